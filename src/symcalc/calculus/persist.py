"""Saving functions and tabulated data to text files.

Two plain text formats are written. A saved :class:`Function` is three lines:

.. code-block:: text

    MathFunction
    f
    ((x)^2 + -4)

and tabulated data is a tab separated table with a header line:

.. code-block:: text

    x	f(x)
    0	-4
    1	-3

Numbers are formatted like C's ``"%g"``. Other programs read these files so
the formats must not change.

The expression line is the :meth:`Expr.to_string` form which is not parsed
back. :func:`read_function_header` only recovers the name and that string.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import Union

from symcalc.calculus.exceptions import FormatError


if _TYPE_CHECKING:
    from symcalc.calculus.function import Function


__all__ = [
    "save_function",
    "read_function_header",
    "export_tabulated_data",
    "read_tabulated_data",
]


logger = logging.getLogger(__name__)

FORMAT_TAG = "MathFunction"

PathLike = Union[str, Path]


def save_function(func: Function, path: PathLike) -> None:
    """Write ``func`` to ``path`` in the three line format."""
    path = Path(path)
    text = f"{FORMAT_TAG}\n{func.name}\n{func.expression.to_string()}\n"
    with path.open("w", newline="\n") as fout:
        fout.write(text)
    logger.info("Saved function %s to %s", func.name, path)


def read_function_header(path: PathLike) -> tuple[str, str]:
    """Read the name and expression string from a file saved by :func:`save_function`."""
    path = Path(path)
    with path.open() as fin:
        lines = fin.read().splitlines()

    if len(lines) < 3 or lines[0] != FORMAT_TAG:
        raise FormatError(f"{path} is not a saved {FORMAT_TAG}")

    name, expression = lines[1], lines[2]
    logger.debug("Read function %s from %s", name, path)
    return name, expression


def export_tabulated_data(
    func: Function, path: PathLike, start: float, end: float, points: int
) -> None:
    """Write ``points`` samples of ``func`` from ``start`` to ``end`` to ``path``.

    Raises :class:`InvalidArgumentError` for fewer than two points before the
    file is opened.
    """
    data = func.tabulate(start, end, points)

    path = Path(path)
    lines = [f"x\t{func.name}(x)"]
    lines.extend(f"{x:g}\t{y:g}" for x, y in data)

    with path.open("w", newline="\n") as fout:
        fout.write("\n".join(lines) + "\n")
    logger.info("Exported %d samples of %s to %s", len(data), func.name, path)


def read_tabulated_data(path: PathLike) -> tuple[str, list[tuple[float, float]]]:
    """Read the function name and samples written by :func:`export_tabulated_data`.

    Values are read back with the 6 significant digits that were written.
    """
    path = Path(path)
    with path.open() as fin:
        lines = fin.read().splitlines()

    if not lines:
        raise FormatError(f"{path} is empty")

    header = lines[0].split("\t")
    if len(header) != 2 or header[0] != "x" or not header[1].endswith("(x)"):
        raise FormatError(f"Bad header in {path}: {lines[0]!r}")
    name = header[1][: -len("(x)")]

    data = []
    for lineno, line in enumerate(lines[1:], 2):
        fields = line.split("\t")
        if len(fields) != 2:
            raise FormatError(f"Bad row at {path}:{lineno}: {line!r}")
        try:
            data.append((float(fields[0]), float(fields[1])))
        except ValueError:
            raise FormatError(f"Bad number at {path}:{lineno}: {line!r}") from None

    logger.debug("Read %d samples of %s from %s", len(data), name, path)
    return name, data
