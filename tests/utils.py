"""Markers shared by the test modules."""
import importlib.util

import pytest

__all__ = ["requires_sympy"]


requires_sympy = pytest.mark.skipif(
    importlib.util.find_spec("sympy") is None, reason="requires sympy"
)
