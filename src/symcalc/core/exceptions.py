"""Errors raised by symcalc.

Every error raised on purpose by the library derives from
:class:`SymCalcError`. The errors in this module come from the rule tables
in :mod:`symcalc.core` and indicate a tree with a head or leaf that has no
rule. Expressions built with :mod:`symcalc.calculus` never raise them.
"""


class SymCalcError(Exception):
    """Base class for all errors raised by symcalc."""


class NoEvaluationRuleError(SymCalcError):
    """An :class:`Evaluator` has no rule for a leaf or head."""


class NoDiffRuleError(SymCalcError):
    """There is no differentiation rule for a head."""
