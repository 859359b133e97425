"""symcalc."""
