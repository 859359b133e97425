"""Core data structures and algorithms for symcalc."""
