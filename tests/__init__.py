"""Test suite for the symcalc package."""
