"""Natal chart service: whole-sign houses, aspects and transits."""
