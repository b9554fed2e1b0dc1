"""
Error types shared by the calculators.
"""


class InvalidInputError(ValueError):
    """Raised when a calculation receives a value it cannot work with
    (zero or negative cost, area, capacity, production, ...)."""
