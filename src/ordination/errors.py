# src/ordination/errors.py


class InvalidArgument(ValueError):
    """Raised when a prescription or dose event is built or fed with out-of-contract input."""
