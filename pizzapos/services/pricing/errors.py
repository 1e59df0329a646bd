"""Pricing errors."""


class InvalidArgument(ValueError):
    """Raised for input the pricing engine refuses to price, e.g. quantity < 1."""


class CatalogLookupError(LookupError):
    """Raised when a cart request references an id missing from the catalog."""
