"""Car dealership backend: listings, accounts and the order lifecycle."""

__version__ = "1.0.0"
