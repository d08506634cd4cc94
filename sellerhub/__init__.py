"""SellerHub: cache-then-network data access for seller records."""

__version__ = "0.1.0"
