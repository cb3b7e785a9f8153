"""ShopQuery - in-memory analytical queries over customers, orders and products."""

__version__ = "0.1.0"
