"""Error root for ShopQuery core."""


class QueryEngineError(Exception):
    """Base class for all errors raised by the query engine."""

    pass
