# app/domain/errors.py
from typing import Optional


class SearchEngineError(Exception):
    """Base class for errors raised by the search engine."""


class NotFound(SearchEngineError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class CollaboratorUnavailable(SearchEngineError):
    """
    The catalog store could not be reached or did not answer in time.
    Never retried inside the engine; retry policy belongs to the caller.
    """
    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        msg = f"Catalog store unavailable during {operation}"
        if cause is not None:
            msg += f": {cause!r}"
        super().__init__(msg)
