"""
Error types raised by the storage and rendering layers.

Handlers never catch these; a single exception handler in ``main_db``
turns every ``TodoAppError`` into a generic 500 response.
"""
from typing import Optional


class TodoAppError(Exception):
    """Base class for failures surfaced to the client as 500"""

    message = "Todo application error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message}: {detail}")


class StorageError(TodoAppError):
    message = "Storage failure"


class ConnectionPoolError(StorageError):
    message = "Failed to get connection"


class SQLExecutionError(StorageError):
    message = "Failed SQL execution"


class RenderError(TodoAppError):
    message = "Failed to render HTML"
