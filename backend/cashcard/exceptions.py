"""
Cash Card API: Exception Hierarchy
==================================

What:  Application-specific exceptions for failures of the persistence layer.
How:   Each exception carries a client-safe message and a context dict.
       The DatabaseError handler registered in main.py turns it into a
       structured JSON 500 response.

Exception Hierarchy:
    CashCardError (base)
    └── DatabaseError            → 500 Internal Server Error

Note:
    A card that does not exist is NOT an error. The repository returns
    None and the route answers 404 itself; no exception is involved.
"""

from typing import Any, Dict, Optional


class CashCardError(Exception):
    """
    Base exception for all Cash Card application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(CashCardError):
    """
    Raised when the persistent store cannot answer a lookup.

    When:    Database unreachable, `cash_card` table missing, driver failure.
    HTTP:    500 Internal Server Error

    This is a deployment precondition failing, not a runtime case the
    service recovers from: there is no retry and no partial response.
    The SQL error text goes to the server log through `context`; the
    client only ever sees the generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
