"""
Cash Card API: Cash Card Route Handler
======================================

What:  Handles GET /cashcards/{id}.
How:   CashCardHandler is constructed with a CashCardRepository; create_router()
       registers the handler's bound method on an APIRouter.
Who:   Assembled by main.create_app().

Request Flow:
    1. Starlette extracts the `{id}` path segment as text
    2. parse_card_id() turns it into a positive 64-bit integer, or None
    3. The repository looks the card up by primary key
    4. Found  → 200 with {"id": ..., "amount": ...}
       Absent → 404 with an empty body

    A token that is not a positive 64-bit integer cannot name a stored card,
    so it takes the 404 branch without touching the database.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Path, Response

from cashcard.responses import DecimalJSONResponse
from cashcard.schemas.cash_card import CashCardResponse, ErrorResponse
from cashcard.services.repository_base import CashCardRepository

logger = logging.getLogger(__name__)

# Largest value a BIGINT primary key can hold
MAX_CARD_ID = 2**63 - 1


def parse_card_id(raw: str) -> Optional[int]:
    """
    Parse a path token into a card identifier.

    Accepts ASCII decimal digits only (no sign, no whitespace, no exponent).

    Returns:
        The identifier, or None when the token is not an integer in
        1..MAX_CARD_ID.
    """
    if not raw.isascii() or not raw.isdigit():
        return None
    value = int(raw)
    if value < 1 or value > MAX_CARD_ID:
        return None
    return value


class CashCardHandler:
    """
    Transport handler for the cash card resource.

    Holds the repository it was built with for its whole lifetime; it never
    creates or locates one on its own.
    """

    def __init__(self, repository: CashCardRepository):
        self._repository = repository

    @property
    def repository(self) -> CashCardRepository:
        return self._repository

    async def find_by_id(
        self,
        requested_id: str = Path(
            ...,
            description="Cash card identifier (positive integer)",
        ),
    ) -> Response:
        """
        Return a single cash card.

        Returns:
            DecimalJSONResponse (HTTP 200) with the card when it exists.
            Empty Response (HTTP 404) otherwise.

        Store failures propagate as DatabaseError and are answered 500 by the
        global exception handler.
        """
        card_id = parse_card_id(requested_id)
        if card_id is None:
            logger.info("Rejected cash card id token %r", requested_id)
            return Response(status_code=404)

        card = await self._repository.find_by_id(card_id)
        if card is None:
            return Response(status_code=404)

        body = CashCardResponse.model_validate(card)
        return DecimalJSONResponse(content=body.model_dump())


def create_router(handler: CashCardHandler) -> APIRouter:
    """Build the /cashcards router around an already-constructed handler."""
    router = APIRouter(prefix="/cashcards", tags=["Cash Cards"])
    router.add_api_route(
        "/{requested_id}",
        handler.find_by_id,
        methods=["GET"],
        response_model=CashCardResponse,
        response_class=DecimalJSONResponse,
        responses={
            200: {"description": "The cash card", "model": CashCardResponse},
            404: {"description": "No cash card with this id (empty body)"},
            500: {"description": "Database unavailable", "model": ErrorResponse},
        },
        summary="Get a cash card by ID",
        description=(
            "Returns the cash card stored under the given identifier. "
            "Unknown identifiers answer 404 with an empty body."
        ),
    )
    return router
