"""
Cash Card API: SQLAlchemy Cash Card Repository
==============================================

What:  CashCardRepository backed by the relational `cash_card` table.
How:   Holds a session factory given at construction; every lookup opens its
       own session, runs a single primary-key SELECT and closes the session.
Who:   Built by main.create_app() and handed to the route handler.

Query plan:
    SELECT cash_card.id, cash_card.amount FROM cash_card WHERE cash_card.id = :id
    → primary key index, at most one row

The repository keeps no state between calls beyond the factory itself:
no identity map survives a lookup, so every request reads the store.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cashcard.exceptions import DatabaseError
from cashcard.models.cash_card import CashCard
from cashcard.services.repository_base import CashCardRepository

logger = logging.getLogger(__name__)


class SQLAlchemyCashCardRepository(CashCardRepository):
    """
    Primary-key lookups against the `cash_card` table.

    Error Handling Strategy:
        A missing row is returned as None. Any SQLAlchemy failure is logged
        with its type and text, then re-raised as DatabaseError so the global
        handler can answer 500 without leaking SQL to the client.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_by_id(self, card_id: int) -> Optional[CashCard]:
        try:
            async with self._session_factory() as session:
                card = await session.get(CashCard, card_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching cash card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the cash card. Please try again.",
                context={"card_id": card_id, "error_type": type(e).__name__},
            ) from e

        if card is None:
            logger.debug("Cash card %s not found", card_id)
        return card
