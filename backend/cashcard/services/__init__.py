# Services package init
"""
Cash Card API: Services Layer
=============================

What:  Data access sitting between routes (HTTP) and the database.

Service Inventory:
    - CashCardRepository (abstract): find_by_id(id) -> CashCard | None
    - SQLAlchemyCashCardRepository: implementation over the `cash_card` table

Routes receive a repository instance when they are built (see
routes/cash_cards.py); they never construct or import one themselves.
"""

from cashcard.services.cash_card_repository import SQLAlchemyCashCardRepository
from cashcard.services.repository_base import CashCardRepository

__all__ = ["CashCardRepository", "SQLAlchemyCashCardRepository"]
