"""
Cash Card API: Abstract Cash Card Repository
============================================

What:  Abstract base class defining the lookup contract the route handler
       depends on.
How:   Concrete repositories inherit from CashCardRepository and implement
       find_by_id(). The handler only ever sees this interface, so tests
       can hand it a stub and deployments can back it with any store.
Who:   Implemented by SQLAlchemyCashCardRepository; consumed by CashCardHandler.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cashcard.models.cash_card import CashCard


class CashCardRepository(ABC):
    """
    Read access to stored cash cards.

    Contract:
        - find_by_id() returns the card, or None when no card has that id
        - absence is a normal result and never raises
        - store failures raise DatabaseError
    """

    @abstractmethod
    async def find_by_id(self, card_id: int) -> Optional[CashCard]:
        """
        Look up a cash card by primary key.

        Args:
            card_id: Identifier of the card.

        Returns:
            The matching CashCard, or None if the store holds no such row.

        Raises:
            DatabaseError: The store could not be queried (unreachable,
                table missing, driver error).
        """
        ...
