"""
Cash Card API: Repository Tests
===============================

What:  Tests for SQLAlchemyCashCardRepository against a real in-memory SQLite
       database, plus failure translation with a mocked session factory.

What we test:
    ✅ Stored card is returned with its exact amount, at any precision
    ✅ Unknown id returns None (no exception)
    ✅ Repeated lookups return equal results
    ✅ Missing table raises DatabaseError
    ✅ Driver errors are wrapped in DatabaseError
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from cashcard.database import build_session_factory
from cashcard.exceptions import DatabaseError
from cashcard.models.cash_card import CashCard
from cashcard.services import SQLAlchemyCashCardRepository


class TestFindById:
    """Lookups against the seeded database."""

    @pytest.mark.asyncio
    async def test_find_existing_card(self, repository):
        card = await repository.find_by_id(99)

        assert card is not None
        assert card.id == 99
        assert card.amount == Decimal("123.45")

    @pytest.mark.asyncio
    async def test_find_unknown_card_returns_none(self, repository):
        assert await repository.find_by_id(1000) is None

    @pytest.mark.asyncio
    async def test_repeated_lookups_are_identical(self, repository):
        first = await repository.find_by_id(99)
        second = await repository.find_by_id(99)

        assert first is not second
        assert (first.id, first.amount) == (second.id, second.amount)

    @pytest.mark.asyncio
    async def test_each_card_found_by_its_own_id(self, session_factory, repository):
        async with session_factory() as session:
            session.add_all([
                CashCard(id=1, amount=Decimal("0.01")),
                CashCard(id=2, amount=Decimal("250.00")),
            ])
            await session.commit()

        for card_id, amount in [(1, Decimal("0.01")), (2, Decimal("250")), (99, Decimal("123.45"))]:
            card = await repository.find_by_id(card_id)
            assert card.id == card_id
            assert card.amount == amount

    @pytest.mark.asyncio
    async def test_amount_defaults_to_zero(self, session_factory, repository):
        async with session_factory() as session:
            card = CashCard()
            session.add(card)
            await session.commit()
            new_id = card.id

        found = await repository.find_by_id(new_id)
        assert found.amount == Decimal("0")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [
        Decimal("0.12345678901"),
        Decimal("12345678901234567.89"),
    ])
    async def test_amount_read_back_exactly(self, session_factory, repository, amount):
        async with session_factory() as session:
            session.add(CashCard(id=7, amount=amount))
            await session.commit()

        found = await repository.find_by_id(7)
        assert found.amount == amount
        assert str(found.amount) == str(amount)


class TestFindByIdFailures:
    """Store failures surface as DatabaseError, never as None."""

    @pytest.mark.asyncio
    async def test_missing_table_raises_database_error(self, empty_engine):
        repository = SQLAlchemyCashCardRepository(build_session_factory(empty_engine))

        with pytest.raises(DatabaseError) as exc_info:
            await repository.find_by_id(99)

        assert exc_info.value.context["card_id"] == 99
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_driver_error_is_wrapped(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError(
            "SELECT ...", {}, Exception("database is locked")
        )
        factory = MagicMock(return_value=mock_db_session)
        repository = SQLAlchemyCashCardRepository(factory)

        with pytest.raises(DatabaseError, match="Could not retrieve the cash card"):
            await repository.find_by_id(5)

        mock_db_session.get.assert_awaited_once_with(CashCard, 5)
