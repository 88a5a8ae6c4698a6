"""
Cash Card API: Access Log Tests
===============================

What:  Level selection and output of RequestLoggingMiddleware.
"""

import logging

import pytest

from cashcard.database import build_session_factory
from cashcard.middleware.logging import access_log_level
from cashcard.services import SQLAlchemyCashCardRepository


class TestAccessLogLevel:

    @pytest.mark.parametrize("path, status, level", [
        ("/cashcards/99", 200, logging.INFO),
        ("/cashcards/1000", 404, logging.INFO),
        ("/cashcards/abc", 404, logging.INFO),
        ("/unknown", 404, logging.WARNING),
        ("/cashcards/99", 405, logging.WARNING),
        ("/cashcards/99", 500, logging.ERROR),
    ])
    def test_level_by_outcome(self, path, status, level):
        assert access_log_level(path, status) == level


class TestRequestLoggingMiddleware:

    @pytest.mark.asyncio
    async def test_absent_card_logged_at_info(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="cashcard.access")

        response = await test_client.get("/cashcards/1000")

        assert response.status_code == 404
        records = [r for r in caplog.records if r.name == "cashcard.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].status == 404
        assert records[0].path == "/cashcards/1000"

    @pytest.mark.asyncio
    async def test_store_failure_logged_at_error(self, empty_engine, client_for, caplog):
        repository = SQLAlchemyCashCardRepository(build_session_factory(empty_engine))
        caplog.set_level(logging.INFO, logger="cashcard.access")

        async with client_for(repository) as client:
            response = await client.get("/cashcards/99")

        assert response.status_code == 500
        records = [r for r in caplog.records if r.name == "cashcard.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="cashcard.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "cashcard.access"]
