"""
Service-level tests run directly against a store handle, outside HTTP.
"""
from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from tasklist.core.errors import StoreError
from tasklist.services import task_query, tasks

from .fakes import FixedClock


@pytest.mark.anyio
async def test_update_accepts_iso_date_strings(database):
    async with database.session() as db:
        created = await tasks.create_task(db, FixedClock(), "Dated later")

    async with database.session() as db:
        row = await tasks.update_task(db, created["id"], {"due_date": "2024-01-02"})
    assert row["due_date"] == date(2024, 1, 2)

    async with database.session() as db:
        stored = await task_query.get_task(db, created["id"])
    assert stored["due_date"] == date(2024, 1, 2)


@pytest.mark.anyio
async def test_session_reports_store_failures_as_store_errors(database):
    with pytest.raises(StoreError) as info:
        async with database.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))

    assert isinstance(info.value.__cause__, OperationalError)
    assert info.value.status_code == 500


def test_lifespan_applies_configured_log_level(settings, clock):
    import logging

    from fastapi.testclient import TestClient
    from tasklist.main import create_app

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    settings.LOG_LEVEL = "WARNING"
    try:
        with TestClient(create_app(settings, clock)):
            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
