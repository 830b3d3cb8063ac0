import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.one_time_codes = MagicMock()
    uow.one_time_codes.get_latest_by_identity = AsyncMock(return_value=None)
    uow.one_time_codes.create = AsyncMock()
    uow.one_time_codes.delete_by_identity = AsyncMock(return_value=0)
    uow.one_time_codes.delete_by_id = AsyncMock(return_value=True)
    uow.one_time_codes.increment_attempts = AsyncMock(return_value=1)
    uow.one_time_codes.delete_expired = AsyncMock(return_value=0)

    uow.sessions = MagicMock()
    uow.sessions.get_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock()
    uow.sessions.delete_by_token_hash = AsyncMock(return_value=True)
    uow.sessions.delete_expired = AsyncMock(return_value=0)

    uow.grants = MagicMock()
    uow.grants.add = AsyncMock(return_value=True)
    uow.grants.list_entitlement_ids = AsyncMock(return_value=[])

    uow.orders = MagicMock()
    uow.orders.create = AsyncMock()
    uow.orders.get_by_reference = AsyncMock(return_value=None)
    uow.orders.transition_from_pending = AsyncMock(return_value=True)

    uow.lesson_progress = MagicMock()
    uow.lesson_progress.get = AsyncMock(return_value=None)
    uow.lesson_progress.list_by_block = AsyncMock(return_value=[])
    uow.lesson_progress.save = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.list_paginated = AsyncMock(return_value=([], None))

    return uow
