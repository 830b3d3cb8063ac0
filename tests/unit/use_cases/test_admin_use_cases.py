"""
Unit tests for PurgeExpiredUseCase and GetAuditEventsUseCase
"""
from datetime import datetime

import pytest

from course_access.app.use_cases.admin import PurgeExpiredUseCase
from course_access.app.use_cases.audit import GetAuditEventsUseCase
from course_access.domain.entities import AuditEvent


@pytest.mark.asyncio
async def test_purge_expired_reports_counts(mock_uow):
    mock_uow.one_time_codes.delete_expired.return_value = 3
    mock_uow.sessions.delete_expired.return_value = 2

    result = await PurgeExpiredUseCase(mock_uow).execute()

    assert result.value.codes_purged == 3
    assert result.value.sessions_purged == 2

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "expired_credentials_purged"
    assert audit.identity is None
    assert audit.event_metadata == {"codes_purged": 3, "sessions_purged": 2}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_audit_events_are_serialized(mock_uow):
    event = AuditEvent(
        identity="viewer@example.com",
        action="login",
        event_metadata={"session_id": "abc"},
        created_at=datetime(2025, 1, 2, 3, 4, 5),
    )
    mock_uow.audit_events.list_paginated.return_value = ([event], "next-page")

    result = await GetAuditEventsUseCase(mock_uow).execute(
        email="Viewer@Example.com", limit=10, cursor=None
    )

    assert result.value == {
        "events": [
            {
                "action": "login",
                "identity": "viewer@example.com",
                "timestamp": "2025-01-02T03:04:05Z",
                "metadata": {"session_id": "abc"},
            }
        ],
        "next_cursor": "next-page",
    }
    mock_uow.audit_events.list_paginated.assert_called_once_with(
        identity="viewer@example.com", limit=10, cursor=None
    )
