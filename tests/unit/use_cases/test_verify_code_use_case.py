"""
Unit tests for VerifyCodeUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import timedelta

import pytest

from course_access.app.use_cases.auth import VerifyCodeUseCase
from course_access.app.use_cases.auth.verify_code_use_case import INVALID_CODE_MESSAGE
from course_access.domain.base import utcnow
from course_access.domain.credentials import hash_code, hash_token
from course_access.domain.entities import OneTimeCode


def make_code(code="123456", expires_in=timedelta(minutes=5), attempts=0):
    return OneTimeCode(
        identity="viewer@example.com",
        code_hash=hash_code(code),
        attempts=attempts,
        expires_at=utcnow() + expires_in,
    )


@pytest.mark.asyncio
async def test_successful_verification_creates_session(mock_uow):
    record = make_code()
    mock_uow.one_time_codes.get_latest_by_identity.return_value = record

    result = await VerifyCodeUseCase(mock_uow, session_ttl_days=30).execute(
        "Viewer@Example.com", "123456"
    )

    assert result.is_ok()
    data = result.value
    assert data.identity == "viewer@example.com"
    assert len(data.session_token) >= 43

    # Code is consumed
    mock_uow.one_time_codes.delete_by_id.assert_called_once_with(record.id)

    # Only the digest of the token is stored
    session = mock_uow.sessions.create.call_args[0][0]
    assert session.token_hash == hash_token(data.session_token)
    assert session.token_hash != data.session_token
    assert session.expires_at > utcnow() + timedelta(days=29)

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "login"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_identity_is_not_found(mock_uow):
    result = await VerifyCodeUseCase(mock_uow).execute("nobody@example.com", "123456")

    assert result.is_err()
    assert result.error.code == "CODE_NOT_FOUND"
    assert result.error.message == INVALID_CODE_MESSAGE
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_expired_code_is_rejected(mock_uow):
    mock_uow.one_time_codes.get_latest_by_identity.return_value = make_code(
        expires_in=timedelta(seconds=-1)
    )

    result = await VerifyCodeUseCase(mock_uow).execute("viewer@example.com", "123456")

    assert result.is_err()
    assert result.error.code == "CODE_EXPIRED"
    assert result.error.message == INVALID_CODE_MESSAGE
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_wrong_code_counts_attempt(mock_uow):
    record = make_code()
    mock_uow.one_time_codes.get_latest_by_identity.return_value = record
    mock_uow.one_time_codes.increment_attempts.return_value = 1

    result = await VerifyCodeUseCase(mock_uow, max_attempts=5).execute(
        "viewer@example.com", "654321"
    )

    assert result.is_err()
    assert result.error.code == "CODE_MISMATCH"
    assert result.error.message == INVALID_CODE_MESSAGE
    mock_uow.one_time_codes.increment_attempts.assert_called_once_with(record.id)
    mock_uow.one_time_codes.delete_by_id.assert_not_called()
    mock_uow.commit.assert_called_once()
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_code_is_burned_at_attempt_limit(mock_uow):
    record = make_code(attempts=4)
    mock_uow.one_time_codes.get_latest_by_identity.return_value = record
    mock_uow.one_time_codes.increment_attempts.return_value = 5

    result = await VerifyCodeUseCase(mock_uow, max_attempts=5).execute(
        "viewer@example.com", "000000"
    )

    assert result.error.code == "CODE_MISMATCH"
    mock_uow.one_time_codes.delete_by_id.assert_called_once_with(record.id)


@pytest.mark.asyncio
async def test_concurrent_consumption_only_one_wins(mock_uow):
    """The verification whose delete removed nothing must not log in"""
    mock_uow.one_time_codes.get_latest_by_identity.return_value = make_code()
    mock_uow.one_time_codes.delete_by_id.return_value = False

    result = await VerifyCodeUseCase(mock_uow).execute("viewer@example.com", "123456")

    assert result.is_err()
    assert result.error.code == "CODE_NOT_FOUND"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()
