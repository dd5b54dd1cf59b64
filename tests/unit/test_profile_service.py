from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from app.db.helpers import DatabaseError
from app.features.profile_completeness.domain.models import ProfileSignals
from app.features.profile_completeness.repository.profile_signals_repository import (
    ProfileSignalsRepository,
)
from app.features.profile_completeness.services.profile_service import (
    ProfileAccessDenied,
    ProfileCompletenessServiceError,
    get_profile_completeness,
    refresh_profile_completeness,
)

REPO = "app.features.profile_completeness.services.profile_service.ProfileSignalsRepository"
REPO_MODULE = "app.features.profile_completeness.repository.profile_signals_repository"

# avatar, name, country, city -> 40
PARTIAL_SIGNALS = ProfileSignals(
    has_avatar=True, has_real_name=True, country="Chile", city="Valparaíso"
)


@pytest.mark.asyncio
async def test_scores_callers_own_profile(monkeypatch, request_context):
    fetch_mock = AsyncMock(return_value=PARTIAL_SIGNALS)
    monkeypatch.setattr(f"{REPO}.fetch_signals", fetch_mock)

    report = await get_profile_completeness(request_context)

    assert report.score == 40
    assert report.next_item.key == "category"
    fetch_mock.assert_awaited_once_with("user-123")


@pytest.mark.asyncio
async def test_unknown_user_returns_none(monkeypatch, request_context):
    monkeypatch.setattr(f"{REPO}.fetch_signals", AsyncMock(return_value=None))

    assert await get_profile_completeness(request_context) is None


@pytest.mark.asyncio
async def test_non_admin_cannot_score_someone_else(monkeypatch, request_context):
    fetch_mock = AsyncMock()
    monkeypatch.setattr(f"{REPO}.fetch_signals", fetch_mock)

    with pytest.raises(ProfileAccessDenied):
        await get_profile_completeness(request_context, user_id="other-user")

    fetch_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_can_score_someone_else(monkeypatch, admin_context):
    fetch_mock = AsyncMock(return_value=PARTIAL_SIGNALS)
    monkeypatch.setattr(f"{REPO}.fetch_signals", fetch_mock)

    report = await get_profile_completeness(admin_context, user_id="user-456")

    assert report.score == 40
    fetch_mock.assert_awaited_once_with("user-456")


@pytest.mark.asyncio
async def test_database_error_is_wrapped(monkeypatch, request_context):
    monkeypatch.setattr(
        f"{REPO}.fetch_signals",
        AsyncMock(side_effect=DatabaseError("connection refused", recoverable=False)),
    )

    with pytest.raises(ProfileCompletenessServiceError) as exc_info:
        await get_profile_completeness(request_context)

    assert exc_info.value.user_id == "user-123"
    assert exc_info.value.recoverable is False


@pytest.mark.asyncio
async def test_refresh_stores_changed_score(monkeypatch, request_context):
    sync_mock = AsyncMock(return_value=(20, True))
    monkeypatch.setattr(f"{REPO}.fetch_signals", AsyncMock(return_value=PARTIAL_SIGNALS))
    monkeypatch.setattr(f"{REPO}.sync_stored_score", sync_mock)

    refresh = await refresh_profile_completeness(request_context)

    assert refresh.report.score == 40
    assert refresh.previous_score == 20
    assert refresh.updated is True
    sync_mock.assert_awaited_once_with("user-123", 40)


@pytest.mark.asyncio
async def test_refresh_reports_unchanged_score(monkeypatch, request_context):
    monkeypatch.setattr(f"{REPO}.fetch_signals", AsyncMock(return_value=PARTIAL_SIGNALS))
    monkeypatch.setattr(f"{REPO}.sync_stored_score", AsyncMock(return_value=(40, False)))

    refresh = await refresh_profile_completeness(request_context)

    assert refresh.previous_score == 40
    assert refresh.updated is False


@pytest.mark.asyncio
async def test_refresh_for_missing_user_returns_none(monkeypatch, request_context):
    sync_mock = AsyncMock()
    monkeypatch.setattr(f"{REPO}.fetch_signals", AsyncMock(return_value=None))
    monkeypatch.setattr(f"{REPO}.sync_stored_score", sync_mock)

    assert await refresh_profile_completeness(request_context) is None
    sync_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_wraps_store_failure(monkeypatch, request_context):
    monkeypatch.setattr(f"{REPO}.fetch_signals", AsyncMock(return_value=PARTIAL_SIGNALS))
    monkeypatch.setattr(
        f"{REPO}.sync_stored_score",
        AsyncMock(side_effect=DatabaseError("timeout", recoverable=True)),
    )

    with pytest.raises(ProfileCompletenessServiceError) as exc_info:
        await refresh_profile_completeness(request_context)

    assert exc_info.value.recoverable is True


class TestSyncStoredScore:
    """Compare-and-update of profiles.profile_completeness inside one transaction."""

    @pytest.fixture
    def conn(self, monkeypatch):
        conn = object()

        @asynccontextmanager
        async def _transaction():
            yield conn

        monkeypatch.setattr(f"{REPO_MODULE}.db_transaction", _transaction)
        return conn

    @pytest.mark.asyncio
    async def test_changed_score_is_written_on_locked_row(self, monkeypatch, conn):
        fetch_mock = AsyncMock(return_value={"profile_completeness": 30})
        execute_mock = AsyncMock(return_value=1)
        monkeypatch.setattr(f"{REPO_MODULE}.fetch_one", fetch_mock)
        monkeypatch.setattr(f"{REPO_MODULE}.execute_query", execute_mock)

        result = await ProfileSignalsRepository.sync_stored_score("user-123", 50)

        assert result == (30, True)
        query = fetch_mock.await_args.args[0]
        assert "FOR UPDATE" in query
        assert fetch_mock.await_args.kwargs["connection"] is conn
        assert execute_mock.await_args.args[1] == (50, "user-123")
        assert execute_mock.await_args.kwargs["connection"] is conn

    @pytest.mark.asyncio
    async def test_same_score_skips_update(self, monkeypatch, conn):
        execute_mock = AsyncMock()
        monkeypatch.setattr(
            f"{REPO_MODULE}.fetch_one", AsyncMock(return_value={"profile_completeness": 50})
        )
        monkeypatch.setattr(f"{REPO_MODULE}.execute_query", execute_mock)

        assert await ProfileSignalsRepository.sync_stored_score("user-123", 50) == (50, False)
        execute_mock.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_profiles_row(self, monkeypatch, conn):
        execute_mock = AsyncMock()
        monkeypatch.setattr(f"{REPO_MODULE}.fetch_one", AsyncMock(return_value=None))
        monkeypatch.setattr(f"{REPO_MODULE}.execute_query", execute_mock)

        assert await ProfileSignalsRepository.sync_stored_score("user-123", 50) == (None, False)
        execute_mock.assert_not_awaited()
