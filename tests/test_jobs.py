"""
Tests for the periodic jobs and the in-process scheduler.
"""
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from edupartner.core.exceptions import InvalidStateTransitionError
from edupartner.engine.dispatcher import DispatchResult
from edupartner.schemas.common import ScoreRefreshResponse
from edupartner.services.job_service import JobService
from edupartner.workers import scheduler
from tests.conftest import make_campaign


@pytest.fixture
def job_service():
    return JobService(MagicMock())


@pytest.mark.asyncio
async def test_launch_due_campaigns_launches_each_once(job_service, now):
    first = make_campaign(scheduled_start=now - timedelta(minutes=5))
    second = make_campaign(scheduled_start=now - timedelta(hours=1))
    job_service.campaign_repo.get_due = AsyncMock(return_value=[second, first])
    ok = DispatchResult(campaign_id=second.id, processed=4)
    job_service.campaign_service.launch = AsyncMock(side_effect=[
        ok,
        InvalidStateTransitionError("campaign", "running", "running"),
    ])

    results = await job_service.launch_due_campaigns(now)

    assert results == [ok]
    job_service.campaign_repo.get_due.assert_awaited_once_with(now)
    assert [c.args for c in job_service.campaign_service.launch.await_args_list] == [
        (second.id, now), (first.id, now)
    ]


@pytest.mark.asyncio
async def test_launch_due_campaigns_with_nothing_due(job_service, now):
    job_service.campaign_repo.get_due = AsyncMock(return_value=[])
    job_service.campaign_service.launch = AsyncMock()

    assert await job_service.launch_due_campaigns(now) == []
    job_service.campaign_service.launch.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_scores_notifies_when_something_changed(job_service, now):
    job_service.scoring_service.refresh_all = AsyncMock(return_value=ScoreRefreshResponse(total=10, updated=4))
    job_service.notifications.notify = AsyncMock()

    result = await job_service.refresh_scores(now)

    assert result.updated == 4
    job_service.scoring_service.refresh_all.assert_awaited_once_with(now)
    job_service.notifications.notify.assert_awaited_once()


@pytest.mark.asyncio
async def test_refresh_scores_quiet_when_nothing_changed(job_service, now):
    job_service.scoring_service.refresh_all = AsyncMock(return_value=ScoreRefreshResponse(total=10, updated=0))
    job_service.notifications.notify = AsyncMock()

    await job_service.refresh_scores(now)

    job_service.notifications.notify.assert_not_awaited()


@pytest.mark.asyncio
async def test_expire_agreements_passes_the_date(job_service, now):
    job_service.partner_service.expire_agreements = AsyncMock(return_value=2)

    assert await job_service.expire_agreements(now) == 2
    job_service.partner_service.expire_agreements.assert_awaited_once_with(now.date())


def test_is_due(now):
    job = {"name": "launch_due_campaigns", "interval": 900}
    assert scheduler.is_due(job, {}, now)
    assert not scheduler.is_due(job, {"launch_due_campaigns": now - timedelta(seconds=899)}, now)
    assert scheduler.is_due(job, {"launch_due_campaigns": now - timedelta(seconds=900)}, now)


@pytest.mark.asyncio
async def test_execute_job_logs_failures_instead_of_raising(now):
    failing = MagicMock()
    failing.refresh_scores = AsyncMock(side_effect=RuntimeError("db down"))
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=MagicMock())
    session_cm.__aexit__ = AsyncMock(return_value=False)

    with patch.object(scheduler, "async_session", return_value=session_cm), \
            patch.object(scheduler, "JobService", return_value=failing):
        await scheduler.execute_job("refresh_scores", now)

    failing.refresh_scores.assert_awaited_once_with(now)
