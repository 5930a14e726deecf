"""
Tests for score recomputation and write-back.
"""
import uuid

import pytest

from edupartner.core.exceptions import NotFoundError
from edupartner.services.scoring_service import ScoringService
from tests.conftest import FakeStore, make_interaction, make_student


@pytest.mark.asyncio
async def test_recalculate_saves_new_score(now):
    student = make_student(engagement_score=0)
    store = FakeStore([student])
    store.add_interactions(student.id, [
        make_interaction("call", days_ago=10, student_id=student.id),
        make_interaction("email", days_ago=400, student_id=student.id),
    ])

    result = await ScoringService(store=store).recalculate(student.id, now)

    assert result.previous_score == 0
    assert result.engagement_score == 2
    assert result.interactions == 2
    assert store.saved_scores == {student.id: 2}
    assert student.engagement_score == 2


@pytest.mark.asyncio
async def test_recalculate_skips_write_when_unchanged(now):
    student = make_student(engagement_score=5)
    store = FakeStore([student])
    store.add_interactions(student.id, [make_interaction("meeting", days_ago=0, student_id=student.id)])

    result = await ScoringService(store=store).recalculate(student.id, now)

    assert result.engagement_score == 5
    assert store.saved_scores == {}


@pytest.mark.asyncio
async def test_recalculate_unknown_student(now):
    with pytest.raises(NotFoundError):
        await ScoringService(store=FakeStore()).recalculate(uuid.uuid4(), now)


@pytest.mark.asyncio
async def test_refresh_all_decays_stale_scores(now):
    active = make_student(engagement_score=0)
    stale = make_student(engagement_score=9)  # stored before its interactions aged
    untouched = make_student(engagement_score=0)
    store = FakeStore([active, stale, untouched])
    store.add_interactions(active.id, [make_interaction("event", days_ago=1, student_id=active.id)])
    store.add_interactions(stale.id, [make_interaction("meeting", days_ago=300, student_id=stale.id)])

    result = await ScoringService(store=store).refresh_all(now)

    assert result.total == 3
    assert result.updated == 2
    assert active.engagement_score == 3  # 4 * 364/365
    assert stale.engagement_score == 0  # 5 * 65/365
    assert untouched.id not in store.saved_scores
