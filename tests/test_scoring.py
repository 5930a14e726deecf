"""
Tests for the engagement score engine.
"""
from datetime import datetime, timedelta, timezone

import pytest

from edupartner.engine.scoring import ScoreEngine, score_engine, HORIZON_DAYS
from tests.conftest import make_interaction


def test_empty_history_scores_zero(now):
    assert score_engine.compute_score([], now) == 0


def test_worked_example_call_and_old_email(now):
    # 3 * 355/365 + 1 * 1/365 = 2.92 -> 2
    interactions = [
        make_interaction("call", days_ago=10),
        make_interaction("email", days_ago=400),
    ]
    assert score_engine.compute_score(interactions, now) == 2


def test_recent_interaction_counts_at_least_as_much_as_older(now):
    recent = make_interaction("meeting", days_ago=5)
    older = make_interaction("meeting", days_ago=100)
    assert score_engine.component(recent, now) > score_engine.component(older, now)


@pytest.mark.parametrize("days_ago", [365, 400, 10_000])
def test_old_interactions_keep_a_positive_floor(now, days_ago):
    component = score_engine.component(make_interaction("call", days_ago=days_ago), now)
    assert component > 0
    assert component == pytest.approx(3 / HORIZON_DAYS)


def test_future_interaction_is_capped_at_base_weight(now):
    future = make_interaction("meeting", days_ago=-30)
    assert score_engine.recency_factor(future.occurred_at, now) == 1.0
    assert score_engine.component(future, now) == 5.0


def test_weights_per_type(now):
    expected = {"call": 3, "meeting": 5, "event": 4, "document": 2, "inquiry": 2, "email": 1, "other": 1}
    for interaction_type, weight in expected.items():
        assert score_engine.component(make_interaction(interaction_type, days_ago=0), now) == weight


def test_unknown_type_defaults_to_weight_one(now):
    assert score_engine.component(make_interaction("webinar", days_ago=0), now) == 1.0


def test_score_is_truncated_not_rounded(now):
    # five meetings 200 days ago: 5 * 5 * 165/365 = 11.3
    interactions = [make_interaction("meeting", days_ago=200) for _ in range(5)]
    assert score_engine.compute_score(interactions, now) == 11


def test_partial_days_are_ignored(now):
    fresh = make_interaction("event", days_ago=0)
    fresh.occurred_at = now - timedelta(hours=23)
    assert score_engine.recency_factor(fresh.occurred_at, now) == 1.0


def test_custom_weights():
    engine = ScoreEngine(weights={"call": 10})
    assert engine.weight("call") == 10
    assert engine.weight("meeting") == 1


def test_offsets_and_naive_rows_are_read_as_utc(now):
    paris = timezone(timedelta(hours=2))
    # 10 days back, expressed in another offset
    call = make_interaction("call", days_ago=0)
    call.occurred_at = (now - timedelta(days=10)).astimezone(paris)
    # naive value as older rows or clients may send it
    email = make_interaction("email", days_ago=0)
    email.occurred_at = (now - timedelta(days=400)).replace(tzinfo=None)

    assert score_engine.compute_score([call, email], now) == 2
    assert score_engine.compute_score([call, email], now.replace(tzinfo=None)) == 2


def test_other_offsets_are_compared_in_utc(now):
    tokyo = timezone(timedelta(hours=9))
    event = make_interaction("event", days_ago=0)
    event.occurred_at = datetime(2026, 10, 17, 20, 30, tzinfo=tokyo)  # 11:30 UTC
    assert score_engine.recency_factor(event.occurred_at, now) == 1.0
