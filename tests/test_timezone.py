"""
Tests for UTC normalisation of stored and incoming datetimes.
"""
from datetime import datetime, timedelta, timezone

from edupartner.core.timezone import to_utc, utc_now
from edupartner.schemas.campaign import CampaignCreate, ReactionCreate
from edupartner.schemas.student import InteractionCreate
from tests.conftest import make_campaign, make_interaction, make_student


def test_utc_now_is_aware():
    assert utc_now().utcoffset() == timedelta(0)


def test_to_utc():
    assert to_utc(None) is None
    assert to_utc(datetime(2026, 10, 17, 12)) == datetime(2026, 10, 17, 12, tzinfo=timezone.utc)
    shifted = datetime(2026, 10, 17, 14, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc(shifted).tzinfo is timezone.utc
    assert to_utc(shifted).hour == 12


def test_model_defaults_are_aware():
    for value in (
        make_student().created_at,
        make_campaign().updated_at,
        make_interaction("call", days_ago=0).created_at,
    ):
        assert value.tzinfo is not None


def test_request_datetimes_arrive_in_utc():
    interaction = InteractionCreate(type="call", occurred_at="2026-10-17T14:00:00+02:00")
    assert interaction.occurred_at == datetime(2026, 10, 17, 12, tzinfo=timezone.utc)
    assert interaction.occurred_at.tzinfo is timezone.utc

    reaction = ReactionCreate(student_id="6f1c3c1e-9a43-4f58-9a0e-1d7bb0a4f0c2", type="reply",
                              occurred_at="2026-10-17T12:00:00Z")
    assert reaction.occurred_at.tzinfo is timezone.utc

    campaign = CampaignCreate(name="Open day", scheduled_start="2026-11-02T09:00:00")
    assert campaign.scheduled_start == datetime(2026, 11, 2, 9, tzinfo=timezone.utc)


def test_missing_request_datetimes_stay_empty():
    assert InteractionCreate(type="meeting").occurred_at is None
