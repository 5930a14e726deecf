"""
API tests with services patched out: routing, status codes and error mapping.
"""
import uuid
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from edupartner.core.exceptions import (
    InvalidCriteriaError, InvalidStateTransitionError, NotFoundError
)
from edupartner.database import get_session
from edupartner.engine.dispatcher import DispatchResult
from edupartner.main import app
from edupartner.schemas.campaign import SegmentPreviewResponse
from tests.conftest import make_campaign, make_student


async def _no_session():
    yield None


@pytest.fixture
def client():
    app.dependency_overrides[get_session] = _no_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _stamp(model):
    model.created_at = model.updated_at = datetime(2026, 10, 1)
    return model


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_launch_returns_counts(client):
    campaign = _stamp(make_campaign(status="running", started_at=datetime(2026, 10, 17)))
    with patch("edupartner.api.campaigns.CampaignService") as service_cls:
        service = service_cls.return_value
        service.launch = AsyncMock(return_value=DispatchResult(campaign_id=campaign.id, processed=3))
        service.get = AsyncMock(return_value=campaign)

        response = client.post(f"/api/campaigns/{campaign.id}/launch")

    assert response.status_code == 200
    body = response.json()
    assert body["processed"] == 3
    assert body["failed"] == 0
    assert body["campaign"]["status"] == "running"


def test_launch_on_wrong_status_is_conflict(client):
    with patch("edupartner.api.campaigns.CampaignService") as service_cls:
        service_cls.return_value.launch = AsyncMock(
            side_effect=InvalidStateTransitionError("campaign", "draft", "running")
        )
        response = client.post(f"/api/campaigns/{uuid.uuid4()}/launch")

    assert response.status_code == 409
    assert "draft" in response.json()["detail"]


def test_unknown_campaign_is_not_found(client):
    campaign_id = uuid.uuid4()
    with patch("edupartner.api.campaigns.CampaignService") as service_cls:
        service_cls.return_value.complete = AsyncMock(side_effect=NotFoundError("Campaign", str(campaign_id)))
        response = client.post(f"/api/campaigns/{campaign_id}/complete")

    assert response.status_code == 404
    assert str(campaign_id) in response.json()["detail"]


def test_segment_preview_rejects_bad_criteria(client):
    with patch("edupartner.api.campaigns.CampaignService") as service_cls:
        service_cls.return_value.preview_segment = AsyncMock(
            side_effect=InvalidCriteriaError("Invalid segmentation criteria: city: Extra inputs are not permitted")
        )
        response = client.post("/api/campaigns/segments/preview", json={"criteria": {"city": ["Paris"]}})

    assert response.status_code == 422
    assert "city" in response.json()["detail"]


def test_segment_preview_passes_raw_criteria(client):
    with patch("edupartner.api.campaigns.CampaignService") as service_cls:
        service = service_cls.return_value
        service.preview_segment = AsyncMock(return_value=SegmentPreviewResponse(total=0, items=[]))
        response = client.post("/api/campaigns/segments/preview", json={"criteria": {"min_score": 10}})

    assert response.status_code == 200
    service.preview_segment.assert_awaited_once_with({"min_score": 10})


def test_create_student_validates_status(client):
    response = client.post("/api/students/", json={
        "first_name": "Amina",
        "last_name": "Diallo",
        "status": "graduated"
    })
    assert response.status_code == 422


def test_record_interaction_rejects_unknown_type(client):
    response = client.post(f"/api/students/{uuid.uuid4()}/interactions", json={"type": "fax"})
    assert response.status_code == 422


def test_get_student(client):
    student = _stamp(make_student(first_name="Amina", tags=["engineering"], engagement_score=7))
    with patch("edupartner.api.students.StudentService") as service_cls:
        service_cls.return_value.get = AsyncMock(return_value=student)
        response = client.get(f"/api/students/{student.id}")

    assert response.status_code == 200
    assert response.json()["engagement_score"] == 7
    assert response.json()["tags"] == ["engineering"]


def test_list_students_builds_filter(client):
    with patch("edupartner.api.students.StudentService") as service_cls:
        service = service_cls.return_value
        service.list = AsyncMock(return_value={"items": [], "total": 0, "page": 1, "limit": 20,
                                               "pages": 0, "has_next": False, "has_prev": False})
        response = client.get("/api/students/?tags=engineering&tags=fall-intake&min_score=5")

    assert response.status_code == 200
    filters, page, limit = service.list.await_args.args
    assert filters.tags == ["engineering", "fall-intake"]
    assert filters.min_score == 5
    assert (page, limit) == (1, 20)


def test_agreement_dates_must_be_ordered(client):
    response = client.post(f"/api/partners/{uuid.uuid4()}/agreements", json={
        "title": "Erasmus exchange",
        "type": "exchange",
        "start_date": "2027-01-01",
        "end_date": "2026-01-01"
    })
    assert response.status_code == 422
