"""
Tests for the simulated delivery provider.
"""
import pytest

from edupartner.core.exceptions import DeliveryError
from edupartner.services.integrations.delivery import SimulatedDeliveryProvider, get_delivery_provider
from tests.conftest import make_campaign, make_student


@pytest.mark.asyncio
async def test_email_needs_an_address():
    provider = SimulatedDeliveryProvider()
    with pytest.raises(DeliveryError, match="email delivery failed"):
        await provider.deliver(make_campaign(channel="email"), make_student(email=None))


@pytest.mark.asyncio
async def test_sms_needs_a_phone():
    provider = SimulatedDeliveryProvider()
    with pytest.raises(DeliveryError, match="sms delivery failed"):
        await provider.deliver(make_campaign(channel="sms"), make_student(phone=None))


@pytest.mark.asyncio
async def test_deliverable_student_is_logged(caplog):
    provider = SimulatedDeliveryProvider()
    student = make_student(email="amina@example.org")
    with caplog.at_level("INFO"):
        await provider.deliver(make_campaign(channel="email"), student)
    assert "amina@example.org" in caplog.text


def test_default_provider_is_simulated():
    assert isinstance(get_delivery_provider(), SimulatedDeliveryProvider)
