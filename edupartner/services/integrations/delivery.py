"""
Delivery provider implementations.
Simulated provider included, ready for real gateways.
"""
import logging

from edupartner.config import settings
from edupartner.core.exceptions import DeliveryError
from edupartner.models.campaign import Campaign
from edupartner.models.student import Student
from edupartner.services.integrations.base import DeliveryProvider

logger = logging.getLogger(__name__)


class SimulatedDeliveryProvider(DeliveryProvider):
    """
    Delivery stand-in for development.
    Logs the hand-off instead of sending anything.
    """

    async def deliver(self, campaign: Campaign, student: Student) -> None:
        if campaign.channel == "email" and not student.email:
            raise DeliveryError("email", f"student {student.id} has no email address")
        if campaign.channel == "sms" and not student.phone:
            raise DeliveryError("sms", f"student {student.id} has no phone number")

        logger.info(
            f"[SIMULATED {campaign.channel.upper()}] campaign={campaign.id} "
            f"to={student.email or student.phone}"
        )


def get_delivery_provider() -> DeliveryProvider:
    """Provider used by the campaign service."""
    if settings.DELIVERY_SIMULATED:
        return SimulatedDeliveryProvider()
    raise DeliveryError("delivery", "no real delivery gateway configured; set DELIVERY_SIMULATED=true")
