"""
Persistence interfaces the engine depends on.
Implemented over SQLModel in repositories/store.py and by fakes in tests.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from edupartner.models.campaign import Campaign
from edupartner.models.interaction import Interaction
from edupartner.models.reaction import Reaction
from edupartner.models.student import Student


class StudentSource(ABC):

    @abstractmethod
    async def load_all_entities(self) -> List[Student]:
        """Every student eligible for scoring or targeting."""
        pass


class ScoreStore(StudentSource):
    """Reads interaction history and writes computed scores."""

    @abstractmethod
    async def load_entity(self, student_id: uuid.UUID) -> Student:
        """Return the student or raise NotFoundError."""
        pass

    @abstractmethod
    async def load_interactions(self, student_id: uuid.UUID) -> List[Interaction]:
        pass

    @abstractmethod
    async def save_score(self, student_id: uuid.UUID, score: int) -> None:
        pass


class CampaignStore(StudentSource):
    """Campaign state and reaction log."""

    @abstractmethod
    async def load_campaign(self, campaign_id: uuid.UUID) -> Campaign:
        """Return the campaign or raise NotFoundError."""
        pass

    @abstractmethod
    async def save_campaign_status(
        self,
        campaign_id: uuid.UUID,
        expected_status: str,
        new_status: str,
        at: Optional[datetime] = None
    ) -> bool:
        """
        Atomically move a campaign from expected_status to new_status.

        Must be a single conditional write (compare-and-swap). Returns False
        when the stored status no longer equals expected_status, in which
        case nothing is changed.
        """
        pass

    @abstractmethod
    async def append_reaction(self, reaction: Reaction) -> Reaction:
        pass


class DeliveryProvider(ABC):
    """Gateway that hands a campaign message to one student (SMTP, SendGrid, SMS...)."""

    @abstractmethod
    async def deliver(self, campaign: Campaign, student: Student) -> None:
        """
        Hand one campaign message for one student to the gateway.

        Raises:
            DeliveryError: when the gateway refuses the message
        """
        pass
