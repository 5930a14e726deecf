"""
Engagement scoring.

Each interaction contributes its type weight scaled by a linear recency
factor over a one-year horizon:

    factor = min(HORIZON, max(1, HORIZON - days_since)) / HORIZON

so a fresh interaction counts fully, one older than the horizon still
counts 1/365 of its weight, and a future-dated one is capped at 1.
"""
from datetime import datetime
from typing import Dict, Iterable, Optional

from edupartner.core.timezone import to_utc
from edupartner.models.interaction import Interaction, InteractionType

HORIZON_DAYS = 365

DEFAULT_WEIGHTS: Dict[str, int] = {
    InteractionType.CALL: 3,
    InteractionType.MEETING: 5,
    InteractionType.EVENT: 4,
    InteractionType.DOCUMENT: 2,
    InteractionType.INQUIRY: 2,
    InteractionType.EMAIL: 1,
    InteractionType.OTHER: 1,
}
UNKNOWN_TYPE_WEIGHT = 1


class ScoreEngine:
    """Pure engagement score calculator. Persisting the result is up to the caller."""

    def __init__(self, weights: Optional[Dict[str, int]] = None, horizon_days: int = HORIZON_DAYS):
        self.weights = dict(weights or DEFAULT_WEIGHTS)
        self.horizon_days = horizon_days

    def weight(self, interaction_type: str) -> int:
        return self.weights.get(interaction_type, UNKNOWN_TYPE_WEIGHT)

    def recency_factor(self, occurred_at: datetime, now: datetime) -> float:
        # naive values are read as UTC so stored rows and request data compare
        days_since = (to_utc(now) - to_utc(occurred_at)).days
        # future timestamps give days_since < 0 and would push the factor past 1
        remaining = min(self.horizon_days, max(1, self.horizon_days - days_since))
        return remaining / self.horizon_days

    def component(self, interaction: Interaction, now: datetime) -> float:
        """Contribution of a single interaction, before truncation."""
        return self.weight(interaction.type) * self.recency_factor(interaction.occurred_at, now)

    def compute_score(self, interactions: Iterable[Interaction], now: datetime) -> int:
        total = sum(self.component(i, now) for i in interactions)
        return int(total)


score_engine = ScoreEngine()
