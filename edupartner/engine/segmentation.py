"""
Student segmentation.

A segment is the conjunction of every criterion that is set. Fields left
unset (or given as an empty list) do not constrain the result.
"""
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, confloat

from edupartner.core.exceptions import InvalidCriteriaError
from edupartner.models.student import Student


class Criteria(BaseModel):
    """
    Segmentation criteria.

    Recognised keys:
        statuses: student.status must be one of these
        education_levels: student.education_level must be one of these
        countries: student.country must be one of these
        min_score: student.engagement_score must be >= this value
        tags: student must hold every one of these tags

    Any other key is rejected.
    """
    model_config = ConfigDict(extra="forbid")

    statuses: Optional[List[str]] = None
    education_levels: Optional[List[str]] = None
    countries: Optional[List[str]] = None
    # strict: booleans and numeric strings are refused, NaN and infinity too
    min_score: Optional[confloat(strict=True, allow_inf_nan=False)] = None
    tags: Optional[List[str]] = None

    @classmethod
    def parse(cls, data: Any) -> "Criteria":
        """Build criteria from caller input, raising InvalidCriteriaError on bad input."""
        if data is None:
            return cls()
        if isinstance(data, Criteria):
            return data
        if not isinstance(data, dict):
            raise InvalidCriteriaError(f"Criteria must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidCriteriaError(f"Invalid segmentation criteria: {problems}") from e


class SegmentationEngine:
    """Filters a student population against Criteria. Holds no state."""

    def matches(self, student: Student, criteria: Criteria) -> bool:
        if criteria.statuses and student.status not in criteria.statuses:
            return False
        if criteria.education_levels and student.education_level not in criteria.education_levels:
            return False
        if criteria.countries and student.country not in criteria.countries:
            return False
        if criteria.min_score is not None and (student.engagement_score or 0) < criteria.min_score:
            return False
        if criteria.tags:
            student_tags = set(student.tags or [])
            # one membership check per tag, so [A, B] needs both A and B
            for tag in criteria.tags:
                if tag not in student_tags:
                    return False
        return True

    def segment(self, population: Iterable[Student], criteria: Criteria) -> List[Student]:
        """Return the students matching every criterion, in input order."""
        return [s for s in population if self.matches(s, criteria)]


segmentation_engine = SegmentationEngine()
