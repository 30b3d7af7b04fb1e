"""
models.py — Shared Pydantic data models.
The infographic schema doubles as the structured-output schema sent to Gemini.
"""

from __future__ import annotations

import re
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_ACCENT_COLOR = "#4F46E5"

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class AppMode(str, Enum):
    """The two top-level UI modes."""
    INFOGRAPHICS = "infographics"
    STUDIO = "studio"


class InfographicType(str, Enum):
    STATISTICAL = "statistical"
    PROCESS = "process"
    COMPARISON = "comparison"
    EDUCATIONAL = "educational"


class StatItem(BaseModel):
    """A single labelled number for the statistical layout."""
    label: str
    value: float
    unit: Optional[str] = Field(
        default=None, description="Optional unit suffix, e.g. '%', 'km', 'M'"
    )


class StepItem(BaseModel):
    title: str
    description: str


class ComparisonSide(BaseModel):
    title: str
    points: List[str] = Field(default_factory=list)


class ComparisonData(BaseModel):
    side_a: ComparisonSide
    side_b: ComparisonSide


class InfoPoint(BaseModel):
    title: str
    text: str
    icon: Optional[str] = Field(
        default=None, description="Optional icon hint (not rendered)"
    )


# Payload field carried by each infographic kind
PAYLOAD_FIELDS = {
    InfographicType.STATISTICAL: "stats",
    InfographicType.PROCESS: "steps",
    InfographicType.COMPARISON: "comparison",
    InfographicType.EDUCATIONAL: "points",
}


class InfographicData(BaseModel):
    """One structured infographic — a tagged variant keyed by ``type``.

    Only the payload field matching ``type`` may be populated. A missing
    payload is allowed; the card then shows its header and summary only.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    type: InfographicType
    title: str
    subtitle: str = ""
    summary: str = ""
    accent_color: str = Field(
        default=DEFAULT_ACCENT_COLOR,
        description="Hex colour used as the layout accent, e.g. '#0EA5E9'",
    )

    stats: Optional[List[StatItem]] = Field(
        default=None, description="Only for type='statistical'"
    )
    steps: Optional[List[StepItem]] = Field(
        default=None, description="Only for type='process'"
    )
    comparison: Optional[ComparisonData] = Field(
        default=None, description="Only for type='comparison'"
    )
    points: Optional[List[InfoPoint]] = Field(
        default=None, description="Only for type='educational'"
    )

    @field_validator("accent_color", mode="before")
    @classmethod
    def _normalize_accent(cls, value: object) -> str:
        if isinstance(value, str) and _HEX_COLOR_RE.match(value.strip()):
            return value.strip()
        return DEFAULT_ACCENT_COLOR

    @model_validator(mode="after")
    def _check_payload_matches_type(self) -> "InfographicData":
        expected = PAYLOAD_FIELDS[self.type]
        stray = [
            name for name in PAYLOAD_FIELDS.values()
            if name != expected and getattr(self, name) is not None
        ]
        if stray:
            raise ValueError(
                f"{self.type.value} infographic must not carry {', '.join(stray)}"
            )
        return self

    @property
    def payload_field(self) -> str:
        return PAYLOAD_FIELDS[self.type]


class GenerationResponse(BaseModel):
    """Structured output of a single infographic generation call."""
    infographics: List[InfographicData] = Field(default_factory=list)
