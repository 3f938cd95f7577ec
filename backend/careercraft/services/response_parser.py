"""Sanitizing and parsing of raw AI replies.

Models are asked for bare JSON or bare text but routinely wrap it in
markdown fences or add a sentence of prose. Everything here is pure and
raises MalformedResponse when a reply cannot be used.
"""

import json
import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from careercraft.errors import MalformedResponse

# A language tag counts only when the fence line ends right after it
_FENCE_MARKER = re.compile(r"```(?:[a-zA-Z]+(?=\n)|json)?\n?")
_FENCED_BLOCK = re.compile(r"```[\s\S]*?```")


def strip_code_fences(text: str) -> str:
    """Drop ``` / ```json (any language tag) markers but keep what they enclose."""
    return _FENCE_MARKER.sub("", text or "").strip()


def strip_fenced_blocks(text: str) -> str:
    """Drop complete fenced blocks, markers and contents alike."""
    cleaned = _FENCED_BLOCK.sub("", text or "").strip()
    if not cleaned:
        raise MalformedResponse("AI returned an empty response")
    return cleaned


def _outer_object(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def parse_json_reply(text: str, required_key: str = None, expected_type: type = None) -> dict:
    """Parse a JSON object out of an AI reply.

    Leading/trailing notes around the object are tolerated. When
    ``required_key`` is given the key must be present, and of
    ``expected_type`` if that is given too.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        candidate = _outer_object(cleaned)
        if candidate is None:
            raise MalformedResponse("AI reply was not valid JSON")
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            raise MalformedResponse("AI reply was not valid JSON")

    if not isinstance(data, dict):
        raise MalformedResponse("AI reply was not a JSON object")

    if required_key is not None:
        if required_key not in data:
            raise MalformedResponse(f"AI reply is missing '{required_key}'")
        if expected_type is not None and not isinstance(data[required_key], expected_type):
            raise MalformedResponse(f"AI reply has an invalid '{required_key}'")

    return data


# ── Industry insight payload ─────────────────────────────────────────────────

# Fallbacks applied to missing or null fields
INSIGHT_DEFAULTS: dict[str, Any] = {
    "salaryRanges": [],
    "growthRate": 0,
    "demandLevel": "Medium",
    "topSkills": [],
    "marketOutlook": "Neutral",
    "keyTrends": [],
    "recommendedSkills": [],
}


class InsightPayload(BaseModel):
    """Industry insight reply with best-effort per-field defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    salary_ranges: list[dict] = Field(default_factory=list, alias="salaryRanges")
    growth_rate: float = Field(default=0, alias="growthRate")
    demand_level: Literal["High", "Medium", "Low"] = Field(default="Medium", alias="demandLevel")
    top_skills: list[str] = Field(default_factory=list, alias="topSkills")
    market_outlook: Literal["Positive", "Neutral", "Negative"] = Field(default="Neutral", alias="marketOutlook")
    key_trends: list[str] = Field(default_factory=list, alias="keyTrends")
    recommended_skills: list[str] = Field(default_factory=list, alias="recommendedSkills")

    @field_validator("*", mode="before")
    @classmethod
    def _null_means_missing(cls, value, info):
        if value is None:
            alias = cls.model_fields[info.field_name].alias
            default = INSIGHT_DEFAULTS[alias]
            return list(default) if isinstance(default, list) else default
        return value


def parse_insight_payload(data: dict) -> InsightPayload:
    try:
        return InsightPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedResponse("AI returned invalid industry insights", details={"fields": _error_fields(e)})


def _error_fields(exc: ValidationError) -> list[str]:
    return sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
