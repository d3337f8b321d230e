"""Typed shape of the casinoscores roulette feed.

Upstream keys are camelCase; the models expose snake_case attributes and
accept either spelling. Unknown keys are ignored, unknown parity/color values
are rejected, and numeric fields must arrive as JSON numbers.
"""

import logging
from datetime import datetime
from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from common.exceptions import ValidationError
from data_sources.rdbms import as_utc

logger = logging.getLogger(__name__)


class _FeedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RouletteOutcome(_FeedModel):
    number: int = Field(strict=True, ge=0, le=36)
    type: Literal["Even", "Odd"]
    color: Literal["Red", "Black", "Green"]


class LuckyNumber(_FeedModel):
    number: int = Field(strict=True)
    rounded_multiplier: float = Field(strict=True, alias="roundedMultiplier")


class RouletteTable(_FeedModel):
    id: str
    name: str


class RouletteResult(_FeedModel):
    outcome: RouletteOutcome
    lucky_numbers_list: Optional[List[LuckyNumber]] = Field(default=None, alias="luckyNumbersList")


class RouletteData(_FeedModel):
    id: str
    started_at: datetime = Field(alias="startedAt")
    settled_at: datetime = Field(alias="settledAt")
    status: str
    game_type: str = Field(alias="gameType")
    table: RouletteTable
    result: RouletteResult

    @field_validator("started_at", "settled_at")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class RouletteEvent(_FeedModel):
    id: str
    data: RouletteData


_event_list = TypeAdapter(List[RouletteEvent])


def _first_error(exc: PydanticValidationError) -> Tuple[str, str]:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "<root>"
    return location, error["msg"]


def validate_events(payload: Any, strict: bool = True) -> List[RouletteEvent]:
    """
    Turn the decoded JSON payload into typed events.

    strict=True rejects the whole batch on the first malformed record.
    strict=False drops malformed records (logged) and keeps the rest; a
    payload that is not a list is rejected in both modes.
    """
    if not isinstance(payload, list):
        raise ValidationError(
            f"Expected a list of roulette events, got {type(payload).__name__}",
            field="<root>",
        )

    if strict:
        try:
            return _event_list.validate_python(payload)
        except PydanticValidationError as exc:
            location, msg = _first_error(exc)
            raise ValidationError(
                f"Invalid roulette payload at {location}: {msg}",
                field=location,
                error_count=exc.error_count(),
            ) from exc

    events = []
    for index, raw in enumerate(payload):
        try:
            events.append(RouletteEvent.model_validate(raw))
        except PydanticValidationError as exc:
            location, msg = _first_error(exc)
            logger.warning("Dropping malformed roulette event #%d at %s: %s", index, location, msg)
    return events
