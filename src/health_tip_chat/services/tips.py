"""Daily health tip selection."""

from collections.abc import Sequence
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Awaitable, Callable, Literal
from zoneinfo import ZoneInfo

from health_tip_chat.config.prompts import DAILY_TIPS
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)

TipSource = Literal["list", "model"]


def resolve_timezone(name: str) -> tzinfo:
    """Timezone by IANA name; "UTC" needs no tz database."""
    if name.upper() == "UTC":
        return dt_timezone.utc
    return ZoneInfo(name)


def select_daily_tip(tips: Sequence[str], day_of_month: int) -> str:
    """Pick ``tips[day_of_month % len(tips)]``: one stable tip per calendar day."""
    if not tips:
        raise ValueError("Tip list is empty")
    return tips[day_of_month % len(tips)]


class TipService:
    """
    Daily tip from a fixed list, or generated by the model.

    The calendar day for the list lookup is read in an explicit timezone,
    so every replica hands out the same tip on the same day.
    """

    def __init__(
        self,
        source: TipSource = "list",
        tips: Sequence[str] = DAILY_TIPS,
        timezone: str = "UTC",
        clock: Callable[[tzinfo], datetime] | None = None,
        generate: Callable[[], Awaitable[str]] | None = None,
    ):
        """
        Initialize tip service.

        Args:
            source: "list" for the fixed list, "model" for generated tips
            tips: Candidate tips for the list source
            timezone: IANA timezone the calendar day is read in
            clock: Returns the current time in the given timezone
            generate: Coroutine producing a model tip (required for "model")
        """
        if source == "list" and not tips:
            raise ValueError("Tip list is empty")
        if source == "model" and generate is None:
            raise ValueError("Model tip source needs a generate coroutine")
        self._source = source
        self._tips = tuple(tips)
        self._tz = resolve_timezone(timezone)
        self._clock = clock or (lambda tz: datetime.now(tz))
        self._generate = generate

    @property
    def source(self) -> TipSource:
        return self._source

    async def get_tip(self) -> str:
        """Return today's tip according to the configured source."""
        if self._source == "model":
            return await self._generate()

        day = self._clock(self._tz).day
        logger.debug("Selecting daily tip", day=day, tip_count=len(self._tips))
        return select_daily_tip(self._tips, day)
