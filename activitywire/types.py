from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Optional, Self, Type

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
CUSTOM_STATUS_NAME = "Custom Status"


class ActivityType(IntEnum):
    PLAYING = 0
    STREAMING = 1
    LISTENING = 2
    WATCHING = 3
    CUSTOM = 4
    COMPETING = 5


@dataclass(frozen=True)
class Emoji:
    name: str | None
    id: int | None = None
    animated: bool | None = None


@dataclass(frozen=True)
class PartySize:
    current: int
    maximum: int


@dataclass(frozen=True)
class Party:
    id: str | None = None
    size: PartySize | None = None


@dataclass(frozen=True)
class Assets:
    large_image: str | None = None
    large_text: str | None = None
    small_image: str | None = None
    """Small image asset ID. Not part of the public read surface of a presence, kept for the wire."""
    small_text: str | None = None


@dataclass(frozen=True)
class Timestamps:
    start_ms: int | None = None
    end_ms: int | None = None

    @classmethod
    def from_datetimes(
        cls: Type[Self], start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Self:
        """
        Build timestamps from datetimes

        Args:
            start `datetime`: When the activity started, naive values are read as UTC\n
            end `datetime`: When the activity ends, naive values are read as UTC\n
        Return:
            Self `Timestamps`
        """
        return cls(start_ms=_to_milliseconds(start), end_ms=_to_milliseconds(end))

    @property
    def start(self) -> datetime | None:
        """time the activity started, in utc"""
        return _from_milliseconds(self.start_ms)

    @property
    def end(self) -> datetime | None:
        """time the activity is going to end, in utc"""
        return _from_milliseconds(self.end_ms)


@dataclass(frozen=True)
class Secrets:
    join: str | None = None
    match: str | None = None
    spectate: str | None = None


@dataclass(frozen=True)
class Activity:
    name: str | None
    url: str | None = None
    type: ActivityType | None = None
    details: str | None = None
    state: str | None = None
    emoji: Emoji | None = None
    application_id: int | None = None
    instance: bool | None = None
    party: Party | None = None
    assets: Assets | None = None
    timestamps: Timestamps | None = None
    secrets: Secrets | None = None
    buttons: tuple[str, ...] | None = None

    def is_rich_presence(self) -> bool:
        return any(
            value is not None
            for value in (
                self.details,
                self.state,
                self.application_id,
                self.instance,
                self.party,
                self.assets,
                self.secrets,
                self.timestamps,
            )
        )

    def is_custom_status(self) -> bool:
        return self.name == CUSTOM_STATUS_NAME


def _from_milliseconds(value: int | None) -> datetime | None:
    if value is None:
        return None
    try:
        return EPOCH + timedelta(milliseconds=value)
    except OverflowError:
        # values past the datetime range read as the earliest representable time
        return datetime.min.replace(tzinfo=timezone.utc)


def _to_milliseconds(value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)
