from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self, Type

from .codec import ActivityCodec, _boolean, _integer, _object
from .errors import MalformedPayloadError
from .types import Activity

PRESENCE_UPDATE = 3


class Status(StrEnum):
    ONLINE = "online"
    DND = "dnd"
    DO_NOT_DISTURB = DND
    IDLE = "idle"
    INVISIBLE = "invisible"
    OFFLINE = "offline"


@dataclass(frozen=True)
class PresenceUpdate:
    activities: tuple[Activity, ...] = ()
    status: Status = Status.ONLINE
    since: int | None = None
    """unix time in milliseconds of when the client went idle"""
    afk: bool = False

    @classmethod
    def decode(cls: Type[Self], value: Any) -> Self:
        data = _object(value, "")
        activities = data.get("activities")
        if activities is None:
            activities = []
        elif not isinstance(activities, list):
            raise MalformedPayloadError(f"expected array, got {type(activities).__name__}", "activities")

        status = data.get("status")
        if status is None:
            status = Status.ONLINE
        try:
            status = Status(status)
        except ValueError:
            raise MalformedPayloadError(f"unknown status {status!r}", "status") from None

        afk = _boolean(data, "afk", "")
        return cls(
            activities=tuple(
                ActivityCodec.decode(activity, f"activities[{idx}]") for idx, activity in enumerate(activities)
            ),
            status=status,
            since=_integer(data, "since", ""),
            afk=bool(afk),
        )

    def encode(self) -> dict[str, Any]:
        return {
            "since": self.since,
            "activities": [
                ActivityCodec.encode(activity, f"activities[{idx}]") for idx, activity in enumerate(self.activities)
            ],
            "status": self.status.value,
            "afk": self.afk,
        }

    def gateway_payload(self) -> dict[str, Any]:
        """The gateway `PRESENCE_UPDATE` frame carrying this presence."""
        return {"op": PRESENCE_UPDATE, "d": self.encode()}
