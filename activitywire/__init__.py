from .codec import ActivityCodec, PartySizeCodec, decode, dumps, encode, loads
from .errors import ActivityWireError, MalformedPayloadError, UnrepresentableValueError
from .presence import PresenceUpdate, Status
from .types import Activity, ActivityType, Assets, Emoji, Party, PartySize, Secrets, Timestamps

__version__ = "0.1.0"

__all__ = [
    "Activity",
    "ActivityCodec",
    "ActivityType",
    "ActivityWireError",
    "Assets",
    "Emoji",
    "MalformedPayloadError",
    "Party",
    "PartySize",
    "PartySizeCodec",
    "PresenceUpdate",
    "Secrets",
    "Status",
    "Timestamps",
    "UnrepresentableValueError",
    "decode",
    "dumps",
    "encode",
    "loads",
]
