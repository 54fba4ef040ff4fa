import json
from logging import getLogger
from typing import Any, Callable, Mapping, TypeVar

from rich.pretty import pretty_repr

from .errors import MalformedPayloadError, UnrepresentableValueError
from .types import Activity, ActivityType, Assets, Emoji, Party, PartySize, Secrets, Timestamps

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

T = TypeVar("T")

_log = getLogger(__name__)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _is_integer(value: Any) -> bool:
    # bool is a subclass of int but is not a JSON number
    return isinstance(value, int) and not isinstance(value, bool)


def _object(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MalformedPayloadError(f"expected object, got {type(value).__name__}", path)
    return value


def _string(data: Mapping[str, Any], key: str, path: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedPayloadError(f"expected string, got {type(value).__name__}", _join(path, key))
    return value


def _boolean(data: Mapping[str, Any], key: str, path: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise MalformedPayloadError(f"expected boolean, got {type(value).__name__}", _join(path, key))
    return value


def _int64(value: Any, path: str) -> int:
    if not _is_integer(value):
        raise MalformedPayloadError(f"expected integer, got {type(value).__name__}", path)
    if not INT64_MIN <= value <= INT64_MAX:
        raise MalformedPayloadError(f"{value} is outside the signed 64-bit range", path)
    return value


def _integer(data: Mapping[str, Any], key: str, path: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    return _int64(value, _join(path, key))


def _snowflake(data: Mapping[str, Any], key: str, path: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    path = _join(path, key)
    if not isinstance(value, str):
        raise MalformedPayloadError(f"expected decimal string, got {type(value).__name__}", path)
    if not (value.isascii() and value.isdigit()):
        raise MalformedPayloadError(f"{value!r} is not a decimal numeral", path)
    number = int(value)
    if number > UINT64_MAX:
        raise MalformedPayloadError(f"{value} is outside the unsigned 64-bit range", path)
    return number


def _encode_int64(value: int, path: str) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise UnrepresentableValueError(f"{value} is outside the signed 64-bit range", path)
    return value


def _encode_snowflake(value: int, path: str) -> str:
    if not 0 <= value <= UINT64_MAX:
        raise UnrepresentableValueError(f"{value} is outside the unsigned 64-bit range", path)
    return str(value)


class PartySizeCodec:
    """Converts between the `[current, maximum]` wire array and `PartySize`."""

    @staticmethod
    def decode(value: Any, path: str = "size") -> PartySize:
        if not isinstance(value, (list, tuple)) or len(value) != 2:  # noqa: PLR2004
            raise MalformedPayloadError("expected array of length 2", path)
        current, maximum = (_int64(item, f"{path}[{idx}]") for idx, item in enumerate(value))
        return PartySize(current=current, maximum=maximum)

    @staticmethod
    def encode(size: PartySize | None, path: str = "size") -> list[int] | None:
        if size is None:
            return None
        return [_encode_int64(size.current, f"{path}[0]"), _encode_int64(size.maximum, f"{path}[1]")]


class ActivityCodec:
    """
    Maps activity wire objects to `Activity` records and back.

    Keys that are absent or null decode to `None`. On encode every field is
    omitted when `None`, except the ones listed in `ALWAYS_INCLUDED`.
    """

    ALWAYS_INCLUDED = frozenset({"name", "assets.large_image", "assets.small_image", "emoji.name"})

    @classmethod
    def decode(cls, data: Any, path: str = "") -> Activity:
        try:
            activity = cls._decode_activity(data, path)
        except MalformedPayloadError as exc:
            _log.debug(f"Malformed activity payload: {exc}")
            raise
        _log.debug(f"Decoded activity: {pretty_repr(activity)}")
        return activity

    @classmethod
    def encode(cls, activity: Activity, path: str = "") -> dict[str, Any]:
        data = cls._encode_activity(activity, path)
        _log.debug(f"Encoded activity: {pretty_repr(data)}")
        return data

    @classmethod
    def _decode_activity(cls, value: Any, path: str) -> Activity:
        data = _object(value, path)
        return Activity(
            name=_string(data, "name", path),
            url=_string(data, "url", path),
            type=cls._decode_type(data, path),
            details=_string(data, "details", path),
            state=_string(data, "state", path),
            emoji=cls._nested(data, "emoji", path, cls._decode_emoji),
            application_id=_snowflake(data, "application_id", path),
            instance=_boolean(data, "instance", path),
            party=cls._nested(data, "party", path, cls._decode_party),
            assets=cls._nested(data, "assets", path, cls._decode_assets),
            timestamps=cls._nested(data, "timestamps", path, cls._decode_timestamps),
            secrets=cls._nested(data, "secrets", path, cls._decode_secrets),
            buttons=cls._decode_buttons(data, path),
        )

    @staticmethod
    def _nested(data: Mapping[str, Any], key: str, path: str, decoder: Callable[[Any, str], T]) -> T | None:
        value = data.get(key)
        if value is None:
            return None
        return decoder(value, _join(path, key))

    @staticmethod
    def _decode_type(data: Mapping[str, Any], path: str) -> ActivityType | None:
        value = _integer(data, "type", path)
        if value is None:
            return None
        try:
            return ActivityType(value)
        except ValueError:
            raise MalformedPayloadError(f"unknown activity type {value}", _join(path, "type")) from None

    @staticmethod
    def _decode_buttons(data: Mapping[str, Any], path: str) -> tuple[str, ...] | None:
        value = data.get("buttons")
        if value is None:
            return None
        path = _join(path, "buttons")
        if not isinstance(value, list):
            raise MalformedPayloadError(f"expected array, got {type(value).__name__}", path)
        for idx, button in enumerate(value):
            if not isinstance(button, str):
                raise MalformedPayloadError(f"expected string, got {type(button).__name__}", f"{path}[{idx}]")
        return tuple(value)

    @staticmethod
    def _decode_emoji(value: Any, path: str) -> Emoji:
        data = _object(value, path)
        return Emoji(
            name=_string(data, "name", path),
            id=_snowflake(data, "id", path),
            animated=_boolean(data, "animated", path),
        )

    @staticmethod
    def _decode_party(value: Any, path: str) -> Party:
        data = _object(value, path)
        size = data.get("size")
        return Party(
            id=_string(data, "id", path),
            size=PartySizeCodec.decode(size, _join(path, "size")) if size is not None else None,
        )

    @staticmethod
    def _decode_assets(value: Any, path: str) -> Assets:
        data = _object(value, path)
        return Assets(
            large_image=_string(data, "large_image", path),
            large_text=_string(data, "large_text", path),
            small_image=_string(data, "small_image", path),
            small_text=_string(data, "small_text", path),
        )

    @staticmethod
    def _decode_timestamps(value: Any, path: str) -> Timestamps:
        data = _object(value, path)
        return Timestamps(start_ms=_integer(data, "start", path), end_ms=_integer(data, "end", path))

    @staticmethod
    def _decode_secrets(value: Any, path: str) -> Secrets:
        data = _object(value, path)
        return Secrets(
            join=_string(data, "join", path),
            match=_string(data, "match", path),
            spectate=_string(data, "spectate", path),
        )

    @classmethod
    def _emit(cls, data: dict[str, Any], key: str, value: Any, record: str = "") -> None:
        if value is not None or _join(record, key) in cls.ALWAYS_INCLUDED:
            data[key] = value

    @classmethod
    def _encode_activity(cls, activity: Activity, path: str) -> dict[str, Any]:
        data: dict[str, Any] = {}
        cls._emit(data, "name", activity.name)
        cls._emit(data, "url", activity.url)
        cls._emit(data, "type", int(activity.type) if activity.type is not None else None)
        cls._emit(data, "details", activity.details)
        cls._emit(data, "state", activity.state)
        if activity.emoji is not None:
            cls._emit(data, "emoji", cls._encode_emoji(activity.emoji, _join(path, "emoji")))
        if activity.application_id is not None:
            application_id = _encode_snowflake(activity.application_id, _join(path, "application_id"))
            cls._emit(data, "application_id", application_id)
        cls._emit(data, "instance", activity.instance)
        if activity.party is not None:
            cls._emit(data, "party", cls._encode_party(activity.party, _join(path, "party")))
        if activity.assets is not None:
            cls._emit(data, "assets", cls._encode_assets(activity.assets))
        if activity.timestamps is not None:
            cls._emit(data, "timestamps", cls._encode_timestamps(activity.timestamps, _join(path, "timestamps")))
        if activity.secrets is not None:
            cls._emit(data, "secrets", cls._encode_secrets(activity.secrets))
        if activity.buttons is not None:
            cls._emit(data, "buttons", list(activity.buttons))
        return data

    @classmethod
    def _encode_emoji(cls, emoji: Emoji, path: str) -> dict[str, Any]:
        data: dict[str, Any] = {}
        cls._emit(data, "name", emoji.name, "emoji")
        if emoji.id is not None:
            cls._emit(data, "id", _encode_snowflake(emoji.id, _join(path, "id")), "emoji")
        cls._emit(data, "animated", emoji.animated, "emoji")
        return data

    @classmethod
    def _encode_party(cls, party: Party, path: str) -> dict[str, Any]:
        data: dict[str, Any] = {}
        cls._emit(data, "id", party.id, "party")
        cls._emit(data, "size", PartySizeCodec.encode(party.size, _join(path, "size")), "party")
        return data

    @classmethod
    def _encode_assets(cls, assets: Assets) -> dict[str, Any]:
        data: dict[str, Any] = {}
        cls._emit(data, "large_image", assets.large_image, "assets")
        cls._emit(data, "large_text", assets.large_text, "assets")
        cls._emit(data, "small_image", assets.small_image, "assets")
        cls._emit(data, "small_text", assets.small_text, "assets")
        return data

    @classmethod
    def _encode_timestamps(cls, timestamps: Timestamps, path: str) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if timestamps.start_ms is not None:
            cls._emit(data, "start", _encode_int64(timestamps.start_ms, _join(path, "start")), "timestamps")
        if timestamps.end_ms is not None:
            cls._emit(data, "end", _encode_int64(timestamps.end_ms, _join(path, "end")), "timestamps")
        return data

    @classmethod
    def _encode_secrets(cls, secrets: Secrets) -> dict[str, Any]:
        data: dict[str, Any] = {}
        cls._emit(data, "join", secrets.join, "secrets")
        cls._emit(data, "match", secrets.match, "secrets")
        cls._emit(data, "spectate", secrets.spectate, "secrets")
        return data


def decode(data: Any) -> Activity:
    return ActivityCodec.decode(data)


def encode(activity: Activity) -> dict[str, Any]:
    return ActivityCodec.encode(activity)


def loads(raw: str | bytes) -> Activity:
    """
    Decode an activity from its JSON text

    Args:
        raw `str | bytes`: The JSON document\n
    Return:
        Activity `Activity`
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        _log.debug(f"Invalid activity JSON: {exc}")
        raise MalformedPayloadError(f"invalid JSON: {exc}") from exc
    return decode(data)


def dumps(activity: Activity, **kwargs: Any) -> str:
    return json.dumps(encode(activity), **kwargs)
