"""Wire codec for the companion protocol.

Messages travel as flat key/value objects keyed like the companion's message
keys (``MESSAGE_TYPE``, ``REQUEST_ID``, ...). Both directions are supported so
the same codec serves the client and a companion fixture.
"""

import json
from collections.abc import Mapping
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from commuter_sync.domain.models.messages import (
    AcknowledgeMessage,
    DepartureCountMessage,
    DepartureMessage,
    DetailLegCountMessage,
    DetailLegMessage,
    InboundMessage,
    OutboundMessage,
    RequestDetailsMessage,
    RequestScheduleMessage,
    SetActiveRouteMessage,
    StationCountMessage,
    StationMessage,
)

MESSAGE_TYPE_KEY = "MESSAGE_TYPE"


class MessageType(IntEnum):
    """Message type codes shared with the companion."""

    REQUEST_DATA = 1
    SEND_DEPARTURE = 2
    SEND_COUNT = 3
    REQUEST_DETAILS = 4
    SEND_DETAIL = 5
    SEND_STATION_COUNT = 6
    SEND_STATION = 7
    SET_ACTIVE_ROUTE = 8
    REQUEST_ACK = 9


class MessageDecodeError(ValueError):
    """Raised when a wire payload is not a valid protocol message."""


_LEG_KEYS = {
    "REQUEST_ID": "request_id",
    "LEG_INDEX": "leg_index",
    "LEG_DEPART_STATION": "depart_station",
    "LEG_ARRIVE_STATION": "arrive_station",
    "LEG_DEPART_TIME": "depart_time",
    "LEG_ARRIVE_TIME": "arrive_time",
    "LEG_DEPART_PLATFORM": "depart_platform",
    "LEG_ARRIVE_PLATFORM": "arrive_platform",
    "LEG_DEPART_DELAY": "depart_delay",
    "LEG_ARRIVE_DELAY": "arrive_delay",
    "LEG_VEHICLE": "vehicle",
    "LEG_DIRECTION": "direction",
    "LEG_STOP_COUNT": "stop_count",
    "LEG_DEPART_PLATFORM_CHANGED": "depart_platform_changed",
    "LEG_ARRIVE_PLATFORM_CHANGED": "arrive_platform_changed",
}

# model -> (type code, wire key -> field name)
_WIRE_FORMATS: dict[type[BaseModel], tuple[MessageType, dict[str, str]]] = {
    AcknowledgeMessage: (MessageType.REQUEST_ACK, {"REQUEST_ID": "request_id"}),
    DepartureCountMessage: (
        MessageType.SEND_COUNT,
        {"REQUEST_ID": "request_id", "DATA_COUNT": "count"},
    ),
    DepartureMessage: (
        MessageType.SEND_DEPARTURE,
        {
            "REQUEST_ID": "request_id",
            "DEPARTURE_INDEX": "index",
            "DESTINATION": "destination",
            "DEPART_TIME": "depart_time",
            "DEPART_TIMESTAMP": "depart_timestamp",
            "ARRIVE_TIME": "arrive_time",
            "PLATFORM": "platform",
            "TRAIN_TYPE": "train_type",
            "DURATION": "duration",
            "DEPART_DELAY": "depart_delay",
            "ARRIVE_DELAY": "arrive_delay",
            "IS_DIRECT": "is_direct",
            "PLATFORM_CHANGED": "platform_changed",
        },
    ),
    DetailLegCountMessage: (
        MessageType.SEND_DETAIL,
        {"REQUEST_ID": "request_id", "LEG_COUNT": "count", "DEPARTURE_INDEX": "departure_index"},
    ),
    DetailLegMessage: (MessageType.SEND_DETAIL, _LEG_KEYS),
    StationCountMessage: (MessageType.SEND_STATION_COUNT, {"CONFIG_STATION_COUNT": "count"}),
    StationMessage: (
        MessageType.SEND_STATION,
        {
            "CONFIG_STATION_INDEX": "index",
            "CONFIG_STATION_NAME": "name",
            "CONFIG_STATION_IRAIL_ID": "station_id",
        },
    ),
    SetActiveRouteMessage: (
        MessageType.SET_ACTIVE_ROUTE,
        {"CONFIG_FROM_INDEX": "from_index", "CONFIG_TO_INDEX": "to_index"},
    ),
    RequestScheduleMessage: (
        MessageType.REQUEST_DATA,
        {
            "FROM_STATION_ID": "from_station_id",
            "TO_STATION_ID": "to_station_id",
            "REQUEST_ID": "request_id",
        },
    ),
    RequestDetailsMessage: (
        MessageType.REQUEST_DETAILS,
        {"DEPARTURE_INDEX": "departure_index", "REQUEST_ID": "request_id"},
    ),
}

_INBOUND_MODELS: dict[MessageType, type[BaseModel]] = {
    MessageType.REQUEST_ACK: AcknowledgeMessage,
    MessageType.SEND_COUNT: DepartureCountMessage,
    MessageType.SEND_DEPARTURE: DepartureMessage,
    MessageType.SEND_STATION_COUNT: StationCountMessage,
    MessageType.SEND_STATION: StationMessage,
    MessageType.SET_ACTIVE_ROUTE: SetActiveRouteMessage,
}

_OUTBOUND_MODELS: dict[MessageType, type[BaseModel]] = {
    MessageType.REQUEST_DATA: RequestScheduleMessage,
    MessageType.REQUEST_DETAILS: RequestDetailsMessage,
}


def encode(message: BaseModel) -> dict[str, Any]:
    """Encode any protocol message as a wire payload. None-valued fields are omitted."""
    message_type, keys = _WIRE_FORMATS[type(message)]
    payload: dict[str, Any] = {MESSAGE_TYPE_KEY: int(message_type)}
    for wire_key, field_name in keys.items():
        value = getattr(message, field_name)
        if value is not None:
            payload[wire_key] = value
    return payload


def encode_outbound(message: OutboundMessage) -> dict[str, Any]:
    return encode(message)


def encoded_size(payload: Mapping[str, Any]) -> int:
    """Size in bytes of the JSON text frame carrying ``payload``."""
    return len(to_json(payload).encode("utf-8"))


def to_json(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _message_type(payload: Mapping[str, Any]) -> MessageType:
    raw_type = payload.get(MESSAGE_TYPE_KEY)
    if raw_type is None:
        raise MessageDecodeError("No message type")
    try:
        return MessageType(int(raw_type))
    except (TypeError, ValueError) as e:
        raise MessageDecodeError(f"Unknown message type: {raw_type!r}") from e


def _validate(model: type[BaseModel], payload: Mapping[str, Any]) -> Any:
    _, keys = _WIRE_FORMATS[model]
    fields = {field_name: payload[key] for key, field_name in keys.items() if key in payload}
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise MessageDecodeError(
            f"Malformed {model.__name__}: {e.error_count()} invalid field(s)"
        ) from e


def decode_inbound(payload: Mapping[str, Any]) -> InboundMessage:
    """Decode a companion -> client payload.

    Raises:
        MessageDecodeError: If the type is unknown or a required field is missing or invalid.
    """
    message_type = _message_type(payload)
    if message_type == MessageType.SEND_DETAIL:
        # Leg count and leg share one type code; the keys tell them apart.
        if "LEG_COUNT" in payload:
            return _validate(DetailLegCountMessage, payload)
        if "LEG_INDEX" in payload:
            return _validate(DetailLegMessage, payload)
        raise MessageDecodeError("Detail message carries neither LEG_COUNT nor LEG_INDEX")

    model = _INBOUND_MODELS.get(message_type)
    if model is None:
        raise MessageDecodeError(f"Unexpected inbound message type: {message_type.name}")
    return _validate(model, payload)


def decode_outbound(payload: Mapping[str, Any]) -> OutboundMessage:
    """Decode a client -> companion payload.

    Raises:
        MessageDecodeError: If the type is unknown or a field fails validation.
    """
    message_type = _message_type(payload)
    model = _OUTBOUND_MODELS.get(message_type)
    if model is None:
        raise MessageDecodeError(f"Unexpected outbound message type: {message_type.name}")
    return _validate(model, payload)


def parse_frame(frame: str) -> dict[str, Any]:
    """Parse a JSON text frame into a payload dictionary.

    Raises:
        MessageDecodeError: If the frame is not a JSON object.
    """
    try:
        payload = json.loads(frame)
    except json.JSONDecodeError as e:
        raise MessageDecodeError(f"Invalid JSON frame: {e.msg}") from e
    if not isinstance(payload, dict):
        raise MessageDecodeError("Frame is not a JSON object")
    return payload
