"""Typed protocol messages exchanged with the companion.

Text fields are bounded and truncated on validation. Text fields default to
None so a reassembler can tell "absent" from "empty"; numeric and flag fields
carry their per-field defaults, and fall back to them when the companion sends
a value that does not validate.
"""

from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)


def _truncate(max_length: int) -> AfterValidator:
    return AfterValidator(lambda value: value[:max_length])


def _or_default(default: Any) -> WrapValidator:
    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return default

    return WrapValidator(validate)


def _nonzero(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return value


StationName = Annotated[str, _truncate(63)]
ShortText = Annotated[str, _truncate(31)]
VehicleText = Annotated[str, _truncate(15)]
TimeText = Annotated[str, _truncate(7)]
PlatformText = Annotated[str, _truncate(3)]

Index = Annotated[int, Field(ge=0)]

Delay = Annotated[int, _or_default(0)]
Timestamp = Annotated[int, _or_default(0)]
StopCount = Annotated[int, Field(ge=0), _or_default(0)]
DirectFlag = Annotated[bool, BeforeValidator(_nonzero), _or_default(True)]
Flag = Annotated[bool, BeforeValidator(_nonzero), _or_default(False)]


class Message(BaseModel):
    """Base for all protocol messages."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


# Inbound (companion -> client)


class AcknowledgeMessage(Message):
    request_id: int


class DepartureCountMessage(Message):
    request_id: int
    count: Index


class DepartureMessage(Message):
    request_id: int | None = None
    index: Index
    destination: ShortText | None = None
    depart_time: TimeText | None = None
    arrive_time: TimeText | None = None
    platform: PlatformText | None = None
    train_type: TimeText | None = None
    duration: TimeText | None = None
    depart_delay: Delay = 0
    arrive_delay: Delay = 0
    is_direct: DirectFlag = True
    platform_changed: Flag = False
    depart_timestamp: Timestamp = 0


class DetailLegCountMessage(Message):
    request_id: int | None = None
    count: Index
    departure_index: Index | None = None


class DetailLegMessage(Message):
    request_id: int | None = None
    leg_index: Index
    depart_station: ShortText | None = None
    arrive_station: ShortText | None = None
    depart_time: TimeText | None = None
    arrive_time: TimeText | None = None
    depart_platform: PlatformText | None = None
    arrive_platform: PlatformText | None = None
    depart_delay: Delay = 0
    arrive_delay: Delay = 0
    vehicle: VehicleText | None = None
    direction: ShortText | None = None
    stop_count: StopCount = 0
    depart_platform_changed: Flag = False
    arrive_platform_changed: Flag = False


class StationCountMessage(Message):
    count: Index


class StationMessage(Message):
    index: Index
    name: StationName | None = None
    station_id: ShortText | None = None


class SetActiveRouteMessage(Message):
    from_index: Index
    to_index: Index


InboundMessage = (
    AcknowledgeMessage
    | DepartureCountMessage
    | DepartureMessage
    | DetailLegCountMessage
    | DetailLegMessage
    | StationCountMessage
    | StationMessage
    | SetActiveRouteMessage
)


# Outbound (client -> companion)


class RequestScheduleMessage(Message):
    from_station_id: str
    to_station_id: str
    request_id: int


class RequestDetailsMessage(Message):
    departure_index: Index
    request_id: int


OutboundMessage = RequestScheduleMessage | RequestDetailsMessage
