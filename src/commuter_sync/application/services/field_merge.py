"""Merging of message fields into reassembled records."""

from typing import Any


def merge_message_fields(
    record: Any,
    message: Any,
    text_fields: tuple[str, ...],
    value_fields: tuple[str, ...],
) -> None:
    """Copy message fields onto a record in place.

    Text fields that are None in the message keep the record's previous value.
    Value fields are always copied, so an absent numeric or flag field falls
    back to the message model's default (delay 0, direct True, ...).
    """
    for name in text_fields:
        value = getattr(message, name)
        if value is not None:
            setattr(record, name, value)
    for name in value_fields:
        setattr(record, name, getattr(message, name))
