"""
GELF Wire Message
=================

Bounded Context: GELF Normalization

A WireMessage is the GELF 1.1 projection of a Message after merging a
logger's default metadata and injecting its hostname. All validation happens
at construction, so a WireMessage that exists can always be rendered.

Field rules:
- ``version`` is always "1.1"
- Reserved names (version, host, short_message, full_message, timestamp,
  level) are only ever set from the Message itself
- Additional fields are written as ``_<key>``; message metadata overrides
  default metadata
- Additional field values are JSON strings or numbers
"""

import json
import math
import re
from typing import Any, Dict, Mapping, Optional

from ..errors import EncodingError
from .message import Message

GELF_VERSION = "1.1"

RESERVED_FIELDS = frozenset({
    "version",
    "host",
    "short_message",
    "full_message",
    "timestamp",
    "level",
})

_FIELD_NAME = re.compile(r"[\w.\-]+", re.ASCII)


def additional_field_name(key: str) -> str:
    """
    Return the wire name (``_<key>``) for an additional field.

    Raises:
        EncodingError: If the key is not a string, is empty, contains
            characters GELF does not allow, or names a reserved field once
            leading underscores are stripped (``host``, ``_host``, ...)
    """
    if not isinstance(key, str):
        raise EncodingError(f"Additional field name must be a string, got {key!r}")

    bare = key.lstrip("_")
    if bare in RESERVED_FIELDS:
        raise EncodingError(
            f"Additional field '{key}' collides with reserved GELF field '{bare}'"
        )

    name = f"_{key}"
    if not _FIELD_NAME.fullmatch(name) or not bare:
        raise EncodingError(f"Invalid additional field name: {key!r}")
    return name


def additional_field_value(key: str, value: Any) -> Any:
    """
    Validate an additional field value.

    Raises:
        EncodingError: If the value is not a string, int or finite float
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise EncodingError(
            f"Additional field '{key}' must be a string or number, "
            f"got {type(value).__name__}"
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodingError(f"Additional field '{key}' is not a finite number: {value}")
    return value


class WireMessage:
    """
    Read-only GELF field set for one message.

    Attributes:
        message: Source Message

    Example:
        >>> wire = WireMessage(Message("hi"), "web-01", {"facility": "api"})
        >>> wire.to_gelf()
        '{"version":"1.1","host":"web-01","short_message":"hi",...,"_facility":"api"}'
    """

    __slots__ = ("message", "_fields")

    def __init__(
        self,
        message: Message,
        hostname: str,
        default_metadata: Optional[Mapping[str, Any]] = None
    ):
        if not isinstance(hostname, str):
            raise EncodingError(f"host must be a string, got {type(hostname).__name__}")

        self.message = message

        fields: Dict[str, Any] = {
            "version": GELF_VERSION,
            "host": hostname,
            "short_message": message.short_message,
        }
        if message.full_message is not None:
            fields["full_message"] = message.full_message
        fields["timestamp"] = message.timestamp.to_gelf()
        fields["level"] = int(message.level)

        for source in (default_metadata or {}, message.metadata):
            for key, value in source.items():
                fields[additional_field_name(key)] = additional_field_value(key, value)

        self._fields = fields

    @property
    def fields(self) -> Dict[str, Any]:
        """Copy of the staged GELF fields, in wire order."""
        return dict(self._fields)

    @property
    def host(self) -> str:
        return self._fields["host"]

    @property
    def short_message(self) -> str:
        return self._fields["short_message"]

    @property
    def level(self) -> int:
        return self._fields["level"]

    def additional_fields(self) -> Dict[str, Any]:
        """The ``_``-prefixed fields only."""
        return {k: v for k, v in self._fields.items() if k.startswith("_")}

    def to_gelf(self) -> str:
        """
        Render the canonical GELF JSON payload (compact, flat, UTF-8 text).

        Raises:
            EncodingError: If a field cannot be serialized to JSON
        """
        try:
            return json.dumps(
                self._fields,
                ensure_ascii=False,
                allow_nan=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to serialize GELF message: {e}") from e

    def to_bytes(self) -> bytes:
        """GELF JSON encoded as UTF-8."""
        try:
            return self.to_gelf().encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(f"GELF message is not valid UTF-8: {e}") from e

    def __repr__(self) -> str:
        return f"WireMessage(host={self.host!r}, short_message={self.short_message!r})"
