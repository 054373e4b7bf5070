"""
Client options and serialization settings.

This module defines the configuration consumed by ``GraphQLClient``: the
field-naming convention with its JSON encode/decode hooks, and the media
type sent with POST bodies.
"""

from __future__ import annotations

import codecs
import json
import re
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MEDIA_TYPE = "application/json; charset=utf-8"

_CHARSET_RE = re.compile(r"charset\s*=\s*\"?([\w.:-]+)\"?", re.IGNORECASE)


def compact_dumps(value: Any) -> str:
    """Encode a value as JSON without insignificant whitespace."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class NamingConvention(str, Enum):
    """Field-naming conventions applied to serialized GraphQL envelopes."""

    CAMEL_CASE = "camel_case"
    SNAKE_CASE = "snake_case"
    PASCAL_CASE = "pascal_case"

    def apply(self, name: str) -> str:
        """
        Convert a snake_case field name to this convention.

        Args:
            name: Field name in snake_case (e.g. "operation_name")

        Returns:
            The field name as it appears on the wire
        """
        if self is NamingConvention.SNAKE_CASE:
            return name

        parts = [part for part in name.split("_") if part]
        if not parts:
            return name
        pascal = "".join(part[:1].upper() + part[1:] for part in parts)
        if self is NamingConvention.PASCAL_CASE:
            return pascal
        return pascal[:1].lower() + pascal[1:]


class SerializationSettings(BaseModel):
    """How requests are encoded and responses decoded."""

    naming: NamingConvention = Field(
        default=NamingConvention.CAMEL_CASE,
        description="Field-naming convention for envelope keys",
    )
    dumps: Callable[[Any], str] = Field(
        default=compact_dumps, description="JSON encode hook"
    )
    loads: Callable[[str], Any] = Field(
        default=json.loads, description="JSON decode hook"
    )

    model_config = ConfigDict(frozen=True)


class GraphQLClientOptions(BaseModel):
    """Options used by ``GraphQLClient``. Both fields are required to be non-null."""

    serialization: SerializationSettings = Field(
        default_factory=SerializationSettings,
        description="Serialization settings for requests and responses",
    )
    media_type: str = Field(
        default=DEFAULT_MEDIA_TYPE,
        description="Content-Type sent with POST bodies",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("media_type")
    @classmethod
    def validate_media_type(cls, value: str) -> str:
        """Reject blank media types and unknown charsets."""
        if not value.strip():
            raise ValueError("media_type must not be empty")
        charset = _charset_of(value)
        try:
            codecs.lookup(charset)
        except LookupError:
            raise ValueError(f"Unknown charset in media_type: {charset}")
        return value.strip()

    @property
    def charset(self) -> str:
        """Charset parameter of the media type, utf-8 when unspecified."""
        return _charset_of(self.media_type)


def _charset_of(media_type: str) -> str:
    match = _CHARSET_RE.search(media_type)
    return match.group(1) if match else "utf-8"
