"""
Message Domain Model

Defines the message payload record and the link view shown before consumption.
"""

from datetime import datetime
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hyperlink.common.time import ensure_utc, utc_now


class Metadata(BaseModel):
    """Message Metadata"""

    created: datetime = Field(..., description="Creation Time (UTC)")
    filename: str = Field("", description="Filename, empty for inline text")
    content_type: str = Field("", description="MIME type used when serving the payload")

    model_config = ConfigDict(frozen=True)

    @field_validator("created", mode="after")
    @classmethod
    def _created_utc(cls, v: datetime) -> datetime:
        dt = ensure_utc(v)
        assert dt is not None
        return dt

    @property
    def is_file(self) -> bool:
        return self.filename != ""


class Message(BaseModel):
    """Message Complete Model"""

    data: bytes = Field(b"", description="Payload bytes")
    meta: Metadata = Field(..., description="Metadata")

    model_config = ConfigDict(frozen=True)


def new_message(
    data: bytes = b"",
    filename: str = "",
    content_type: str = "",
) -> Message:
    """
    Create a new message

    This is the only place `created` is stamped; storage backends keep it as is.

    Args:
        data: Payload bytes
        filename: Original filename for file uploads
        content_type: MIME type of the payload

    Returns:
        Message: New immutable message
    """
    return Message(
        data=data,
        meta=Metadata(
            created=utc_now(),
            filename=filename,
            content_type=content_type,
        ),
    )


class LinkType(str, Enum):
    MESSAGE = "message"
    FILE = "file"


class LinkView(BaseModel):
    """Non-consuming description of a stored message"""

    key: str
    type: LinkType
    link: str
    created: datetime
    filename: str = ""
    content_type: str = ""

    @classmethod
    def from_metadata(cls, key: str, meta: Metadata) -> "LinkView":
        if meta.is_file:
            return cls(
                key=key,
                type=LinkType.FILE,
                link=f"/{key}/{quote(meta.filename, safe='')}",
                created=meta.created,
                filename=meta.filename,
                content_type=meta.content_type,
            )
        return cls(
            key=key,
            type=LinkType.MESSAGE,
            link=f"/api/{key}",
            created=meta.created,
            content_type=meta.content_type,
        )
