"""
Message Domain Model Unit Tests
"""

from datetime import datetime, timedelta, timezone

import pydantic
import pytest

from hyperlink.common.time import utc_now
from hyperlink.domain.message import LinkType, LinkView, Message, Metadata, new_message


def test_new_message_stamps_created():
    before = utc_now()
    message = new_message()
    after = utc_now()

    assert before <= message.meta.created <= after
    assert message.data == b""
    assert message.meta.filename == ""
    assert message.meta.content_type == ""
    assert not message.meta.is_file


def test_message_is_immutable():
    message = new_message(b"hello")
    with pytest.raises(pydantic.ValidationError):
        message.data = b"changed"
    with pytest.raises(pydantic.ValidationError):
        message.meta.created = utc_now() - timedelta(days=1)


def test_link_view_for_message():
    message = new_message(b"hello")
    view = LinkView.from_metadata("abc123def456", message.meta)

    assert view.type == LinkType.MESSAGE
    assert view.link == "/api/abc123def456"
    assert view.filename == ""


def test_link_view_for_file():
    message = new_message(b"%PDF", filename="report 1.pdf", content_type="application/pdf")
    view = LinkView.from_metadata("abc123def456", message.meta)

    assert view.type == LinkType.FILE
    assert view.link == "/abc123def456/report%201.pdf"
    assert view.filename == "report 1.pdf"
    assert view.content_type == "application/pdf"


def test_link_view_escapes_slash_in_filename():
    meta = Metadata(created=utc_now(), filename="dir/x.txt")
    view = LinkView.from_metadata("abc123def456", meta)

    assert view.link == "/abc123def456/dir%2Fx.txt"


def test_naive_created_is_treated_as_utc():
    naive = datetime(2024, 5, 1, 8, 30, 0)
    message = Message(data=b"x", meta=Metadata(created=naive))

    assert message.meta.created.tzinfo is not None
    assert message.meta.created == naive.replace(tzinfo=timezone.utc)


def test_aware_created_is_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    meta = Metadata(created=datetime(2024, 5, 1, 10, 30, 0, tzinfo=plus_two))

    assert meta.created == datetime(2024, 5, 1, 8, 30, 0, tzinfo=timezone.utc)
    assert meta.created.utcoffset() == timedelta(0)
