"""
Message API

Provides message submission, one-shot retrieval and link view endpoints.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.datastructures import UploadFile

from hyperlink.api.deps import MessageServiceDep
from hyperlink.common.errors import ValidationError
from hyperlink.common.utils import get_client_ip
from hyperlink.domain.message import LinkView, Message
from hyperlink.services.message_service import MessageService

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
FORM_MULTIPART = "multipart/form-data"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

NO_CACHE_HEADERS = {"Cache-Control": "no-store"}

api_router = APIRouter(prefix="/api", tags=["Messages"])
view_router = APIRouter(tags=["Messages"])


def _content_length(request: Request) -> int | None:
    value = request.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _payload_response(message: Message) -> Response:
    return Response(
        content=message.data,
        media_type=message.meta.content_type or DEFAULT_CONTENT_TYPE,
        headers=NO_CACHE_HEADERS,
    )


async def _consume(request: Request, key: str, service: MessageService) -> Response:
    client = request.client.host if request.client else None
    logger.info(
        f"Get key: {key} from: {get_client_ip(request.headers, client)} "
        f"agent: {request.headers.get('user-agent', '')}"
    )
    message = await service.consume(key)
    return _payload_response(message)


@api_router.post("/", response_class=PlainTextResponse)
async def create_message(request: Request, service: MessageServiceDep):
    """
    Create Message

    Accepts a urlencoded form field `data` (text) or a multipart file `data`.
    The response body is the message key.
    """
    service.check_upload_size(_content_length(request))

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_URLENCODED):
        form = await request.form()
        value = form.get("data", "")
        if isinstance(value, UploadFile):
            raise ValidationError("Bad request", code="bad_request", status_code=400)
        key = await service.create(value.encode("utf-8"))
    elif content_type.startswith(FORM_MULTIPART):
        form = await request.form()
        upload = form.get("data")
        if not isinstance(upload, UploadFile):
            raise ValidationError("Bad request", code="bad_request", status_code=400)
        try:
            data = await upload.read()
        finally:
            await upload.close()
        key = await service.create(
            data,
            filename=upload.filename or "",
            content_type=upload.content_type or "",
        )
    else:
        raise ValidationError(
            "Unsupported Content-Type",
            code="unsupported_content_type",
            status_code=400,
        )

    return PlainTextResponse(key, headers=NO_CACHE_HEADERS)


@api_router.get("/{key}/meta", response_model=LinkView)
async def get_message_view(key: str, service: MessageServiceDep):
    """
    Get Message Link View

    Describes the message without consuming it.
    """
    return await service.describe(key)


@api_router.get("/{key}")
async def get_message(request: Request, key: str, service: MessageServiceDep):
    """
    Get Message

    Returns the payload once; the key is dead afterwards.
    """
    return await _consume(request, key, service)


@view_router.get("/{key}/{filename}")
async def get_file(request: Request, key: str, filename: str, service: MessageServiceDep):
    """
    Get File

    Same as GET /api/{key}; the filename in the URL only hints the download name.
    """
    return await _consume(request, key, service)


@view_router.get("/{key}", response_model=LinkView)
async def get_link_view(key: str, service: MessageServiceDep):
    """
    Get Link View

    Tells whether the key points at a file or a text message, without consuming it.
    """
    return await service.describe(key)
