"""DocCenter — Document Delivery Webhook Route."""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from sqlmodel import Session
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.config import Settings, get_settings
from app.connectors.download.client import FileDownloader
from app.database import get_session
from app.delivery.handler import WebhookHandler
from app.models.webhook_models import WebhookOutcome
from app.core.logging import get_logger

logger = get_logger("api.webhook")

router = APIRouter(tags=["Webhook"])

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_downloader(config: Settings = Depends(get_settings)):
    """Dependency — yields a downloader closed after the request."""
    downloader = FileDownloader(config)
    try:
        yield downloader
    finally:
        await downloader.close()


async def read_payload(request: Request) -> Dict[str, Any]:
    """Collect query params and body fields (form or JSON) into one mapping.

    A body that cannot be parsed contributes nothing.
    """
    payload: Dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "")

    if any(form_type in content_type for form_type in FORM_TYPES):
        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException) as e:
            # Inside an app Starlette re-raises multipart errors as a 400
            logger.warning(f"Unparseable form body: {e}")
            return payload
        for key, value in form.items():
            if not isinstance(value, UploadFile):
                payload[key] = value
        return payload

    body = await request.body()
    if not body.strip():
        return payload
    try:
        data = json.loads(body)
    except ValueError as e:
        logger.warning(f"Unparseable JSON body: {e}")
        return payload
    if isinstance(data, dict):
        payload.update(data)
    else:
        logger.warning(f"Ignoring non-object JSON body ({type(data).__name__})")
    return payload


def build_response(outcome: WebhookOutcome, config: Settings) -> JSONResponse:
    """Map a handler outcome onto the HTTP reply."""
    if not outcome.authorized and config.webhook_enforce_auth:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"}
        )
    if not config.webhook_report_failures:
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "success"})
    if outcome.succeeded:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "success", **outcome.model_dump()},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", **outcome.model_dump()},
    )


@router.post("/webhook")
async def receive_webhook(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    config: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
    downloader: FileDownloader = Depends(get_downloader),
):
    """Receive a document-delivery notification.

    Stores the payload, then downloads ``URL_ARQUIVO`` into the client's
    folder for the month and department named in the payload.
    """
    payload = await read_payload(request)
    handler = WebhookHandler(config, session, downloader)
    outcome = await handler.handle(payload, authorization)
    return build_response(outcome, config)
