"""DocCenter — Webhook Handler.

Runs one document delivery end to end:
  auth → store record → resolve destination → name file → download → log

Failures after the auth check are logged and recorded on the outcome; they
never abort the request.
"""

import os
from typing import Any, Dict, Optional

from sqlmodel import Session

from app.config import Settings
from app.connectors.download.client import FileDownloader
from app.core.errors import DownloadFailed, PersistenceError, Unauthorized, WebhookError
from app.core.logging import get_channel_logger
from app.core.security import validate_authorization_header
from app.delivery.filename import build_filename
from app.delivery.path_resolver import resolve_destination
from app.models.webhook_models import WebhookOutcome, WebhookRecord


class WebhookHandler:
    """Processes document-delivery webhooks with injected config and collaborators."""

    def __init__(self, config: Settings, session: Session, downloader: FileDownloader):
        self.config = config
        self.session = session
        self.downloader = downloader
        self.logger = get_channel_logger(
            config.webhook_log_channel, config.webhook_log_file
        )

    async def handle(
        self, payload: Dict[str, Any], authorization: Optional[str] = None
    ) -> WebhookOutcome:
        outcome = WebhookOutcome()

        try:
            self._check_authorization(authorization)
            outcome.authorized = True
        except Unauthorized as e:
            self.logger.error("Unauthorized", extra={"error": e.code})
            if self.config.webhook_enforce_auth:
                return outcome

        try:
            record = self._store_record(payload)
            outcome.persisted = True
            outcome.record_id = record.id
            self.logger.info(
                "Webhook data saved to the database",
                extra={"record_id": record.id},
            )
        except PersistenceError as e:
            outcome.persistence_error = str(e)
            self.logger.error(
                "Failed to save webhook data to the database",
                extra={"error": e.code, "context": {"message": str(e)}},
            )

        file_url = payload.get("URL_ARQUIVO")
        if file_url:
            await self._deliver_file(payload, str(file_url), outcome)
        else:
            self.logger.warning("File URL not found in payload")

        self.logger.info("Webhook received", extra={"context": payload})
        return outcome

    def _check_authorization(self, authorization: Optional[str]) -> None:
        if not validate_authorization_header(authorization, self.config.webhook_token):
            raise Unauthorized("Invalid or missing bearer token")

    def _store_record(self, payload: Dict[str, Any]) -> WebhookRecord:
        """Persist the raw webhook; raises PersistenceError."""
        record = WebhookRecord.from_payload(payload)
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except Exception as e:
            # Drivers raise more than SQLAlchemyError (e.g. UnicodeEncodeError)
            self.session.rollback()
            raise PersistenceError(f"Error saving webhook record: {e}") from e
        return record

    async def _deliver_file(
        self, payload: Dict[str, Any], file_url: str, outcome: WebhookOutcome
    ) -> None:
        try:
            folder = resolve_destination(payload, self.config.client_base_path)
            filename = build_filename(payload, file_url, self.config.filename_strategy)
            destination = os.path.join(folder, filename)
            await self.downloader.download(file_url, destination)
        except WebhookError as e:
            outcome.file_status = "failed"
            outcome.file_error = e.code
            outcome.file_detail = str(e)
            extra: Dict[str, Any] = {"error": e.code, "context": {"message": str(e)}}
            if isinstance(e, DownloadFailed) and e.status_code is not None:
                extra["status_code"] = e.status_code
            self.logger.error("Error processing the file", extra=extra)
            return
        except Exception as e:
            outcome.file_status = "failed"
            outcome.file_error = "InternalError"
            outcome.file_detail = str(e)
            self.logger.exception(
                "Unexpected error processing the file", extra={"error": "InternalError"}
            )
            return

        outcome.file_status = "saved"
        outcome.file_path = destination
        self.logger.info("File saved successfully", extra={"path": destination})
