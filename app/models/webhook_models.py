"""DocCenter — Webhook Record & Outcome Models."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import BaseModel
from sqlmodel import SQLModel, Field


# ─────────────────────────────────────────────
# DATABASE MODEL — One row per received webhook
# ─────────────────────────────────────────────

# Payload key → column. Anything else only lives in payload_json.
RECORD_FIELDS: Dict[str, str] = {
    "CNPJ": "cnpj",
    "MESANO": "mesano",
    "GRUPO": "grupo",
    "CODIGOEMPRESA": "codigo_empresa",
    "CODIGOFILIAL": "codigo_filial",
    "TIPO": "tipo",
    "ASSUNTO": "assunto",
    "URL_ARQUIVO": "url_arquivo",
}


class WebhookRecord(SQLModel, table=True):
    """Immutable copy of a received document-delivery webhook.

    Create-only — it's the audit trail of what the sender delivered.
    """

    __tablename__ = "webhook_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    cnpj: Optional[str] = Field(default=None, index=True, description="Client tax ID")
    mesano: Optional[str] = Field(default=None, description="MMYYYY")
    grupo: Optional[str] = Field(default=None, description="Department")
    codigo_empresa: Optional[str] = Field(default=None)
    codigo_filial: Optional[str] = Field(default=None)
    tipo: Optional[str] = Field(default=None)
    assunto: Optional[str] = Field(default=None)
    url_arquivo: Optional[str] = Field(default=None)
    payload_json: str = Field(description="Full raw payload as JSON")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "WebhookRecord":
        """Build a record from the known keys; the rest is kept as raw JSON."""
        columns = {
            column: _as_text(payload.get(key)) for key, column in RECORD_FIELDS.items()
        }
        return cls(
            **columns,
            payload_json=json.dumps(payload, ensure_ascii=False, default=str),
        )


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


# ─────────────────────────────────────────────
# PYDANTIC SCHEMAS — Handler outcome
# ─────────────────────────────────────────────


class WebhookOutcome(BaseModel):
    """What happened to a single webhook delivery."""

    authorized: bool = False
    persisted: bool = False
    record_id: Optional[int] = None
    persistence_error: Optional[str] = None
    file_status: str = "skipped"  # saved | skipped | failed
    file_path: Optional[str] = None
    file_error: Optional[str] = None
    """Error code from app.core.errors, or InternalError."""
    file_detail: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.persisted and self.file_status != "failed"
