"""DocCenter — Delivered File Naming."""

import posixpath
from typing import Any, Dict
from urllib.parse import urlparse

from app.delivery.sanitizer import sanitize_name

# Payload key → placeholder used when the key is missing
NAME_PARTS = (
    ("CODIGOEMPRESA", "unknown_empresa"),
    ("CODIGOFILIAL", "unknown_filial"),
    ("TIPO", "unknown_tipo"),
    ("ASSUNTO", "unknown_assunto"),
)


def url_basename(url: str) -> str:
    """Last segment of the URL path, e.g. ``doc.pdf``."""
    return posixpath.basename(urlparse(url).path)


def url_extension(url: str) -> str:
    """Extension of the URL path's last segment, without the dot; may be empty."""
    name, dot, ext = url_basename(url).rpartition(".")
    return ext if dot else ""


def generate_filename(payload: Dict[str, Any], file_url: str) -> str:
    """Build ``{empresa}-{filial}-{tipo}-{assunto}.{ext}`` from the payload."""
    parts = []
    for key, placeholder in NAME_PARTS:
        value = payload.get(key)
        text = str(value) if value not in (None, "") else placeholder
        parts.append(sanitize_name(text))
    return "-".join(parts) + "." + sanitize_name(url_extension(file_url))


def legacy_filename(payload: Dict[str, Any], file_url: str) -> str:
    """Keep the source's own file name; fall back to the field-based name."""
    basename = sanitize_name(url_basename(file_url))
    if basename in ("", ".", ".."):
        return generate_filename(payload, file_url)
    return basename


FILENAME_STRATEGIES = {
    "fields": generate_filename,
    "url": legacy_filename,
}


def build_filename(payload: Dict[str, Any], file_url: str, strategy: str = "fields") -> str:
    """Name the delivered file with the configured strategy."""
    try:
        namer = FILENAME_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown filename strategy: {strategy}") from None
    return namer(payload, file_url)
