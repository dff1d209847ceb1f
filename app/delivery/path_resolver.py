"""DocCenter — Destination Path Resolver.

Maps the business fields of a delivery webhook onto the office folder tree:

    <base>/<client folder containing CNPJ>/<year>/<GRUPO>/<month name>

Every directory along that path must already exist; nothing is created here.
"""

import os
import re
from typing import Any, Dict, Tuple

from app.core.errors import (
    ClientFolderNotFound,
    DestinationNotFound,
    InvalidDateFormat,
    InvalidMonth,
    MissingField,
)
from app.core.logging import get_logger
from app.delivery.folder_locator import find_client_folder
from app.delivery.sanitizer import sanitize_name

logger = get_logger("delivery.resolver")

MONTH_NAMES: Dict[str, str] = {
    "01": "Janeiro",
    "02": "Fevereiro",
    "03": "Março",
    "04": "Abril",
    "05": "Maio",
    "06": "Junho",
    "07": "Julho",
    "08": "Agosto",
    "09": "Setembro",
    "10": "Outubro",
    "11": "Novembro",
    "12": "Dezembro",
}

NON_DIGITS = re.compile(r"\D")


def require_field(payload: Dict[str, Any], key: str) -> str:
    """Return a payload value as text, raising MissingField if absent or blank."""
    value = payload.get(key)
    if value is None or not str(value).strip():
        raise MissingField(key)
    return str(value)


def parse_mesano(mesano: str) -> Tuple[str, str]:
    """Split MESANO (MMYYYY, separators tolerated) into (month, year) digits."""
    digits = NON_DIGITS.sub("", mesano)
    if len(digits) != 6:
        raise InvalidDateFormat(f"Invalid MESANO format: {mesano!r}")
    return f"{int(digits[:2]):02d}", digits[2:]


def month_name(month: str) -> str:
    """Portuguese name of a zero-padded month number."""
    try:
        return MONTH_NAMES[month]
    except KeyError:
        raise InvalidMonth(f"Invalid month: {month}") from None


def resolve_destination(payload: Dict[str, Any], base_path: str) -> str:
    """Return the existing directory a delivered file belongs in.

    Raises:
        MissingField: CNPJ, MESANO or GRUPO absent.
        ClientFolderNotFound: no client folder name contains the CNPJ.
        InvalidDateFormat / InvalidMonth: MESANO unusable.
        DestinationNotFound: composed path missing or outside the client folder.
    """
    cnpj = sanitize_name(require_field(payload, "CNPJ"))

    client_folder = find_client_folder(base_path, cnpj)
    if not client_folder:
        raise ClientFolderNotFound(f"Client folder not found for CNPJ {cnpj}")

    month, year = parse_mesano(require_field(payload, "MESANO"))
    department = sanitize_name(require_field(payload, "GRUPO"))
    if department.strip() in (".", ".."):
        raise DestinationNotFound(f"Invalid department folder: {department!r}")

    destination = os.path.join(client_folder, year, department, month_name(month))

    # Symlinks must not lead outside the client folder
    root = os.path.realpath(client_folder)
    if os.path.commonpath([root, os.path.realpath(destination)]) != root:
        raise DestinationNotFound(f"Destination escapes client folder: {destination}")

    if not os.path.isdir(destination):
        raise DestinationNotFound(f"Destination path does not exist: {destination}")

    logger.info("Destination resolved", extra={"path": destination})
    return destination
