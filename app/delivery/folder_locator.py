"""DocCenter — Client Folder Locator.

Client folders are named freely by the office ("ACME LTDA - 12.345.678_0001-99"),
so the only reliable handle is the CNPJ appearing somewhere in the name.
"""

import os
from typing import Optional

from app.core.logging import get_logger

logger = get_logger("delivery.locator")


def find_client_folder(base_path: str, cnpj: str) -> Optional[str]:
    """Return the first subdirectory of ``base_path`` whose name contains ``cnpj``.

    Candidates are checked in name order. Returns None when nothing matches
    or the base path cannot be listed.
    """
    try:
        with os.scandir(base_path) as it:
            entries = sorted(
                (entry for entry in it if entry.is_dir()),
                key=lambda entry: entry.name,
            )
    except OSError as e:
        logger.error(
            f"Cannot list client base path: {e}", extra={"path": base_path}
        )
        return None

    matches = [entry.path for entry in entries if cnpj in entry.name]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            f"{len(matches)} client folders match CNPJ {cnpj}; using the first",
            extra={"context": {"candidates": matches}},
        )
    return matches[0]
