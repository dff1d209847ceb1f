"""DocCenter — Path Segment Sanitizer."""

import re

# Characters Windows refuses in file and folder names
ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*]')


def sanitize_name(name: str) -> str:
    """Replace every character illegal in a path segment with ``_``."""
    return ILLEGAL_CHARS.sub("_", name)
