"""Filename and size validation utilities for uploads"""

import os
import re
import unicodedata
from typing import Optional, Tuple


# Characters kept verbatim in stored filenames
SAFE_CHARACTERS = "A-Za-z0-9._-"
UNSAFE_CHARACTER_PATTERN = re.compile(f"[^{SAFE_CHARACTERS}]")

MAX_FILENAME_LENGTH = 255

FALLBACK_FILENAME = "file"


def safe_filename(filename: str, replacement: str = "_") -> str:
    """Turn a client supplied filename into a safe filename for storage

    Directory components are dropped, unicode is transliterated to ASCII and
    every remaining character outside [A-Za-z0-9._-] is replaced by the
    replacement string. Repeated replacements are not collapsed, case and
    extension are preserved.

    Args:
        filename: Original filename
        replacement: Replacement for each disallowed character

    Returns:
        Sanitized filename

    Example:
        >>> safe_filename('../../order.pdf')
        'order.pdf'
        >>> safe_filename('order (copy).pdf')
        'order__copy_.pdf'
        >>> safe_filename('Résumé.docx')
        'Resume.docx'
    """
    # Remove path components (both separators, clients send either)
    filename = re.split(r"[\\/]", filename)[-1]

    # Transliterate: decompose and drop combining marks
    decomposed = unicodedata.normalize("NFKD", filename)
    filename = "".join(c for c in decomposed if not unicodedata.combining(c))

    filename = UNSAFE_CHARACTER_PATTERN.sub(replacement, filename)

    if len(filename) > MAX_FILENAME_LENGTH:
        name, ext = os.path.splitext(filename)
        if len(ext) >= MAX_FILENAME_LENGTH:
            # No room left for a name, cut through the extension
            filename = filename[:MAX_FILENAME_LENGTH]
        else:
            max_name_len = MAX_FILENAME_LENGTH - len(ext)
            filename = name[:max_name_len] + ext

    # '.' and '..' would resolve outside the target directory
    if not filename.strip("."):
        return FALLBACK_FILENAME

    return filename


def validate_file_size(size_bytes: int, max_size: int) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size in bytes

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_file_size(1024, 2048)
        (True, None)
        >>> validate_file_size(4096, 2048)
        (False, 'File exceeds maximum size of 2048 bytes (got 4096 bytes)')
    """
    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size} bytes (got {size_bytes} bytes)"

    return True, None
