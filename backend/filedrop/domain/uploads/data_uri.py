"""Data URI decoding (RFC 2397)

    data:[<media type>][;<attribute>=<value>]*[;base64],<data>

parse_data_uri() reports malformed input as None; decode_data_uri() is the
raising variant for callers that need a hard failure.
"""

import base64
import binascii
import re
from typing import Dict, Optional
from urllib.parse import unquote, unquote_to_bytes

from .errors import DecodeFailedError
from .models import DataUri

DATA_URI_SCHEME = "data:"

DEFAULT_MEDIA_TYPE = "text/plain"
DEFAULT_CHARSET = "US-ASCII"

MEDIA_TYPE_PATTERN = re.compile(r"^[\w.+-]+/[\w.+-]+$")


def parse_data_uri(text: str) -> Optional[DataUri]:
    """Decode a data URI

    Args:
        text: Data URI text (leading/trailing whitespace is ignored)

    Returns:
        DataUri with the media type, parameters and decoded bytes, or None
        when the text is not a well-formed data URI

    Example:
        >>> parse_data_uri('data:text/plain;base64,aGVsbG8=').data
        b'hello'
        >>> parse_data_uri('data:,hello%20world').media_type
        'text/plain'
        >>> parse_data_uri('not a data uri') is None
        True
    """
    if not isinstance(text, str):
        return None

    text = text.strip()
    if text[:len(DATA_URI_SCHEME)].lower() != DATA_URI_SCHEME:
        return None

    header, separator, payload = text[len(DATA_URI_SCHEME):].partition(",")
    if not separator:
        return None

    parts = header.split(";")
    is_base64 = False
    if len(parts) > 1 and parts[-1].strip().lower() == "base64":
        is_base64 = True
        parts = parts[:-1]

    media_type = parts[0].strip().lower()
    parameters: Dict[str, str] = {}
    for part in parts[1:]:
        name, equals, value = part.partition("=")
        if not equals or not name.strip():
            return None
        parameters[name.strip().lower()] = unquote(value.strip())

    if not media_type:
        media_type = DEFAULT_MEDIA_TYPE
        parameters.setdefault("charset", DEFAULT_CHARSET)
    elif not MEDIA_TYPE_PATTERN.match(media_type):
        return None

    if is_base64:
        encoded = re.sub(r"\s+", "", unquote(payload))
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            return None
    else:
        data = unquote_to_bytes(payload)

    return DataUri(media_type=media_type, data=data, parameters=parameters)


def decode_data_uri(text: str) -> DataUri:
    """Decode a data URI, raising on malformed input

    Args:
        text: Data URI text

    Returns:
        DataUri

    Raises:
        DecodeFailedError: If the text is not a well-formed data URI
    """
    data_uri = parse_data_uri(text)
    if data_uri is None:
        raise DecodeFailedError("Could not decode the provided data URI")

    return data_uri
