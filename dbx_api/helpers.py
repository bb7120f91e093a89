"""Helper functions for the dbx_api package.

This module contains utility functions used across the dbx_api package:
encoding arguments into the ``Dropbox-API-Arg`` header, decoding the
``Dropbox-API-Result`` header, and loading upload payloads.
"""

import io
import json
import os
from typing import Any, Dict, Optional

from .exceptions import ArgumentError


def encode_api_arg(arg: Dict[str, Any]) -> str:
    """Serialize request arguments for the ``Dropbox-API-Arg`` header.

    HTTP header values must be ASCII, so every non-ASCII character is escaped
    as ``\\uXXXX``. Dropbox additionally requires DEL (0x7F) to be escaped.

    Args:
        arg: JSON-ready argument dictionary

    Returns:
        Compact, ASCII-only JSON string

    Example:
        >>> encode_api_arg({"path": "/Café.txt"})
        '{"path":"/Caf\\\\u00e9.txt"}'
    """
    encoded = json.dumps(arg, ensure_ascii=True, separators=(",", ":"))
    return encoded.replace("\x7f", "\\u007f")


def decode_api_result(header_value: Optional[str]) -> Any:
    """Decode the ``Dropbox-API-Result`` response header.

    Args:
        header_value: Raw header value, or None when the header is missing

    Returns:
        Parsed JSON value, the raw string if it is not JSON, or None
    """
    if not header_value:
        return None
    try:
        return json.loads(header_value)
    except ValueError:
        return header_value


def read_payload(source: Any) -> bytes:
    """Load the request body for an upload-style endpoint.

    Args:
        source: bytes-like object, binary file object, or local file path
            (``str`` or ``os.PathLike``)

    Returns:
        The bytes to send

    Raises:
        ArgumentError: If the source is None or of an unsupported type
    """
    if source is None:
        raise ArgumentError("Upload data is required (got None)")
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as f:
            return f.read()
    if isinstance(source, io.TextIOBase):
        raise ArgumentError("Upload file objects must be opened in binary mode")
    if hasattr(source, "read"):
        data = source.read()
        if not isinstance(data, (bytes, bytearray)):
            raise ArgumentError(f"File object returned {type(data).__name__}, expected bytes")
        return bytes(data)
    raise ArgumentError(f"Unsupported upload data type: {type(source).__name__}")
