"""RFC 2397 data URL parsing following the WHATWG "data: URL processor".

Parsing never raises: any input that is not a well-formed data URL yields
``None`` so callers can fall through to other specifier shapes.
"""

from __future__ import annotations

import base64
import binascii
import json
import string
from typing import Any
from urllib.parse import quote_from_bytes, unquote_to_bytes

from morphir_deps.models.dependencies import DataUrl

_ASCII_WHITESPACE = "\t\n\f\r "
_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")
_BASE64_CHARS = frozenset(string.ascii_letters + string.digits + "+/")

DEFAULT_MIME_TYPE = "text/plain"


def _is_token(value: str) -> bool:
    return bool(value) and all(ch in _TOKEN_CHARS for ch in value)


def _forgiving_base64_decode(data: str) -> bytes | None:
    stripped = "".join(ch for ch in data if ch not in _ASCII_WHITESPACE)
    if len(stripped) % 4 == 0:
        stripped = stripped.removesuffix("=").removesuffix("=")
    if len(stripped) % 4 == 1:
        return None
    if any(ch not in _BASE64_CHARS for ch in stripped):
        return None
    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error:
        return None


def _parse_quoted(value: str, start: int) -> tuple[str, int]:
    """Collect an HTTP quoted-string starting at the opening quote."""
    chars: list[str] = []
    position = start + 1
    while position < len(value):
        ch = value[position]
        if ch == "\\":
            position += 1
            if position >= len(value):
                chars.append("\\")
                break
            chars.append(value[position])
        elif ch == '"':
            position += 1
            break
        else:
            chars.append(ch)
        position += 1
    # Anything between the closing quote and the next ';' is discarded.
    end = value.find(";", position)
    return "".join(chars), len(value) if end == -1 else end


def parse_mime_type(value: str) -> tuple[str, dict[str, str]] | None:
    """Parse a MIME type into its essence and lower-cased parameter names."""
    value = value.strip(_ASCII_WHITESPACE)
    slash = value.find("/")
    if slash == -1:
        return None
    type_ = value[:slash]
    semicolon = value.find(";", slash + 1)
    end = len(value) if semicolon == -1 else semicolon
    subtype = value[slash + 1 : end].rstrip(_ASCII_WHITESPACE)
    if not _is_token(type_) or not _is_token(subtype):
        return None

    parameters: dict[str, str] = {}
    position = end
    while position < len(value):
        position += 1  # skip ';'
        while position < len(value) and value[position] in _ASCII_WHITESPACE:
            position += 1
        name_end = position
        while name_end < len(value) and value[name_end] not in ";=":
            name_end += 1
        name = value[position:name_end].lower()
        position = name_end
        if position >= len(value) or value[position] == ";":
            continue
        position += 1  # skip '='
        if position < len(value) and value[position] == '"':
            param_value, position = _parse_quoted(value, position)
        else:
            semicolon = value.find(";", position)
            stop = len(value) if semicolon == -1 else semicolon
            param_value = value[position:stop].rstrip(_ASCII_WHITESPACE)
            position = stop
            if not param_value:
                continue
        if _is_token(name) and name not in parameters:
            parameters[name] = param_value
    return f"{type_.lower()}/{subtype.lower()}", parameters


def parse_data_url(value: str) -> DataUrl | None:
    """Parse ``data:[<mediatype>][;base64],<data>``; return ``None`` if malformed."""
    if not isinstance(value, str):
        return None
    url = value.strip(_C0_CONTROL_OR_SPACE)
    url = url.replace("\t", "").replace("\n", "").replace("\r", "")
    if url[:5].lower() != "data:":
        return None
    url = url[5:].split("#", 1)[0]
    comma = url.find(",")
    if comma == -1:
        return None

    mime_part = url[:comma].strip(_ASCII_WHITESPACE)
    body = unquote_to_bytes(url[comma + 1 :])

    head, sep, tail = mime_part.rpartition(";")
    if sep and tail.strip(_ASCII_WHITESPACE).lower() == "base64":
        decoded = _forgiving_base64_decode(body.decode("latin-1"))
        if decoded is None:
            return None
        body = decoded
        mime_part = head.rstrip(_ASCII_WHITESPACE)

    if mime_part.startswith(";"):
        mime_part = DEFAULT_MIME_TYPE + mime_part
    parsed = parse_mime_type(mime_part)
    if parsed is None:
        # No charset is recorded so the body decodes with the loader default.
        return DataUrl(mime_type=DEFAULT_MIME_TYPE, body=body)
    mime_type, parameters = parsed
    return DataUrl(mime_type=mime_type, parameters=parameters, body=body)


def encode_data_url(
    payload: Any,
    *,
    mime_type: str = "application/json",
    charset: str = "utf-8",
    use_base64: bool = True,
) -> str:
    """Serialize a JSON-compatible payload into a data URL."""
    raw = json.dumps(payload, ensure_ascii=False).encode(charset)
    if use_base64:
        encoded = base64.b64encode(raw).decode("ascii")
        return f"data:{mime_type};charset={charset};base64,{encoded}"
    return f"data:{mime_type};charset={charset},{quote_from_bytes(raw, safe='')}"
