"""Text decoding and JSON parsing shared by the local and remote loaders."""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any

from morphir_deps.errors import DocumentDecodeError

logger = logging.getLogger(__name__)

DEFAULT_CHARSET = "utf-8"

_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


WINDOWS_1252 = "cp1252"

# WHATWG Encoding Standard: all of these labels decode as windows-1252.
_WINDOWS_1252_LABELS = frozenset(
    {
        "ansi_x3.4-1968",
        "ascii",
        "cp1252",
        "cp819",
        "csisolatin1",
        "ibm819",
        "iso-8859-1",
        "iso-ir-100",
        "iso8859-1",
        "iso88591",
        "iso_8859-1",
        "iso_8859-1:1987",
        "l1",
        "latin1",
        "us-ascii",
        "windows-1252",
        "x-cp1252",
    }
)
_C1_ERROR_HANDLER = "morphir-deps-c1-passthrough"


def _c1_passthrough(exc: UnicodeError) -> tuple[str, int]:
    # Bytes cp1252 leaves undefined map to the matching C1 control code point.
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    return chr(exc.object[exc.start]), exc.start + 1


codecs.register_error(_C1_ERROR_HANDLER, _c1_passthrough)


def resolve_charset(label: str | None) -> str:
    """Map a charset label to a Python text codec name, defaulting to UTF-8.

    Latin-1 and ASCII labels resolve to windows-1252 as browsers do. Labels naming
    codecs that do not produce text (``hex``, ``zlib``, ...) count as unknown.
    """
    if not label or not label.strip():
        return DEFAULT_CHARSET
    normalized = label.strip().strip('"').lower()
    if normalized in _WINDOWS_1252_LABELS:
        return WINDOWS_1252
    try:
        info = codecs.lookup(normalized)
    except LookupError:
        info = None
    if info is None or not getattr(info, "_is_text_encoding", True):
        logger.debug("Unknown charset label %r, falling back to %s", label, DEFAULT_CHARSET)
        return DEFAULT_CHARSET
    return info.name


def decode_text(data: bytes, charset: str | None = None, *, origin: str = "<bytes>") -> str:
    """Decode bytes with the named charset; a byte order mark takes precedence."""
    encoding = resolve_charset(charset)
    for bom, bom_encoding in _BOMS:
        if data.startswith(bom):
            data = data[len(bom) :]
            encoding = bom_encoding
            break
    try:
        if encoding == WINDOWS_1252:
            return data.decode(encoding, errors=_C1_ERROR_HANDLER)
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        msg = f"Dependency {origin} is not valid {encoding} text: {exc.reason}"
        raise DocumentDecodeError(msg, origin, exc) from exc


def parse_document(text: str, origin: str) -> Any:
    """Parse decoded text as a JSON document."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Dependency {origin} is not valid JSON: {exc.msg} (line {exc.lineno})"
        raise DocumentDecodeError(msg, origin, exc) from exc


def parse_bytes(data: bytes, origin: str, charset: str | None = None) -> Any:
    """Decode then parse in one step."""
    return parse_document(decode_text(data, charset, origin=origin), origin)
