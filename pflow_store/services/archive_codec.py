"""Pack a model document into a printable blob and back.

A blob is standard base64 over a single-entry ZIP archive. Entries are
written with a fixed timestamp so the same document always yields the same
blob, and therefore the same CID.

``decode`` fails open: a malformed blob, a corrupt archive or a missing
entry all produce ``b""`` so read paths can always answer with something.
"""

from __future__ import annotations

import base64
import io
import logging
import lzma
import zipfile
import zlib

from ..errors import InvalidInputError

logger = logging.getLogger(__name__)

MODEL_ENTRY = "model.json"

_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_ENTRY_MODE = 0o644 << 16


def encode(document: bytes, entry_name: str = MODEL_ENTRY) -> str:
    if not entry_name:
        raise InvalidInputError("Archive entry name must not be empty")

    info = zipfile.ZipInfo(entry_name, date_time=_FIXED_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = _ENTRY_MODE

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(info, document)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def decode(text_blob: str, entry_name: str = MODEL_ENTRY) -> bytes:
    if not text_blob:
        return b""

    # Query-string decoding turns "+" into " "
    normalized = text_blob.strip().replace(" ", "+")
    try:
        raw = base64.b64decode(normalized, validate=True)
        with zipfile.ZipFile(io.BytesIO(raw), "r") as zf:
            return zf.read(entry_name)
    except (
        ValueError,
        KeyError,
        EOFError,
        OSError,
        RuntimeError,
        zipfile.BadZipFile,
        zlib.error,
        lzma.LZMAError,
    ) as exc:
        logger.debug("Could not decode %s from blob: %s", entry_name, exc)
        return b""
