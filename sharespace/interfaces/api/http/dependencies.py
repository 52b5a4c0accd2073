"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * lectura de UploadFile con límite (anti OOM)
      * sanitización de filename
      * headers de descarga (Content-Disposition)
      * URL pública de un share link

Colaboradores:
  - crosscutting.config.get_settings
  - crosscutting.error_responses (RFC7807 factories)
===============================================================================
"""

from __future__ import annotations

import os
from urllib.parse import quote

from fastapi import Request, UploadFile

from ....crosscutting.config import get_settings
from ....crosscutting.error_responses import payload_too_large

_CHUNK_SIZE = 1024 * 1024  # 1MB


def sanitize_filename(filename: str | None) -> str:
    """
    Sanitiza filename para evitar paths raros.
    Nos quedamos con basename (también para separadores Windows).
    """
    if not filename:
        return "upload"
    base = os.path.basename(filename.replace("\\", "/")).strip()
    return base or "upload"


async def read_upload_bytes(file: UploadFile, *, max_bytes: int | None = None) -> bytes:
    """
    Lee un UploadFile en memoria respetando un límite duro.

    Motivo:
      - Evitar OOM por archivos gigantes.
      - Fail-fast con RFC7807 413.
    """
    limit = max_bytes if max_bytes is not None else get_settings().max_upload_bytes
    if limit <= 0:
        return await file.read()

    data = bytearray()
    total = 0

    while True:
        piece = await file.read(_CHUNK_SIZE)
        if not piece:
            break
        data.extend(piece)
        total += len(piece)
        if total > limit:
            raise payload_too_large(f"{limit} bytes")

    return bytes(data)


def content_disposition(filename: str) -> str:
    """attachment; filename=... con fallback ASCII + filename* (RFC 5987)."""
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "")
    ascii_name = ascii_name or "download"
    return (
        f'attachment; filename="{ascii_name}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


def build_share_url(request: Request, share_id: str) -> str:
    """URL absoluta de descarga pública, relativa al host del request."""
    return str(request.url_for("download_shared_file", share_id=share_id))
