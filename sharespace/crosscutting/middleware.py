"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py
===============================================================================
Class: RequestContextMiddleware

Responsibilities:
  - Aceptar un X-Request-Id entrante (si es razonable) o generar uno nuevo,
    y devolverlo siempre en la respuesta.
  - Cargar request_id/method/path en los ContextVars que lee el JSONFormatter.
  - Emitir una línea de log por request (status + latency_ms), salvo /healthz.
  - Limpiar el contexto al final (los ContextVars no deben filtrarse).

Collaborators:
  - sharespace/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

# Sólo caracteres seguros para un header y para logs (sin espacios ni CR/LF)
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    _QUIET_PATHS = frozenset({"/healthz"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = incoming if _REQUEST_ID_RE.match(incoming) else str(uuid.uuid4())

        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request failed",
                extra={"status_code": status_code, "latency_ms": _elapsed_ms(start)},
            )
            clear_context()
            raise

        status_code = response.status_code
        response.headers["X-Request-Id"] = request_id
        if request.url.path not in self._QUIET_PATHS:
            logger.info(
                "request completed",
                extra={"status_code": status_code, "latency_ms": _elapsed_ms(start)},
            )
        clear_context()
        return response
