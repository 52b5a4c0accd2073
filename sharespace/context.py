"""
===============================================================================
TARJETA CRC — sharespace/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Mantener contexto "request-scoped" con ContextVars (async-safe).
  - Permitir correlacionar logs sin pasar request_id/user_id por todo el stack.

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path al inicio del request.
  - identity.current_user: setea user_id cuando el token es válido.
  - crosscutting.logger: enriquece cada línea con get_context_dict().

Restricciones:
  - Solo strings; "" significa "no disponible".
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

_CTX_KEYS: Final[tuple[tuple[str, ContextVar[str]], ...]] = (
    ("request_id", request_id_var),
    ("user_id", user_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Setea el contexto mínimo del request."""
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_user_context(user_id: str = "") -> None:
    user_id_var.set(user_id or "")


def get_context_dict() -> dict[str, str]:
    """Contexto actual como dict, omitiendo claves vacías."""
    return {key: value for key, var in _CTX_KEYS if (value := var.get())}


def clear_context() -> None:
    """
    Limpia el contexto al final del request.

    Importante:
      - Evita que el contexto de un request se filtre al siguiente.
    """
    for _, var in _CTX_KEYS:
        var.set("")
