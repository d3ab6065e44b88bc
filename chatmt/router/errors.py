# router/errors.py
import logging
from enum import Enum
from typing import Any, Optional

import httpx

from chatmt.router.models import RESULT_TYPE

logger = logging.getLogger(__name__)

# El servicio no distingue códigos en errores de transporte; se conserva 401
_TRANSPORT_ERROR_CODE = "401"
_CANCELED_MESSAGE     = "canceled"
_TIMEOUT_MESSAGE      = "Request timeout."
_UNKNOWN_MESSAGE      = "Unknown error"


class ErrorCategory(str, Enum):
    HTTP       = "http"
    NO_CONTENT = "no_content"
    NETWORK    = "network"
    TIMEOUT    = "timeout"


class TranslationError(Exception):
    """
    Única forma de error que ve el llamador.
    Lleva categoría, código opcional (como string) y mensaje legible.
    """

    def __init__(
        self,
        category: ErrorCategory,
        message:  str,
        code:     Optional[str] = None,
        type:     str           = RESULT_TYPE,
    ):
        super().__init__(message)
        self.category = category
        self.message  = message
        self.code     = code
        self.type     = type

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "code": self.code, "message": self.message}

    def __repr__(self) -> str:
        return (
            f"TranslationError(category={self.category.value!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


class RequestCancelled(Exception):
    """
    Cancelación deliberada. No lleva payload y no es un TranslationError:
    el consumidor no debe mostrarla como fallo.
    """
    pass


def http_status_error(status_code: int, reason_phrase: str) -> TranslationError:
    return TranslationError(
        category = ErrorCategory.HTTP,
        code     = str(status_code),
        message  = f"API Error: {reason_phrase}",
    )


def no_content_error() -> TranslationError:
    return TranslationError(
        category = ErrorCategory.NO_CONTENT,
        message  = "No content in response",
    )


def normalize_transport_error(
    exc:        BaseException,
    *,
    cancelled:  bool          = False,
    timed_out:  bool          = False,
    error_body: Optional[Any] = None,
) -> Exception:
    """
    Traduce un fallo de transporte durante el streaming a la forma común.

    - cancelled=True o mensaje exactamente "canceled" → RequestCancelled.
    - Mensaje tomado de error.message del cuerpo si existe, si no "Unknown error".
    - timed_out=True o timeout de httpx → "Request timeout.".

    Devuelve la excepción; quien llama decide hacer `raise ... from exc`.
    """
    if cancelled or str(exc) == _CANCELED_MESSAGE:
        logger.info("Petición cancelada")
        return RequestCancelled()

    message = _extract_error_message(error_body) or _UNKNOWN_MESSAGE
    category = ErrorCategory.NETWORK

    if timed_out or isinstance(exc, httpx.TimeoutException):
        message  = _TIMEOUT_MESSAGE
        category = ErrorCategory.TIMEOUT

    logger.warning("Error de transporte (%s): %s", type(exc).__name__, message)
    return TranslationError(
        category = category,
        code     = _TRANSPORT_ERROR_CODE,
        message  = message,
    )


def _extract_error_message(body: Optional[Any]) -> Optional[str]:
    """Busca {"error": {"message": "..."}} en el cuerpo de error."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None
