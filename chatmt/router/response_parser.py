# router/response_parser.py
import json
import logging
from typing import Any, Optional

from chatmt.router.models import StreamDelta

logger = logging.getLogger(__name__)


class NotJSON:
    """Marca un frame que no es JSON (p. ej. el centinela [DONE])."""

    def __repr__(self) -> str:
        return "NOT_JSON"


NOT_JSON = NotJSON()


def try_parse_json(raw: str) -> Any:
    """
    Parsea un frame del stream.
    Devuelve NOT_JSON si no es JSON válido, nunca lanza excepción.
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, ValueError, TypeError):
        return NOT_JSON


def extract_delta(frame: Any) -> Optional[StreamDelta]:
    """
    Extrae el delta de un frame ya parseado:
    {"choices": [{"delta": {"content": "...", "role": "..."}, "finish_reason": ...}]}

    Devuelve None sin choices o con lista vacía (keep-alive / chunk vacío).
    Si choices[0] trae finish_reason, el delta solo lleva ese campo.
    """
    if not isinstance(frame, dict):
        return None
    choices = frame.get("choices")
    if not choices or not isinstance(choices, list):
        return None

    choice = choices[0] if isinstance(choices[0], dict) else {}
    finish_reason = choice.get("finish_reason")
    if finish_reason:
        return StreamDelta(finish_reason=finish_reason)

    delta = choice.get("delta") or {}
    content = delta.get("content") or ""
    return StreamDelta(content=str(content), role=delta.get("role"))


def extract_message_content(body: Any) -> str:
    """
    Contenido de una respuesta no-streaming: choices[0].message.content.
    Devuelve "" si falta en cualquier nivel.
    """
    if not isinstance(body, dict):
        return ""
    choices = body.get("choices")
    if not choices or not isinstance(choices, list) or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""
