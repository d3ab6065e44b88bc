# router/transport.py
import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from chatmt.router.models import ProviderConfig, RequestPayload

logger = logging.getLogger(__name__)

_CHAT_COMPLETIONS_PATH = "/chat/completions"


def normalize_endpoint(endpoint: str) -> str:
    """Acepta una base URL (…/v1) o el endpoint completo."""
    base = endpoint.strip().rstrip("/")
    if base.endswith(_CHAT_COMPLETIONS_PATH):
        return base
    return base + _CHAT_COMPLETIONS_PATH


def is_streaming(payload: RequestPayload) -> bool:
    """La rama de envío depende solo del flag del payload."""
    return bool(payload.stream)


def select_proxy(
    url:         str,
    http_proxy:  Optional[str],
    https_proxy: Optional[str],
) -> Optional[str]:
    """Transporte plano → proxy http; cualquier otro esquema → proxy https."""
    if urlsplit(url).scheme == "http":
        return http_proxy
    return https_proxy


def request_timeout(seconds: float) -> httpx.Timeout:
    """Plazo de una petición hasta recibir las cabeceras de respuesta."""
    return httpx.Timeout(seconds)


def release_read_timeout(response: httpx.Response) -> None:
    """
    Quita el plazo de lectura al cuerpo de una respuesta en streaming.
    httpcore lee la extensión "timeout" al empezar a iterar el cuerpo, así que
    basta con sustituirla antes del primer frame. Desde ahí solo manda
    el CancellationToken.
    """
    timeouts = response.request.extensions.get("timeout")
    if timeouts:
        response.request.extensions["timeout"] = {**timeouts, "read": None}


def build_http_client(config: ProviderConfig) -> httpx.Client:
    """
    Cliente httpx con un transporte por esquema, resuelto una sola vez.
    Sin plazo de lectura por defecto: cada petición lleva el suyo hasta las
    cabeceras y el tiempo hasta el primer frame lo controla CancellationToken.
    """
    mounts = {
        prefix: httpx.HTTPTransport(
            proxy=select_proxy(prefix, config.http_proxy, config.https_proxy),
        )
        for prefix in ("http://", "https://")
    }
    logger.debug(
        "Cliente HTTP: proxy http=%s https=%s",
        bool(config.http_proxy), bool(config.https_proxy),
    )
    return httpx.Client(
        mounts           = mounts,
        timeout          = httpx.Timeout(config.timeout_seconds, read=None),
        follow_redirects = True,
    )
