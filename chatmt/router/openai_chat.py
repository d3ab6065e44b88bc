# router/openai_chat.py
import json
import logging
from typing import Any, Iterator, Optional

import httpx

from chatmt.router.cancellation import REASON_CANCELED, CancellationToken
from chatmt.router.errors import http_status_error, normalize_transport_error
from chatmt.router.models import ProviderConfig, RequestPayload
from chatmt.router.response_parser import NOT_JSON, try_parse_json
from chatmt.router.sse import iter_sse_data
from chatmt.router.transport import (
    build_http_client,
    normalize_endpoint,
    release_read_timeout,
    request_timeout,
)

logger = logging.getLogger(__name__)

# Errores que pueden aparecer cuando el token cierra la respuesta en vuelo
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.StreamError, OSError)


class OpenAIChatClient:
    """
    Adaptador HTTP para un endpoint chat-completions compatible con OpenAI.

    Solo sabe enviar payloads y devolver cuerpos o frames crudos.
    Toda excepción de transporte sale ya normalizada: TranslationError
    o RequestCancelled.
    """

    def __init__(self, config: ProviderConfig, client: Optional[httpx.Client] = None):
        self._config   = config
        self._client   = client or build_http_client(config)
        self._endpoint = normalize_endpoint(config.endpoint)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def model(self) -> str:
        return self._config.model

    def new_token(self) -> CancellationToken:
        """Token fresco con el plazo de red configurado."""
        return CancellationToken(timeout_seconds=self._config.timeout_seconds)

    def close(self) -> None:
        self._client.close()

    def post_json(self, payload: RequestPayload, token: CancellationToken) -> Any:
        """
        POST sin streaming. Devuelve el cuerpo parseado (NOT_JSON si no lo es).
        Un status no-2xx lanza TranslationError con el código HTTP.
        """
        response = self._send(payload, token)
        try:
            try:
                response.read()
            except _TRANSPORT_ERRORS as e:
                raise self._transport_error(e, token) from e
            self._raise_if_cancelled(token)

            if response.is_error:
                logger.error(
                    "Petición fallida: %d %s - %s",
                    response.status_code,
                    response.reason_phrase,
                    response.text[:500],
                )
                raise http_status_error(response.status_code, response.reason_phrase)

            body = try_parse_json(response.text)
            if body is NOT_JSON:
                logger.warning("Respuesta no-streaming sin JSON válido")
            return body
        finally:
            token.detach()
            response.close()

    def stream_frames(
        self,
        payload: RequestPayload,
        token:   CancellationToken,
    ) -> Iterator[str]:
        """
        POST con streaming. Genera el campo data de cada evento SSE en orden
        de llegada. El consumidor puede cerrar el generador en cualquier momento.
        """
        response = self._send(payload, token)
        try:
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "Stream rechazado: %d %s", response.status_code, response.reason_phrase,
                )
                try:
                    body = try_parse_json(response.read().decode("utf-8", errors="replace"))
                except _TRANSPORT_ERRORS as read_error:
                    raise self._transport_error(read_error, token) from read_error
                raise normalize_transport_error(e, error_body=body) from e

            try:
                for data in iter_sse_data(response.iter_lines()):
                    if token.cancelled:
                        break
                    yield data
            except _TRANSPORT_ERRORS as e:
                raise self._transport_error(e, token) from e

            # El cierre desde otro hilo puede terminar la lectura sin excepción
            self._raise_if_cancelled(token)
        finally:
            token.detach()
            response.close()

    def _send(self, payload: RequestPayload, token: CancellationToken) -> httpx.Response:
        body = payload.to_dict()
        logger.debug("params: %s", json.dumps(body, ensure_ascii=False))

        request = self._client.build_request(
            "POST",
            self._endpoint,
            json    = body,
            headers = self._headers(),
            timeout = request_timeout(self._config.timeout_seconds),
        )
        try:
            response = self._client.send(request, stream=True)
        except _TRANSPORT_ERRORS as e:
            raise self._transport_error(e, token) from e

        if payload.stream:
            # Entre frames no hay plazo de lectura; el token cubre el primero
            release_read_timeout(response)
        token.attach(response)
        return response

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type":  "application/json",
            "Authorization": f"Bearer {self._config.api_key or ''}",
        }

    def _raise_if_cancelled(self, token: CancellationToken) -> None:
        if token.cancelled:
            raise self._transport_error(
                httpx.ReadError(token.reason or REASON_CANCELED), token,
            )

    @staticmethod
    def _transport_error(exc: BaseException, token: CancellationToken) -> Exception:
        return normalize_transport_error(
            exc,
            cancelled = token.reason == REASON_CANCELED,
            timed_out = token.timed_out,
        )
