# router/decoder.py
import logging
from typing import Optional

from chatmt.router.cancellation import CancellationToken
from chatmt.router.models import StreamDelta, TranslationRequest, TranslationResult
from chatmt.router.response_parser import NOT_JSON, extract_delta, try_parse_json

logger = logging.getLogger(__name__)

# Comillas de apertura que algunos modelos anteponen sin motivo
LEFT_QUOTES = ('"', "“", "'", "「")

FINISH_STOP = "stop"


class StreamDecoder:
    """
    Decodifica los frames de un único request en streaming.

    Es dueño del texto acumulado y del flag "primer delta": una instancia
    por petición, nunca compartida. El centinela no-JSON es la única señal
    de fin de stream; finish_reason se registra pero no cierra el stream.
    """

    def __init__(
        self,
        request: TranslationRequest,
        token:   Optional[CancellationToken] = None,
    ):
        self._request   = request
        self._token     = token
        self._text      = ""
        self._is_first  = True
        self._finished  = False
        self._saw_frame = False
        self._emitted   = 0
        self.finish_reason: Optional[str] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def emitted(self) -> int:
        """Deltas entregados a on_message."""
        return self._emitted

    def result(self) -> TranslationResult:
        return TranslationResult(request=self._request, translated_text=self._text)

    def feed(self, raw: str) -> Optional[TranslationResult]:
        """
        Procesa un frame crudo.
        Devuelve el resultado acumulado si el frame aportó un delta,
        None si no emitió nada (keep-alive, finish_reason, centinela).
        """
        if self._finished:
            return None

        if not self._saw_frame:
            # El plazo protege el tiempo hasta el primer byte, no el total
            self._saw_frame = True
            if self._token is not None:
                self._token.disarm()

        frame = try_parse_json(raw)
        if frame is NOT_JSON:
            logger.debug("Frame no-JSON (%r): fin de stream", raw[:20])
            self.finish(FINISH_STOP)
            return None

        delta = extract_delta(frame)
        if delta is None:
            return None
        if delta.finish_reason:
            self.finish_reason = delta.finish_reason
            return None

        content = self._strip_leading_quote(delta.content)
        self._text += content

        # role solo viene en el primer delta de este formato
        if not delta.role:
            self._is_first = False

        self._emitted += 1
        emitted = StreamDelta(content=content, role=delta.role)
        if self._request.on_message:
            self._request.on_message(emitted)

        return self.result()

    def finish(self, reason: str = FINISH_STOP) -> None:
        """
        Cierra el stream y avisa al consumidor. Solo la primera llamada cuenta.
        Sin ningún delta emitido no hay on_finish: el desenlace es NO_CONTENT.
        """
        if self._finished:
            return
        self._finished = True
        if self._emitted and self._request.on_finish:
            self._request.on_finish(reason)

    def _strip_leading_quote(self, content: str) -> str:
        if not (self._is_first and content):
            return content
        source_first = self._request.text[:1]
        if source_first in LEFT_QUOTES:
            return content
        if content[0] in LEFT_QUOTES:
            return content[1:]
        return content
