# chatmt/orchestrator.py
import logging
from typing import Callable, Iterator, Optional

from chatmt.languages import get_language_english_name
from chatmt.router.cancellation import CancellationToken
from chatmt.router.decoder import FINISH_STOP, StreamDecoder
from chatmt.router.errors import no_content_error
from chatmt.router.models import (
    RequestPayload,
    StreamDelta,
    TranslationRequest,
    TranslationResult,
)
from chatmt.router.openai_chat import OpenAIChatClient
from chatmt.router.prompt_builder import build_payload
from chatmt.router.response_parser import extract_message_content
from chatmt.router.transport import is_streaming

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Dirige una petición de traducción de extremo a extremo.
    No hace HTTP por sí mismo: coordina payload, transporte y decodificación.

    Dos canales hacia el consumidor:
    - progreso: callbacks del request y los snapshots de iter_translate()
    - desenlace: translate() devuelve el resultado final o lanza
      TranslationError / RequestCancelled
    """

    def __init__(
        self,
        client:        OpenAIChatClient,
        language_name: Callable[[str], str] = get_language_english_name,
    ):
        self._client        = client
        self._language_name = language_name

    def build_payload(self, request: TranslationRequest) -> RequestPayload:
        return build_payload(
            text        = request.text,
            source_name = self._language_name(request.source_lang),
            target_name = self._language_name(request.target_lang),
            model       = self._client.model,
        )

    def translate(
        self,
        request: TranslationRequest,
        token:   Optional[CancellationToken] = None,
    ) -> TranslationResult:
        """Consume todo el progreso y devuelve el último resultado."""
        result = None
        for result in self.iter_translate(request, token):
            pass
        if result is None:
            raise no_content_error()
        return result

    def iter_translate(
        self,
        request: TranslationRequest,
        token:   Optional[CancellationToken] = None,
    ) -> Iterator[TranslationResult]:
        """
        Genera snapshots del texto acumulado, uno por delta emitido.
        El último snapshot es el resultado final. En modo no-streaming
        se genera un único snapshot.

        on_finish solo se llama si hubo al menos un delta; un stream vacío
        termina en TranslationError NO_CONTENT sin on_finish.

        Sin token se crea uno nuevo con el plazo de red configurado.
        """
        payload = self.build_payload(request)
        token   = token or self._client.new_token()
        streaming = is_streaming(payload)

        logger.info(
            "Petición de traducción: model=%s stream=%s %s→%s",
            payload.model, streaming, request.source_lang, request.target_lang,
        )

        try:
            if streaming:
                yield from self._run_streaming(request, payload, token)
            else:
                yield self._run_blocking(request, payload, token)
        finally:
            token.disarm()

    def _run_blocking(
        self,
        request: TranslationRequest,
        payload: RequestPayload,
        token:   CancellationToken,
    ) -> TranslationResult:
        """
        Una sola petición, un solo cuerpo. Simula un stream de un chunk
        para que el consumidor reciba la misma forma de callbacks.
        """
        body    = self._client.post_json(payload, token)
        content = extract_message_content(body)
        logger.debug("Contenido no-streaming: %r", content[:200])

        if not content:
            raise no_content_error()

        if request.on_message:
            request.on_message(StreamDelta(content=content, role="assistant"))
        if request.on_finish:
            request.on_finish(FINISH_STOP)

        return TranslationResult(request=request, translated_text=content)

    def _run_streaming(
        self,
        request: TranslationRequest,
        payload: RequestPayload,
        token:   CancellationToken,
    ) -> Iterator[TranslationResult]:
        decoder = StreamDecoder(request, token)
        frames  = self._client.stream_frames(payload, token)

        try:
            for raw in frames:
                result = decoder.feed(raw)
                if result is not None:
                    yield result
                if decoder.finished:
                    break
        finally:
            frames.close()

        if not decoder.finished:
            # Conexión cerrada sin centinela: se cierra igual, una sola vez
            logger.info("Stream terminado sin centinela")
            decoder.finish(FINISH_STOP)

        logger.info(
            "Stream completado: %d deltas, %d caracteres, finish_reason=%s",
            decoder.emitted, len(decoder.text), decoder.finish_reason,
        )
        if not decoder.emitted:
            raise no_content_error()
