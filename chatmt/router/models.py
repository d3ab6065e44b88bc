# router/models.py
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


# Marcadores de familia de modelo en el identificador
_DEDICATED_TRANSLATION_MARKER = "qwen-mt"
_NON_STREAMING_MARKER         = "qwen-mt-plus"

RESULT_TYPE = "OpenAI"


@dataclass
class ProviderConfig:
    """
    Configuración del servicio chat-completion.
    Se carga desde ~/.chatmt/config.yaml.
    """
    endpoint:        str
    model:           str
    api_key:         Optional[str] = None
    timeout_seconds: float = 15.0
    http_proxy:      Optional[str] = None
    https_proxy:     Optional[str] = None


@dataclass(frozen=True)
class ModelProfile:
    """
    Capacidades derivadas del identificador del modelo.
    No guarda estado: todo se calcula a partir de `model`.
    """
    model: str

    @property
    def supports_dedicated_translation(self) -> bool:
        return _DEDICATED_TRANSLATION_MARKER in self.model

    @property
    def requires_non_streaming(self) -> bool:
        # qwen-mt-plus no soporta streaming de forma fiable
        return _NON_STREAMING_MARKER in self.model


@dataclass(frozen=True)
class StreamDelta:
    """Un fragmento incremental tal como lo recibe el consumidor."""
    content:       str = ""
    role:          Optional[str] = None
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class TranslationRequest:
    text:        str
    source_lang: str
    target_lang: str
    on_message:  Optional[Callable[[StreamDelta], None]] = field(default=None, compare=False)
    on_finish:   Optional[Callable[[str], None]]         = field(default=None, compare=False)


@dataclass(frozen=True)
class RequestPayload:
    model:    str
    messages: tuple
    stream:   bool
    extra:    dict = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Cuerpo JSON tal como viaja al servicio."""
        body = {
            "model":    self.model,
            "messages": [dict(m) for m in self.messages],
            "stream":   self.stream,
        }
        body.update(self.extra)
        return body


@dataclass(frozen=True)
class TranslationResult:
    request:         TranslationRequest
    translated_text: str
    type:            str = RESULT_TYPE

    @property
    def translations(self) -> list[str]:
        return [self.translated_text]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type":          self.type,
            "queryWordInfo": self.request,
            "translations":  self.translations,
            "result":        {"translatedText": self.translated_text},
        }
