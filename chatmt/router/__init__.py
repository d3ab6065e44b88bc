from chatmt.router.cancellation import CancellationToken
from chatmt.router.config_loader import load_provider_config
from chatmt.router.decoder import StreamDecoder
from chatmt.router.errors import ErrorCategory, RequestCancelled, TranslationError
from chatmt.router.models import (
    ModelProfile,
    ProviderConfig,
    RequestPayload,
    StreamDelta,
    TranslationRequest,
    TranslationResult,
)
from chatmt.router.openai_chat import OpenAIChatClient
from chatmt.router.prompt_builder import build_payload, map_translation_language

__all__ = [
    "CancellationToken",
    "load_provider_config",
    "StreamDecoder",
    "ErrorCategory",
    "RequestCancelled",
    "TranslationError",
    "ModelProfile",
    "ProviderConfig",
    "RequestPayload",
    "StreamDelta",
    "TranslationRequest",
    "TranslationResult",
    "OpenAIChatClient",
    "build_payload",
    "map_translation_language",
]
