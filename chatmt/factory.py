# chatmt/factory.py
from dataclasses import replace
from typing import Optional

import httpx

from chatmt.orchestrator import Orchestrator
from chatmt.router.config_loader import load_provider_config
from chatmt.router.openai_chat import OpenAIChatClient


def build_orchestrator(
    config_path: Optional[str]          = None,
    model:       Optional[str]          = None,
    http_client: Optional[httpx.Client] = None,
) -> Orchestrator:
    """
    Ensambla el Orchestrator con todas sus dependencias.
    Punto de entrada único para el CLI y los tests de integración.

    model: sobrescribe el modelo del config (útil desde --model).
    http_client: cliente httpx ya construido (los tests inyectan un MockTransport).
    """
    config = load_provider_config(config_path)
    if model:
        config = replace(config, model=model)

    if not config.api_key:
        raise RuntimeError(
            "Sin api_key configurada. "
            "Revisa ~/.chatmt/config.yaml y tus variables de entorno."
        )

    client = OpenAIChatClient(config, client=http_client)
    return Orchestrator(client)
