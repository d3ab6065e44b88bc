# router/config_loader.py
import os
from pathlib import Path
from typing import Optional

import yaml

from chatmt.router.models import ProviderConfig

_DEFAULT_CONFIG_PATH = Path.home() / ".chatmt" / "config.yaml"
_DEFAULT_ENDPOINT    = "https://api.openai.com/v1/chat/completions"
_DEFAULT_MODEL       = "gpt-3.5-turbo"
_DEFAULT_TIMEOUT     = 15.0


def load_provider_config(config_path: Optional[str] = None) -> ProviderConfig:
    """
    Carga la configuración del servicio desde YAML (sección `openai:`).
    Resuelve variables de entorno en los valores (${VAR}).
    """
    path = Path(config_path or os.environ.get("CHATMT_CONFIG_PATH") or _DEFAULT_CONFIG_PATH)

    if not path.exists():
        raise FileNotFoundError(
            f"Config no encontrada en {path}. "
            f"Copia config.example.yaml a ~/.chatmt/config.yaml"
        )

    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    entry = raw.get("openai") or {}

    return ProviderConfig(
        endpoint        = _resolve_env(entry.get("endpoint")) or _DEFAULT_ENDPOINT,
        model           = _resolve_env(entry.get("model")) or _DEFAULT_MODEL,
        api_key         = _resolve_env(entry.get("api_key")),
        timeout_seconds = float(entry.get("timeout_seconds", _DEFAULT_TIMEOUT)),
        http_proxy      = _resolve_env(entry.get("http_proxy")),
        https_proxy     = _resolve_env(entry.get("https_proxy")),
    )


def _resolve_env(value: Optional[str]) -> Optional[str]:
    """Expande ${VAR_NAME} desde el entorno."""
    if not value or not isinstance(value, str) or not value.startswith("${"):
        return value
    var_name = value.strip("${}").strip()
    return os.environ.get(var_name)
