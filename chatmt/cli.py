# chatmt/cli.py
import logging
import sys

import click
from dotenv import load_dotenv

from chatmt.factory import build_orchestrator
from chatmt.languages import resolve_language_code, supported_languages
from chatmt.router.errors import RequestCancelled, TranslationError
from chatmt.router.models import TranslationRequest


# Carga .env una sola vez, antes que cualquier otra cosa
load_dotenv()


# ------------------------------------------------------------------
# Grupo raíz
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="chatmt")
def main():
    """
    chatmt: traducción vía servicios chat-completion.

    Envía el texto a un endpoint compatible con OpenAI y muestra
    la traducción a medida que llega.
    """


# ------------------------------------------------------------------
# chatmt translate
# ------------------------------------------------------------------

@main.command()
@click.argument("text")
@click.option(
    "--from", "source_lang",
    default      = "auto",
    show_default = True,
    metavar      = "LANG",
    help         = "Idioma de origen (ej: en, ja, zh-CHS). 'auto' para detectar.",
)
@click.option(
    "--to", "target_lang",
    required = True,
    metavar  = "LANG",
    help     = "Idioma de destino (ej: zh-CHS, en, fr)",
)
@click.option(
    "--model", "-m",
    default = None,
    help    = "Modelo a usar. Sobrescribe el del config.",
)
@click.option(
    "--config", "config_path",
    default = None,
    type    = click.Path(exists=False),
    help    = "Ruta al config.yaml (por defecto ~/.chatmt/config.yaml)",
)
@click.option(
    "--no-stream-output",
    is_flag = True,
    default = False,
    help    = "Imprime solo el resultado final, sin deltas.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Logging a DEBUG.")
def translate(
    text:             str,
    source_lang:      str,
    target_lang:      str,
    model:            str | None,
    config_path:      str | None,
    no_stream_output: bool,
    verbose:          bool,
):
    """Traduce TEXT mostrando los fragmentos según llegan."""

    _setup_logging(verbose)

    # ── Validaciones de entrada ───────────────────────────────────
    if not text.strip():
        _abort("El texto a traducir no puede estar vacío.")
    source = _validate_lang(source_lang, "--from")
    target = _validate_lang(target_lang, "--to")

    if target == "auto":
        _abort("--to no puede ser 'auto'.")
    if source == target:
        _abort("El idioma de origen y destino no pueden ser el mismo.")

    # ── Ensamblar pipeline ────────────────────────────────────────
    try:
        orchestrator = build_orchestrator(config_path=config_path, model=model)
    except FileNotFoundError as e:
        _abort(str(e))
    except RuntimeError as e:
        _abort(str(e))

    def on_message(delta):
        if not no_stream_output:
            click.echo(delta.content, nl=False)

    request = TranslationRequest(
        text        = text,
        source_lang = source,
        target_lang = target,
        on_message  = on_message,
    )

    # ── Ejecutar ──────────────────────────────────────────────────
    try:
        result = orchestrator.translate(request)

    except RequestCancelled:
        click.echo("\n[chatmt] Petición cancelada.")
        sys.exit(130)

    except KeyboardInterrupt:
        click.echo("\n[chatmt] Proceso interrumpido.")
        sys.exit(130)

    except TranslationError as e:
        code = f" ({e.code})" if e.code else ""
        _error(f"Error de traducción{code}: {e.message}")
        sys.exit(1)

    if no_stream_output:
        click.echo(result.translated_text)
    else:
        click.echo("")


# ------------------------------------------------------------------
# chatmt languages
# ------------------------------------------------------------------

@main.command()
def languages():
    """Lista los códigos de idioma soportados."""
    for code, name in supported_languages():
        click.echo(f"{code:<8} {name}")


# ------------------------------------------------------------------
# Helpers de validación
# ------------------------------------------------------------------

def _validate_lang(code: str, option: str) -> str:
    """Valida el código y lo devuelve en su forma canónica."""
    code = code.strip()

    if not code:
        _abort(f"{option} no puede estar vacío.")

    canonical = resolve_language_code(code)
    if canonical is None:
        _abort(
            f"{option}: idioma no soportado: '{code}'\n"
            f"Usa 'chatmt languages' para ver la lista."
        )
    return canonical


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level  = logging.DEBUG if verbose else logging.WARNING,
        format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ------------------------------------------------------------------
# Helpers de output
# ------------------------------------------------------------------

def _abort(message: str) -> None:
    """Error de validación, culpa del usuario."""
    click.echo(click.style(f"[chatmt] Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _error(message: str) -> None:
    """Error de sistema, no es culpa del usuario."""
    click.echo(click.style(f"[chatmt] {message}", fg="red"), err=True)
