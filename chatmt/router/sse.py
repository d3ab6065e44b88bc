# router/sse.py
from typing import Iterable, Iterator


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """
    Agrupa líneas de un stream server-sent-events en eventos y devuelve
    el campo `data` de cada uno.

    - Una línea vacía cierra el evento.
    - Varias líneas `data:` del mismo evento se unen con "\\n".
    - Comentarios (`:`) y otros campos (`event:`, `id:`, `retry:`) se ignoran.
    - Si el stream termina sin línea vacía, el último evento se emite igual.
    """
    buffer: list[str] = []

    for raw in lines:
        line = raw.rstrip("\r\n")

        if not line:
            if buffer:
                yield "\n".join(buffer)
                buffer = []
            continue

        if line.startswith(":"):
            continue

        field, sep, value = line.partition(":")
        if field != "data":
            continue
        # Solo se descarta un espacio tras los dos puntos
        if sep and value.startswith(" "):
            value = value[1:]
        buffer.append(value)

    if buffer:
        yield "\n".join(buffer)
