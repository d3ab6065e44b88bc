# router/cancellation.py
import logging
import socket
import threading
from typing import Optional

logger = logging.getLogger(__name__)

REASON_CANCELED = "canceled"
REASON_TIMEOUT  = "timeout"


class CancellationToken:
    """
    Señal de aborto de una sola petición, con plazo opcional.

    Se crea una por petición y se pasa explícitamente hasta el transporte.
    El plazo mide el tiempo hasta el primer byte: el streaming lo desarma
    al recibir el primer frame. Al cancelarse cierra la respuesta en vuelo
    para que la lectura bloqueada falle y pase por el normalizador de errores.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._lock      = threading.Lock()
        self._reason:   Optional[str] = None
        self._response  = None
        self._timer:    Optional[threading.Timer] = None
        if timeout_seconds:
            self._timer = threading.Timer(timeout_seconds, self._expire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def timed_out(self) -> bool:
        return self._reason == REASON_TIMEOUT

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = REASON_CANCELED) -> None:
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason
            response     = self._response
        self.disarm()
        if response is not None:
            _close_response(response)

    def disarm(self) -> None:
        """Cancela el plazo pendiente. Idempotente."""
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def attach(self, response) -> None:
        """
        Registra la respuesta en vuelo. Si el token ya estaba cancelado
        la cierra de inmediato.
        """
        with self._lock:
            self._response = response
            already = self._reason is not None
        if already:
            _close_response(response)

    def detach(self) -> None:
        with self._lock:
            self._response = None

    def _expire(self) -> None:
        logger.warning("Plazo de red agotado, abortando petición")
        self.cancel(REASON_TIMEOUT)


def _close_response(response) -> None:
    """
    Cierra la respuesta desde cualquier hilo. close() no despierta un recv
    bloqueado en otro hilo; shutdown() sobre el socket sí.
    """
    extensions = getattr(response, "extensions", None) or {}
    network_stream = extensions.get("network_stream")
    sock = network_stream.get_extra_info("socket") if network_stream is not None else None
    if sock is not None:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.debug("shutdown del socket ignorado: %s", e)
    response.close()
