import httpx
import pytest

from chatmt.router.errors import (
    ErrorCategory,
    RequestCancelled,
    TranslationError,
    http_status_error,
    no_content_error,
    normalize_transport_error,
)


class TestNormalizeTransportError:

    def test_mensaje_canceled_es_cancelacion_silenciosa(self):
        result = normalize_transport_error(Exception("canceled"))
        assert isinstance(result, RequestCancelled)
        assert not isinstance(result, TranslationError)

    def test_flag_cancelled(self):
        result = normalize_transport_error(httpx.ReadError("boom"), cancelled=True)
        assert isinstance(result, RequestCancelled)

    def test_mensaje_del_cuerpo_de_error(self):
        body = {"error": {"message": "Incorrect API key provided"}}
        result = normalize_transport_error(httpx.ReadError("x"), error_body=body)

        assert isinstance(result, TranslationError)
        assert result.category is ErrorCategory.NETWORK
        assert result.code == "401"
        assert result.message == "Incorrect API key provided"

    def test_sin_cuerpo_unknown_error(self):
        result = normalize_transport_error(httpx.ConnectError("refused"))
        assert result.message == "Unknown error"

    def test_timeout_sobrescribe_el_mensaje(self):
        body = {"error": {"message": "algo"}}
        result = normalize_transport_error(httpx.ReadError("x"), timed_out=True, error_body=body)

        assert result.category is ErrorCategory.TIMEOUT
        assert result.message == "Request timeout."
        assert result.code == "401"

    def test_timeout_de_httpx(self):
        result = normalize_transport_error(httpx.ReadTimeout("timed out"))
        assert result.category is ErrorCategory.TIMEOUT


class TestTranslationError:

    def test_http_status_error(self):
        err = http_status_error(429, "Too Many Requests")
        assert err.to_dict() == {
            "type":    "OpenAI",
            "code":    "429",
            "message": "API Error: Too Many Requests",
        }
        assert err.category is ErrorCategory.HTTP

    def test_no_content(self):
        err = no_content_error()
        assert err.code is None
        assert err.message == "No content in response"
        assert err.category is ErrorCategory.NO_CONTENT

    def test_es_excepcion(self):
        with pytest.raises(TranslationError, match="No content"):
            raise no_content_error()
