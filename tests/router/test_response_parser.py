from chatmt.router.models import StreamDelta
from chatmt.router.response_parser import (
    NOT_JSON,
    extract_delta,
    extract_message_content,
    try_parse_json,
)


class TestTryParseJson:

    def test_json_valido(self):
        assert try_parse_json('{"a": 1}') == {"a": 1}

    def test_centinela_done_no_es_json(self):
        assert try_parse_json("[DONE]") is NOT_JSON

    def test_texto_vacio_no_es_json(self):
        assert try_parse_json("") is NOT_JSON


class TestExtractDelta:

    def test_delta_con_rol_y_contenido(self):
        frame = {"choices": [{"delta": {"role": "assistant", "content": "Hola"}}]}
        assert extract_delta(frame) == StreamDelta(content="Hola", role="assistant")

    def test_contenido_ausente_es_cadena_vacia(self):
        frame = {"choices": [{"delta": {"role": "assistant"}}]}
        assert extract_delta(frame).content == ""

    def test_contenido_null_es_cadena_vacia(self):
        frame = {"choices": [{"delta": {"content": None}}]}
        assert extract_delta(frame).content == ""

    def test_sin_choices(self):
        assert extract_delta({"id": "x"}) is None

    def test_choices_vacio(self):
        assert extract_delta({"choices": []}) is None

    def test_frame_no_dict(self):
        assert extract_delta(42) is None

    def test_finish_reason_solo_lo_registra(self):
        frame = {"choices": [{"delta": {"content": "x"}, "finish_reason": "stop"}]}
        delta = extract_delta(frame)
        assert delta.finish_reason == "stop"
        assert delta.content == ""


class TestExtractMessageContent:

    def test_camino_feliz(self):
        body = {"choices": [{"message": {"content": "Bonjour"}}]}
        assert extract_message_content(body) == "Bonjour"

    def test_sin_choices(self):
        assert extract_message_content({}) == ""

    def test_sin_message(self):
        assert extract_message_content({"choices": [{}]}) == ""

    def test_cuerpo_no_json(self):
        assert extract_message_content(NOT_JSON) == ""
