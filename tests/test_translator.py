"""Tests for the batch translator (requests.post is mocked throughout)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from elpais_pipeline.errors import ConfigurationError, TranslationError
from elpais_pipeline.translator import ArticleTranslator


def _response(status=200, payload=None, text=None, json_error=None):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    resp.text = text if text is not None else str(payload)
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


def _ok(*texts):
    return _response(payload={"data": {"translations": [{"translatedText": t} for t in texts]}})


@pytest.fixture
def translator():
    return ArticleTranslator(api_key="test-key", endpoint="https://translate.test/v2")


class TestConstruction:
    def test_missing_key_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            ArticleTranslator(api_key="")

    def test_payload_shape(self, translator) -> None:
        assert translator.build_payload(["hola", None]) == {
            "q": ["hola", ""],
            "source": "es",
            "target": "en",
            "format": "text",
        }


class TestTranslateBatch:
    def test_empty_input_makes_no_request(self, translator) -> None:
        with patch("elpais_pipeline.translator.requests.post") as post:
            assert translator.translate_batch([]) == []
        post.assert_not_called()

    def test_single_request_keeps_order(self, translator) -> None:
        with patch("elpais_pipeline.translator.requests.post", return_value=_ok("War", "Peace", "Talks")) as post:
            result = translator.translate_batch(["Guerra", "Paz", "Conversaciones"])

        assert result == ["War", "Peace", "Talks"]
        post.assert_called_once()
        args, kwargs = post.call_args
        assert args[0] == "https://translate.test/v2"
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["json"]["q"] == ["Guerra", "Paz", "Conversaciones"]
        assert kwargs["json"]["source"] == "es"
        assert kwargs["json"]["target"] == "en"
        assert kwargs["json"]["format"] == "text"
        assert kwargs["timeout"]

    def test_count_mismatch_raises(self, translator) -> None:
        with patch("elpais_pipeline.translator.requests.post", return_value=_ok("Only one")):
            with pytest.raises(TranslationError, match="1 item"):
                translator.translate_batch(["uno", "dos"])

    def test_non_success_status_carries_body(self, translator) -> None:
        body = '{"error": {"code": 403, "message": "API key not valid"}}'
        with patch("elpais_pipeline.translator.requests.post", return_value=_response(403, text=body)):
            with pytest.raises(TranslationError) as info:
                translator.translate_batch(["hola"])
        assert info.value.status == 403
        assert info.value.body == body
        assert "HTTP 403" in str(info.value)
        assert "API key not valid" in str(info.value)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"data": {}},
            {"data": {"translations": [{"text": "no key"}]}},
            {"data": {"translations": [{"translatedText": None}]}},
            {"data": {"translations": None}},
        ],
    )
    def test_malformed_payload_raises(self, translator, payload) -> None:
        with patch("elpais_pipeline.translator.requests.post", return_value=_response(payload=payload)):
            with pytest.raises(TranslationError, match="Malformed"):
                translator.translate_batch(["hola"])

    def test_invalid_json_raises(self, translator) -> None:
        resp = _response(text="<html>oops</html>", json_error=ValueError("not json"))
        with patch("elpais_pipeline.translator.requests.post", return_value=resp):
            with pytest.raises(TranslationError):
                translator.translate_batch(["hola"])

    def test_network_error_is_wrapped(self, translator) -> None:
        with patch(
            "elpais_pipeline.translator.requests.post",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            with pytest.raises(TranslationError, match="connection refused") as info:
                translator.translate_batch(["hola"])
        assert isinstance(info.value.__cause__, requests.ConnectionError)
