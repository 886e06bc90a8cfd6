"""Gemini gateway with the SDK client faked out."""
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from autofit import config, gateway
from autofit.errors import ConfigurationError, EmptyResponseError
from autofit.image import ImageBuffer


@pytest.fixture(autouse=True)
def fresh_clients(monkeypatch):
    monkeypatch.setattr(gateway, "_clients", {})
    monkeypatch.setattr(config, "GOOGLE_CLOUD_PROJECT", "autofit-test")
    monkeypatch.setattr(config, "GOOGLE_APPLICATION_CREDENTIALS_JSON", "")


def _fake_client(response) -> MagicMock:
    client = MagicMock()
    client.models.generate_content.return_value = response
    return client


def _image_response(*parts) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


async def test_missing_project_fails_before_any_call(monkeypatch):
    monkeypatch.setattr(config, "GOOGLE_CLOUD_PROJECT", "")
    with patch("autofit.gateway.genai.Client") as client_cls:
        with pytest.raises(ConfigurationError):
            await gateway.generate_text("hello")
    client_cls.assert_not_called()


def test_client_is_built_once_per_location():
    with patch("autofit.gateway.genai.Client") as client_cls:
        first = gateway.get_client("asia-northeast3")
        second = gateway.get_client("asia-northeast3")
        gateway.get_client("us-central1")

    assert first is second
    assert client_cls.call_count == 2
    kwargs = client_cls.call_args_list[0].kwargs
    assert kwargs["vertexai"] is True
    assert kwargs["project"] == "autofit-test"
    assert kwargs["location"] == "asia-northeast3"
    assert kwargs["credentials"] is None


@pytest.mark.parametrize("raw", ["{not json", "{}", "{\"type\": \"service_account\"}"])
def test_unusable_credentials_json_is_ignored(monkeypatch, raw):
    monkeypatch.setattr(config, "GOOGLE_APPLICATION_CREDENTIALS_JSON", raw)
    assert gateway._credentials() is None


async def test_generate_text_returns_model_text(monkeypatch):
    client = _fake_client(SimpleNamespace(text='{"stylingTips": []}'))
    monkeypatch.setattr(gateway, "get_client", lambda location: client)

    text = await gateway.generate_text("prompt", ImageBuffer(b"img", "image/webp"))

    assert text == '{"stylingTips": []}'
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == config.TEXT_MODEL
    assert kwargs["contents"][0] == "prompt"
    assert len(kwargs["contents"]) == 2


@pytest.mark.parametrize("text", [None, ""])
async def test_empty_text_is_an_error(monkeypatch, text):
    monkeypatch.setattr(gateway, "get_client", lambda location: _fake_client(SimpleNamespace(text=text)))
    with pytest.raises(EmptyResponseError):
        await gateway.generate_text("prompt")


async def test_transport_errors_propagate(monkeypatch):
    client = MagicMock()
    client.models.generate_content.side_effect = ConnectionError("network down")
    monkeypatch.setattr(gateway, "get_client", lambda location: client)

    with pytest.raises(ConnectionError):
        await gateway.generate_text("prompt")


async def test_generate_image_returns_first_inline_image(monkeypatch):
    response = _image_response(
        SimpleNamespace(inline_data=None, text="Here is your lookbook"),
        SimpleNamespace(inline_data=SimpleNamespace(data=b"png-bytes", mime_type="image/png")),
    )
    client = _fake_client(response)
    seen_locations = []

    def get_client(location):
        seen_locations.append(location)
        return client

    monkeypatch.setattr(gateway, "get_client", get_client)

    data, mime_type = await gateway.generate_image("prompt")

    assert (data, mime_type) == (b"png-bytes", "image/png")
    assert seen_locations == [config.GOOGLE_CLOUD_IMAGE_LOCATION]
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == config.IMAGE_MODEL
    assert kwargs["config"] is gateway.IMAGE_GENERATION_CONFIG


@pytest.mark.parametrize("response", [
    SimpleNamespace(candidates=[]),
    _image_response(),
    _image_response(SimpleNamespace(inline_data=None, text="no image, sorry")),
])
async def test_generate_image_without_image_is_an_error(monkeypatch, response):
    monkeypatch.setattr(gateway, "get_client", lambda location: _fake_client(response))
    with pytest.raises(EmptyResponseError):
        await gateway.generate_image("prompt")
