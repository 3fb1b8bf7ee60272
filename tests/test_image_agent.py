"""
Unit tests for image_agent.py
"""

import base64
from types import SimpleNamespace

import pytest

import image_agent
from conftest import FakeOpenAI
from image_agent import ImageAgent, ImageGenerationError


def test_returns_jpeg_data_url():
    client = FakeOpenAI()
    agent = ImageAgent(client=client, model="gpt-image-1")

    url = agent.generate_food_image("비빔밥")

    assert url == "data:image/jpeg;base64,aW1hZ2U="


def test_requests_exactly_one_square_image():
    client = FakeOpenAI()
    agent = ImageAgent(client=client, model="gpt-image-1")

    agent.generate_food_image("비빔밥")

    call = client.images.calls[0]
    assert call["n"] == 1
    assert call["size"] == "1024x1024"
    assert call["output_format"] == "jpeg"
    assert "'비빔밥'" in call["prompt"]
    assert "photorealistic" in call["prompt"]


def test_dalle_model_does_not_send_output_format():
    client = FakeOpenAI()
    agent = ImageAgent(client=client, model="dall-e-3")

    agent.generate_food_image("잡채")

    assert "output_format" not in client.images.calls[0]


def test_no_image_raises():
    client = FakeOpenAI(image_data=[])
    agent = ImageAgent(client=client, model="gpt-image-1")

    with pytest.raises(ImageGenerationError):
        agent.generate_food_image("비빔밥")


def test_api_error_is_wrapped():
    client = FakeOpenAI()
    client.images.error = RuntimeError("quota")
    agent = ImageAgent(client=client, model="gpt-image-1")

    with pytest.raises(ImageGenerationError):
        agent.generate_food_image("비빔밥")


def test_hosted_url_is_downloaded(monkeypatch):
    client = FakeOpenAI(image_data=[SimpleNamespace(b64_json=None, url="https://img.example/x.png")])
    agent = ImageAgent(client=client, model="dall-e-3")
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        return SimpleNamespace(content=b"jpeg-bytes", raise_for_status=lambda: None)

    monkeypatch.setattr(image_agent.requests, "get", fake_get)

    url = agent.generate_food_image("불고기")

    assert seen["url"] == "https://img.example/x.png"
    assert url == "data:image/jpeg;base64," + base64.b64encode(b"jpeg-bytes").decode("utf-8")
