"""
Pytest configuration and shared fixtures.

The OpenAI client is replaced by small fakes that record every call, so
no test touches the network.
"""

import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Make the flat top-level modules importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Recommendation


SAMPLE_ITEMS = [
    {"foodName": "김치찌개", "reason": "비 오는 날엔 얼큰한 찌개가 최고예요.", "familiarity": 5},
    {"foodName": "짬뽕", "reason": "매콤한 국물이 몸을 데워줘요.", "familiarity": 5},
    {"foodName": "감자탕", "reason": "든든하고 뜨끈한 한 끼.", "familiarity": 4},
    {"foodName": "어탕국수", "reason": "색다른 국물 요리를 원한다면.", "familiarity": 2},
    {"foodName": "육개장", "reason": "매운 국물의 정석.", "familiarity": 4},
]


class FakeChatCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeImages:
    def __init__(self, data=None, error=None):
        self.data = data if data is not None else [SimpleNamespace(b64_json="aW1hZ2U=", url=None)]
        self.error = error
        self.calls = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


class FakeResponses:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            output=[
                SimpleNamespace(type="web_search_call"),
                SimpleNamespace(
                    type="message",
                    content=[SimpleNamespace(type="output_text", text=self.text)],
                ),
            ]
        )


class FakeOpenAI:
    """Stands in for openai.OpenAI with the three endpoints the agents use."""

    def __init__(self, chat_content=None, image_data=None, weather_text=None):
        self.chat = SimpleNamespace(completions=FakeChatCompletions(content=chat_content))
        self.images = FakeImages(data=image_data)
        self.responses = FakeResponses(text=weather_text)


@pytest.fixture
def sample_items():
    return [dict(item) for item in SAMPLE_ITEMS]


@pytest.fixture
def sample_recommendations(sample_items):
    return [Recommendation.from_dict(item) for item in sample_items]


@pytest.fixture
def fake_client(sample_items):
    """A client whose every endpoint answers successfully."""
    return FakeOpenAI(
        chat_content=json.dumps({"recommendations": sample_items}, ensure_ascii=False),
        weather_text='{"condition": "비", "temperature": 14}',
    )
