# weather_agent.py

import json
import logging
import math
import re
from typing import Optional

from models import WeatherCondition, WeatherInfo
import config

logger = logging.getLogger(__name__)


FALLBACK_WEATHER = WeatherInfo(WeatherCondition.CLOUDY, 20)

# Temperatures used when the user picks the weather by hand
MANUAL_TEMPERATURES = {
    WeatherCondition.HOT: 30,
    WeatherCondition.COLD: 5,
    WeatherCondition.SNOWY: -2,
    WeatherCondition.RAINY: 15,
}
NEUTRAL_TEMPERATURE = 20


def build_weather_prompt(lat: float, lon: float) -> str:
    c = WeatherCondition
    return (
        f'Based on the current weather at latitude {lat} and longitude {lon}, respond with a '
        f'JSON object containing "condition" and "temperature".\n'
        f'The "condition" must be ONE of the following Korean words: '
        f"'{c.SUNNY.value}', '{c.RAINY.value}', '{c.CLOUDY.value}', "
        f"'{c.SNOWY.value}', '{c.HOT.value}', '{c.COLD.value}'.\n"
        f"- Use '{c.HOT.value}' for hot weather (e.g., above 28°C).\n"
        f"- Use '{c.COLD.value}' for cold weather (e.g., below 10°C).\n"
        f"- Use '{c.SUNNY.value}' for sunny or clear conditions.\n"
        f"- Use '{c.CLOUDY.value}' for cloudy conditions.\n"
        f"- Use '{c.RAINY.value}' if it is raining.\n"
        f"- Use '{c.SNOWY.value}' if it is snowing.\n"
        f'The "temperature" must be the current temperature in Celsius as an integer number.\n'
        f"Your response must be ONLY the JSON object, without any other text, explanation, "
        f"or markdown formatting like ```json.\n"
        f'Example response: {{"condition": "{c.SUNNY.value}", "temperature": 25}}'
    )


def strip_code_fence(text: str) -> str:
    text = text.strip()
    text = re.sub(r"^```json\n", "", text)
    text = re.sub(r"\n```$", "", text)
    return text


class WeatherAgent:
    """
    Infers the current weather at a coordinate by letting the model search
    the web. Never raises: every failure degrades to FALLBACK_WEATHER.
    """

    def __init__(self, client=None, model: Optional[str] = None, search_tool: str = "web_search_preview"):
        self.client = client or config.build_openai_client()
        self.model = model or config.get_weather_model()
        self.search_tool = search_tool

    def _call_llm_with_search(self, prompt: str) -> str:
        response = self.client.responses.create(
            model=self.model,
            tools=[{"type": self.search_tool}],
            input=prompt,
        )

        # output holds web_search_call items before the final message
        text_chunks = []
        for item in response.output:
            for c in getattr(item, "content", None) or []:
                if c.type == "output_text":
                    text_chunks.append(c.text)
        return "".join(text_chunks).strip()

    @staticmethod
    def parse_weather(text: str) -> Optional[WeatherInfo]:
        """Returns None when the reply is valid JSON of the wrong shape."""
        parsed = json.loads(strip_code_fence(text))
        if not isinstance(parsed, dict):
            return None

        condition = parsed.get("condition")
        temperature = parsed.get("temperature")
        valid_conditions = {w.value for w in WeatherCondition}

        if (
            condition
            and condition in valid_conditions
            and isinstance(temperature, (int, float))
            and not isinstance(temperature, bool)
        ):
            # halves round up, -2.5 -> -2
            return WeatherInfo(WeatherCondition(condition), math.floor(temperature + 0.5))
        return None

    def get_weather_from_coordinates(self, lat: float, lon: float) -> WeatherInfo:
        prompt = build_weather_prompt(lat, lon)

        try:
            text = self._call_llm_with_search(prompt)
            weather = self.parse_weather(text)
        except Exception as e:
            logger.error("[WEATHER] Error getting weather from coordinates: %s", e)
            return FALLBACK_WEATHER

        if weather is None:
            logger.warning("[WEATHER] Unexpected weather response format: %r. Falling back.", text)
            return FALLBACK_WEATHER

        logger.info("[WEATHER] %s at (%.3f, %.3f)", weather.label(), lat, lon)
        return weather

    @staticmethod
    def manual_weather(condition: WeatherCondition) -> WeatherInfo:
        condition = WeatherCondition(condition)
        temperature = MANUAL_TEMPERATURES.get(condition, NEUTRAL_TEMPERATURE)
        return WeatherInfo(condition, temperature)
