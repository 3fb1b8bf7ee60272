# recommendation_agent.py

import json
import logging
from typing import Dict, List, Optional

from models import FoodAgentError, FoodPreference, MealTime, Recommendation, WeatherInfo
import config

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 5


class RecommendationError(FoodAgentError):
    pass


SYSTEM_INSTRUCTION = """You are an expert Korean food recommendation engine. Your task is to suggest 5 suitable Korean dishes based on the provided conditions. The recommendations should be diverse and interesting, like a food world cup. Always respond with a JSON array containing exactly 5 recommendation objects, according to the schema. Do not include any markdown formatting like ```json.

[USER FAMILIARITY FEEDBACK]
- You may be provided with a 'familiarityTable' which contains the user's personal familiarity score (1-5) for certain foods they have rated before.
- Use this table to understand the user's taste profile. For example, if a user rates many traditional soups highly, they may prefer more classic dishes.
- When you recommend a food that is in the table, your own 'familiarity' score in the response should be influenced by the user's score.
- For new foods not in the table, continue to use the general Korean familiarity score (1=exotic, 5=common).

[WEATHER / FALLBACK ADDENDUM]
목적: 위치 권한 실패/네트워크 오류로 날씨 정보가 없어도 추천이 중단되지 않도록 하는 규칙입니다.

[FAIL-SAFE]
- 'weather' 정보가 제공되지 않으면, 오류를 반환하지 마세요.
- 대신 '수동 모드'로 간주하고, 'mealTime', 'foodPreference', 'familiarityTable'만으로 5개의 음식을 추천해주세요.

[SCORING BEHAVIOR WHEN NO WEATHER]
- 'weather' 정보가 없으면, 날씨 관련 가중치는 중립적으로 처리하세요.

[OUTPUT CONSTRAINT]
- 어떤 상황에서도 설명이나 오류 메시지 없이, 반드시 지정된 JSON 스키마에 맞는 5개의 추천 음식 배열만 응답해야 합니다."""


RECOMMENDATION_ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "foodName": {
            "type": "string",
            "description": "The name of the recommended Korean food in Korean.",
        },
        "reason": {
            "type": "string",
            "description": (
                "A short, engaging reason in Korean why this food is recommended "
                "for the given conditions."
            ),
        },
        "familiarity": {
            "type": "integer",
            "description": (
                "A score from 1 (very exotic) to 5 (very common and familiar) representing "
                "how familiar this dish is to a typical Korean."
            ),
        },
    },
    "required": ["foodName", "reason", "familiarity"],
    "additionalProperties": False,
}

# Strict structured outputs need an object at the top level, so the
# array travels under "recommendations".
RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "food_recommendations",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "recommendations": {
                    "type": "array",
                    "items": RECOMMENDATION_ITEM_SCHEMA,
                },
            },
            "required": ["recommendations"],
            "additionalProperties": False,
        },
    },
}


class RecommendationAgent:
    """
    Asks the text model for exactly five Korean dishes that suit the
    meal time, taste preference, weather and the user's familiarity table.
    """

    def __init__(self, client=None, model: Optional[str] = None, temperature: float = 0.9):
        self.client = client or config.build_openai_client()
        self.model = model or config.get_text_model()
        self.temperature = temperature

    # ------------------------------------------------------------------
    # Prompt building
    # ------------------------------------------------------------------
    @staticmethod
    def build_user_prompt(
        weather: Optional[WeatherInfo],
        meal_time: MealTime,
        food_preference: FoodPreference,
        familiarity_ratings: Optional[Dict[str, int]] = None,
    ) -> str:
        if weather:
            weather_line = (
                f"- Weather: '{weather.condition.value}', Temperature: {weather.temperature}°C"
            )
        else:
            weather_line = "- Weather: Not available"

        lines = [
            f"Please recommend {RECOMMENDATION_COUNT} Korean dishes based on these conditions:",
            f"- Meal Time: '{MealTime(meal_time).value}'",
            f"- Food Preference: '{FoodPreference(food_preference).value}'",
            weather_line,
        ]
        if familiarity_ratings:
            lines.append(
                "- User's Familiarity Table: "
                + json.dumps(familiarity_ratings, ensure_ascii=False)
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------
    @staticmethod
    def parse_recommendations(content: str) -> List[Recommendation]:
        """
        Parse the model reply into Recommendation objects.

        Accepts either the schema wrapper {"recommendations": [...]} or a
        bare array. Only the first element is shape-checked.
        """
        data = json.loads(content)
        if isinstance(data, dict):
            data = data.get("recommendations")

        if not isinstance(data, list) or len(data) == 0:
            raise ValueError("Invalid response format: expected an array.")

        first = data[0]
        if (
            not isinstance(first, dict)
            or not first.get("foodName")
            or not first.get("reason")
            or first.get("familiarity") is None
        ):
            raise ValueError("Invalid response format from OpenAI API")

        return [Recommendation.from_dict(item) for item in data if isinstance(item, dict)]

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def get_food_recommendation(
        self,
        weather: Optional[WeatherInfo],
        meal_time: MealTime,
        food_preference: FoodPreference,
        familiarity_ratings: Optional[Dict[str, int]] = None,
    ) -> List[Recommendation]:
        user_prompt = self.build_user_prompt(weather, meal_time, food_preference, familiarity_ratings)
        logger.debug("[RECOMMEND] Prompt:\n%s", user_prompt)

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": user_prompt},
                ],
                response_format=RESPONSE_FORMAT,
                temperature=self.temperature,
            )
            content = (completion.choices[0].message.content or "").strip()
            recommendations = self.parse_recommendations(content)
        except Exception as e:
            logger.error("[RECOMMEND] Error getting food recommendation: %s", e)
            raise RecommendationError("Failed to get food recommendation from OpenAI API.") from e

        logger.info(
            "[RECOMMEND] %d dishes, top pick: %s",
            len(recommendations),
            recommendations[0].food_name,
        )
        return recommendations
