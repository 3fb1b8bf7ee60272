# flow_agent.py

import logging
from typing import List, Optional

from models import (
    AppStep,
    FinalRecommendation,
    FoodAgentError,
    FoodPreference,
    MealTime,
    WeatherCondition,
    WeatherInfo,
    clamp_familiarity,
)
from memory_agent import MemoryAgent
from weather_agent import WeatherAgent

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "추천을 생성하는 데 실패했습니다. 잠시 후 다시 시도해 주세요."


class FlowAgent:
    """
    Screen-flow orchestration for one browser session.

        welcome -> gettingWeather -> (manualWeather) -> preferences
                -> loading -> result | error -> welcome

    Holds no UI code: streamlit_app.py renders whatever `step` says and
    forwards user actions here. The familiarity table in `memory_agent`
    outlives every reset.
    """

    def __init__(
        self,
        recommendation_agent=None,
        image_agent=None,
        weather_agent=None,
        memory_agent: Optional[MemoryAgent] = None,
    ):
        self.recommendation_agent = recommendation_agent
        self.image_agent = image_agent
        self.weather_agent = weather_agent
        self.memory_agent = memory_agent or MemoryAgent()

        self.step = AppStep.WELCOME
        self.weather: Optional[WeatherInfo] = None
        self.meal_time: Optional[MealTime] = None
        self.food_preference: Optional[FoodPreference] = None
        self.recommendations: Optional[List[FinalRecommendation]] = None
        self.error: Optional[str] = None
        self.current_user_rating: Optional[int] = None

    @property
    def familiarity_ratings(self):
        return self.memory_agent.as_dict()

    # ---------- Welcome / weather ----------

    def start(self):
        self.step = AppStep.GETTING_WEATHER

    def geolocation_unavailable(self, reason: str = "unavailable"):
        """Browser has no geolocation, refused it, or the user skipped it."""
        if self.step != AppStep.GETTING_WEATHER:
            return
        logger.warning("[FLOW] Geolocation %s, proceeding to manual weather selection.", reason)
        self.step = AppStep.MANUAL_WEATHER

    @staticmethod
    def _extract_coordinates(location):
        if not isinstance(location, dict) or location.get("error"):
            return None
        coords = location.get("coords") or location
        lat = coords.get("latitude")
        lon = coords.get("longitude")
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            return None
        return float(lat), float(lon)

    def handle_geolocation(self, location):
        """
        Takes the browser geolocation result:
        {"coords": {"latitude": .., "longitude": ..}} or {"error": {...}}.
        Any failure lands on the manual weather screen.
        """
        if self.step != AppStep.GETTING_WEATHER:
            return

        coords = self._extract_coordinates(location)
        if coords is None:
            message = ""
            if isinstance(location, dict) and isinstance(location.get("error"), dict):
                message = location["error"].get("message", "")
            self.geolocation_unavailable(f"error {message}".strip())
            return

        try:
            weather = self.weather_agent.get_weather_from_coordinates(*coords)
        except Exception as e:
            logger.error("[FLOW] Failed to fetch weather from API: %s", e)
            self.step = AppStep.MANUAL_WEATHER
            return

        self.weather = weather
        self.step = AppStep.PREFERENCES

    def select_manual_weather(self, condition: WeatherCondition):
        self.weather = WeatherAgent.manual_weather(condition)
        self.step = AppStep.PREFERENCES

    # ---------- Preferences ----------

    def select_meal_time(self, meal_time: MealTime):
        self.meal_time = MealTime(meal_time)

    def select_food_preference(self, food_preference: FoodPreference):
        self.food_preference = FoodPreference(food_preference)

    def can_submit(self) -> bool:
        return self.meal_time is not None and self.food_preference is not None

    def begin_submission(self) -> bool:
        """Move to the loading screen. False when a selection is missing."""
        if not self.can_submit():
            return False
        self.step = AppStep.LOADING
        self.error = None
        return True

    def fetch_recommendations(self):
        """
        Runs the two model calls for the loading screen and lands on
        result or error.
        """
        if self.step != AppStep.LOADING:
            return

        try:
            text_recommendations = self.recommendation_agent.get_food_recommendation(
                self.weather,
                self.meal_time,
                self.food_preference,
                self.familiarity_ratings,
            )
            if not text_recommendations:
                raise FoodAgentError("Received no recommendations.")

            primary = text_recommendations[0]
            self.current_user_rating = primary.familiarity

            image_url = self.image_agent.generate_food_image(primary.food_name)

            self.recommendations = [
                FinalRecommendation.from_recommendation(rec, image_url if idx == 0 else "")
                for idx, rec in enumerate(text_recommendations)
            ]
            self.step = AppStep.RESULT
        except FoodAgentError as e:
            logger.error("[FLOW] Recommendation flow failed: %s", e)
            self.error = GENERIC_ERROR_MESSAGE
            self.step = AppStep.ERROR

    def submit_preferences(self):
        if self.begin_submission():
            self.fetch_recommendations()

    # ---------- Result ----------

    @property
    def primary_recommendation(self) -> Optional[FinalRecommendation]:
        if not self.recommendations:
            return None
        return self.recommendations[0]

    @property
    def other_recommendations(self) -> List[FinalRecommendation]:
        return list(self.recommendations[1:]) if self.recommendations else []

    def set_current_user_rating(self, score: int):
        self.current_user_rating = clamp_familiarity(score)

    # ---------- Reset ----------

    def _clear_session(self):
        self.step = AppStep.WELCOME
        self.weather = None
        self.meal_time = None
        self.food_preference = None
        self.recommendations = None
        self.current_user_rating = None
        self.error = None

    def reset_and_save_rating(self):
        primary = self.primary_recommendation
        if primary is not None and self.current_user_rating is not None:
            self.memory_agent.save_rating(primary.food_name, self.current_user_rating)
        self._clear_session()

    def reset_from_error(self):
        self._clear_session()
