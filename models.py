# models.py
from enum import Enum
from typing import Optional


class WeatherCondition(str, Enum):
    SUNNY = "맑음"
    RAINY = "비"
    CLOUDY = "흐림"
    SNOWY = "눈"
    HOT = "더움"
    COLD = "추움"


class MealTime(str, Enum):
    BREAKFAST = "아침"
    LUNCH = "점심"
    DINNER = "저녁"
    SNACK = "간식"


class FoodPreference(str, Enum):
    SPICY = "매운 것"
    MILD = "순한 것"
    SOUP = "국물 있는 것"
    LIGHT = "가벼운 것"
    HEAVY = "든든한 것"


class AppStep(str, Enum):
    WELCOME = "welcome"
    GETTING_WEATHER = "gettingWeather"
    MANUAL_WEATHER = "manualWeather"
    PREFERENCES = "preferences"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


MIN_FAMILIARITY = 1
MAX_FAMILIARITY = 5
DEFAULT_FAMILIARITY = 3

# index = score - 1
FAMILIARITY_LABELS = ["매우 생소함", "생소함", "보통", "익숙함", "매우 익숙함"]


def clamp_familiarity(score) -> int:
    return max(MIN_FAMILIARITY, min(MAX_FAMILIARITY, int(round(score))))


class WeatherInfo:
    def __init__(self, condition: WeatherCondition, temperature: int):
        self.condition = WeatherCondition(condition)
        self.temperature = int(temperature)

    def label(self) -> str:
        return f"{self.condition.value} ({self.temperature}°C)"

    def __eq__(self, other):
        if not isinstance(other, WeatherInfo):
            return NotImplemented
        return self.condition == other.condition and self.temperature == other.temperature

    def __repr__(self):
        return f"WeatherInfo(condition={self.condition.value!r}, temperature={self.temperature})"


class Recommendation:
    def __init__(self, food_name: str, reason: str, familiarity: int):
        self.food_name = food_name
        self.reason = reason
        self.familiarity = familiarity

    @classmethod
    def from_dict(cls, raw: dict) -> "Recommendation":
        """Build from the wire shape {foodName, reason, familiarity}."""
        familiarity = raw.get("familiarity")
        try:
            familiarity = clamp_familiarity(float(familiarity))
        except (TypeError, ValueError):
            familiarity = DEFAULT_FAMILIARITY
        return cls(
            food_name=str(raw.get("foodName") or ""),
            reason=str(raw.get("reason") or ""),
            familiarity=familiarity,
        )

    def to_dict(self) -> dict:
        return {
            "foodName": self.food_name,
            "reason": self.reason,
            "familiarity": self.familiarity,
        }

    def __repr__(self):
        return f"<Recommendation {self.food_name} (familiarity {self.familiarity})>"


class FinalRecommendation(Recommendation):
    def __init__(self, food_name: str, reason: str, familiarity: int, image_url: Optional[str] = ""):
        super().__init__(food_name, reason, familiarity)
        self.image_url = image_url or ""

    @classmethod
    def from_recommendation(cls, rec: Recommendation, image_url: str = "") -> "FinalRecommendation":
        return cls(
            food_name=rec.food_name,
            reason=rec.reason,
            familiarity=rec.familiarity,
            image_url=image_url,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["imageUrl"] = self.image_url
        return data

    def __repr__(self):
        has_image = "with image" if self.image_url else "no image"
        return f"<FinalRecommendation {self.food_name} ({has_image})>"


class FoodAgentError(Exception):
    """Base for failures the UI reports as a generic recommendation error."""
    pass
