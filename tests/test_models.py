"""
Unit tests for models.py
"""

from models import (
    AppStep,
    FinalRecommendation,
    FoodPreference,
    MealTime,
    Recommendation,
    WeatherCondition,
    WeatherInfo,
)


def test_fixed_label_sets():
    assert [w.value for w in WeatherCondition] == ["맑음", "비", "흐림", "눈", "더움", "추움"]
    assert [m.value for m in MealTime] == ["아침", "점심", "저녁", "간식"]
    assert len(FoodPreference) == 5
    assert AppStep("gettingWeather") is AppStep.GETTING_WEATHER


def test_weather_info_from_label():
    weather = WeatherInfo("흐림", 20)

    assert weather.condition is WeatherCondition.CLOUDY
    assert weather.label() == "흐림 (20°C)"


def test_recommendation_wire_shape():
    rec = Recommendation.from_dict({"foodName": "삼계탕", "reason": "보양식", "familiarity": 4})

    assert rec.food_name == "삼계탕"
    assert rec.to_dict() == {"foodName": "삼계탕", "reason": "보양식", "familiarity": 4}


def test_recommendation_numeric_string_familiarity():
    rec = Recommendation.from_dict({"foodName": "삼계탕", "reason": "보양식", "familiarity": "2"})

    assert rec.familiarity == 2


def test_final_recommendation_keeps_fields():
    rec = Recommendation("냉면", "시원해요", 5)

    final = FinalRecommendation.from_recommendation(rec, "data:image/jpeg;base64,AAAA")

    assert final.food_name == "냉면"
    assert final.familiarity == 5
    assert final.to_dict()["imageUrl"] == "data:image/jpeg;base64,AAAA"
    assert FinalRecommendation.from_recommendation(rec).image_url == ""
