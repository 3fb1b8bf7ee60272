import logging
import os
import toml

secrets_path = ".streamlit/secrets.toml"
if os.path.exists(secrets_path):
    secrets = toml.load(secrets_path)
    os.environ["OPENAI_API_KEY"] = secrets["OPENAI_API_KEY"]
else:
    raise FileNotFoundError("No secrets.toml found.")

import config
from flow_agent import FlowAgent
from image_agent import ImageAgent
from models import AppStep, FoodPreference, MealTime, WeatherCondition
from recommendation_agent import RecommendationAgent
from weather_agent import WeatherAgent

logging.basicConfig(level=config.get_log_level())

client = config.build_openai_client()
flow = FlowAgent(
    recommendation_agent=RecommendationAgent(client=client),
    image_agent=ImageAgent(client=client),
    weather_agent=WeatherAgent(client=client),
)

# No browser here, so go straight to manual weather
flow.start()
flow.geolocation_unavailable("no browser")
flow.select_manual_weather(WeatherCondition.RAINY)
flow.select_meal_time(MealTime.DINNER)
flow.select_food_preference(FoodPreference.SOUP)
flow.submit_preferences()

if flow.step == AppStep.ERROR:
    print("Error:", flow.error)
else:
    print("Weather:", flow.weather.label())
    for rec in flow.recommendations:
        print(f"- {rec.food_name} ({rec.familiarity}/5): {rec.reason}")
    print("Image attached:", bool(flow.primary_recommendation.image_url))

    flow.set_current_user_rating(5)
    flow.reset_and_save_rating()
    print("Familiarity table:", flow.familiarity_ratings)
