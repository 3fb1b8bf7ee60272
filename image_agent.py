# image_agent.py

import base64
import logging
from typing import Optional

import requests

from models import FoodAgentError
import config

logger = logging.getLogger(__name__)


class ImageGenerationError(FoodAgentError):
    pass


class ImageAgent:
    """
    Generates one photorealistic picture of a dish and hands it back as a
    data URL the UI can drop straight into an <img> tag.
    """

    def __init__(self, client=None, model: Optional[str] = None, size: str = "1024x1024"):
        self.client = client or config.build_openai_client()
        self.model = model or config.get_image_model()
        self.size = size  # square, like the result card

    @staticmethod
    def build_prompt(food_name: str) -> str:
        return (
            f"A delicious, high-quality, photorealistic picture of a Korean dish called "
            f"'{food_name}', beautifully plated in a restaurant setting."
        )

    def _download_as_base64(self, url: str) -> str:
        logger.info("[IMAGE] Downloading hosted image")
        resp = requests.get(url, timeout=10)
        resp.raise_for_status()
        return base64.b64encode(resp.content).decode("utf-8")

    def generate_food_image(self, food_name: str) -> str:
        prompt = self.build_prompt(food_name)

        params = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": self.size,
        }
        # dall-e models reject output_format and return png/url instead
        if self.model.startswith("gpt-image"):
            params["output_format"] = "jpeg"

        try:
            response = self.client.images.generate(**params)

            images = getattr(response, "data", None) or []
            if not images:
                raise ValueError("No image was generated.")

            image = images[0]
            b64 = getattr(image, "b64_json", None)
            if not b64 and getattr(image, "url", None):
                b64 = self._download_as_base64(image.url)
            if not b64:
                raise ValueError("No image was generated.")
        except Exception as e:
            logger.error("[IMAGE] Error generating food image: %s", e)
            raise ImageGenerationError("Failed to generate food image from OpenAI API.") from e

        logger.info("[IMAGE] Generated image for %s", food_name)
        return f"data:image/jpeg;base64,{b64}"
