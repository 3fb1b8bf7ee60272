# memory_agent.py
import logging
from typing import Dict, List, Optional

import pandas as pd

from models import clamp_familiarity

logger = logging.getLogger(__name__)


class MemoryAgent:
    """
    Agent responsible for the user's familiarity table.
    Lives only as long as the browser session; nothing is written to disk.
    """

    COLUMNS = ["FoodName", "Familiarity"]

    # ---------------------------------------------------------
    # INITIALISATION
    # ---------------------------------------------------------
    def __init__(self):
        self.df = pd.DataFrame({col: [] for col in self.COLUMNS})

    # ---------------------------------------------------------
    # SAVE / LOAD RATINGS
    # ---------------------------------------------------------
    def save_rating(self, food_name: str, score: int) -> int:
        """
        Store the score for food_name, overwriting an older one.
        Returns the stored (clamped) score.
        """
        if not food_name:
            raise ValueError("food_name must not be empty")

        score = clamp_familiarity(score)

        if food_name in self.df["FoodName"].values:
            self.df.loc[self.df["FoodName"] == food_name, "Familiarity"] = score
        else:
            new_row = pd.DataFrame({
                "FoodName": [food_name],
                "Familiarity": [score],
            })
            self.df = new_row if self.df.empty else pd.concat([self.df, new_row], ignore_index=True)

        logger.info("[MEMORY] Saved familiarity %d for %s", score, food_name)
        return score

    def get_rating(self, food_name: str) -> Optional[int]:
        rows = self.df[self.df["FoodName"] == food_name]
        if rows.empty:
            return None
        return int(rows["Familiarity"].iloc[0])

    def as_dict(self) -> Dict[str, int]:
        """The table in the shape the recommendation prompt embeds."""
        return {
            str(row.FoodName): int(row.Familiarity)
            for row in self.df.itertuples(index=False)
        }

    def list_rated_foods(self) -> List[str]:
        return list(self.df["FoodName"].dropna().unique())

    def clear(self):
        self.df = pd.DataFrame({col: [] for col in self.COLUMNS})

    def __len__(self):
        return len(self.df)
