# cards.py
from html import escape

from models import Recommendation


# Model text is untrusted: everything interpolated here is escaped.

def food_name_html(rec: Recommendation) -> str:
    return f"<div class='food-name'>{escape(rec.food_name)}!</div>"


def food_reason_html(rec: Recommendation) -> str:
    return f"<div class='food-reason'>\"{escape(rec.reason)}\"</div>"


def other_card_html(rec: Recommendation) -> str:
    return f"""
    <div class="other-card">
        <div><b>{escape(rec.food_name)}</b></div>
        <div class="other-card-reason">"{escape(rec.reason)}"</div>
    </div>
    """
