# streamlit_app.py
import base64
import logging

import streamlit as st
from streamlit_js_eval import get_geolocation

import config
from cards import food_name_html, food_reason_html, other_card_html
from flow_agent import FlowAgent
from image_agent import ImageAgent
from models import (
    FAMILIARITY_LABELS,
    MAX_FAMILIARITY,
    MIN_FAMILIARITY,
    AppStep,
    FoodPreference,
    MealTime,
    WeatherCondition,
)
from recommendation_agent import RecommendationAgent
from weather_agent import WeatherAgent

# ---------------------------
# Setup
# ---------------------------

st.set_page_config(
    page_title="날씨의 맛",
    page_icon="🍲",
    layout="centered",
)

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.markdown("""
<style>
/* ===== Global background ===== */
html, body {
    background: linear-gradient(135deg, #fdf2f8 0%, #f8fafc 50%, #f5f3ff 100%) !important;
}
.stApp,
main,
section.main,
div[data-testid="stAppViewContainer"],
div[data-testid="stHeader"],
footer,
div[data-testid="stDecoration"] {
    background: transparent !important;
}

/* Headings */
.app-title {
    text-align: center;
    font-size: 3.2rem;
    font-weight: 800;
    margin-bottom: 0.2rem;
    background: linear-gradient(90deg, #ec4899 0%, #8b5cf6 100%);
    -webkit-background-clip: text;
    -webkit-text-fill-color: transparent;
}
.app-subtitle, .screen-caption {
    text-align: center;
    color: #4b5563;
    margin-bottom: 1.6rem;
}
.screen-title {
    text-align: center;
    font-size: 1.9rem;
    font-weight: 700;
    color: #1f2937;
}
.weather-highlight { color: #ec4899; font-weight: 700; }

/* Buttons */
.stButton>button {
    border-radius: 14px;
    border: 2px solid #d1d5db;
    min-height: 3.2rem;
    font-weight: 600;
    transition: 0.15s ease-out;
}
.stButton>button:hover {
    border-color: #f472b6;
    transform: scale(1.02);
}
.stButton>button[kind="primary"] {
    background: #ec4899;
    border-color: #ec4899;
    color: #ffffff;
}

/* Result card */
.food-name {
    text-align: center;
    font-size: 3rem;
    font-weight: 800;
    color: #ec4899;
}
.food-reason {
    background: #fdf2f8;
    border-radius: 10px;
    padding: 0.9rem 1rem;
    margin: 0.8rem 0;
    text-align: center;
    color: #1f2937;
    font-weight: 500;
}
.other-card {
    background: #f1f5f9;
    border-radius: 10px;
    padding: 0.7rem 0.9rem;
    margin-bottom: 0.3rem;
}
.other-card-reason { color: #4b5563; font-style: italic; font-size: 0.9rem; }
.familiarity-row {
    display: flex;
    justify-content: space-between;
    font-size: 0.9rem;
    color: #4b5563;
}
.familiarity-label { color: #db2777; font-weight: 600; }
</style>
""", unsafe_allow_html=True)

WEATHER_ICONS = {
    WeatherCondition.SUNNY: "☀️",
    WeatherCondition.RAINY: "🌧️",
    WeatherCondition.CLOUDY: "☁️",
    WeatherCondition.SNOWY: "❄️",
    WeatherCondition.HOT: "🔥",
    WeatherCondition.COLD: "🥶",
}

# ---------------------------
# Initialise Agents
# ---------------------------

if "flow" not in st.session_state:
    try:
        client = config.build_openai_client()
    except config.ConfigError as e:
        st.error(f"설정 오류: {e}")
        st.stop()

    st.session_state.flow = FlowAgent(
        recommendation_agent=RecommendationAgent(client=client),
        image_agent=ImageAgent(client=client),
        weather_agent=WeatherAgent(client=client),
    )

if "geo_attempt" not in st.session_state:
    st.session_state.geo_attempt = 0

flow: FlowAgent = st.session_state.flow

# ---------------------------
# Helpers
# ---------------------------

def data_url_to_bytes(data_url: str) -> bytes:
    _, _, payload = data_url.partition(",")
    return base64.b64decode(payload)


def familiarity_rating(score: int, key: str = None, interactive: bool = False) -> int:
    """
    Slider when interactive, read-only bar otherwise.
    Returns the (possibly changed) score.
    """
    title = "이 음식, 얼마나 익숙하세요?" if interactive else "익숙함 정도"

    if interactive:
        score = st.slider(
            title,
            min_value=MIN_FAMILIARITY,
            max_value=MAX_FAMILIARITY,
            value=score,
            key=key,
        )
        st.markdown(
            f"<div class='familiarity-row'><span></span>"
            f"<span class='familiarity-label'>{FAMILIARITY_LABELS[score - 1]}</span></div>",
            unsafe_allow_html=True,
        )
    else:
        st.markdown(
            f"<div class='familiarity-row'><span>{title}</span>"
            f"<span class='familiarity-label'>{FAMILIARITY_LABELS[score - 1]}</span></div>",
            unsafe_allow_html=True,
        )
        st.progress(score / MAX_FAMILIARITY)
    return score


def waiting_screen(title: str, caption: str):
    st.markdown(f"<div class='screen-title'>{title}</div>", unsafe_allow_html=True)
    st.markdown(f"<p class='screen-caption'>{caption}</p>", unsafe_allow_html=True)

# ---------------------------
# Screens
# ---------------------------

def render_welcome():
    st.markdown("<div class='app-title'>날씨의 맛</div>", unsafe_allow_html=True)
    st.markdown(
        "<p class='app-subtitle'>오늘 날씨에 딱 맞는 음식을 추천해드려요!</p>",
        unsafe_allow_html=True,
    )
    if st.button("음식 추천받기", type="primary", use_container_width=True):
        st.session_state.geo_attempt += 1
        flow.start()
        st.rerun()


def render_getting_weather():
    waiting_screen("현재 위치의 날씨를 확인하고 있어요...", "잠시만 기다려 주세요!")

    # None until the browser answers (or forever, if it never does)
    location = get_geolocation(component_key=f"geolocation_{st.session_state.geo_attempt}")

    if location is None:
        if st.button("날씨 직접 선택하기", use_container_width=True):
            flow.geolocation_unavailable("skipped by user")
            st.rerun()
        return

    with st.spinner("날씨 정보를 불러오는 중..."):
        flow.handle_geolocation(location)
    st.rerun()


def render_manual_weather():
    st.markdown("<div class='screen-title'>날씨를 알려주세요</div>", unsafe_allow_html=True)
    st.markdown(
        "<p class='screen-caption'>위치 정보를 가져올 수 없었어요.<br/>"
        "현재 날씨를 직접 선택해주시면 음식을 추천해드릴게요!</p>",
        unsafe_allow_html=True,
    )

    cols = st.columns(3)
    for i, condition in enumerate(WeatherCondition):
        with cols[i % 3]:
            label = f"{WEATHER_ICONS[condition]} {condition.value}"
            if st.button(label, key=f"weather_{condition.name}", use_container_width=True):
                flow.select_manual_weather(condition)
                st.rerun()


def render_preferences():
    st.markdown("<div class='screen-title'>어떤 음식을 원하세요?</div>", unsafe_allow_html=True)
    if flow.weather:
        caption = (
            f"오늘 날씨는 <span class='weather-highlight'>{flow.weather.label()}</span>!"
        )
    else:
        caption = "오늘의 취향에 맞춰 추천해드릴게요!"
    st.markdown(f"<p class='screen-caption'>{caption}</p>", unsafe_allow_html=True)

    st.subheader("식사 시간")
    cols = st.columns(4)
    for i, meal_time in enumerate(MealTime):
        with cols[i % 4]:
            selected = flow.meal_time == meal_time
            if st.button(
                meal_time.value,
                key=f"meal_{meal_time.name}",
                type="primary" if selected else "secondary",
                use_container_width=True,
            ):
                flow.select_meal_time(meal_time)
                st.rerun()

    st.subheader("음식 취향")
    cols = st.columns(3)
    for i, preference in enumerate(FoodPreference):
        with cols[i % 3]:
            selected = flow.food_preference == preference
            if st.button(
                preference.value,
                key=f"pref_{preference.name}",
                type="primary" if selected else "secondary",
                use_container_width=True,
            ):
                flow.select_food_preference(preference)
                st.rerun()

    st.markdown("")
    if st.button(
        "결과 보기",
        type="primary",
        disabled=not flow.can_submit(),
        use_container_width=True,
    ):
        flow.begin_submission()
        st.rerun()


def render_loading():
    waiting_screen(
        "맛있는 음식을 찾고 있어요...",
        "날씨와 취향에 맞는 최고의 메뉴를 추천해 드릴게요!",
    )
    with st.spinner("추천 메뉴를 고르는 중..."):
        flow.fetch_recommendations()
    st.rerun()


def render_result():
    primary = flow.primary_recommendation
    if primary is None or flow.current_user_rating is None:
        return

    meal_label = flow.meal_time.value if flow.meal_time else ""
    if flow.weather:
        headline = f"{flow.weather.label()} 날씨, {meal_label}으로 추천!"
    else:
        headline = f"{meal_label}으로 추천!"
    st.markdown(f"<p class='screen-caption'>{headline}</p>", unsafe_allow_html=True)
    st.markdown(food_name_html(primary), unsafe_allow_html=True)

    if primary.image_url:
        st.image(data_url_to_bytes(primary.image_url), caption=primary.food_name, use_container_width=True)

    st.markdown(food_reason_html(primary), unsafe_allow_html=True)

    new_score = familiarity_rating(
        flow.current_user_rating,
        key=f"rating_{primary.food_name}",
        interactive=True,
    )
    flow.set_current_user_rating(new_score)

    others = flow.other_recommendations
    if others:
        st.markdown("---")
        st.subheader("다른 추천 메뉴")
        for rec in others:
            st.markdown(other_card_html(rec), unsafe_allow_html=True)
            familiarity_rating(rec.familiarity)

    st.markdown("")
    if st.button("평가 저장하고 다시 추천받기", use_container_width=True):
        flow.reset_and_save_rating()
        st.rerun()


def render_error():
    st.error(f"오류 발생\n\n{flow.error}")
    if st.button("처음으로", use_container_width=True):
        flow.reset_from_error()
        st.rerun()


SCREENS = {
    AppStep.WELCOME: render_welcome,
    AppStep.GETTING_WEATHER: render_getting_weather,
    AppStep.MANUAL_WEATHER: render_manual_weather,
    AppStep.PREFERENCES: render_preferences,
    AppStep.LOADING: render_loading,
    AppStep.RESULT: render_result,
    AppStep.ERROR: render_error,
}

# ---------------------------
# Render current step
# ---------------------------

SCREENS[flow.step]()

with st.sidebar:
    st.header("⭐ 내 익숙함 기록")
    ratings = flow.familiarity_ratings
    if ratings:
        for food_name, score in ratings.items():
            st.caption(f"{food_name}: {FAMILIARITY_LABELS[score - 1]} ({score})")
    else:
        st.caption("아직 저장된 평가가 없어요.")
