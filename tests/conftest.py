"""Pytest configuration shared by the whole suite.

Puts the project root on ``sys.path`` so the flat top-level modules
(``config``, ``models``, ``orchestrator`` ...) import the same way they do
under ``streamlit run app.py``, and provides a dummy API key so settings
load without a ``.env`` file.
"""

import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest  # noqa: E402

from config import Settings  # noqa: E402
from models import InfographicData  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", _env_file=None)


@pytest.fixture
def statistical() -> InfographicData:
    return InfographicData.model_validate({
        "id": "stat-1",
        "type": "statistical",
        "title": "Water by the Numbers",
        "subtitle": "Where Earth's water lives",
        "summary": "Almost all water is salty.",
        "accent_color": "#0EA5E9",
        "stats": [
            {"label": "Oceans", "value": 96.5, "unit": "%"},
            {"label": "Ice caps", "value": 1.74, "unit": "%"},
            {"label": "Groundwater", "value": 1.69, "unit": "%"},
            {"label": "Rivers", "value": 2, "unit": "%"},
            {"label": "Atmosphere", "value": 0.001},
        ],
    })


@pytest.fixture
def process() -> InfographicData:
    return InfographicData.model_validate({
        "id": "proc-1",
        "type": "process",
        "title": "The Water Cycle",
        "subtitle": "Four stages",
        "summary": "Water moves continuously.",
        "accent_color": "#10B981",
        "steps": [
            {"title": "Evaporation", "description": "Sun heats surface water."},
            {"title": "Condensation", "description": "Vapour forms clouds."},
            {"title": "Precipitation", "description": "Rain and snow fall."},
            {"title": "Collection", "description": "Water gathers in oceans."},
        ],
    })


@pytest.fixture
def comparison() -> InfographicData:
    return InfographicData.model_validate({
        "id": "cmp-1",
        "type": "comparison",
        "title": "Rain vs Snow",
        "subtitle": "Two kinds of precipitation",
        "summary": "Temperature decides.",
        "accent_color": "#F59E0B",
        "comparison": {
            "side_a": {"title": "Rain", "points": ["Liquid", "Above 0°C"]},
            "side_b": {"title": "Snow", "points": ["Ice crystals", "Below 0°C"]},
        },
    })


@pytest.fixture
def educational() -> InfographicData:
    return InfographicData.model_validate({
        "id": "edu-1",
        "type": "educational",
        "title": "Water Facts",
        "subtitle": "Things to know",
        "summary": "A few essentials.",
        "accent_color": "#8B5CF6",
        "points": [
            {"title": "Transpiration", "text": "Plants release vapour."},
            {"title": "Sublimation", "text": "Ice turns straight to vapour."},
        ],
    })


@pytest.fixture
def all_kinds(statistical, process, comparison, educational):
    return [statistical, process, comparison, educational]
