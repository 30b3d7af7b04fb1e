"""
agents/infographic_agent.py — Topic-to-infographics generation.
Asks Gemini for four structured infographics, one per presentation kind.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from config import Settings, get_settings
from engine.app_logger import AppLogger
from engine.llm_provider import LLMProvider
from models import GenerationResponse, InfographicData, InfographicType
from prompts.infographic_prompts import (
    INFOGRAPHIC_GENERATION_PROMPT,
    INFOGRAPHIC_SYSTEM_INSTRUCTION,
)

EXPECTED_COUNT = len(InfographicType)


class InfographicAgent:
    """Generates the four infographic variants for a free-text topic."""

    def __init__(
        self,
        llm: Optional[LLMProvider] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._llm = llm or LLMProvider(self._settings)
        self._log = AppLogger("InfographicAgent")

    def generate_infographics(self, topic: str) -> List[InfographicData]:
        """Generate infographics for a topic in a single structured call.

        Args:
            topic: Free-text topic, e.g. "Explain the water cycle".

        Returns:
            The infographics in the order the model returned them.
        """
        topic = topic.strip()
        self._log.action("Generate Infographics", f"topic={topic[:80]}")

        prompt = INFOGRAPHIC_GENERATION_PROMPT.format(topic=topic)

        with self._log.step("infographic generation"):
            response = self._llm.generate_structured(
                prompt=prompt,
                response_model=GenerationResponse,
                system_instruction=INFOGRAPHIC_SYSTEM_INSTRUCTION,
            )

        infographics = list(response.infographics)
        self._check_coverage(infographics)
        return infographics

    def _check_coverage(self, infographics: List[InfographicData]) -> None:
        """Warn when the model strays from one infographic per kind."""
        kinds = Counter(info.type for info in infographics)
        missing = [t.value for t in InfographicType if t not in kinds]

        if len(infographics) != EXPECTED_COUNT:
            self._log.warning(
                f"Expected {EXPECTED_COUNT} infographics, got {len(infographics)}"
            )
        if missing:
            self._log.warning(f"Missing infographic kinds: {', '.join(missing)}")
        else:
            self._log.info(f"Generated {len(infographics)} infographics")
