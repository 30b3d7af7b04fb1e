"""
engine/llm_provider.py — Gemini API wrapper for structured output.
Uses google-genai SDK, tenacity for optional retries, and AppLogger for audit.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type

from google import genai
from google.genai import types
from pydantic import BaseModel
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import Settings, get_settings
from engine.app_logger import AppLogger


class LLMProvider:
    """Unified interface for structured Gemini text calls."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._log = AppLogger("LLMProvider")
        self._client = client or genai.Client(api_key=self._settings.gemini_api_key)
        self._log.info("LLMProvider initialized")

    # ── Public API ──────────────────────────────────────────

    def generate_structured(
        self,
        prompt: str,
        response_model: Type[BaseModel],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        system_instruction: Optional[str] = None,
    ) -> BaseModel:
        """Generate a response and parse it into a Pydantic model.

        Uses Gemini's JSON mode to get structured output, then validates
        via the provided Pydantic model.

        Args:
            prompt: The user prompt.
            response_model: Pydantic model class to parse the response into.
            model: Override model name (defaults to the text model).
            temperature: Sampling temperature override.
            system_instruction: System-level instruction.

        Returns:
            A validated instance of response_model.

        Raises:
            ValueError: The response was not valid JSON for response_model.
        """
        model_name = model or self._settings.gemini_text_model
        temp = temperature if temperature is not None else self._settings.llm_temperature

        config = self._build_config(
            temperature=temp,
            max_output_tokens=self._settings.llm_max_output_tokens,
            system_instruction=system_instruction,
            response_schema=response_model,
        )

        self._log.action(
            "LLM Structured Call",
            f"model={model_name} schema={response_model.__name__}",
        )

        response = self._call_api(model_name, prompt, config)
        raw_text = response.text or "{}"
        self._log.debug(f"Response length: {len(raw_text)} chars")

        try:
            parsed = json.loads(raw_text)
            result = response_model.model_validate(parsed)
        except Exception as e:
            self._log.error(f"Failed to parse structured output: {e}")
            raise ValueError(
                f"The model returned invalid data for {response_model.__name__}: {e}"
            ) from e

        self._log.debug(f"Parsed {response_model.__name__} successfully")
        return result

    @staticmethod
    def _sanitize_schema(schema: Dict[str, Any], defs: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Recursively sanitize a JSON schema for the Gemini API.

        Removes: additionalProperties, title, default, $defs
        Inlines: $ref references
        Converts: anyOf[Type, null] → Type with nullable marker
        """
        if defs is None:
            defs = schema.pop("$defs", {})

        if "$ref" in schema:
            ref_name = schema["$ref"].rsplit("/", 1)[-1]
            resolved = defs.get(ref_name, {})
            merged = {k: v for k, v in schema.items() if k != "$ref"}
            merged.update(resolved)
            return LLMProvider._sanitize_schema(merged, defs)

        if "anyOf" in schema:
            non_null = [s for s in schema["anyOf"] if s != {"type": "null"}]
            if len(non_null) == 1:
                inner = dict(non_null[0])
                if "description" in schema:
                    inner.setdefault("description", schema["description"])
                result = LLMProvider._sanitize_schema(inner, defs)
                result["nullable"] = True
                return result

        out: Dict[str, Any] = {}
        for key, value in schema.items():
            if key in ("additionalProperties", "title", "default", "$defs"):
                continue
            if key == "properties" and isinstance(value, dict):
                out[key] = {
                    k: LLMProvider._sanitize_schema(dict(v), defs)
                    for k, v in value.items()
                }
            elif key == "items" and isinstance(value, dict):
                out[key] = LLMProvider._sanitize_schema(dict(value), defs)
            else:
                out[key] = value
        return out

    def _build_config(
        self,
        temperature: float,
        max_output_tokens: int,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Type[BaseModel]] = None,
    ) -> types.GenerateContentConfig:
        """Build the Gemini GenerateContentConfig."""
        kwargs: Dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }
        if system_instruction:
            kwargs["system_instruction"] = system_instruction
        if response_schema:
            kwargs["response_mime_type"] = "application/json"
            # Gemini rejects several JSON-schema keywords pydantic emits
            raw_schema = response_schema.model_json_schema()
            kwargs["response_schema"] = self._sanitize_schema(raw_schema)

        return types.GenerateContentConfig(**kwargs)

    def _call_api(
        self,
        model_name: str,
        prompt: str,
        config: types.GenerateContentConfig,
    ) -> Any:
        """Execute the Gemini API call, attempting up to llm_max_attempts times."""
        for attempt in Retrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(self._settings.llm_max_attempts),
            wait=wait_exponential(
                multiplier=self._settings.llm_retry_wait_seconds, min=2, max=30
            ),
            reraise=True,
        ):
            with attempt:
                return self._client.models.generate_content(
                    model=model_name,
                    contents=prompt,
                    config=config,
                )
