"""
generators/image_studio.py — Instruction-driven photo editing via the Gemini image API.
Uses the google-genai SDK's generate_content() with image modality:
the uploaded photo and a free-text instruction go in, an edited image comes out.
"""

from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import Settings, get_settings
from engine.app_logger import AppLogger
from prompts.studio_prompts import IMAGE_EDIT_PROMPT

NO_IMAGE_RETURNED = "The model did not return an edited image."


class ImageStudio:
    """Applies free-text edit instructions to images via Gemini.

    Uses the same gemini_api_key as the text model — no separate key needed.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        self._log = AppLogger("ImageStudio")
        self._settings = settings or get_settings()
        self._client = client or genai.Client(api_key=self._settings.gemini_api_key)
        self._model = self._settings.gemini_image_model
        self._log.info(f"Image studio enabled (model={self._model})")

    # ── Low-level API call ───────────────────────────────────

    def _call_gemini_image_edit(
        self, image_bytes: bytes, mime_type: str, prompt: str
    ) -> Any:
        """Call the Gemini image API with an input image (image-to-image)."""
        image_part = types.Part.from_bytes(data=image_bytes, mime_type=mime_type)
        for attempt in Retrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(self._settings.llm_max_attempts),
            wait=wait_exponential(
                multiplier=self._settings.llm_retry_wait_seconds, min=2, max=15
            ),
            reraise=True,
        ):
            with attempt:
                return self._client.models.generate_content(
                    model=self._model,
                    contents=[image_part, prompt],
                    config=types.GenerateContentConfig(
                        response_modalities=["IMAGE", "TEXT"],
                    ),
                )

    @staticmethod
    def _first_image_part(response: Any) -> Optional[bytes]:
        """Return the bytes of the first inline image part, if any."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates or candidates[0].content is None:
            return None
        for part in candidates[0].content.parts or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data and (inline.mime_type or "").startswith("image/"):
                return inline.data
        return None

    # ── Image-to-image edit ──────────────────────────────────

    def edit_image(self, image_bytes: bytes, mime_type: str, instruction: str) -> bytes:
        """Edit an image according to a free-text instruction.

        Args:
            image_bytes: Raw bytes of the source image.
            mime_type: MIME type of the source image, e.g. 'image/jpeg'.
            instruction: What to change, e.g. 'Add snow to the mountains'.

        Returns:
            The encoded bytes of the edited image.

        Raises:
            RuntimeError: The model answered without an image part.
        """
        self._log.action(
            "Edit Image",
            f"input={len(image_bytes) / 1024:.0f} KB mime={mime_type}",
        )
        prompt = IMAGE_EDIT_PROMPT.format(instruction=instruction.strip())

        with self._log.step("image edit"):
            response = self._call_gemini_image_edit(image_bytes, mime_type, prompt)
            edited = self._first_image_part(response)
            if edited is None:
                raise RuntimeError(NO_IMAGE_RETURNED)

        self._log.info(f"Image edited: {len(edited) / 1024:.1f} KB")
        return edited
