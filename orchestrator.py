"""
orchestrator.py — UI state controller for both app modes.
Owns every transition of the session state: mode switch, submission,
the single external call per submission, uploads and studio reset.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, MutableMapping, Optional

from agents.infographic_agent import InfographicAgent
from config import Settings, get_settings
from engine.app_logger import AppLogger
from generators.image_studio import ImageStudio
from models import AppMode, InfographicData
from utils.data_url import (
    DEFAULT_IMAGE_MIME,
    decode_data_url,
    sniff_image_mime,
    to_data_url,
)

NO_IMAGE_MESSAGE = "Please upload an image first."
FAILURE_PREFIX = "Failed to process request"


def _default_state() -> Dict[str, Any]:
    return {
        "mode": AppMode.INFOGRAPHICS,
        "is_loading": False,
        "pending_prompt": None,
        "pending_mode": None,
        "error_message": None,
        "results": [],
        "source_image": None,
        "source_mime": None,
        "edited_image": None,
        "uploader_key": 0,
    }


STATE_KEYS = tuple(_default_state())


class AppOrchestrator:
    """Drives the two UI flows over a session-state mapping.

    The mapping is ``st.session_state`` in the app and a plain dict in tests.
    Services are created on first use so that a page without an API key can
    still render.
    """

    def __init__(
        self,
        state: MutableMapping[str, Any],
        settings: Optional[Settings] = None,
        agent_factory: Optional[Callable[[], InfographicAgent]] = None,
        studio_factory: Optional[Callable[[], ImageStudio]] = None,
    ) -> None:
        self.state = state
        self._settings = settings
        self._agent_factory = agent_factory
        self._studio_factory = studio_factory
        self._agent: Optional[InfographicAgent] = None
        self._studio: Optional[ImageStudio] = None
        self._log = AppLogger("Orchestrator")

    # ── Lazy services ────────────────────────────────────────

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def agent(self) -> InfographicAgent:
        if self._agent is None:
            if self._agent_factory is not None:
                self._agent = self._agent_factory()
            else:
                self._agent = InfographicAgent(settings=self.settings)
        return self._agent

    @property
    def studio(self) -> ImageStudio:
        if self._studio is None:
            if self._studio_factory is not None:
                self._studio = self._studio_factory()
            else:
                self._studio = ImageStudio(settings=self.settings)
        return self._studio

    # ── State accessors ──────────────────────────────────────

    def init_state(self) -> None:
        """Fill in missing state keys; existing values are left alone."""
        for key, default in _default_state().items():
            if key not in self.state:
                self.state[key] = default

    @property
    def mode(self) -> AppMode:
        return AppMode(self.state["mode"])

    @property
    def results(self) -> List[InfographicData]:
        return self.state["results"]

    def submit_disabled(self) -> bool:
        """Whether the prompt form should refuse input right now."""
        if self.state["is_loading"]:
            return True
        return self.mode is AppMode.STUDIO and not self.state["source_image"]

    # ── Transitions ──────────────────────────────────────────

    def set_mode(self, mode: AppMode) -> None:
        if self.mode is not mode:
            self._log.action("Switch Mode", mode.value)
        self.state["mode"] = mode

    def submit(self, prompt: str) -> bool:
        """Accept a prompt for processing.

        Returns True when a call has been queued; ``process_pending`` then
        performs it. Empty prompts and submissions during an in-flight call
        are ignored.
        """
        if not prompt or not prompt.strip():
            return False
        if self.state["is_loading"]:
            self._log.debug("Submission ignored: a request is already in flight")
            return False

        self.state["error_message"] = None

        if self.mode is AppMode.STUDIO and not self.state["source_image"]:
            self.state["error_message"] = NO_IMAGE_MESSAGE
            self._log.decision("Rejected studio submission", reason="no source image")
            return False

        self.state["pending_prompt"] = prompt
        self.state["pending_mode"] = self.mode
        self.state["is_loading"] = True
        self._log.action("Submit", f"mode={self.mode.value}")
        return True

    def process_pending(self) -> None:
        """Run the single external call for the queued prompt.

        The call goes to the service of the mode the prompt was submitted
        in, even if the mode has been switched since.
        """
        prompt = self.state["pending_prompt"]
        if not self.state["is_loading"] or prompt is None:
            return
        mode = AppMode(self.state.get("pending_mode") or self.mode)

        try:
            if mode is AppMode.INFOGRAPHICS:
                self.state["results"] = self.agent.generate_infographics(prompt)
            else:
                self._run_edit(prompt)
        except Exception as e:
            self._log.exception(f"Request failed in {mode.value} mode")
            self.state["error_message"] = f"{FAILURE_PREFIX}: {str(e) or 'Unknown error'}"
        finally:
            self.state["is_loading"] = False
            self.state["pending_prompt"] = None
            self.state["pending_mode"] = None

    def _run_edit(self, instruction: str) -> None:
        source = self.state["source_image"]
        if not source:
            raise ValueError(NO_IMAGE_MESSAGE)
        _, image_bytes = decode_data_url(source)
        mime_type = self.state["source_mime"] or DEFAULT_IMAGE_MIME

        edited = self.studio.edit_image(image_bytes, mime_type, instruction)
        self.state["edited_image"] = to_data_url(edited, sniff_image_mime(edited))

    def handle_upload(self, data: bytes, mime_type: Optional[str], filename: str = "") -> None:
        """Load an uploaded file as the studio's source image."""
        if not data:
            return
        if len(data) > self.settings.max_upload_bytes:
            self.state["error_message"] = (
                f"Image is too large. The limit is {self.settings.max_upload_mb} MB."
            )
            self._log.decision("Rejected upload", reason=f"{len(data)} bytes")
            return

        mime_type = mime_type or sniff_image_mime(data)
        self.state["source_image"] = to_data_url(data, mime_type)
        self.state["source_mime"] = mime_type
        self.state["edited_image"] = None
        self.state["error_message"] = None
        self._log.action("Upload", f"{filename or 'image'} ({len(data) / 1024:.0f} KB, {mime_type})")

    def clear_studio(self) -> None:
        """Drop the source and edited images and reset the upload widget."""
        self.state["source_image"] = None
        self.state["source_mime"] = None
        self.state["edited_image"] = None
        self.state["uploader_key"] += 1
        self._log.action("Reset Studio")
