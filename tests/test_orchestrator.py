from unittest.mock import MagicMock

import pytest

from models import AppMode
from orchestrator import NO_IMAGE_MESSAGE, STATE_KEYS, AppOrchestrator
from utils.data_url import decode_data_url, to_data_url

SOURCE = b"\xff\xd8\xff\xe0source-jpeg"
EDITED = b"\x89PNG\r\n\x1a\nedited-png"


@pytest.fixture
def agent():
    return MagicMock(name="InfographicAgent")


@pytest.fixture
def studio():
    mock = MagicMock(name="ImageStudio")
    mock.edit_image.return_value = EDITED
    return mock


@pytest.fixture
def orchestrator(settings, agent, studio) -> AppOrchestrator:
    orch = AppOrchestrator(
        {},
        settings=settings,
        agent_factory=lambda: agent,
        studio_factory=lambda: studio,
    )
    orch.init_state()
    return orch


def _run(orch: AppOrchestrator, prompt: str) -> bool:
    queued = orch.submit(prompt)
    if queued:
        orch.process_pending()
    return queued


def test_init_state_fills_defaults_without_overwriting(settings) -> None:
    state = {"mode": AppMode.STUDIO, "uploader_key": 3}
    AppOrchestrator(state, settings=settings).init_state()

    assert set(STATE_KEYS) <= set(state)
    assert state["mode"] is AppMode.STUDIO
    assert state["uploader_key"] == 3
    assert state["results"] == []
    assert state["is_loading"] is False


def test_set_mode_changes_only_mode(orchestrator) -> None:
    orchestrator.state["results"] = ["kept"]
    orchestrator.set_mode(AppMode.STUDIO)
    assert orchestrator.mode is AppMode.STUDIO
    assert orchestrator.state["results"] == ["kept"]


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
def test_empty_prompt_is_a_noop(orchestrator, agent, studio, prompt) -> None:
    orchestrator.state["error_message"] = "previous"
    before = dict(orchestrator.state)

    assert _run(orchestrator, prompt) is False

    assert orchestrator.state == before
    agent.generate_infographics.assert_not_called()
    studio.edit_image.assert_not_called()


def test_infographics_submission_stores_results(orchestrator, agent, all_kinds) -> None:
    agent.generate_infographics.return_value = all_kinds
    orchestrator.state["error_message"] = "old error"

    assert orchestrator.submit("Explain the water cycle") is True
    assert orchestrator.state["is_loading"] is True
    assert orchestrator.state["error_message"] is None
    assert orchestrator.submit_disabled() is True

    orchestrator.process_pending()

    agent.generate_infographics.assert_called_once_with("Explain the water cycle")
    assert orchestrator.results == all_kinds
    assert orchestrator.state["is_loading"] is False
    assert orchestrator.state["pending_prompt"] is None


def test_second_submission_while_loading_is_ignored(orchestrator, agent) -> None:
    agent.generate_infographics.return_value = []
    assert orchestrator.submit("first") is True
    assert orchestrator.submit("second") is False

    orchestrator.process_pending()
    agent.generate_infographics.assert_called_once_with("first")


def test_mode_switch_while_loading_keeps_infographic_request(
    orchestrator, agent, studio, all_kinds
) -> None:
    agent.generate_infographics.return_value = all_kinds
    assert orchestrator.submit("Explain the water cycle") is True

    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.process_pending()

    agent.generate_infographics.assert_called_once_with("Explain the water cycle")
    studio.edit_image.assert_not_called()
    assert orchestrator.results == all_kinds
    assert orchestrator.state["error_message"] is None
    assert orchestrator.state["pending_mode"] is None


def test_mode_switch_while_loading_keeps_studio_request(orchestrator, agent, studio) -> None:
    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.handle_upload(SOURCE, "image/jpeg")
    assert orchestrator.submit("make it night") is True

    orchestrator.set_mode(AppMode.INFOGRAPHICS)
    orchestrator.process_pending()

    studio.edit_image.assert_called_once_with(SOURCE, "image/jpeg", "make it night")
    agent.generate_infographics.assert_not_called()
    assert decode_data_url(orchestrator.state["edited_image"]) == ("image/png", EDITED)


def test_process_pending_without_submission_does_nothing(orchestrator, agent) -> None:
    orchestrator.process_pending()
    agent.generate_infographics.assert_not_called()


def test_studio_without_upload_sets_fixed_error(orchestrator, studio) -> None:
    orchestrator.set_mode(AppMode.STUDIO)

    assert orchestrator.submit_disabled() is True
    assert _run(orchestrator, "make it night") is False

    assert orchestrator.state["error_message"] == NO_IMAGE_MESSAGE
    assert orchestrator.state["is_loading"] is False
    studio.edit_image.assert_not_called()


def test_upload_populates_source_and_clears_edited(orchestrator) -> None:
    orchestrator.state["edited_image"] = to_data_url(EDITED, "image/png")

    orchestrator.handle_upload(SOURCE, "image/jpeg", "photo.jpg")

    mime, data = decode_data_url(orchestrator.state["source_image"])
    assert (mime, data) == ("image/jpeg", SOURCE)
    assert orchestrator.state["source_mime"] == "image/jpeg"
    assert orchestrator.state["edited_image"] is None


def test_upload_without_type_sniffs_mime(orchestrator) -> None:
    orchestrator.handle_upload(SOURCE, None)
    assert orchestrator.state["source_mime"] == "image/jpeg"


def test_empty_upload_is_ignored(orchestrator) -> None:
    orchestrator.handle_upload(b"", "image/png")
    assert orchestrator.state["source_image"] is None


def test_oversized_upload_is_rejected(orchestrator, settings) -> None:
    orchestrator.handle_upload(SOURCE, "image/jpeg")
    source = orchestrator.state["source_image"]

    too_big = b"\x00" * (settings.max_upload_bytes + 1)
    orchestrator.handle_upload(too_big, "image/png")

    assert orchestrator.state["source_image"] == source
    assert "too large" in orchestrator.state["error_message"]


def test_valid_upload_clears_rejection_error(orchestrator, settings) -> None:
    too_big = b"\x00" * (settings.max_upload_bytes + 1)
    orchestrator.handle_upload(too_big, "image/png")
    assert orchestrator.state["error_message"] is not None

    orchestrator.handle_upload(SOURCE, "image/jpeg")

    assert orchestrator.state["error_message"] is None
    assert orchestrator.state["source_image"] is not None


def test_edit_replaces_only_result(orchestrator, studio) -> None:
    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.handle_upload(SOURCE, "image/jpeg", "photo.jpg")
    source = orchestrator.state["source_image"]

    assert _run(orchestrator, "Add snow to the mountains") is True

    studio.edit_image.assert_called_once_with(SOURCE, "image/jpeg", "Add snow to the mountains")
    assert orchestrator.state["source_image"] == source
    assert orchestrator.state["source_mime"] == "image/jpeg"
    assert decode_data_url(orchestrator.state["edited_image"]) == ("image/png", EDITED)
    assert orchestrator.state["error_message"] is None


def test_edit_defaults_mime_to_png(orchestrator, studio) -> None:
    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.state["source_image"] = to_data_url(SOURCE, "image/jpeg")
    orchestrator.state["source_mime"] = None

    _run(orchestrator, "retro filter")

    assert studio.edit_image.call_args.args[1] == "image/png"


def test_failure_surfaces_flat_message(orchestrator, agent, all_kinds) -> None:
    orchestrator.state["results"] = all_kinds
    agent.generate_infographics.side_effect = RuntimeError("quota exceeded")

    _run(orchestrator, "topic")

    assert orchestrator.state["error_message"] == "Failed to process request: quota exceeded"
    assert orchestrator.state["is_loading"] is False
    assert orchestrator.results == all_kinds


def test_failure_without_message_reads_unknown_error(orchestrator, studio) -> None:
    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.handle_upload(SOURCE, "image/jpeg")
    studio.edit_image.side_effect = RuntimeError()

    _run(orchestrator, "make it night")

    assert orchestrator.state["error_message"] == "Failed to process request: Unknown error"
    assert orchestrator.state["edited_image"] is None


def test_clear_studio_resets_images_and_uploader(orchestrator) -> None:
    orchestrator.handle_upload(SOURCE, "image/jpeg")
    orchestrator.state["edited_image"] = to_data_url(EDITED, "image/png")
    key = orchestrator.state["uploader_key"]

    orchestrator.clear_studio()

    assert orchestrator.state["source_image"] is None
    assert orchestrator.state["source_mime"] is None
    assert orchestrator.state["edited_image"] is None
    assert orchestrator.state["uploader_key"] == key + 1


def test_studio_submit_enabled_after_upload(orchestrator) -> None:
    orchestrator.set_mode(AppMode.STUDIO)
    orchestrator.handle_upload(SOURCE, "image/jpeg")
    assert orchestrator.submit_disabled() is False
