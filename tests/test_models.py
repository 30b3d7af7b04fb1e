import pytest
from pydantic import ValidationError

from models import (
    DEFAULT_ACCENT_COLOR,
    GenerationResponse,
    InfographicData,
    InfographicType,
)


def _base(kind: str, **extra):
    return {"type": kind, "title": "T", "subtitle": "S", "summary": "Sum", **extra}


def test_payload_matching_type_is_accepted(statistical, comparison) -> None:
    assert statistical.type is InfographicType.STATISTICAL
    assert statistical.payload_field == "stats"
    assert [s.label for s in statistical.stats][:2] == ["Oceans", "Ice caps"]
    assert comparison.comparison.side_b.title == "Snow"


def test_cross_type_payload_is_rejected() -> None:
    with pytest.raises(ValidationError, match="must not carry steps"):
        InfographicData.model_validate(_base(
            "statistical",
            stats=[{"label": "a", "value": 1}],
            steps=[{"title": "x", "description": "y"}],
        ))


def test_missing_payload_is_tolerated() -> None:
    info = InfographicData.model_validate(_base("process"))
    assert info.steps is None
    assert info.stats is None


def test_id_defaults_to_short_hex() -> None:
    a = InfographicData.model_validate(_base("educational"))
    b = InfographicData.model_validate(_base("educational"))
    assert len(a.id) == 8
    assert a.id != b.id


@pytest.mark.parametrize("color", ["#0EA5E9", "#abc", "  #10b981 "])
def test_hex_accent_colors_are_kept(color: str) -> None:
    info = InfographicData.model_validate(_base("educational", accent_color=color))
    assert info.accent_color == color.strip()


@pytest.mark.parametrize("color", ["blue", "#12345", "red;background:url(x)", None, 42])
def test_invalid_accent_colors_fall_back(color) -> None:
    info = InfographicData.model_validate(_base("educational", accent_color=color))
    assert info.accent_color == DEFAULT_ACCENT_COLOR


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        InfographicData.model_validate(_base("timeline"))


def test_generation_response_parses_list(all_kinds) -> None:
    payload = {"infographics": [i.model_dump(mode="json") for i in all_kinds]}
    response = GenerationResponse.model_validate(payload)
    assert [i.type for i in response.infographics] == list(InfographicType)
