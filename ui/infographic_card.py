"""
ui/infographic_card.py — Pure HTML renderer for a single infographic.
Branches on the infographic type to one of four static layout templates.
"""

from __future__ import annotations

import io
from html import escape
from typing import Callable, Dict, List, Optional, Tuple, Union

import streamlit as st

from generators.chart_renderer import ChartRenderer
from models import InfographicData, InfographicType, StatItem
from utils.data_url import to_data_url

CHECK_ICON = "&#10003;"
ARROW_ICON = "&#8594;"
INFO_ICON = "&#9432;"
TREND_ICON = "&#8599;"


def _tint(hex_color: str, alpha: str = "15") -> str:
    """Append a two-digit hex alpha to a colour ('#abc' → '#aabbcc15')."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    return f"#{h}{alpha}"


def format_stat_value(value: float, unit: Optional[str] = None) -> str:
    """Render a stat as shown on its tile: integral values drop the decimal point."""
    number = str(int(value)) if float(value).is_integer() else str(value)
    return f"{number}{unit or ''}"


# ── Chart Cache ─────────────────────────────────────────────

@st.cache_data(show_spinner=False, max_entries=64)
def _bar_chart_png(bars: Tuple[Tuple[str, float], ...], accent_color: str, dpi: int) -> bytes:
    stats = [StatItem(label=label, value=value) for label, value in bars]
    return ChartRenderer(dpi=dpi).bar_chart(stats, accent_color).getvalue()


class CachedCharts:
    """Bar charts memoised on their content, so reruns reuse the PNG."""

    def __init__(self, dpi: int) -> None:
        self._dpi = dpi

    def bar_chart(self, stats: List[StatItem], accent_color: str) -> io.BytesIO:
        bars = tuple((s.label, s.value) for s in stats)
        return io.BytesIO(_bar_chart_png(bars, accent_color, self._dpi))


Charts = Union[ChartRenderer, CachedCharts]
LayoutFn = Callable[[InfographicData, Optional[Charts]], str]


# ── Layout Templates ────────────────────────────────────────

def _render_statistical(data: InfographicData, charts: Optional[Charts]) -> str:
    if not data.stats:
        return ""
    accent = data.accent_color
    renderer = charts or ChartRenderer()
    chart_png = renderer.bar_chart(data.stats, accent).getvalue()

    tiles = []
    for stat in data.stats[:4]:
        tiles.append(
            f'<div class="ig-stat">'
            f'<div class="ig-stat-icon" style="background:{accent};">{TREND_ICON}</div>'
            f'<div><p class="ig-stat-label">{escape(stat.label)}</p>'
            f'<p class="ig-stat-value">{escape(format_stat_value(stat.value, stat.unit))}</p></div>'
            f"</div>"
        )
    return (
        f'<div class="ig-layout ig-statistical">'
        f'<img class="ig-chart" alt="{escape(data.title)} chart" '
        f'src="{to_data_url(chart_png, "image/png")}"/>'
        f'<div class="ig-stat-grid">{"".join(tiles)}</div>'
        f"</div>"
    )


def _render_process(data: InfographicData, charts: Optional[Charts]) -> str:
    if not data.steps:
        return ""
    items = []
    for idx, step in enumerate(data.steps, start=1):
        items.append(
            f'<div class="ig-step">'
            f'<div class="ig-step-num" style="background:{data.accent_color};">{idx}</div>'
            f'<div class="ig-step-body"><h4>{escape(step.title)}</h4>'
            f"<p>{escape(step.description)}</p></div>"
            f"</div>"
        )
    return (
        f'<div class="ig-layout ig-process">'
        f'<div class="ig-timeline"></div>{"".join(items)}'
        f"</div>"
    )


def _render_comparison(data: InfographicData, charts: Optional[Charts]) -> str:
    if not data.comparison:
        return ""
    accent = data.accent_color
    side_a, side_b = data.comparison.side_a, data.comparison.side_b

    points_a = "".join(
        f'<li><span style="color:{accent};">{CHECK_ICON}</span><span>{escape(p)}</span></li>'
        for p in side_a.points
    )
    points_b = "".join(
        f'<li><span class="ig-muted">{ARROW_ICON}</span><span>{escape(p)}</span></li>'
        for p in side_b.points
    )
    return (
        f'<div class="ig-layout ig-comparison">'
        f'<div class="ig-side ig-side-a" style="border-top-color:{accent};">'
        f'<h4 style="text-decoration-color:{accent};">{escape(side_a.title)}</h4>'
        f"<ul>{points_a}</ul></div>"
        f'<div class="ig-vs"><span>VS</span></div>'
        f'<div class="ig-side ig-side-b"><h4>{escape(side_b.title)}</h4>'
        f"<ul>{points_b}</ul></div>"
        f"</div>"
    )


def _render_educational(data: InfographicData, charts: Optional[Charts]) -> str:
    if not data.points:
        return ""
    cards = []
    for point in data.points:
        cards.append(
            f'<div class="ig-point">'
            f'<div class="ig-point-icon" style="background:{_tint(data.accent_color)};'
            f'color:{data.accent_color};">{INFO_ICON}</div>'
            f"<h4>{escape(point.title)}</h4>"
            f"<p>{escape(point.text)}</p>"
            f"</div>"
        )
    return f'<div class="ig-layout ig-educational">{"".join(cards)}</div>'


LAYOUTS: Dict[InfographicType, LayoutFn] = {
    InfographicType.STATISTICAL: _render_statistical,
    InfographicType.PROCESS: _render_process,
    InfographicType.COMPARISON: _render_comparison,
    InfographicType.EDUCATIONAL: _render_educational,
}


# ── Public API ──────────────────────────────────────────────

def card_html(data: InfographicData, charts: Optional[Charts] = None) -> str:
    """Build the full HTML for one infographic card.

    Only the layout registered for ``data.type`` is rendered; the other
    payload fields are never read.
    """
    accent = data.accent_color
    body = LAYOUTS[data.type](data, charts)
    return (
        f'<div class="ig-card ig-card-{data.type.value}" data-id="{escape(data.id)}">'
        f'<div class="ig-glow" style="background:{accent};"></div>'
        f'<span class="ig-pill" style="background:{accent};">{data.type.value}</span>'
        f"<h2>{escape(data.title)}</h2>"
        f'<p class="ig-subtitle">{escape(data.subtitle)}</p>'
        f'<p class="ig-summary">{escape(data.summary)}</p>'
        f"{body}"
        f"</div>"
    )


def render_infographic_card(data: InfographicData, charts: Optional[Charts] = None) -> None:
    """Write one infographic card to the Streamlit page."""
    st.markdown(card_html(data, charts), unsafe_allow_html=True)
