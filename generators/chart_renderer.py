"""
generators/chart_renderer.py — Matplotlib bar charts for statistical infographics.
Renders PNG images in the infographic's accent colour for inline embedding.
"""

from __future__ import annotations

import io
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt

from config import Settings, get_settings
from engine.app_logger import AppLogger
from models import StatItem

TICK_COLOR = "#64748b"
GRID_COLOR = "#e2e8f0"

# ── Global Style ────────────────────────────────────────────
plt.rcParams.update({
    "font.family": "sans-serif",
    "font.sans-serif": ["Inter", "Segoe UI", "Arial", "Helvetica", "DejaVu Sans"],
    "font.size": 10,
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.spines.left": False,
    "figure.facecolor": "white",
    "axes.facecolor": "white",
})


class ChartRenderer:
    """Generates bar chart images from statistical infographic items."""

    def __init__(self, settings: Optional[Settings] = None, dpi: Optional[int] = None) -> None:
        self._settings = settings or get_settings()
        self._log = AppLogger("ChartRenderer")
        self._dpi = dpi or self._settings.chart_dpi

    def bar_chart(
        self,
        stats: List[StatItem],
        accent_color: str,
        width: float = 8.0,
        height: float = 3.2,
    ) -> io.BytesIO:
        """Render stats as a vertical bar chart and return a PNG buffer."""
        self._log.debug(f"Bar chart: {len(stats)} bars, color={accent_color}")

        fig, ax = plt.subplots(figsize=(width, height))
        labels = [s.label for s in stats]
        values = [s.value for s in stats]

        ax.bar(range(len(stats)), values, color=accent_color, alpha=0.8, width=0.6)
        ax.set_xticks(range(len(stats)))
        ax.set_xticklabels(labels, fontsize=8)
        ax.tick_params(axis="both", colors=TICK_COLOR, labelsize=8, length=0)
        ax.spines["bottom"].set_color(GRID_COLOR)

        # Horizontal grid only
        ax.set_axisbelow(True)
        ax.yaxis.grid(True, linestyle="--", color=GRID_COLOR, linewidth=0.8)
        ax.xaxis.grid(False)

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=self._dpi, bbox_inches="tight",
                    facecolor="white", edgecolor="none")
        plt.close(fig)
        buf.seek(0)
        return buf
