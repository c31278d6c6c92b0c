"""Weekly sightings line chart renderer.

Draws one week of daily counts as an inline SVG line chart. Synthesized days
are plotted at zero like any other day, but their tooltip reads "no data" and
the point is styled differently so a gap is not mistaken for a quiet day.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from robin_sightings.renderers import render_template

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from robin_sightings.schemas import DailyRecord

CHART_WIDTH = 720
CHART_HEIGHT = 320
MARGIN_LEFT = 48
MARGIN_RIGHT = 24
MARGIN_TOP = 16
MARGIN_BOTTOM = 80  # room for angled date labels
MAX_Y_TICKS = 5


def tooltip_text(record: DailyRecord, synthesized: Collection[str]) -> str:
    """Second tooltip line for *record*: its count, or "no data" if synthesized."""
    if record.date in synthesized:
        return "Sightings: no data"
    return f"Sightings: {record.count}"


def _y_ticks(max_count: int) -> list[int]:
    """Integer y-axis ticks from 0 to at least *max_count*."""
    step = max(1, math.ceil(max_count / MAX_Y_TICKS))
    top = max(step, math.ceil(max_count / step) * step)
    return list(range(0, top + 1, step))


def build_week_chart_html(
    week: Sequence[DailyRecord],
    synthesized: Collection[str],
) -> str:
    """Build an SVG line chart for one week of records."""
    if not week:
        return "<p>No sightings data available.</p>"

    plot_w = CHART_WIDTH - MARGIN_LEFT - MARGIN_RIGHT
    plot_h = CHART_HEIGHT - MARGIN_TOP - MARGIN_BOTTOM
    baseline = MARGIN_TOP + plot_h

    ticks = _y_ticks(max(r.count for r in week))
    y_max = ticks[-1]

    def _y(value: int) -> float:
        return baseline - (value / y_max) * plot_h

    # Center a lone point; otherwise spread edge to edge
    if len(week) == 1:
        xs = [MARGIN_LEFT + plot_w / 2]
    else:
        spacing = plot_w / (len(week) - 1)
        xs = [MARGIN_LEFT + i * spacing for i in range(len(week))]

    points: list[dict[str, Any]] = []
    for x, record in zip(xs, week, strict=True):
        missing = record.date in synthesized
        points.append(
            {
                "x": f"{x:.1f}",
                "y": f"{_y(record.count):.1f}",
                "date": record.date,
                "count": record.count,
                "missing": missing,
                "tooltip": f"Date: {record.date}\n{tooltip_text(record, synthesized)}",
            }
        )

    y_ticks = [{"value": t, "y": f"{_y(t):.1f}"} for t in ticks]

    return render_template(
        "week_chart.html.j2",
        width=CHART_WIDTH,
        height=CHART_HEIGHT,
        left=MARGIN_LEFT,
        right=CHART_WIDTH - MARGIN_RIGHT,
        top=MARGIN_TOP,
        baseline=f"{baseline:.1f}",
        polyline=" ".join(f"{p['x']},{p['y']}" for p in points),
        points=points,
        y_ticks=y_ticks,
        label_y=f"{baseline + 12:.1f}",
    )
