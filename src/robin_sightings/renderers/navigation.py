"""Previous/next week navigation for the static site."""

from __future__ import annotations

from robin_sightings.renderers import render_template


def week_page_name(index: int) -> str:
    """File name of the page for week *index* (0-based): ``week-1.html``, ..."""
    return f"week-{index + 1}.html"


def build_week_nav_html(current_week: int, total_weeks: int) -> str:
    """
    Build the previous/next links for week *current_week* (0-based).

    Previous is disabled on the first week and next on the last, so a single
    week shows both disabled.
    """
    has_previous = current_week > 0
    has_next = current_week < total_weeks - 1
    return render_template(
        "week_nav.html.j2",
        label=f"Week {current_week + 1}",
        total_weeks=total_weeks,
        previous_href=week_page_name(current_week - 1) if has_previous else None,
        next_href=week_page_name(current_week + 1) if has_next else None,
    )
