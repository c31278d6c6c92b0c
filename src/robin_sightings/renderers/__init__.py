"""HTML fragments for the weekly sightings site.

Renderers take already-filled week pages and return markup. They never read
the cache or write files; flows/build.py does both and stitches the fragments
into ``base.html.j2``.

  - chart: build_week_chart_html, tooltip_text
  - navigation: build_week_nav_html, week_page_name
"""

from __future__ import annotations

from typing import Any

import jinja2

_env = jinja2.Environment(
    loader=jinja2.PackageLoader("robin_sightings", "templates"),
    autoescape=jinja2.select_autoescape(["html", "html.j2"]),
    undefined=jinja2.StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(name: str, **context: Any) -> str:
    """Render ``templates/<name>`` with *context*; unknown variables raise."""
    return _env.get_template(name).render(**context)
