"""HTML preview rendering of the dashboard."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from meteodash.display.chart import ChartRenderer
from meteodash.display.view_models import DashboardView
from meteodash.models.place import Place
from meteodash.storage.places import FAVORITES_KEY, RECENTS_KEY
from meteodash.storage.preferences import Theme
from meteodash.utils.file import atomic_write_text

logger: Final = logging.getLogger(__name__)

TEMPLATES_DIR: Final = Path(__file__).resolve().parent.parent / "templates"
PREVIEW_HTML: Final = "dashboard.html"
CHART_PNG: Final = "hourly-chart.png"


class TemplateRenderer:
    """Handles the Jinja2 template environment and rendering.

    The dashboard template receives preformatted view models, so it needs
    no custom filters beyond autoescaping.
    """

    dashboard_template: Template

    def __init__(self, templates_dir: Path | None = None) -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates (default: packaged templates)
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "j2"]),
        )
        self.dashboard_template = self.env.get_template("dashboard.html.j2")

    def render_dashboard(self, **context: Any) -> str:
        """Render the dashboard template with the provided context.

        Args:
            context: Template context variables

        Returns:
            Rendered HTML
        """
        return cast(str, self.dashboard_template.render(**context))


class HtmlPreviewSink:
    """Render sink writing a static HTML page (plus chart PNG) to a directory.

    Each call rewrites the page from the latest dashboard or message and
    the last known favorites/recents.
    """

    def __init__(
        self,
        output_dir: Path,
        theme: Theme = Theme.LIGHT,
        template_renderer: TemplateRenderer | None = None,
        chart_renderer: ChartRenderer | None = None,
    ) -> None:
        self.output_dir = output_dir
        self.theme = theme
        self.template_renderer = template_renderer or TemplateRenderer()
        self.chart_renderer = chart_renderer or ChartRenderer()
        self.places: dict[str, list[Place]] = {FAVORITES_KEY: [], RECENTS_KEY: []}
        self._view: DashboardView | None = None
        self._message: str | None = None

    @property
    def html_path(self) -> Path:
        return self.output_dir / PREVIEW_HTML

    @property
    def chart_path(self) -> Path:
        return self.output_dir / CHART_PNG

    def show_loading(self, label: str) -> None:
        logger.info("Loading weather for %s", label)

    def show_dashboard(self, view: DashboardView) -> None:
        self._view, self._message = view, None
        if view.chart is not None:
            self.chart_renderer.render(view.chart, self.chart_path)
        self._write()

    def show_message(self, message: str) -> None:
        self._view, self._message = None, message
        self._write()

    def show_places(self, key: str, places: Sequence[Place]) -> None:
        self.places[key] = list(places)
        if self._view is not None or self._message is not None:
            self._write()

    def _write(self) -> None:
        html = self.template_renderer.render_dashboard(
            view=self._view,
            message=self._message,
            theme=self.theme.value,
            chart_src=CHART_PNG if self._view and self._view.chart else None,
            favorites=self.places.get(FAVORITES_KEY, []),
            recents=self.places.get(RECENTS_KEY, []),
        )
        atomic_write_text(self.html_path, html)
        logger.debug("Preview written to %s", self.html_path)
