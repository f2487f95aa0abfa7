"""Plain-text render sink for the command line."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from meteodash.display.view_models import DashboardView
from meteodash.models.place import Place


class ConsoleSink:
    """Writes dashboards and messages to the terminal with Typer."""

    def __init__(self, show_place_updates: bool = False) -> None:
        self.show_place_updates = show_place_updates

    def show_loading(self, label: str) -> None:
        typer.secho(f"Loading weather for {label}...", dim=True, err=True)

    def show_dashboard(self, view: DashboardView) -> None:
        current = view.current
        typer.secho(f"{current.icon} {current.place_name}", bold=True)
        typer.echo(current.summary)
        typer.echo(current.meta)
        if current.preview:
            items = " • ".join(f"{item.label}: {item.temperature}" for item in current.preview)
            typer.echo(f"Next hours: {items}")

        if view.daily:
            typer.echo("")
            for day in view.daily:
                typer.echo(
                    f"{day.icon} {day.weekday:<4} {day.high} / {day.low}  "
                    f"sunrise {day.sunrise} • sunset {day.sunset}  precip {day.precipitation}"
                )

        if view.air_quality is not None:
            aq = view.air_quality
            typer.echo("")
            typer.echo(f"{aq.summary}  {aq.pm2_5} • {aq.pm10}")

    def show_message(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.YELLOW, err=True)

    def show_places(self, key: str, places: Sequence[Place]) -> None:
        if self.show_place_updates:
            names = ", ".join(place.name for place in places) or "(empty)"
            typer.secho(f"{key}: {names}", dim=True, err=True)
