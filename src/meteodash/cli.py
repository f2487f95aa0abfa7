"""Weather dashboard CLI application.

This module provides the command-line interface for meteodash: city
searches, the "here" lookup, autocomplete, unit and theme toggles, the
favorites and recents lists, and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer

from meteodash.display.console import ConsoleSink
from meteodash.display.protocols import RenderSink
from meteodash.display.render import HtmlPreviewSink
from meteodash.location import ConfiguredLocation
from meteodash.presenter import ForecastPresenter
from meteodash.settings import UserSettings
from meteodash.storage import (
    FAVORITES_KEY,
    RECENTS_KEY,
    JsonFileStore,
    PlaceList,
    PlaceStore,
    Preferences,
)
from meteodash.weather.utils.units import TemperatureUnit

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Open-Meteo weather dashboard CLI", add_completion=False)
favorites_app = typer.Typer(help="Manage favorite places")
recents_app = typer.Typer(help="Inspect recently searched places")
config_app = typer.Typer(help="Config helpers")
app.add_typer(favorites_app, name="favorites")
app.add_typer(recents_app, name="recents")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "meteodash.cli"

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
PREVIEW_OPTION = typer.Option(
    False, "--preview", "-p", help="Write an HTML preview instead of printing"
)
SAVE_OPTION = typer.Option(False, "--save", "-s", help="Add the place to favorites")
CITY_ARGUMENT = typer.Argument(..., help="City name, e.g. 'Paris'")
NAME_ARGUMENT = typer.Argument(..., help="Place name exactly as listed")
QUERY_ARGUMENT = typer.Argument(..., help="Start of a city name")
UNIT_ARGUMENT = typer.Argument(..., help="Temperature unit: c or f")
CONFIG_FILE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False)


@dataclass
class CliState:
    settings: UserSettings

    @property
    def store(self) -> JsonFileStore:
        return JsonFileStore(self.settings.storage_path)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state not initialized")
    return state


def _presenter(state: CliState, preview: bool = False) -> tuple[ForecastPresenter, RenderSink]:
    store = state.store
    settings = state.settings
    sink: RenderSink
    if preview:
        sink = HtmlPreviewSink(settings.preview_dir, theme=Preferences(store).theme)
        places = PlaceStore(store)
        sink.show_places(
            FAVORITES_KEY, PlaceList.favorites(places, settings.favorites_capacity).items()
        )
        sink.show_places(RECENTS_KEY, PlaceList.recents(places, settings.recents_capacity).items())
    else:
        sink = ConsoleSink()
    presenter = ForecastPresenter(
        settings,
        store,
        sink,
        location_provider=ConfiguredLocation(settings.home_lat, settings.home_lon),
    )
    return presenter, sink


def _finish(loaded: bool, sink: RenderSink) -> None:
    if isinstance(sink, HtmlPreviewSink) and sink.html_path.exists():
        typer.echo(f"Preview written to {sink.html_path}")
    if not loaded:
        raise typer.Exit(code=1)


def _echo_places(places_list: PlaceList) -> None:
    places = places_list.items()
    if not places:
        typer.echo("(empty)")
        return
    for index, place in enumerate(places, start=1):
        coords = (
            f"  ({place.lat:.4f}, {place.lon:.4f})"
            if place.lat is not None and place.lon is not None
            else ""
        )
        typer.echo(f"{index}. {place.name}{coords}")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Open-Meteo weather dashboard."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    try:
        settings = UserSettings.load_or_default(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    logger.debug("Storage at %s", settings.storage_path)
    ctx.obj = CliState(settings)


# ───────────────────────── weather commands ──────────────────────────────────
@app.command()
def search(
    ctx: typer.Context,
    city: str = CITY_ARGUMENT,
    save: bool = SAVE_OPTION,
    preview: bool = PREVIEW_OPTION,
) -> None:
    """Show the weather for a city."""
    presenter, sink = _presenter(_state(ctx), preview)
    view = presenter.search_city(city)
    if view is not None and save:
        place = presenter.save_favorite()
        if place is not None:
            typer.echo(f"⭐ Saved {place.name} to favorites")
    _finish(view is not None, sink)


@app.command()
def here(ctx: typer.Context, preview: bool = PREVIEW_OPTION) -> None:
    """Show the weather for the configured home location."""
    presenter, sink = _presenter(_state(ctx), preview)
    _finish(presenter.load_current_location() is not None, sink)


@app.command()
def suggest(ctx: typer.Context, query: str = QUERY_ARGUMENT) -> None:
    """List city names matching the start of QUERY."""
    presenter, _ = _presenter(_state(ctx))
    for result in presenter.suggest(query):
        typer.echo(result.label)


@app.command()
def unit(ctx: typer.Context, code: str = UNIT_ARGUMENT) -> None:
    """Set the temperature unit used for display."""
    code = code.strip().lower()
    if code not in {u.value for u in TemperatureUnit}:
        typer.secho(f"Unknown unit: {code!r} (use c or f)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    preferences = Preferences(_state(ctx).store)
    preferences.unit = TemperatureUnit(code)
    typer.echo(f"Temperature unit set to {preferences.unit.symbol}")


@app.command()
def theme(ctx: typer.Context) -> None:
    """Toggle the preview between light and dark."""
    new_theme = Preferences(_state(ctx).store).toggle_theme()
    typer.echo(f"Theme set to {new_theme.value}")


# ───────────────────────── favorites sub-commands ────────────────────────────
@favorites_app.command("list")
def favorites_list(ctx: typer.Context) -> None:
    """List saved favorites."""
    state = _state(ctx)
    _echo_places(PlaceList.favorites(PlaceStore(state.store), state.settings.favorites_capacity))


@favorites_app.command("add")
def favorites_add(ctx: typer.Context, city: str = CITY_ARGUMENT) -> None:
    """Look up a city and save it to favorites."""
    presenter, sink = _presenter(_state(ctx))
    view = presenter.search_city(city)
    if view is not None:
        place = presenter.save_favorite()
        if place is not None:
            typer.echo(f"⭐ Saved {place.name} to favorites")
    _finish(view is not None, sink)


@favorites_app.command("remove")
def favorites_remove(ctx: typer.Context, name: str = NAME_ARGUMENT) -> None:
    """Remove a favorite by name."""
    state = _state(ctx)
    favorites = PlaceList.favorites(PlaceStore(state.store), state.settings.favorites_capacity)
    if favorites.find(name) is None:
        typer.secho(f"Not a favorite: {name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    favorites.remove(name)
    typer.echo(f"Removed {name} from favorites")


@favorites_app.command("clear")
def favorites_clear(ctx: typer.Context) -> None:
    """Remove all favorites."""
    state = _state(ctx)
    PlaceList.favorites(PlaceStore(state.store), state.settings.favorites_capacity).clear()
    typer.echo("Favorites cleared")


@favorites_app.command("open")
def favorites_open(
    ctx: typer.Context, name: str = NAME_ARGUMENT, preview: bool = PREVIEW_OPTION
) -> None:
    """Show the weather for a saved favorite."""
    presenter, sink = _presenter(_state(ctx), preview)
    place = presenter.favorites.find(name)
    if place is None:
        typer.secho(f"Not a favorite: {name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    _finish(presenter.load_place(place) is not None, sink)


# ───────────────────────── recents sub-commands ──────────────────────────────
@recents_app.command("list")
def recents_list(ctx: typer.Context) -> None:
    """List recently searched places, newest first."""
    state = _state(ctx)
    _echo_places(PlaceList.recents(PlaceStore(state.store), state.settings.recents_capacity))


@recents_app.command("clear")
def recents_clear(ctx: typer.Context) -> None:
    """Forget recent searches."""
    state = _state(ctx)
    PlaceList.recents(PlaceStore(state.store), state.settings.recents_capacity).clear()
    typer.echo("Recent searches cleared")


@recents_app.command("open")
def recents_open(
    ctx: typer.Context, name: str = NAME_ARGUMENT, preview: bool = PREVIEW_OPTION
) -> None:
    """Show the weather for a recent search."""
    presenter, sink = _presenter(_state(ctx), preview)
    place = presenter.recents.find(name)
    if place is None:
        typer.secho(f"Not a recent search: {name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    _finish(presenter.load_place(place) is not None, sink)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path = CONFIG_FILE_ARGUMENT) -> None:
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
