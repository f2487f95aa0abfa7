# src/meteodash/display/protocols.py
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from meteodash.display.view_models import DashboardView
from meteodash.models.place import Place


@runtime_checkable
class RenderSink(Protocol):
    """Protocol for anything that shows the dashboard.

    The presenter only ever writes preformatted view models into a sink;
    a sink never calls back into the presenter.
    """

    def show_loading(self, label: str) -> None:
        """Indicate that a load for *label* has started."""
        ...

    def show_dashboard(self, view: DashboardView) -> None:
        """Replace the displayed forecast with *view*."""
        ...

    def show_message(self, message: str) -> None:
        """Replace the displayed forecast with a user-facing message."""
        ...

    def show_places(self, key: str, places: Sequence[Place]) -> None:
        """Refresh the chips of the stored list *key*."""
        ...


class MockSink:
    """Mock implementation of RenderSink for testing."""

    def __init__(self) -> None:
        self.loading: list[str] = []
        self.dashboards: list[DashboardView] = []
        self.messages: list[str] = []
        self.place_updates: list[tuple[str, list[Place]]] = []

    def show_loading(self, label: str) -> None:
        self.loading.append(label)

    def show_dashboard(self, view: DashboardView) -> None:
        self.dashboards.append(view)

    def show_message(self, message: str) -> None:
        self.messages.append(message)

    def show_places(self, key: str, places: Sequence[Place]) -> None:
        self.place_updates.append((key, list(places)))

    @property
    def last_dashboard(self) -> DashboardView | None:
        return self.dashboards[-1] if self.dashboards else None

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.loading = []
        self.dashboards = []
        self.messages = []
        self.place_updates = []
