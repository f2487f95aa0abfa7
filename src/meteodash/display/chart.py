"""Hourly temperature line chart: coordinate scaling and PNG rendering."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from PIL import Image, ImageDraw, ImageFont

from meteodash.utils.file import ensure_directory_exists

if TYPE_CHECKING:
    from meteodash.display.view_models import ChartView

logger: Final = logging.getLogger(__name__)

# Plot area margins in pixels
MARGIN_TOP: Final = 20
MARGIN_BOTTOM: Final = 20
MARGIN_LEFT: Final = 40
MARGIN_RIGHT: Final = 10
# Added above and below the data range so a flat series still has a span
VALUE_PADDING: Final = 2.0
GRID_ROWS: Final = 5


@dataclass(frozen=True)
class ChartLayout:
    """Linear mapping from (index, value) to canvas pixels.

    Values map onto ``[MARGIN_TOP, height - MARGIN_BOTTOM]`` with higher
    values nearer the top; indices are spread evenly over
    ``[MARGIN_LEFT, width - MARGIN_RIGHT]``.
    """

    width: int
    height: int
    count: int
    min_value: float
    max_value: float

    @property
    def top(self) -> float:
        return MARGIN_TOP

    @property
    def bottom(self) -> float:
        return self.height - MARGIN_BOTTOM

    @property
    def left(self) -> float:
        return MARGIN_LEFT

    @property
    def right(self) -> float:
        return self.width - MARGIN_RIGHT

    def y_for(self, value: float) -> float:
        """Vertical pixel for a data value."""
        fraction = (value - self.min_value) / (self.max_value - self.min_value)
        return self.bottom - fraction * (self.bottom - self.top)

    def x_for(self, index: int) -> float:
        """Horizontal pixel for the *index*-th point."""
        if self.count == 1:
            return self.left
        return self.left + index * (self.right - self.left) / (self.count - 1)

    def gridlines(self, rows: int = GRID_ROWS) -> tuple[float, ...]:
        """Evenly spaced horizontal grid rows across the plot area."""
        step = (self.bottom - self.top) / (rows - 1)
        return tuple(self.top + i * step for i in range(rows))


def compute_layout(
    values: Sequence[float], width: int, height: int, count: int | None = None
) -> ChartLayout:
    """Build the layout for plotting *values* on a ``width`` x ``height`` canvas.

    Args:
        values: Data series; must not be empty
        width: Canvas width in pixels
        height: Canvas height in pixels
        count: Number of x positions (default: one per value); larger when
            the series has gaps that should keep their slot

    Returns:
        ChartLayout whose domain is the data range padded by 2 units
    """
    if not values:
        raise ValueError("compute_layout() needs at least one value")
    return ChartLayout(
        width=width,
        height=height,
        count=max(count or 0, len(values)),
        min_value=min(values) - VALUE_PADDING,
        max_value=max(values) + VALUE_PADDING,
    )


class ChartRenderer:
    """Draws a :class:`ChartView` into a PNG with Pillow."""

    BACKGROUND: Final = (22, 27, 34)
    GRID: Final = (52, 58, 66)
    LABEL: Final = (170, 176, 184)
    LINE: Final = (106, 163, 255)  # #6aa3ff
    POINT_RADIUS: Final = 3

    def __init__(self, font: ImageFont.ImageFont | ImageFont.FreeTypeFont | None = None) -> None:
        self.font = font or ImageFont.load_default()

    def render(self, chart: ChartView, output_path: Path) -> Path:
        """Render *chart* and save it to *output_path*.

        Args:
            chart: Precomputed chart view (pixel coordinates and labels)
            output_path: Destination PNG file

        Returns:
            The written path
        """
        image = Image.new("RGB", (chart.width, chart.height), self.BACKGROUND)
        draw = ImageDraw.Draw(image)

        for y in chart.gridlines:
            draw.line([(chart.left, y), (chart.right, y)], fill=self.GRID, width=1)

        coords = [(point.x, point.y) for point in chart.points]
        if len(coords) > 1:
            draw.line(coords, fill=self.LINE, width=2)

        r = self.POINT_RADIUS
        for point in chart.points:
            draw.ellipse([point.x - r, point.y - r, point.x + r, point.y + r], fill=self.LINE)
            draw.text((point.x - 12, point.y - 16), point.value_label, fill=self.LINE, font=self.font)
            draw.text((point.x - 8, chart.height - 14), point.label, fill=self.LABEL, font=self.font)

        ensure_directory_exists(output_path.parent)
        image.save(output_path, format="PNG")
        logger.debug("Chart with %d points written to %s", len(chart.points), output_path)
        return output_path
