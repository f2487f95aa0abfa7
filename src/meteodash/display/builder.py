"""Turns Open-Meteo responses into dashboard view models."""

from __future__ import annotations

from datetime import datetime

from meteodash.display.chart import compute_layout
from meteodash.display.view_models import (
    AirQualityView,
    ChartPoint,
    ChartView,
    CurrentView,
    DailyView,
    DashboardView,
    HourlyPreviewItem,
)
from meteodash.settings import UserSettings
from meteodash.utils.formatting import format_rounded
from meteodash.utils.time import TimeUtils
from meteodash.weather.air_quality import AirQuality
from meteodash.weather.models import AirQualityResponse, DailyBlock, ForecastResponse
from meteodash.weather.series import TimestampedSeries, future_window
from meteodash.weather.utils import TemperatureUnit, UnitConverter, WeatherCodes


class DashboardBuilder:
    """Builds view models for the dashboard.

    The builder:
    - Describes current conditions and picks an icon from the WMO code
    - Windows the hourly series to the next few hours for the preview
      and the chart
    - Formats temperatures in the unit it is given
    - Selects the current air-quality sample and classifies it
    """

    def __init__(self, settings: UserSettings) -> None:
        self.settings = settings

    def build(
        self,
        place_name: str,
        forecast: ForecastResponse,
        air: AirQualityResponse | None,
        unit: TemperatureUnit,
        now: datetime,
    ) -> DashboardView:
        """Build the complete dashboard view.

        Args:
            place_name: Title for the current conditions card
            forecast: Validated forecast response
            air: Air-quality response, or None when it could not be fetched
            unit: Temperature display unit
            now: Aware reference time for windowing

        Returns:
            DashboardView ready for a render sink
        """
        hourly = forecast.hourly_series()
        return DashboardView(
            current=self.build_current(place_name, forecast, hourly, unit, now),
            unit=unit,
            daily=self.build_daily(forecast.daily, unit),
            chart=self.build_chart(hourly, unit, now),
            air_quality=self.build_air_quality(air, now) if air is not None else None,
        )

    def build_current(
        self,
        place_name: str,
        forecast: ForecastResponse,
        hourly: TimestampedSeries,
        unit: TemperatureUnit,
        now: datetime,
    ) -> CurrentView:
        current = forecast.current
        window = future_window(hourly, now, self.settings.hourly_preview_count)
        preview = tuple(
            HourlyPreviewItem(
                label=t.strftime(self.settings.time_format_hourly),
                temperature=UnitConverter.format_temperature(v, unit),
            )
            for t, v in window
        )
        return CurrentView(
            place_name=place_name,
            description=WeatherCodes.describe(current.weather_code),
            icon=WeatherCodes.icon_for(current.weather_code),
            temperature=UnitConverter.format_temperature(current.temperature_2m, unit),
            feels_like=UnitConverter.format_temperature(current.apparent_temperature, unit),
            humidity=format_rounded(current.relative_humidity_2m, "%"),
            wind=format_rounded(current.wind_speed_10m, " km/h"),
            preview=preview,
        )

    def build_daily(self, daily: DailyBlock, unit: TemperatureUnit) -> tuple[DailyView, ...]:
        days: list[DailyView] = []
        fmt_time = self.settings.time_format_general
        for idx, day in enumerate(daily.time[: self.settings.daily_count]):
            code = daily.value_at(daily.weather_code, idx)
            days.append(
                DailyView(
                    weekday=day.strftime(self.settings.time_format_daily),
                    icon=WeatherCodes.icon_for(code),
                    description=WeatherCodes.describe(code),
                    high=UnitConverter.format_temperature(
                        daily.value_at(daily.temperature_2m_max, idx), unit
                    ),
                    low=UnitConverter.format_temperature(
                        daily.value_at(daily.temperature_2m_min, idx), unit
                    ),
                    sunrise=TimeUtils.format_datetime(daily.value_at(daily.sunrise, idx), fmt_time),
                    sunset=TimeUtils.format_datetime(daily.value_at(daily.sunset, idx), fmt_time),
                    precipitation=format_rounded(
                        daily.value_at(daily.precipitation_probability_max, idx), "%"
                    ),
                )
            )
        return tuple(days)

    def build_chart(
        self, hourly: TimestampedSeries, unit: TemperatureUnit, now: datetime
    ) -> ChartView | None:
        """Lay out the next hours of temperatures, or None when there are none.

        Hours without a sample are skipped but keep their x position, so the
        line bridges the gap instead of squeezing later points together.
        """
        window = future_window(hourly, now, self.settings.chart_points)
        samples = [(i, t, v) for i, (t, v) in enumerate(window) if v is not None]
        if not samples:
            return None

        # Plot in the display unit so the curve matches its labels
        values = [UnitConverter.convert(v, unit) for _, _, v in samples]
        layout = compute_layout(
            values, self.settings.chart_width, self.settings.chart_height, count=len(window)
        )
        points = tuple(
            ChartPoint(
                x=layout.x_for(i),
                y=layout.y_for(value),
                label=t.strftime(self.settings.time_format_hourly),
                value_label=UnitConverter.format_temperature(celsius, unit),
            )
            for (i, t, celsius), value in zip(samples, values)
        )
        return ChartView(
            width=layout.width,
            height=layout.height,
            left=layout.left,
            right=layout.right,
            gridlines=layout.gridlines(),
            points=points,
        )

    def build_air_quality(self, air: AirQualityResponse, now: datetime) -> AirQualityView | None:
        """Summarise the current air-quality sample, or None when there is none."""
        reading = AirQuality.from_response(air, now)
        if reading is None:
            return None
        return AirQualityView(
            summary=f"US AQI: {format_rounded(reading.us_aqi)} ({reading.label})",
            label=reading.label,
            color=reading.color,
            pm2_5=f"PM2.5: {format_rounded(reading.pm2_5, ' µg/m³')}",
            pm10=f"PM10: {format_rounded(reading.pm10, ' µg/m³')}",
        )

