"""Line chart surface for the hourly temperature graph."""
from typing import List

from attrs import define, field

from dashboard.models.weather import HourlyTemperature

LINE_COLOR = "#ffcc33"
FILL_GRADIENT = ((0.0, "rgba(255, 200, 0, 0.35)"), (1.0, "rgba(0, 0, 0, 0)"))


@define
class Chart:
    """A live chart instance bound to the canvas."""

    labels: List[str]
    values: List[float]
    border_color: str = LINE_COLOR
    fill_gradient: tuple = FILL_GRADIENT
    tension: float = 0.4
    destroyed: bool = field(default=False)


class ChartView:
    """Creates and destroys chart instances on one canvas."""

    def __init__(self):
        self.live: List[Chart] = []

    def create(self, series: HourlyTemperature) -> Chart:
        chart = Chart(labels=list(series.labels), values=list(series.temps_c))
        self.live.append(chart)
        return chart

    def destroy(self, chart: Chart) -> None:
        chart.destroyed = True
        if chart in self.live:
            self.live.remove(chart)
