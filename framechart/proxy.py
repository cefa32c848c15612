"""
ChartFactoryProxy: the engine-independent entry point.

Builders go to the factory of the current default engine; ``show`` goes to
the factory of the engine the charts were built with.
"""
import logging
from typing import Dict, Iterable, Optional, Union

from .chart import Chart
from .factory import ChartFactory, Configurator, as_chart_list
from .logging_utils import apply_settings
from .plot.pie import PiePlot
from .plot.xy import XyPlot
from .settings import Engine, get_settings
from .types import DomainType

logger = logging.getLogger(__name__)


def _new_factory(engine: Engine) -> ChartFactory:
    # engine packages import matplotlib/plotly, so load them only when used
    if engine == Engine.DESKTOP:
        from .matplotlib import MatplotlibChartFactory
        return MatplotlibChartFactory()
    from .plotly import PlotlyChartFactory
    return PlotlyChartFactory()


class ChartFactoryProxy(ChartFactory):
    """
    Chart factory that switches between the desktop and html engines.

    Args:
        engine: Default engine; taken from settings when None

    Examples:
        >>> charts = create()
        >>> chart = charts.html_mode().with_line_plot(prices)
        >>> charts.show([chart])
    """

    def __init__(self, engine: Optional[Union[Engine, str]] = None):
        settings = get_settings()
        apply_settings(settings)
        self.engine = Engine(engine) if engine is not None else settings.engine
        self._factories: Dict[Engine, ChartFactory] = {}
        logger.debug(f"Chart factory proxy created, default engine: {self.engine.value}")

    def factory(self, engine: Optional[Engine] = None) -> ChartFactory:
        """Factory for ``engine`` (the default engine when None), created on first use."""
        engine = engine or self.engine
        factory = self._factories.get(engine)
        if factory is None:
            factory = _new_factory(engine)
            self._factories[engine] = factory
        return factory

    def html_mode(self) -> "ChartFactoryProxy":
        """Make the html engine the default and return self."""
        self.engine = Engine.HTML
        return self

    def desktop_mode(self) -> "ChartFactoryProxy":
        """Make the desktop engine the default and return self."""
        self.engine = Engine.DESKTOP
        return self

    def as_html(self) -> ChartFactory:
        return self.factory(Engine.HTML)

    def as_desktop(self) -> ChartFactory:
        return self.factory(Engine.DESKTOP)

    def is_supported(self, chart: object) -> bool:
        return isinstance(chart, Chart) and chart.engine in {e.value for e in Engine}

    def _create_xy(self, plot: XyPlot) -> Chart:
        return self.factory()._create_xy(plot)

    def _create_pie(self, plot: PiePlot) -> Chart:
        return self.factory()._create_pie(plot)

    def of_xy(self, domain_type: Optional[DomainType] = None, configure: Configurator = None) -> Chart:
        return self.factory().of_xy(domain_type, configure)

    def of_pie(self, is_3d: bool = False, configure: Configurator = None) -> Chart:
        return self.factory().of_pie(is_3d, configure)

    def show(self, charts: Iterable[Chart], columns: int = 1):
        """
        Show charts with the factory of the first chart's engine.

        Raises:
            ValueError: If an item is not a chart
        """
        charts = as_chart_list(charts)
        if not charts:
            logger.warning("⚠️  No charts to show")
            return None
        first = charts[0]
        if not self.is_supported(first):
            raise ValueError(f"Unsupported chart object: {first!r}")
        return self.factory(Engine(first.engine)).show(charts, columns)
