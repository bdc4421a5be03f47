"""
Selection lifecycle for the sales chart.

The controller holds one immutable snapshot that is replaced as a whole on
every transition: IDLE -> LOADING -> READY | ERROR. A selection change
re-enters LOADING and recomputes from scratch. Results of a superseded run
are discarded by comparing generation numbers.
"""
import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, Optional

from sales_analytics.analysis.chart_builder import ChartSeries
from sales_analytics.analysis.date_range import resolve_date_window
from sales_analytics.analysis.report_factory import ReportFactory
from sales_analytics.data.models.sales import DateWindow, Metric, ReportSelection
from sales_analytics.exceptions import FetchFailure, InvalidSelection

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong while building the chart."


class ReportState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ReportSnapshot:
    state: ReportState = ReportState.IDLE
    generation: int = 0
    selection: Optional[ReportSelection] = None
    window: Optional[DateWindow] = None
    chart: Optional[ChartSeries] = None
    error: Optional[str] = None
    
    @property
    def is_loading(self) -> bool:
        return self.state == ReportState.LOADING
    
    def is_for(self, selection: ReportSelection) -> bool:
        """True if this snapshot was produced for ``selection``."""
        return self.state != ReportState.IDLE and self.selection == selection


class ReportController:
    """
    Drives report runs for a changing user selection.
    """
    
    def __init__(self, report_factory: ReportFactory, today_provider: Callable[[], date] = date.today):
        """
        Initialize the controller.
        
        Args:
            report_factory (ReportFactory): Source of report views
            today_provider (Callable[[], date]): Returns the reference day for preset windows
        """
        self.report_factory = report_factory
        self.today_provider = today_provider
        self._snapshot = ReportSnapshot()
    
    @property
    def snapshot(self) -> ReportSnapshot:
        return self._snapshot
    
    @property
    def state(self) -> ReportState:
        return self._snapshot.state
    
    def resolve(self, selection: ReportSelection) -> DateWindow:
        """
        Validate a selection and resolve its date window.
        
        Raises:
            InvalidSelection: If the selection cannot be run yet
        """
        try:
            Metric(selection.metric)
        except ValueError:
            raise InvalidSelection("Unknown metric", details=str(selection.metric))
        return resolve_date_window(
            selection.time_range,
            selection.custom_start,
            selection.custom_end,
            today=self.today_provider()
        )
    
    def begin(self, selection: ReportSelection) -> int:
        """
        Enter LOADING for a new selection.
        
        The previous chart stays visible while loading.
        
        Args:
            selection (ReportSelection): The selection to run
        
        Returns:
            int: Generation number identifying this run
        
        Raises:
            InvalidSelection: If the selection cannot be run yet; the
                snapshot is left untouched
        """
        window = self.resolve(selection)
        generation = self._snapshot.generation + 1
        self._snapshot = replace(
            self._snapshot,
            state=ReportState.LOADING,
            generation=generation,
            selection=selection,
            window=window,
            error=None
        )
        return generation
    
    def complete(self, generation: int, chart: ChartSeries) -> bool:
        """
        Publish a finished chart unless a newer run has started.
        
        Returns:
            bool: True if the chart was applied
        """
        if generation != self._snapshot.generation:
            logger.debug(f"Discarding result of superseded run {generation}")
            return False
        self._snapshot = replace(self._snapshot, state=ReportState.READY, chart=chart, error=None)
        return True
    
    def fail(self, generation: int, message: str) -> bool:
        """
        Publish an error and clear the chart unless a newer run has started.
        
        Returns:
            bool: True if the error was applied
        """
        if generation != self._snapshot.generation:
            logger.debug(f"Discarding failure of superseded run {generation}")
            return False
        self._snapshot = replace(self._snapshot, state=ReportState.ERROR, chart=None, error=message)
        return True
    
    def refresh(self, selection: ReportSelection) -> ReportSnapshot:
        """
        Run the selected report end to end.
        
        Args:
            selection (ReportSelection): The user's selection
        
        Returns:
            ReportSnapshot: The snapshot after the run
        """
        try:
            generation = self.begin(selection)
        except InvalidSelection as e:
            logger.debug(f"Selection not ready: {str(e)}")
            return self._snapshot
        
        report = self.report_factory.get_report(selection.report)
        if report is None:
            self.fail(generation, f"Unknown report: {selection.report}")
            return self._snapshot
        
        try:
            chart = report.run(self._snapshot.window, Metric(selection.metric))
        except FetchFailure as e:
            logger.error(f"Report {selection.report} failed: {str(e)}")
            self.fail(generation, e.message)
        except Exception as e:
            logger.error(f"Unexpected error building report {selection.report}: {str(e)}", exc_info=True)
            self.fail(generation, UNEXPECTED_ERROR_MESSAGE)
        else:
            self.complete(generation, chart)
        
        return self._snapshot
    
    def on_selection_changed(self, selection: ReportSelection) -> ReportSnapshot:
        """
        Refresh only when the selection differs from the last one applied.
        
        Args:
            selection (ReportSelection): The current selection
        
        Returns:
            ReportSnapshot: The current snapshot
        """
        if selection == self._snapshot.selection and self._snapshot.state != ReportState.IDLE:
            return self._snapshot
        return self.refresh(selection)
