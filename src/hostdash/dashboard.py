"""
Dashboard loop: builds every widget, paints them, and starts over.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from .config.loader import ConfigLoader, widget_specs
from .render.base import RenderSink
from .render.terminal import TerminalSink
from .services import create_service
from .services.base import HostService
from .utils.errors import HostDashError, error_boundary
from .widgets.base import RenderJob, WidgetSpec
from .widgets.dispatcher import WidgetDispatcher

logger = logging.getLogger(__name__)


@error_boundary(default_return=False)
def paint_job(job: RenderJob) -> bool:
    """Invoke one render job; failures are logged and reported as False."""
    job()
    return True


class Dashboard:
    """
    Terminal dashboard of one host.

    Widgets are rebuilt on every refresh, so each frame shows metrics
    fetched for that frame. A widget that fails to build or paint is
    logged and skipped; the others are still shown.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        service: Optional[HostService] = None,
        sink: Optional[RenderSink] = None,
    ) -> None:
        """
        Initialize the dashboard.

        Args:
            config: Configuration returned by ConfigLoader.load()
            service: Host metrics service (default: from the "host" section)
            sink: Rendering sink (default: TerminalSink)
        """
        self.config = config
        self.specs: List[WidgetSpec] = widget_specs(config)
        self.refresh_interval: float = float(config["general"]["refresh"])
        self.service: HostService = service or create_service(config["host"])
        self.sink: RenderSink = sink or TerminalSink(style=config.get("style"))
        self.dispatcher = WidgetDispatcher(self.service, self.sink)
        self.running: bool = False
        self.shutting_down: bool = False

    @classmethod
    def from_file(cls, config_path: str) -> "Dashboard":
        """Create a dashboard from a YAML configuration file."""
        return cls(ConfigLoader().load(config_path))

    def build(self) -> List[RenderJob]:
        """
        Build the render jobs of all widgets, in configuration order.

        Returns:
            Jobs of the widgets that could be built
        """
        jobs = []
        for spec in self.specs:
            if self.shutting_down:
                logger.info("Shutdown requested, not building the remaining widgets")
                break
            try:
                jobs.append(self.dispatcher.create_widget(spec))
            except HostDashError as e:
                logger.error(f"Cannot build widget {spec.kind}: {e}", exc_info=True)
        logger.info(f"Built {len(jobs)} of {len(self.specs)} widgets")
        return jobs

    def paint(self, jobs: List[RenderJob]) -> int:
        """
        Paint a frame.

        Returns:
            Number of widgets painted
        """
        self.sink.clear()
        painted = sum(1 for job in jobs if paint_job(job))
        self.sink.flush()
        return painted

    def refresh(self) -> int:
        """Fetch fresh metrics for every widget and paint them."""
        return self.paint(self.build())

    def run(self, once: bool = False) -> None:
        """
        Main application run loop.

        Args:
            once: Paint a single frame and return
        """
        self.running = True
        logger.info(f"Dashboard running with {len(self.specs)} widgets")

        try:
            while self.running:
                started = time.monotonic()
                self.refresh()
                if once:
                    break

                # Sleep the rest of the interval, in short steps to stay responsive
                while self.running and time.monotonic() - started < self.refresh_interval:
                    time.sleep(0.1)

        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        finally:
            logger.info("Shutting down dashboard...")
            self.running = False
