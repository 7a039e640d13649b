"""
Base classes for all host widget types.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Mapping

from ..utils.errors import MetricFetchFailure, RenderFailure
from .kinds import WidgetKind
from .options import resolve_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WidgetSpec:
    """
    Declarative description of one dashboard tile.

    Attributes:
        kind: Widget name from configuration (e.g. "lh.box_load")
        options: String options; unrecognized keys are left for the sink
    """

    kind: str
    options: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderJob:
    """
    Deferred paint operation for one widget.

    Holds the data fetched when the widget was built. Calling the job
    paints that data through exactly one sink operation and never
    fetches again.

    Attributes:
        kind: Widget kind the job was built for
        title: Resolved title
        options: Options as given by the caller
        snapshot: Metrics fetched at build time
        paint: Bound sink call
    """

    kind: WidgetKind
    title: str
    options: Mapping[str, str]
    snapshot: Any
    paint: Callable[[], None] = field(repr=False)

    def __call__(self) -> None:
        """
        Paint the widget.

        Raises:
            RenderFailure: If the rendering sink fails
        """
        try:
            self.paint()
        except RenderFailure:
            raise
        except Exception as e:
            raise RenderFailure(f"failed to render widget {self.kind.value}: {e}") from e


class BaseBuilder(ABC):
    """
    Base class for host widget builders.

    A builder resolves its options, fetches metrics once from the host
    service and returns a RenderJob bound to the rendering sink.

    Class Attributes:
        kind: Widget kind this builder produces
        default_title: Title used when the options carry none

    Example:
        >>> class LoadBox(BaseBuilder):
        ...     kind = WidgetKind.LOAD
        ...     default_title = " Load "
        ...
        ...     def fetch_data(self, service):
        ...         return service.load()
        ...
        ...     def draw(self, sink, snapshot, title):
        ...         sink.add_text_box(snapshot, title, self.options)
    """

    kind: WidgetKind = None

    default_title: str = ""

    def __init__(self, options: Mapping[str, str]):
        """
        Initialize builder with widget options.

        Args:
            options: Widget options from configuration

        Raises:
            ValueError: If kind is not defined
        """
        if not self.kind:
            raise ValueError(f"{self.__class__.__name__} must define kind")

        self.options: Mapping[str, str] = MappingProxyType(dict(options))

    def title(self) -> str:
        """Resolve the widget title."""
        return resolve_title(self.options, self.default_title)

    @abstractmethod
    def fetch_data(self, service) -> Any:
        """
        Fetch the widget's metrics from the host service.

        Args:
            service: HostService instance

        Returns:
            Snapshot handed to draw()
        """
        pass

    @abstractmethod
    def draw(self, sink, snapshot: Any, title: str) -> None:
        """
        Paint a snapshot with one rendering sink call.

        Args:
            sink: RenderSink instance
            snapshot: Data returned by fetch_data()
            title: Resolved title
        """
        pass

    def build(self, service, sink) -> RenderJob:
        """
        Fetch metrics and bind them to a render job.

        Args:
            service: HostService to fetch from
            sink: RenderSink the job paints on

        Returns:
            RenderJob ready to be invoked by the render loop

        Raises:
            MetricFetchFailure: If the host service fails; no job is created
        """
        title = self.title()
        logger.debug(f"Building {self.kind.value} widget with title {title!r}")

        try:
            snapshot = self.fetch_data(service)
        except Exception as e:
            raise MetricFetchFailure(self.kind.value, e) from e

        return RenderJob(
            kind=self.kind,
            title=title,
            options=self.options,
            snapshot=snapshot,
            paint=partial(self.draw, sink, snapshot, title),
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(kind={self.kind.value})>"
