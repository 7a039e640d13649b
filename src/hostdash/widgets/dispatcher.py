"""
Dispatch of widget specs to their builders.
"""

import logging
from typing import Dict, List, Type

from .base import BaseBuilder, RenderJob, WidgetSpec
from .host import BUILDERS
from .kinds import WidgetKind, parse_kind

logger = logging.getLogger(__name__)


class BuilderRegistry:
    """
    Registry mapping every widget kind to its builder class.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._builders: Dict[WidgetKind, Type[BaseBuilder]] = {}

    def register(self, builder_class: type) -> None:
        """
        Register a builder class.

        Args:
            builder_class: Builder class to register

        Raises:
            TypeError: If builder_class doesn't inherit from BaseBuilder
            ValueError: If kind is not defined
        """
        if not issubclass(builder_class, BaseBuilder):
            raise TypeError(f"{builder_class} must inherit from BaseBuilder")

        kind = builder_class.kind
        if not kind:
            raise ValueError(f"{builder_class.__name__} must define kind class attribute")

        if kind in self._builders:
            logger.warning(f"Overwriting existing builder for {kind.value}")

        self._builders[kind] = builder_class
        logger.debug(f"Registered builder for {kind.value}")

    def get_builder_class(self, kind: WidgetKind) -> Type[BaseBuilder]:
        """
        Get builder class by kind.

        Raises:
            KeyError: If no builder is registered for the kind
        """
        return self._builders[kind]

    def missing_kinds(self) -> List[WidgetKind]:
        """Kinds of the catalog without a builder."""
        return [kind for kind in WidgetKind if kind not in self._builders]


registry = BuilderRegistry()
for _builder_class in BUILDERS:
    registry.register(_builder_class)

if registry.missing_kinds():
    raise RuntimeError(f"No builder for widget kinds: {registry.missing_kinds()}")


class WidgetDispatcher:
    """
    Builds render jobs for widget specs.

    Local host names (``lh.*``) and remote host names (``rh.*``) resolve to
    the same builders.
    """

    def __init__(self, service, sink):
        """
        Initialize the dispatcher.

        Args:
            service: HostService the builders fetch from
            sink: RenderSink the render jobs paint on
        """
        self.service = service
        self.sink = sink

    def create_widget(self, spec: WidgetSpec) -> RenderJob:
        """
        Build the render job of one widget.

        Args:
            spec: Widget kind and options

        Returns:
            RenderJob holding the fetched metrics

        Raises:
            UnknownWidgetKind: If spec.kind is not a known widget name
            MetricFetchFailure: If the host service fails
        """
        kind = parse_kind(spec.kind)
        builder_class = registry.get_builder_class(kind)
        logger.debug(f"Dispatching {spec.kind} to {builder_class.__name__}")

        builder = builder_class(spec.options)
        return builder.build(self.service, self.sink)
