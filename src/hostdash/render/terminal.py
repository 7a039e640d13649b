"""
Terminal rendering with rich
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..utils.errors import RenderFailure
from .base import RenderSink

logger = logging.getLogger(__name__)

BAR_FILL = "█"
BAR_EMPTY = "░"

DEFAULT_STYLE = {
    "border_color": "blue",
    "text_color": "white",
    "bar_color": "green",
    "bar_width": 30,
}


class TerminalSink(RenderSink):
    """
    Renders widgets as rich panels and tables.

    Widgets drawn during a paint cycle are collected and printed together
    on flush(), so a frame is never shown half drawn.

    Sink options, read from each widget's options:
        border_color: Panel border color
        text_color: Content color
        bar_color: Bar color of bar charts
        bar_width: Width of the longest bar in characters
    """

    def __init__(self, console: Optional[Console] = None, style: Optional[Dict[str, Any]] = None):
        """
        Initialize the terminal sink.

        Args:
            console: Console to print on (default: stdout)
            style: Overrides of DEFAULT_STYLE
        """
        self.console = console or Console()
        self.style = {**DEFAULT_STYLE, **(style or {})}
        self._renderables: List[Any] = []

    def _style(self, options: Mapping[str, str], key: str) -> Any:
        return options.get(key, self.style[key])

    def _panel(self, body: Any, title: str, options: Mapping[str, str]) -> Panel:
        return Panel(
            body,
            title=title,
            title_align="left",
            border_style=self._style(options, "border_color"),
            expand=False,
        )

    def add_text_box(self, content: str, title: str, options: Mapping[str, str]) -> None:
        text = Text(str(content), style=self._style(options, "text_color"))
        self._renderables.append(self._panel(text, title, options))

    def add_bar_chart(
        self,
        values: Sequence[int],
        labels: Sequence[str],
        title: str,
        options: Mapping[str, str],
    ) -> None:
        if len(values) != len(labels):
            raise RenderFailure(
                f"Bar chart {title!r} has {len(values)} values for {len(labels)} labels"
            )

        try:
            width = int(self._style(options, "bar_width"))
        except (TypeError, ValueError) as e:
            raise RenderFailure(f"Invalid bar_width for {title!r}: {e}") from e

        peak = max(values, default=0)
        label_width = max((len(label) for label in labels), default=0)
        bar_color = self._style(options, "bar_color")
        text_color = self._style(options, "text_color")

        lines = []
        for value, label in zip(values, labels):
            filled = round(width * value / peak) if peak > 0 else 0
            filled = max(0, min(width, filled))
            line = Text()
            line.append(f"{label:<{label_width}} ", style=text_color)
            line.append(BAR_FILL * filled, style=bar_color)
            line.append(BAR_EMPTY * (width - filled), style="dim")
            line.append(f" {value}", style=text_color)
            lines.append(line)

        self._renderables.append(self._panel(Group(*lines), title, options))

    def add_table(
        self, rows: Sequence[Sequence[str]], title: str, options: Mapping[str, str]
    ) -> None:
        headers = list(rows[0]) if rows else []
        table = Table(
            title=title,
            title_justify="left",
            border_style=self._style(options, "border_color"),
            style=self._style(options, "text_color"),
            show_header=bool(headers),
        )

        width = max((len(row) for row in rows), default=0)
        for index in range(width):
            table.add_column(headers[index] if index < len(headers) else "")

        for row in rows[1:]:
            table.add_row(*[str(cell) for cell in row])

        self._renderables.append(table)

    def clear(self) -> None:
        self._renderables = []

    def flush(self) -> None:
        try:
            self.console.clear()
            for renderable in self._renderables:
                self.console.print(renderable)
        except Exception as e:
            raise RenderFailure(f"Failed to write to terminal: {e}") from e
        logger.debug(f"Flushed {len(self._renderables)} widgets")
