"""
Rendering sink interface used by render jobs
"""

from abc import ABC, abstractmethod
from typing import Mapping, Sequence


class RenderSink(ABC):
    """
    Drawing primitives of a dashboard.

    Each render job calls exactly one of add_text_box(), add_bar_chart()
    or add_table(). The dashboard loop brackets a paint cycle with clear()
    and flush(). Implementations raise RenderFailure when they cannot draw.
    """

    @abstractmethod
    def add_text_box(self, content: str, title: str, options: Mapping[str, str]) -> None:
        """Draw a titled box of text."""
        pass

    @abstractmethod
    def add_bar_chart(
        self,
        values: Sequence[int],
        labels: Sequence[str],
        title: str,
        options: Mapping[str, str],
    ) -> None:
        """Draw a titled bar chart, one bar per value."""
        pass

    @abstractmethod
    def add_table(
        self, rows: Sequence[Sequence[str]], title: str, options: Mapping[str, str]
    ) -> None:
        """Draw a titled table; the first row holds the headers, empty for none."""
        pass

    def clear(self) -> None:
        """Forget everything drawn since the last flush."""
        pass

    def flush(self) -> None:
        """Show what was drawn since the last clear."""
        pass
