"""
Tests for the rich terminal sink.
"""

import io

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hostdash.render.terminal import BAR_FILL, TerminalSink
from hostdash.utils.errors import RenderFailure


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=100, color_system=None, force_terminal=False)


@pytest.fixture
def sink(console):
    return TerminalSink(console=console)


def output(console):
    return console.file.getvalue()


class TestTerminalSink:
    """TerminalSink drawing"""

    def test_text_box(self, sink, console):
        sink.add_text_box("1d 1h 1m 1s", " Uptime ", {})
        sink.flush()

        text = output(console)
        assert "Uptime" in text
        assert "1d 1h 1m 1s" in text

    def test_text_box_border_option(self, sink):
        sink.add_text_box("x", "t", {"border_color": "red"})
        panel = sink._renderables[0]
        assert isinstance(panel, Panel)
        assert panel.border_style == "red"

    def test_style_overrides(self, console):
        sink = TerminalSink(console=console, style={"border_color": "magenta"})
        sink.add_text_box("x", "t", {})
        assert sink._renderables[0].border_style == "magenta"

    def test_bar_chart(self, sink, console):
        sink.add_bar_chart([50, 100], ["CPU", "Memory"], " Usage ", {"bar_width": "10"})
        sink.flush()

        text = output(console)
        assert "CPU    " + BAR_FILL * 5 in text
        assert "Memory " + BAR_FILL * 10 in text
        assert " 100" in text

    def test_bar_chart_all_zero(self, sink, console):
        sink.add_bar_chart([0, 0], ["a", "b"], "z", {})
        sink.flush()
        assert BAR_FILL not in output(console)

    def test_bar_chart_length_mismatch(self, sink):
        with pytest.raises(RenderFailure):
            sink.add_bar_chart([1, 2, 3], ["a", "b"], "t", {})

    def test_bar_chart_bad_width(self, sink):
        with pytest.raises(RenderFailure):
            sink.add_bar_chart([1], ["a"], "t", {"bar_width": "wide"})

    def test_table_with_headers(self, sink, console):
        sink.add_table([["Filesystem", "Mount"], ["/dev/sda1", "/"]], " Disks ", {})
        table = sink._renderables[0]
        assert isinstance(table, Table)
        assert table.show_header is True
        assert [c.header for c in table.columns] == ["Filesystem", "Mount"]
        assert table.row_count == 1

        sink.flush()
        assert "/dev/sda1" in output(console)

    def test_table_without_headers(self, sink):
        sink.add_table([[], ["a", "b", "c"], ["d"]], " Table ", {})
        table = sink._renderables[0]
        assert table.show_header is False
        assert len(table.columns) == 3
        assert table.row_count == 2

    def test_empty_table(self, sink):
        sink.add_table([], " Table ", {})
        assert sink._renderables[0].row_count == 0

    def test_clear(self, sink, console):
        sink.add_text_box("old", "t", {})
        sink.clear()
        sink.add_text_box("new", "t", {})
        sink.flush()

        text = output(console)
        assert "new" in text
        assert "old" not in text
