"""
Host monitoring widgets: uptime, load, processes, rates, I/O, memory and disks.
"""

from typing import Any, List, Tuple

from .base import BaseBuilder
from .formatting import format_rate, format_seconds
from .kinds import WidgetKind
from .options import (
    OPTION_HEADERS,
    OPTION_METRICS,
    resolve_command,
    resolve_list,
    resolve_title,
    resolve_unit,
)

DEFAULT_UNIT = "kb"
DEFAULT_DISK_UNIT = "gb"
DEFAULT_MEMORY_METRICS = ["MemTotal", "MemFree", "MemAvailable"]
DISK_HEADERS = ["Filesystem", "Size", "Used", "Available", "Use%", "Mount"]
DEFAULT_TABLE_COMMAND = "/bin/df -x devtmpfs -x tmpfs -x debugfs | tail -n +2"
RATE_LABELS = ["CPU", "Memory", "Swap"]


class TextBoxBuilder(BaseBuilder):
    """Widgets painted as a single text box."""

    def format(self, snapshot: Any) -> str:
        """Turn the snapshot into box content."""
        return snapshot

    def draw(self, sink, snapshot: Any, title: str) -> None:
        sink.add_text_box(self.format(snapshot), title, self.options)


class UnitTextBoxBuilder(TextBoxBuilder):
    """
    Text box whose default title embeds the unit.

    Class Attributes:
        title_template: Default title with a ``{unit}`` placeholder
        default_unit: Unit used when the options carry none
    """

    title_template: str = ""
    default_unit: str = DEFAULT_UNIT

    @property
    def unit(self) -> str:
        return resolve_unit(self.options, self.default_unit)

    def title(self) -> str:
        default = self.title_template.format(unit=self.unit.upper())
        return resolve_title(self.options, default)


class UptimeBox(TextBoxBuilder):
    """
    Display host uptime.

    Example:
        - name: lh.box_uptime
    """

    kind = WidgetKind.UPTIME
    default_title = " Uptime "

    def fetch_data(self, service) -> int:
        return service.uptime()

    def format(self, snapshot: int) -> str:
        return format_seconds(snapshot)


class LoadBox(TextBoxBuilder):
    """Display the load averages."""

    kind = WidgetKind.LOAD
    default_title = " Load "

    def fetch_data(self, service) -> str:
        return service.load()


class ProcessesBox(TextBoxBuilder):
    """Display the number of running processes."""

    kind = WidgetKind.PROCESSES
    default_title = " Running processes "

    def fetch_data(self, service) -> str:
        return service.processes()


class CPURateBox(TextBoxBuilder):
    """Display CPU usage percentage."""

    kind = WidgetKind.CPU_RATE
    default_title = " CPU usage "

    def fetch_data(self, service) -> float:
        return service.cpu_rate()

    def format(self, snapshot: float) -> str:
        return format_rate(snapshot)


class MemoryRateBox(TextBoxBuilder):
    """Display memory usage percentage."""

    kind = WidgetKind.MEMORY_RATE
    default_title = " Memory usage "

    def fetch_data(self, service) -> float:
        return service.memory_rate()

    def format(self, snapshot: float) -> str:
        return format_rate(snapshot)


class SwapRateBox(TextBoxBuilder):
    """Display swap usage percentage."""

    kind = WidgetKind.SWAP_RATE
    default_title = " Swap usage "

    def fetch_data(self, service) -> float:
        return service.swap_rate()

    def format(self, snapshot: float) -> str:
        return format_rate(snapshot)


class NetIOBox(UnitTextBoxBuilder):
    """
    Display bytes received and sent by the network interfaces.

    Configuration:
        unit: b, kb, mb, gb or tb (default: kb)
    """

    kind = WidgetKind.NET_IO
    title_template = " Net I/O ({unit}) "

    def fetch_data(self, service) -> str:
        return service.net_io(self.unit)


class DiskIOBox(UnitTextBoxBuilder):
    """
    Display bytes read and written by the block devices.

    Configuration:
        unit: b, kb, mb, gb or tb (default: kb)
    """

    kind = WidgetKind.DISK_IO
    title_template = " Disk I/O ({unit}) "

    def fetch_data(self, service) -> str:
        return service.disk_io(self.unit)


class MemoryBar(BaseBuilder):
    """
    Bar chart of memory figures.

    Configuration:
        metrics: Comma separated /proc/meminfo keys (default: MemTotal,MemFree,MemAvailable)
        headers: Comma separated bar labels (default: the metrics)
        unit: b, kb, mb, gb or tb (default: kb)

    Example:
        - name: rh.bar_memory
          options:
            metrics: MemTotal,MemAvailable
            headers: Total,Available
            unit: mb
    """

    kind = WidgetKind.MEMORY_BAR

    @property
    def unit(self) -> str:
        return resolve_unit(self.options, DEFAULT_UNIT)

    @property
    def metrics(self) -> List[str]:
        return resolve_list(self.options, OPTION_METRICS, DEFAULT_MEMORY_METRICS)

    @property
    def headers(self) -> List[str]:
        return resolve_list(self.options, OPTION_HEADERS, self.metrics)

    def title(self) -> str:
        return resolve_title(self.options, f" Memory ({self.unit.upper()}) ")

    def fetch_data(self, service) -> List[int]:
        return service.memory(self.metrics, self.unit)

    def draw(self, sink, snapshot: List[int], title: str) -> None:
        sink.add_bar_chart(snapshot, self.headers, title, self.options)


class RatesBar(BaseBuilder):
    """Bar chart of CPU, memory and swap usage percentages."""

    kind = WidgetKind.RATES_BAR
    default_title = " Resources usage (%) "

    def fetch_data(self, service) -> Tuple[float, float, float]:
        swap_rate = service.swap_rate()
        cpu_rate = service.cpu_rate()
        memory_rate = service.memory_rate()
        return cpu_rate, memory_rate, swap_rate

    def draw(self, sink, snapshot: Tuple[float, float, float], title: str) -> None:
        values = [int(rate) for rate in snapshot]
        sink.add_bar_chart(values, list(RATE_LABELS), title, self.options)


class DiskTable(BaseBuilder):
    """
    Table of mounted filesystems.

    Configuration:
        unit: b, kb, mb, gb or tb (default: gb)
    """

    kind = WidgetKind.DISK_TABLE
    default_title = " Disks "

    def fetch_data(self, service) -> List[List[str]]:
        unit = resolve_unit(self.options, DEFAULT_DISK_UNIT)
        return service.disk(list(DISK_HEADERS), unit)

    def draw(self, sink, snapshot: List[List[str]], title: str) -> None:
        sink.add_table(snapshot, title, self.options)


class CommandTable(BaseBuilder):
    """
    Table built from the output of a shell command run on the host.

    Without a command, lists filesystems with df. A custom command has no
    headers unless the headers option is given.

    Configuration:
        command: Shell command; each output line becomes a row
        headers: Comma separated column headers

    Example:
        - name: lh.table
          options:
            command: "ps -eo pid,comm --no-headers | head -5"
            headers: PID,Command
    """

    kind = WidgetKind.TABLE
    default_title = " Table "

    @property
    def command(self) -> Tuple[str, bool]:
        return resolve_command(self.options, DEFAULT_TABLE_COMMAND)

    @property
    def headers(self) -> List[str]:
        _, custom = self.command
        default = [] if custom else DISK_HEADERS
        return resolve_list(self.options, OPTION_HEADERS, default)

    def fetch_data(self, service) -> List[List[str]]:
        command, _ = self.command
        return service.table(command, self.headers)

    def draw(self, sink, snapshot: List[List[str]], title: str) -> None:
        sink.add_table(snapshot, title, self.options)


BUILDERS = [
    UptimeBox,
    LoadBox,
    ProcessesBox,
    CPURateBox,
    MemoryRateBox,
    SwapRateBox,
    NetIOBox,
    DiskIOBox,
    MemoryBar,
    RatesBar,
    DiskTable,
    CommandTable,
]
