"""
Catalog of host widget kinds.

Widgets are named in configuration with an ``rh.`` (remote host) or
``lh.`` (local host) prefix. Both prefixes share one catalog: every local
name is an explicit alias of its remote counterpart.
"""

from enum import Enum
from typing import Dict, List

from ..utils.errors import UnknownWidgetKind


class WidgetKind(str, Enum):
    """The twelve host widgets, valued by their canonical configuration name."""

    UPTIME = "rh.box_uptime"
    LOAD = "rh.box_load"
    PROCESSES = "rh.box_processes"
    CPU_RATE = "rh.box_cpu_rate"
    MEMORY_RATE = "rh.box_memory_rate"
    SWAP_RATE = "rh.box_swap_rate"
    NET_IO = "rh.box_net_io"
    DISK_IO = "rh.box_disk_io"
    MEMORY_BAR = "rh.bar_memory"
    RATES_BAR = "rh.bar_rates"
    DISK_TABLE = "rh.table_disk"
    TABLE = "rh.table"


# Local host names, mapped onto the same widgets
ALIASES: Dict[str, WidgetKind] = {
    "lh.box_uptime": WidgetKind.UPTIME,
    "lh.box_load": WidgetKind.LOAD,
    "lh.box_processes": WidgetKind.PROCESSES,
    "lh.box_cpu_rate": WidgetKind.CPU_RATE,
    "lh.box_memory_rate": WidgetKind.MEMORY_RATE,
    "lh.box_swap_rate": WidgetKind.SWAP_RATE,
    "lh.box_net_io": WidgetKind.NET_IO,
    "lh.box_disk_io": WidgetKind.DISK_IO,
    "lh.bar_memory": WidgetKind.MEMORY_BAR,
    "lh.bar_rates": WidgetKind.RATES_BAR,
    "lh.table_disk": WidgetKind.DISK_TABLE,
    "lh.table": WidgetKind.TABLE,
}


def parse_kind(name: str) -> WidgetKind:
    """
    Resolve a configured widget name to its kind.

    Args:
        name: Widget name from configuration (``rh.*`` or ``lh.*``)

    Returns:
        Matching WidgetKind

    Raises:
        UnknownWidgetKind: If the name is neither a catalog name nor an alias
    """
    if name in ALIASES:
        return ALIASES[name]
    try:
        return WidgetKind(name)
    except ValueError:
        raise UnknownWidgetKind(name) from None


def list_kinds() -> List[str]:
    """All accepted widget names, catalog names first."""
    return [kind.value for kind in WidgetKind] + list(ALIASES)
