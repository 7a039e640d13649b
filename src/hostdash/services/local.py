"""
Metrics of the machine hostdash runs on, read through psutil
"""

import logging
import time
from typing import List, Sequence

import psutil

from ..utils.errors import HostError
from .base import HostService, convert_bytes, disk_row, format_io

logger = logging.getLogger(__name__)


class LocalHost(HostService):
    """Local machine metrics"""

    name = "localhost"

    def __init__(self, timeout: float = 10.0, cpu_interval: float = 0.5):
        """
        Args:
            timeout: Timeout in seconds for table commands
            cpu_interval: Sampling interval of cpu_rate() in seconds
        """
        super().__init__(timeout)
        self.cpu_interval = cpu_interval

    def load(self) -> str:
        return " ".join(f"{avg:.2f}" for avg in psutil.getloadavg())

    def processes(self) -> str:
        return str(len(psutil.pids()))

    def uptime(self) -> int:
        return int(time.time() - psutil.boot_time())

    def cpu_rate(self) -> float:
        # Blocks for cpu_interval to get a meaningful sample
        return float(psutil.cpu_percent(interval=self.cpu_interval))

    def memory_rate(self) -> float:
        return float(psutil.virtual_memory().percent)

    def swap_rate(self) -> float:
        return float(psutil.swap_memory().percent)

    def net_io(self, unit: str) -> str:
        counters = psutil.net_io_counters(pernic=True)
        received = sum(c.bytes_recv for nic, c in counters.items() if nic != "lo")
        sent = sum(c.bytes_sent for nic, c in counters.items() if nic != "lo")
        return format_io(
            "Received", convert_bytes(received, unit), "Sent", convert_bytes(sent, unit), unit
        )

    def disk_io(self, unit: str) -> str:
        counters = psutil.disk_io_counters()
        if counters is None:
            raise HostError("No disk I/O counters available on this host")
        return format_io(
            "Read",
            convert_bytes(counters.read_bytes, unit),
            "Written",
            convert_bytes(counters.write_bytes, unit),
            unit,
        )

    def _meminfo(self) -> dict:
        """Memory figures in bytes keyed like /proc/meminfo."""
        vm = psutil.virtual_memory()
        swap = psutil.swap_memory()
        figures = {
            "MemTotal": vm.total,
            "MemFree": vm.free,
            "MemAvailable": vm.available,
            "SwapTotal": swap.total,
            "SwapFree": swap.free,
        }
        # Linux only fields
        for key, attr in (
            ("Buffers", "buffers"),
            ("Cached", "cached"),
            ("Shmem", "shared"),
            ("Active", "active"),
            ("Inactive", "inactive"),
        ):
            if hasattr(vm, attr):
                figures[key] = getattr(vm, attr)
        return figures

    def memory(self, metrics: Sequence[str], unit: str) -> List[int]:
        figures = self._meminfo()
        values = []
        for metric in metrics:
            if metric not in figures:
                raise HostError(f"Unknown memory metric: {metric}")
            values.append(convert_bytes(figures[metric], unit))
        return values

    def disk(self, headers: Sequence[str], unit: str) -> List[List[str]]:
        rows = [list(headers)]
        for partition in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as e:
                logger.debug(f"Skipping {partition.mountpoint}: {e}")
                continue
            rows.append(
                disk_row(
                    partition.device,
                    usage.total,
                    usage.used,
                    usage.free,
                    usage.percent,
                    partition.mountpoint,
                    unit,
                )
            )
        return rows

    def run_command(self, command: str) -> str:
        # shell=True is intentional: table commands use pipes
        return self._run(command, command, shell=True)
