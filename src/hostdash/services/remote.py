"""
Metrics of a Linux host reachable over SSH

Every metric is read with one ssh invocation, mostly from /proc.
Authentication is left to ssh itself (agent, keys, ~/.ssh/config);
BatchMode keeps it from prompting.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..utils.errors import HostError
from .base import HostService, convert_bytes, disk_row, format_io

logger = logging.getLogger(__name__)

CPU_SAMPLE_COMMAND = "head -n1 /proc/stat; sleep 1; head -n1 /proc/stat"
DISK_COMMAND = "df -P -B1 -x devtmpfs -x tmpfs -x debugfs | tail -n +2"
DISKSTATS_COMMAND = "ls /sys/block; echo --; cat /proc/diskstats"
SECTOR_SIZE = 512


def parse_meminfo(output: str) -> Dict[str, int]:
    """Parse /proc/meminfo into bytes per key."""
    figures = {}
    for line in output.splitlines():
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        fields = rest.split()
        if not fields:
            continue
        value = int(fields[0])
        # Values are in kB unless they are page counts
        if len(fields) > 1 and fields[1].lower() == "kb":
            value *= 1024
        figures[key.strip()] = value
    return figures


def parse_cpu_sample(line: str) -> Tuple[int, int]:
    """Return (idle, total) jiffies from the aggregate cpu line of /proc/stat."""
    fields = line.split()
    if not fields or fields[0] != "cpu":
        raise ValueError(f"Not a cpu line: {line!r}")
    values = [int(v) for v in fields[1:]]
    idle = values[3] + (values[4] if len(values) > 4 else 0)
    return idle, sum(values)


def parse_net_dev(output: str) -> Tuple[int, int]:
    """Sum received and sent bytes from /proc/net/dev, loopback excluded."""
    received = sent = 0
    for line in output.splitlines():
        iface, sep, rest = line.partition(":")
        if not sep or iface.strip() == "lo":
            continue
        fields = rest.split()
        if len(fields) < 9:
            continue
        received += int(fields[0])
        sent += int(fields[8])
    return received, sent


def parse_diskstats(output: str) -> Tuple[int, int]:
    """
    Sum read and written bytes of whole block devices.

    Expects ``ls /sys/block``, a ``--`` line, then /proc/diskstats, so that
    partitions and loop/ram devices are not counted.
    """
    listing, _, stats = output.partition("--")
    devices = {
        name for name in listing.split() if not name.startswith(("loop", "ram"))
    }
    read = written = 0
    for line in stats.splitlines():
        fields = line.split()
        if len(fields) < 10 or fields[2] not in devices:
            continue
        read += int(fields[5]) * SECTOR_SIZE
        written += int(fields[9]) * SECTOR_SIZE
    return read, written


class RemoteHost(HostService):
    """Metrics of a remote Linux host, collected with the ssh client"""

    name = "remote"

    def __init__(self, address: str, username: Optional[str] = None, timeout: float = 10.0):
        """
        Args:
            address: "host" or "host:port"
            username: Remote user, None for the ssh default
            timeout: Timeout in seconds for each command
        """
        super().__init__(timeout)
        host, _, port = address.partition(":")
        if not host:
            raise ValueError(f"Invalid host address: {address!r}")
        self.host = host
        self.port = port or None
        self.username = username or None
        self.name = f"{self.username}@{host}" if self.username else host

    def ssh_args(self, command: str) -> List[str]:
        """Build the ssh command line running command on the host."""
        args = [
            "ssh",
            "-o",
            "BatchMode=yes",
            "-o",
            f"ConnectTimeout={int(self.timeout)}",
        ]
        if self.port:
            args.extend(["-p", self.port])
        target = f"{self.username}@{self.host}" if self.username else self.host
        args.extend([target, command])
        return args

    def run_command(self, command: str) -> str:
        return self._run(self.ssh_args(command), command)

    def _parse(self, command: str, parser, *args):
        """Run command and parse its output, reporting malformed output as HostError."""
        output = self.run_command(command)
        try:
            return parser(output, *args)
        except (ValueError, IndexError) as e:
            raise HostError(f"Unexpected output from {command!r}: {e}", command) from e

    def load(self) -> str:
        return self._parse("cat /proc/loadavg", lambda out: " ".join(out.split()[:3]))

    def processes(self) -> str:
        return self._parse(
            "ps -e --no-headers | wc -l", lambda out: str(int(out.strip()))
        )

    def uptime(self) -> int:
        return self._parse("cat /proc/uptime", lambda out: int(float(out.split()[0])))

    def cpu_rate(self) -> float:
        def rate(output: str) -> float:
            lines = [line for line in output.splitlines() if line.startswith("cpu ")]
            idle1, total1 = parse_cpu_sample(lines[0])
            idle2, total2 = parse_cpu_sample(lines[1])
            elapsed = total2 - total1
            if elapsed <= 0:
                return 0.0
            return 100.0 * (1.0 - (idle2 - idle1) / elapsed)

        return self._parse(CPU_SAMPLE_COMMAND, rate)

    def _meminfo(self) -> Dict[str, int]:
        return self._parse("cat /proc/meminfo", parse_meminfo)

    def memory_rate(self) -> float:
        figures = self._meminfo()
        total = figures.get("MemTotal", 0)
        if not total:
            raise HostError("MemTotal missing from /proc/meminfo")
        available = figures.get("MemAvailable", figures.get("MemFree", 0))
        return 100.0 * (total - available) / total

    def swap_rate(self) -> float:
        figures = self._meminfo()
        total = figures.get("SwapTotal", 0)
        if not total:
            return 0.0
        return 100.0 * (total - figures.get("SwapFree", 0)) / total

    def net_io(self, unit: str) -> str:
        received, sent = self._parse("cat /proc/net/dev", parse_net_dev)
        return format_io(
            "Received", convert_bytes(received, unit), "Sent", convert_bytes(sent, unit), unit
        )

    def disk_io(self, unit: str) -> str:
        read, written = self._parse(DISKSTATS_COMMAND, parse_diskstats)
        return format_io(
            "Read", convert_bytes(read, unit), "Written", convert_bytes(written, unit), unit
        )

    def memory(self, metrics: Sequence[str], unit: str) -> List[int]:
        figures = self._meminfo()
        values = []
        for metric in metrics:
            if metric not in figures:
                raise HostError(f"Unknown memory metric: {metric}")
            values.append(convert_bytes(figures[metric], unit))
        return values

    def disk(self, headers: Sequence[str], unit: str) -> List[List[str]]:
        def rows(output: str) -> List[List[str]]:
            table = [list(headers)]
            for line in output.splitlines():
                fields = line.split(None, 5)
                if len(fields) < 6:
                    continue
                device, size, used, free, percent, mount = fields
                table.append(
                    disk_row(
                        device,
                        int(size),
                        int(used),
                        int(free),
                        float(percent.rstrip("%")),
                        mount,
                        unit,
                    )
                )
            return table

        return self._parse(DISK_COMMAND, rows)
