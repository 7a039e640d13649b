"""
Base host service abstraction shared by local and SSH-reachable hosts
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..utils.errors import HostError

logger = logging.getLogger(__name__)

UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
    "tb": 1024**4,
}


def convert_bytes(value: float, unit: str) -> int:
    """
    Convert a byte count to a whole number of the given unit.

    Args:
        value: Number of bytes
        unit: One of b, kb, mb, gb, tb (case insensitive)

    Returns:
        Converted value, truncated

    Raises:
        ValueError: If the unit is unknown
    """
    factor = UNITS.get(unit.lower())
    if factor is None:
        raise ValueError(f"Unknown unit {unit!r} (expected one of {', '.join(UNITS)})")
    return int(value / factor)


def format_io(first_label: str, first: int, second_label: str, second: int, unit: str) -> str:
    """Two line I/O summary, e.g. ``Received: 12 KB`` / ``Sent: 3 KB``."""
    unit = unit.upper()
    return f"{first_label}: {first} {unit}\n{second_label}: {second} {unit}"


def disk_row(
    device: str, size: int, used: int, free: int, percent: float, mount: str, unit: str
) -> List[str]:
    """Format one filesystem as a disk table row."""
    suffix = unit.upper()
    return [
        device,
        f"{convert_bytes(size, unit)}{suffix}",
        f"{convert_bytes(used, unit)}{suffix}",
        f"{convert_bytes(free, unit)}{suffix}",
        f"{percent:.0f}%",
        mount,
    ]


def parse_table(output: str, headers: Sequence[str]) -> List[List[str]]:
    """
    Split command output into table rows.

    Each non-blank line becomes a row of whitespace separated fields. The
    header row always comes first and is empty without headers. With
    headers, surplus fields are joined into the last column.

    Args:
        output: Command standard output
        headers: Column headers, possibly empty

    Returns:
        Header row followed by the data rows
    """
    rows: List[List[str]] = [list(headers)]

    for line in output.splitlines():
        if not line.strip():
            continue
        if headers:
            rows.append(line.split(None, len(headers) - 1))
        else:
            rows.append(line.split())

    return rows


class HostService(ABC):
    """Base class for the metrics of one host"""

    name: str = "base"

    def __init__(self, timeout: float = 10.0):
        """
        Args:
            timeout: Timeout in seconds for each command run on the host
        """
        self.timeout = timeout

    @abstractmethod
    def load(self) -> str:
        """
        Load averages over 1, 5 and 15 minutes

        Returns:
            Text such as "0.52 0.58 0.59"
        """
        pass

    @abstractmethod
    def processes(self) -> str:
        """Number of processes, as text"""
        pass

    @abstractmethod
    def uptime(self) -> int:
        """Seconds since boot"""
        pass

    @abstractmethod
    def cpu_rate(self) -> float:
        """CPU usage percentage (0-100)"""
        pass

    @abstractmethod
    def memory_rate(self) -> float:
        """Memory usage percentage (0-100)"""
        pass

    @abstractmethod
    def swap_rate(self) -> float:
        """Swap usage percentage (0-100), 0 without swap"""
        pass

    @abstractmethod
    def net_io(self, unit: str) -> str:
        """Bytes received and sent by all interfaces but loopback"""
        pass

    @abstractmethod
    def disk_io(self, unit: str) -> str:
        """Bytes read and written by all block devices"""
        pass

    @abstractmethod
    def memory(self, metrics: Sequence[str], unit: str) -> List[int]:
        """
        Memory figures named like /proc/meminfo keys

        Args:
            metrics: Keys such as MemTotal, MemFree, MemAvailable
            unit: Unit of the returned values

        Returns:
            One value per metric, in the same order

        Raises:
            HostError: If a metric is unknown
        """
        pass

    @abstractmethod
    def disk(self, headers: Sequence[str], unit: str) -> List[List[str]]:
        """
        Usage of mounted filesystems

        Returns:
            Header row followed by one row per filesystem
        """
        pass

    @abstractmethod
    def run_command(self, command: str) -> str:
        """
        Run a shell command on the host

        Returns:
            Standard output of the command

        Raises:
            HostError: If the command cannot run or exits with an error
        """
        pass

    def table(self, command: str, headers: Sequence[str]) -> List[List[str]]:
        """
        Tabulate the output of a shell command

        Args:
            command: Shell command run on the host
            headers: Column headers, possibly empty

        Returns:
            Header row (empty without headers) followed by one row per output line
        """
        return parse_table(self.run_command(command), headers)

    def _run(self, args, command: str, shell: bool = False) -> str:
        """Run a process and return its standard output."""
        logger.debug(f"Running on {self.name}: {command}")
        try:
            result = subprocess.run(
                args, shell=shell, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise HostError(f"Command timed out after {self.timeout}s: {command}", command) from e
        except OSError as e:
            raise HostError(f"Command could not run: {command}: {e}", command) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise HostError(
                f"Command failed with exit code {result.returncode}: {command}: {stderr}",
                command,
            )
        return result.stdout
