"""
Pytest configuration and fixtures
"""

import pytest
import yaml
from unittest.mock import Mock

from hostdash.render.base import RenderSink
from hostdash.services.base import HostService


@pytest.fixture
def sample_config():
    """Sample configuration for testing"""
    return {
        "general": {"refresh": 5},
        "host": {"address": "", "timeout": 3},
        "widgets": [
            {"name": "lh.box_uptime"},
            {"name": "rh.box_cpu_rate", "options": {"title": " CPU "}},
            {"name": "lh.bar_memory", "options": {"unit": "mb", "metrics": "MemTotal,MemFree"}},
            {"name": "lh.table", "options": {"command": "ls", "border_color": "red"}},
        ],
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def mock_service():
    """Host service returning fixed metrics"""
    service = Mock(spec=HostService)
    service.uptime.return_value = 90061
    service.load.return_value = "0.52 0.58 0.59"
    service.processes.return_value = "231"
    service.cpu_rate.return_value = 42.0
    service.memory_rate.return_value = 63.456
    service.swap_rate.return_value = 7.9
    service.net_io.return_value = "Received: 10 KB\nSent: 2 KB"
    service.disk_io.return_value = "Read: 30 KB\nWritten: 4 KB"
    service.memory.return_value = [16000, 2000, 8000]
    service.disk.return_value = [
        ["Filesystem", "Size", "Used", "Available", "Use%", "Mount"],
        ["/dev/sda1", "100GB", "40GB", "60GB", "40%", "/"],
    ]
    service.table.return_value = [[], ["a", "b"]]
    return service


@pytest.fixture
def mock_sink():
    """Rendering sink recording calls"""
    return Mock(spec=RenderSink)


@pytest.fixture(autouse=True)
def no_subprocess_calls(monkeypatch):
    """Prevent actual subprocess calls during testing"""
    monkeypatch.setattr(
        "subprocess.run", Mock(return_value=Mock(returncode=0, stdout="", stderr=""))
    )
