"""
Integration tests for the dashboard loop and the command line entry point.

These tests verify:
- Every configured widget is built and painted once per refresh
- Failing widgets are skipped without stopping the others
- Each refresh fetches fresh metrics
- The entry point paints a frame and reports configuration errors
"""

import io
import signal
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from hostdash.dashboard import Dashboard
from hostdash.main import main
from hostdash.render.terminal import TerminalSink
from hostdash.services.base import HostService
from hostdash.utils.errors import HostError, RenderFailure


@pytest.fixture
def loaded_config(sample_config):
    sample_config["style"] = {}
    return sample_config


class TestDashboard:
    """Dashboard build and paint cycle"""

    def test_build_all(self, loaded_config, mock_service, mock_sink):
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)
        jobs = dashboard.build()

        assert [job.kind.value for job in jobs] == [
            "rh.box_uptime",
            "rh.box_cpu_rate",
            "rh.bar_memory",
            "rh.table",
        ]
        mock_service.memory.assert_called_once_with(["MemTotal", "MemFree"], "mb")
        mock_service.table.assert_called_once_with("ls", [])

    def test_refresh_paints_every_widget(self, loaded_config, mock_service, mock_sink):
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)
        assert dashboard.refresh() == 4

        mock_sink.clear.assert_called_once()
        mock_sink.flush.assert_called_once()
        assert mock_sink.add_text_box.call_count == 2
        mock_sink.add_bar_chart.assert_called_once()
        mock_sink.add_table.assert_called_once()

    def test_unknown_widget_skipped(self, loaded_config, mock_service, mock_sink):
        loaded_config["widgets"].insert(0, {"name": "lh.box_weather"})
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)

        assert len(dashboard.build()) == 4

    def test_fetch_failure_skips_only_that_widget(self, loaded_config, mock_service, mock_sink):
        mock_service.cpu_rate.side_effect = HostError("ssh: Connection refused")
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)

        assert dashboard.refresh() == 3
        # The CPU box never reaches the sink
        titles = [c[0][1] for c in mock_sink.add_text_box.call_args_list]
        assert titles == [" Uptime "]

    def test_render_failure_skips_only_that_widget(self, loaded_config, mock_service, mock_sink):
        mock_sink.add_bar_chart.side_effect = RenderFailure("chart broke")
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)

        assert dashboard.refresh() == 3
        mock_sink.flush.assert_called_once()

    def test_each_refresh_fetches_again(self, loaded_config, mock_service, mock_sink):
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)
        dashboard.refresh()
        dashboard.refresh()

        assert mock_service.uptime.call_count == 2
        assert mock_service.cpu_rate.call_count == 2

    def test_run_once(self, loaded_config, mock_service, mock_sink):
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)
        dashboard.run(once=True)

        mock_sink.flush.assert_called_once()
        assert dashboard.running is False

    def test_run_stops_on_interrupt(self, loaded_config, mock_service, mock_sink):
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)
        dashboard.refresh_interval = 0
        with patch.object(dashboard, "refresh", side_effect=[4, KeyboardInterrupt()]) as refresh:
            dashboard.run()

        assert refresh.call_count == 2
        assert dashboard.running is False

    def test_shutdown_stops_building(self, loaded_config, mock_service, mock_sink):
        """Test no further host fetches happen once shutdown is requested."""
        dashboard = Dashboard(loaded_config, service=mock_service, sink=mock_sink)

        def uptime():
            dashboard.shutting_down = True
            return 90061

        mock_service.uptime.side_effect = uptime

        jobs = dashboard.build()

        assert len(jobs) == 1
        mock_service.cpu_rate.assert_not_called()
        mock_service.memory.assert_not_called()
        mock_service.table.assert_not_called()

    def test_terminal_output(self, loaded_config, mock_service):
        mock_service.memory.return_value = [16000, 2000]
        console = Console(file=io.StringIO(), width=120, color_system=None)
        dashboard = Dashboard(
            loaded_config, service=mock_service, sink=TerminalSink(console=console)
        )
        dashboard.refresh()

        text = console.file.getvalue()
        assert "1d 1h 1m 1s" in text
        assert "42.00 %" in text
        assert "Memory (MB)" in text

    def test_bar_length_mismatch_skipped(self, loaded_config, mock_service, caplog):
        """Test a memory bar with more values than labels is left out of the frame."""
        mock_service.memory.return_value = [16000, 2000, 8000]
        console = Console(file=io.StringIO(), width=120, color_system=None)
        dashboard = Dashboard(
            loaded_config, service=mock_service, sink=TerminalSink(console=console)
        )

        assert dashboard.refresh() == 3

        text = console.file.getvalue()
        assert "Memory (MB)" not in text
        assert "1d 1h 1m 1s" in text
        failures = [r for r in caplog.records if r.exc_info and r.exc_info[0] is RenderFailure]
        assert len(failures) == 1

    def test_default_service_from_config(self, loaded_config, mock_sink):
        with patch("hostdash.dashboard.create_service") as create:
            create.return_value = Mock(spec=HostService)
            dashboard = Dashboard(loaded_config, sink=mock_sink)

        create.assert_called_once_with(loaded_config["host"])
        assert dashboard.service is create.return_value


class TestMain:
    """Command line entry point"""

    def test_list_widgets(self, capsys):
        assert main(["--list-widgets"]) == 0
        out = capsys.readouterr().out.split()
        assert "rh.box_uptime" in out
        assert "lh.table_disk" in out

    def test_once(self, config_file, tmp_path, mock_service):
        with patch("hostdash.dashboard.create_service", return_value=mock_service):
            with patch("hostdash.main.signal.signal"):
                code = main(
                    [str(config_file), "--once", "--log-file", str(tmp_path / "log" / "hd.log")]
                )

        assert code == 0
        mock_service.uptime.assert_called_once()

    def test_invalid_config(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("widgets: []\n")

        code = main([str(bad), "--log-file", str(tmp_path / "hd.log")])

        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "section",
        [
            "style: [red, blue]\n",
            "host:\n  address: ':22'\n",
        ],
    )
    def test_invalid_section(self, tmp_path, capsys, section):
        bad = tmp_path / "bad.yaml"
        bad.write_text(section + "widgets:\n  - name: lh.box_load\n")

        with patch("hostdash.main.signal.signal"):
            code = main([str(bad), "--once", "--log-file", str(tmp_path / "hd.log")])

        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_signal_interrupts_running_fetch(self, config_file, tmp_path, mock_service):
        handlers = {}

        def slow_uptime():
            # SIGINT arrives while the first widget waits on the host
            handlers[signal.SIGINT](signal.SIGINT, None)
            return 90061

        mock_service.uptime.side_effect = slow_uptime

        with patch("hostdash.dashboard.create_service", return_value=mock_service):
            with patch("hostdash.main.signal.signal", side_effect=handlers.__setitem__):
                code = main([str(config_file), "--log-file", str(tmp_path / "hd.log")])

        assert code == 0
        assert set(handlers) == {signal.SIGINT, signal.SIGTERM}
        mock_service.cpu_rate.assert_not_called()

    def test_config_required(self):
        with pytest.raises(SystemExit):
            main([])
