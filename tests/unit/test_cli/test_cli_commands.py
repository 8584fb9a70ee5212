"""Unit tests for the CLI commands."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock, patch

import httpx
import pytest
import structlog
from click.testing import CliRunner

from pingwatch.cli.main import cli
from pingwatch.source.metrics import SourceMetrics
from pingwatch.status.metrics import AggregationMetrics


ENDPOINTS_YAML = """\
endpoints:
  - id: g.co
  - id: offline.example.com
"""


@pytest.fixture(autouse=True)
def quiet_environment(monkeypatch: pytest.MonkeyPatch):  # type: ignore[no-untyped-def]
    """Silence structlog and isolate settings from the host environment."""
    for name in ("TARGET_URLS", "PINGWATCH_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    with patch("pingwatch.cli.main.configure_logging"):
        yield
    structlog.reset_defaults()
    SourceMetrics.reset()
    AggregationMetrics.reset_instance()


class TestStatusCommand:
    """Tests for the status command."""

    def test_status_mock_table(self) -> None:
        """Mock data renders the table and overview."""
        result = CliRunner().invoke(cli, ["status", "--mock"])

        assert result.exit_code == 0, result.output
        assert "ENDPOINT" in result.output
        assert "github.com" in result.output
        assert "3 endpoints:" in result.output

    def test_status_mock_json(self) -> None:
        """--json prints the snapshot document."""
        result = CliRunner().invoke(cli, ["status", "--mock", "--json"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert [e["endpoint_id"] for e in document["endpoints"]] == [
            "g.co",
            "github.com",
            "microsoft.com",
        ]
        assert document["run_info"]["source"] == "mock"

    def test_status_with_endpoints_file(self) -> None:
        """The endpoints file filters and reconciles the output."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "endpoints.yaml"
            path.write_text(ENDPOINTS_YAML, encoding="utf-8")

            result = CliRunner().invoke(
                cli, ["status", "--mock", "--json", "--endpoints", str(path)]
            )

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        endpoints = {e["endpoint_id"]: e for e in document["endpoints"]}
        assert set(endpoints) == {"g.co", "offline.example.com"}
        assert endpoints["offline.example.com"]["status_label"] == "Unknown"
        assert document["overview"]["no_data"] == 1

    def test_status_with_target_urls(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """TARGET_URLS filters when no endpoints file is given."""
        monkeypatch.setenv("TARGET_URLS", "github.com")

        result = CliRunner().invoke(cli, ["status", "--mock", "--json"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert [e["endpoint_id"] for e in document["endpoints"]] == ["github.com"]

    def test_status_single_endpoint_and_threshold(self) -> None:
        """--endpoint and --threshold reach the pipeline."""
        result = CliRunner().invoke(
            cli,
            ["status", "--mock", "--json", "--endpoint", "g.co", "--threshold", "5"],
        )

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert [e["endpoint_id"] for e in document["endpoints"]] == ["g.co"]
        assert document["run_info"]["high_latency_threshold_ms"] == 5.0
        assert document["endpoints"][0]["latest_status"] == "High Latency"

    def test_invalid_endpoints_file(self) -> None:
        """An invalid endpoints file exits with status 1."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "endpoints.yaml"
            path.write_text("endpoints:\n  - name: missing-id\n", encoding="utf-8")

            result = CliRunner().invoke(
                cli, ["status", "--mock", "--endpoints", str(path)]
            )

        assert result.exit_code == 1
        assert "is invalid" in result.output

    @patch("pingwatch.source.client.httpx.get")
    def test_server_unreachable(self, mock_get: MagicMock) -> None:
        """A fetch failure exits with status 1."""
        mock_get.side_effect = httpx.ConnectError("refused")

        result = CliRunner().invoke(cli, ["status"])

        assert result.exit_code == 1
        assert "Error fetching ping data" in result.output

    @patch("pingwatch.source.client.httpx.get")
    def test_fallback_to_mock(self, mock_get: MagicMock) -> None:
        """--fallback-to-mock serves demo data when the server is down."""
        mock_get.side_effect = httpx.ConnectError("refused")

        result = CliRunner().invoke(cli, ["status", "--fallback-to-mock", "--json"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["run_info"]["source"] == "http+mock"
        assert len(document["endpoints"]) == 3


class TestRunContext:
    """Tests for per-command log context."""

    def test_context_cleared_after_command(self) -> None:
        """Run id and command name are unbound when the command ends."""
        result = CliRunner().invoke(cli, ["status", "--mock"])

        assert result.exit_code == 0, result.output
        context = structlog.contextvars.get_contextvars()
        assert "run_id" not in context
        assert "command" not in context

    @patch("pingwatch.cli.main.clear_run_context")
    @patch("pingwatch.cli.main.bind_run_context")
    def test_context_bound_with_command(
        self, mock_bind: MagicMock, mock_clear: MagicMock
    ) -> None:
        """The command name is bound alongside the run id."""
        result = CliRunner().invoke(cli, ["status", "--mock"])

        assert result.exit_code == 0, result.output
        run_id, command = mock_bind.call_args.args
        assert len(run_id) == 12
        assert command == "status"
        mock_clear.assert_called_once_with()


class TestWatchCommand:
    """Tests for the watch command."""

    @patch("pingwatch.cli.main.time.sleep")
    def test_watch_iterations(self, mock_sleep: MagicMock) -> None:
        """Watch runs the requested passes and sleeps between them."""
        result = CliRunner().invoke(
            cli, ["watch", "--mock", "--iterations", "3", "--interval", "0.5"]
        )

        assert result.exit_code == 0, result.output
        assert result.output.count("3 endpoints:") == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.5)

    @patch("pingwatch.cli.main.time.sleep")
    @patch("pingwatch.source.client.httpx.get")
    def test_watch_survives_failures(
        self, mock_get: MagicMock, mock_sleep: MagicMock
    ) -> None:
        """A failed pass is reported and the next pass still runs."""
        mock_get.side_effect = httpx.ConnectError("refused")

        result = CliRunner().invoke(cli, ["watch", "--iterations", "2"])

        assert result.exit_code == 0, result.output
        assert result.output.count("Error fetching ping data") == 2
        assert mock_get.call_count == 2

    @patch("pingwatch.cli.main.time.sleep")
    def test_watch_interrupt(self, mock_sleep: MagicMock) -> None:
        """Ctrl-C ends the loop cleanly."""
        mock_sleep.side_effect = KeyboardInterrupt

        result = CliRunner().invoke(cli, ["watch", "--mock"])

        assert result.exit_code == 0, result.output
        assert result.output.count("3 endpoints:") == 1


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_writes_status_json(self) -> None:
        """Render writes status.json to the output directory."""
        with TemporaryDirectory() as tmpdir:
            output_dir = Path(tmpdir) / "public"

            result = CliRunner().invoke(
                cli, ["render", "--mock", "--out", str(output_dir)]
            )

            assert result.exit_code == 0, result.output
            assert "Wrote" in result.output
            document = json.loads((output_dir / "status.json").read_text("utf-8"))
            assert len(document["endpoints"]) == 3


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self) -> None:
        """A valid file reports its tracked endpoints."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "endpoints.yaml"
            path.write_text(ENDPOINTS_YAML, encoding="utf-8")

            result = CliRunner().invoke(cli, ["validate", "--endpoints", str(path)])

        assert result.exit_code == 0, result.output
        assert "Endpoints file is valid!" in result.output
        assert "g.co, offline.example.com" in result.output

    def test_valid_file_json(self) -> None:
        """--json prints counts and checksum."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "endpoints.yaml"
            path.write_text(ENDPOINTS_YAML, encoding="utf-8")

            result = CliRunner().invoke(
                cli, ["validate", "--endpoints", str(path), "--json"]
            )

        assert result.exit_code == 0, result.output
        output = json.loads(result.output)
        assert output["endpoints"] == 2
        assert output["tracked"] == ["g.co", "offline.example.com"]
        assert len(output["sha256"]) == 64

    def test_missing_file(self) -> None:
        """A missing file fails validation."""
        result = CliRunner().invoke(
            cli, ["validate", "--endpoints", "/nonexistent/endpoints.yaml"]
        )

        assert result.exit_code == 1
        assert "Endpoints validation failed:" in result.output


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """--version prints the package version."""
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
