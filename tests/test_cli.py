import sys

import httpx
import pytest
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from cli.main import app
from core import __version__
from harness import make_settings
from vendor_payloads import application_json

runner = CliRunner()


@pytest.fixture
def served(monkeypatch):
    """Sustituye el bucle stdio: registra los settings con los que se serviría."""

    calls = []

    async def fake_serve(settings):
        calls.append(settings)

    monkeypatch.setattr(cli_main, "serve", fake_serve)
    return calls


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_token_exits_with_error(served):
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "API token is required" in result.output
    assert served == []


def test_invalid_log_level(served):
    result = runner.invoke(app, ["--api-token", "tok", "--log-level", "verbose"])
    assert result.exit_code == 1
    assert "invalid log level" in result.output
    assert served == []


def test_flags_override_environment(served, monkeypatch):
    monkeypatch.setenv("REPLICATED_API_TOKEN", "env-token")
    monkeypatch.setenv("REPLICATED_TIMEOUT_SECONDS", "60")

    result = runner.invoke(
        app, ["--api-token", "flag-token", "--timeout", "5", "--log-level", "error", "--endpoint", "https://x.test"]
    )

    assert result.exit_code == 0, result.output
    (settings,) = served
    assert settings.api_token == "flag-token"
    assert settings.timeout_seconds == 5
    assert settings.log_level == "error"
    assert settings.endpoint == "https://x.test"


def test_environment_token_is_enough(served, monkeypatch):
    monkeypatch.setenv("REPLICATED_API_TOKEN", "env-token")
    result = runner.invoke(app, [])
    assert result.exit_code == 0, result.output
    assert served[0].api_token == "env-token"
    assert served[0].timeout_seconds == 30


def test_endpoint_flag_is_hidden():
    result = runner.invoke(app, ["--help"])
    assert "--api-token" in result.output
    assert "--endpoint" not in result.output


class TestDoctor:
    def test_without_token_skips_connectivity(self):
        result = runner.invoke(app, ["doctor", "run"])
        assert result.exit_code == 0, result.output
        assert "MISSING" in result.output
        assert "SKIPPED" in result.output

    def test_with_token_runs_probe(self, monkeypatch):
        async def fake_check(settings, **kwargs):
            return True, "3 application(s) visible"

        monkeypatch.setattr(doctor, "check_api", fake_check)
        result = runner.invoke(app, ["--api-token", "tok", "doctor", "run"])
        assert result.exit_code == 0, result.output
        assert "3 application(s) visible" in result.output
        assert "SKIPPED" not in result.output

    @pytest.mark.asyncio
    async def test_check_api_success(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"applications": [application_json()], "total_count": 1})
        )
        ok, detail = await doctor.check_api(make_settings(), transport=transport)
        assert ok
        assert detail == "1 application(s) visible"

    @pytest.mark.asyncio
    async def test_check_api_failure(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401))
        ok, detail = await doctor.check_api(make_settings(), transport=transport)
        assert not ok
        assert detail == "API error (status 401): Unauthorized"

    @pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
    def test_setup_token_writes_user_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        result = runner.invoke(app, ["doctor", "setup-token"], input="tok-123\n\n")

        assert result.exit_code == 0, result.output
        env_file = tmp_path / "cfg" / "replicated-mcp-server" / ".env"
        lines = env_file.read_text(encoding="utf-8").splitlines()
        assert "REPLICATED_API_TOKEN=tok-123" in lines
        assert "REPLICATED_ENDPOINT=https://api.replicated.com/vendor" in lines
