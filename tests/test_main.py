"""Tests for the CLI entry point and its exit codes."""

import json
import logging
from unittest.mock import patch

import pytest

import eggsetup
from constants import ExitCodes
from repository.models import RemoteRepositoryError
from runner import CommandError
from scaffold import ScaffoldError
from versioning.models import ResolutionResult

OFFLINE = ((0, {}, None), "connection error: offline")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    monkeypatch.delenv("EGGS_REGISTRY_URL", raising=False)
    monkeypatch.delenv("EGGS_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _run_main(argv):
    with pytest.raises(SystemExit) as exc_info:
        eggsetup.main(argv)
    return exc_info.value.code


class TestResolveOnly:
    """Test --resolve-only output."""

    @patch('registry.npm.get_json', return_value=OFFLINE)
    def test_prints_json(self, _mock_get, capsys):
        code = _run_main(["--resolve-only", "-v", "^17.0.0", "-p", "rxjs", "-p", "primeng@17.2.0"])

        assert code == ExitCodes.SUCCESS.value
        payload = json.loads(capsys.readouterr().out)
        assert payload["packages"] == ["@schematics/angular@^17.0.0", "rxjs@latest", "primeng@17.2.0"]
        assert payload["forceInstall"] is False

    @patch('registry.npm.get_json', return_value=OFFLINE)
    def test_exports_json(self, _mock_get, tmp_path):
        out = tmp_path / "resolution.json"
        code = _run_main(["--resolve-only", "-p", "rxjs", "-o", str(out)])

        assert code == ExitCodes.SUCCESS.value
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["packages"][0] == "@schematics/angular@latest"

    @patch('registry.npm.get_json', side_effect=KeyboardInterrupt)
    def test_interrupt_exits_130(self, _mock_get):
        code = _run_main(["--resolve-only", "-p", "rxjs"])
        assert code == ExitCodes.INTERRUPTED.value

    def test_export_failure_is_file_error(self, tmp_path):
        resolution = ResolutionResult(generator=None, resolved=(), conflicts={})
        with pytest.raises(SystemExit) as exc_info:
            eggsetup.export_json(resolution, str(tmp_path / "missing" / "out.json"))
        assert exc_info.value.code == ExitCodes.FILE_ERROR.value


class TestMain:
    """Test scaffolding runs and error mapping."""

    @patch('registry.npm.get_json', return_value=OFFLINE)
    def test_dry_run_succeeds(self, _mock_get, tmp_path):
        code = _run_main(["-n", "shop", "-d", str(tmp_path), "--dry-run", "--create-remote"])

        assert code == ExitCodes.SUCCESS.value
        assert not (tmp_path / "shop").exists()

    def test_config_error(self, tmp_path):
        code = _run_main(["-c", str(tmp_path / "missing.yml"), "--resolve-only"])
        assert code == ExitCodes.FILE_ERROR.value

    @pytest.mark.parametrize("error,expected", [
        (ScaffoldError("Destination already exists: /x"), ExitCodes.FILE_ERROR),
        (CommandError("npm", ["install"], 1), ExitCodes.COMMAND_FAILED),
        (RemoteRepositoryError("github", "HTTP 401"), ExitCodes.CONNECTION_ERROR),
        (KeyboardInterrupt(), ExitCodes.INTERRUPTED),
    ])
    def test_error_mapping(self, error, expected, tmp_path):
        with patch('eggsetup.Scaffolder') as mock_scaffolder:
            mock_scaffolder.return_value.run.side_effect = error
            code = _run_main(["-n", "shop", "-d", str(tmp_path)])
        assert code == expected.value
