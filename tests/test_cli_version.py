import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main directly.


@pytest.fixture()
def run_module():
    # Ensure a clean import each time (run.py captures the TTY state at import)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    from station import __version__

    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert __version__ in out
    assert "Dark Station" in out


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "generate"
    assert ns.level == 1 and ns.seed is None


def test_generate_prints_summary_and_map(run_module, capsys):
    assert run_module.main(["generate", "--level", "2", "--seed", "12", "--map"]) == 0
    out = capsys.readouterr().out
    assert "Dark Station Deck" in out
    assert "Seed:" in out and "12" in out
    assert "S" in out and "#" in out


def test_generate_json_metrics(run_module, capsys):
    assert run_module.main(["generate", "--level", "3", "--seed", "7", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["level"] == 3 and data["seed"] == 7
    assert data["metrics"]["generators"] == 1


def test_invalid_level_returns_error_code(run_module, capsys):
    assert run_module.main(["generate", "--level", "0"]) == 2
    assert "level must be >= 1" in capsys.readouterr().err


def test_env_file_argument(monkeypatch, tmp_path, run_module, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("STATION_SEED=31337\n")
    monkeypatch.delenv("STATION_SEED", raising=False)
    assert run_module.main(["--env-file", str(env_file), "generate", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 31337
    monkeypatch.delenv("STATION_SEED", raising=False)
