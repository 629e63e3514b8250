import importlib.util
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "seed_unified_data.py"


@pytest.fixture
def seed():
    spec = importlib.util.spec_from_file_location("seed_unified_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_script_runs_from_checkout(tmp_path):
    env = {k: v for k, v in os.environ.items() if k != "PYTHONPATH"}
    result = subprocess.run(
        [sys.executable, str(SCRIPT), "--dry-run"],
        cwd=tmp_path, env=env, capture_output=True, text=True, timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert "11 documents would be uploaded." in result.stdout


def test_init_env_writes_template_once(seed, tmp_path, capsys):
    env_path = tmp_path / ".env"
    assert seed.main(["--init-env", "--env-path", str(env_path)]) == 0
    assert "FIREBASE_API_KEY=" in env_path.read_text(encoding="utf-8")

    env_path.write_text("FIREBASE_API_KEY=mine\n", encoding="utf-8")
    assert seed.main(["--init-env", "--env-path", str(env_path)]) == 0
    assert env_path.read_text(encoding="utf-8") == "FIREBASE_API_KEY=mine\n"
    assert "already exists" in capsys.readouterr().out


def test_dry_run_lists_bundled_samples(seed, capsys):
    assert seed.main(["--dry-run"]) == 0
    out = capsys.readouterr().out
    assert "EQ001" in out
    assert "11 documents would be uploaded." in out


def test_dry_run_from_json(seed, tmp_path, capsys):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps([{"TradeID": "Z1", "TradeStatus": "Booked"}, "junk"]), encoding="utf-8")
    assert seed.main(["--dry-run", "--json", str(path)]) == 0
    assert "1 documents would be uploaded." in capsys.readouterr().out


def test_bad_json_file(seed, tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps({"TradeID": "Z1"}), encoding="utf-8")
    assert seed.main(["--json", str(path)]) == 1


def test_unconfigured_upload_fails(seed, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FIREBASE_API_KEY", raising=False)
    monkeypatch.delenv("FIREBASE_PROJECT_ID", raising=False)
    assert seed.main([]) == 1
