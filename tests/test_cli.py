# tests/test_cli.py
"""
Testes da CLI `venv-reconcile` (runner fake injetado).
"""

import json

import yaml

from venv_reconciler.cli import EXIT_FATAL, EXIT_OK, EXIT_OUT_OF_SYNC, main


def _write_config(tmp_path, **fields):
    path = tmp_path / "venv.yaml"
    path.write_text(yaml.safe_dump(fields), encoding="utf-8")
    return str(path)


def test_sync_creates_environment_and_prints_result(tmp_path, fake_runner, capsys):
    target = tmp_path / "env"
    config = _write_config(tmp_path, path=str(target), requirements=["six==1.16.0"])

    code = main(["sync", "--config", config, "--json"], runner=fake_runner)

    assert code == EXIT_OK
    out = json.loads(capsys.readouterr().out)
    assert out["state"] == "never_synced"
    assert out["installed_units"] == [str(target / ".individual_requirements.txt")]
    assert (target / ".requirements_state").exists()


def test_status_reports_out_of_sync_then_in_sync(tmp_path, venv_dir, fake_runner, capsys):
    config = _write_config(tmp_path, path=str(venv_dir), requirements=["six"])

    assert main(["status", "--config", config], runner=fake_runner) == EXIT_OUT_OF_SYNC
    assert capsys.readouterr().out.strip() == "out-of-sync"
    assert fake_runner.install_calls() == []

    assert main(["sync", "--config", config], runner=fake_runner) == EXIT_OK
    capsys.readouterr()

    assert main(["status", "--config", config], runner=fake_runner) == EXIT_OK
    assert capsys.readouterr().out.strip() == "in-sync"


def test_local_override_is_merged(tmp_path, venv_dir, fake_runner, capsys):
    config = _write_config(tmp_path, path=str(venv_dir), requirements=["six"])
    local = tmp_path / "venv.local.yaml"
    local.write_text(yaml.safe_dump({"requirements": ["six", "wheel"]}), encoding="utf-8")

    assert main(["sync", "--config", config, "--local", str(local)], runner=fake_runner) == EXIT_OK
    assert fake_runner.installed_contents == ["six\nwheel\n"]


def test_destroy_removes_environment(tmp_path, venv_dir, fake_runner):
    config = _write_config(tmp_path, path=str(venv_dir))

    assert main(["destroy", "--config", config], runner=fake_runner) == EXIT_OK
    assert not venv_dir.exists()


def test_missing_requirements_file_exits_with_payload(tmp_path, venv_dir, fake_runner, capsys):
    config = _write_config(
        tmp_path,
        path=str(venv_dir),
        requirements_files=[str(tmp_path / "missing.txt")],
    )

    code = main(["sync", "--config", config], runner=fake_runner)

    assert code == EXIT_FATAL
    err = capsys.readouterr().err
    assert '"kind": "CONFIGURATION_ERROR"' in err
    assert fake_runner.install_calls() == []


def test_invalid_declaration_exits_with_payload(tmp_path, fake_runner, capsys):
    config = _write_config(tmp_path, path="relative/env")

    code = main(["sync", "--config", config], runner=fake_runner)

    assert code == EXIT_FATAL
    assert '"kind": "DECLARATION_INVALID"' in capsys.readouterr().err
    assert fake_runner.calls == []


def test_malformed_yaml_declaration_exits_with_payload(tmp_path, fake_runner, capsys):
    config = tmp_path / "venv.yaml"
    config.write_text("requirements: [six\n", encoding="utf-8")

    code = main(["status", "--config", str(config)], runner=fake_runner)

    assert code == EXIT_FATAL
    err = capsys.readouterr().err
    assert '"kind": "DECLARATION_INVALID"' in err
    assert '"error": "MalformedDeclarationError"' in err
    assert fake_runner.calls == []


def test_malformed_json_declaration_exits_with_payload(tmp_path, fake_runner, capsys):
    config = tmp_path / "venv.json"
    config.write_text("{not json", encoding="utf-8")

    assert main(["sync", "--config", str(config)], runner=fake_runner) == EXIT_FATAL
    assert '"kind": "DECLARATION_INVALID"' in capsys.readouterr().err
