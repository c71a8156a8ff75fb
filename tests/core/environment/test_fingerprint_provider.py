# tests/core/environment/test_fingerprint_provider.py
"""
Testes do Environment Fingerprint Provider.

Invariantes:
    - o fingerprint é o SHA-256 da saída integral de `pip freeze -l`
    - falha da ferramenta retorna None e registra FINGERPRINT_UNAVAILABLE
    - ambiente inexistente retorna None sem invocar a ferramenta
"""

import hashlib

from venv_reconciler.core.backend.pip import PipBackend
from venv_reconciler.core.environment.fingerprint import EnvironmentFingerprintProvider
from venv_reconciler.core.environment.layout import VenvLayout
from venv_reconciler.core.errors import ErrorKind


def _provider(path, runner):
    layout = VenvLayout(path)
    return EnvironmentFingerprintProvider(layout=layout, backend=PipBackend(layout=layout, runner=runner))


def test_fingerprint_hashes_freeze_output_verbatim(venv_dir, fake_runner, ctx):
    fake_runner.freeze_output = "six==1.16.0\nwheel==0.42.0\n"
    digest = _provider(venv_dir, fake_runner).current_fingerprint(ctx=ctx)

    assert digest == hashlib.sha256(b"six==1.16.0\nwheel==0.42.0\n").hexdigest()
    assert fake_runner.calls == [[str(venv_dir / "bin" / "pip"), "freeze", "-l"]]


def test_fingerprint_changes_with_installed_set(venv_dir, fake_runner, ctx):
    provider = _provider(venv_dir, fake_runner)
    first = provider.current_fingerprint(ctx=ctx)
    fake_runner.freeze_output += "requests==2.31.0\n"
    assert provider.current_fingerprint(ctx=ctx) != first


def test_tool_failure_is_unavailable(venv_dir, fake_runner, ctx):
    fake_runner.freeze_fails = True
    assert _provider(venv_dir, fake_runner).current_fingerprint(ctx=ctx) is None
    assert [w.kind for w in ctx.warnings] == [ErrorKind.FINGERPRINT_UNAVAILABLE]
    assert ctx.warnings[0].fatal is False


def test_missing_environment_is_unavailable_without_query(tmp_path, fake_runner, ctx):
    assert _provider(tmp_path / "absent", fake_runner).current_fingerprint(ctx=ctx) is None
    assert fake_runner.calls == []
    assert ctx.warnings == []
