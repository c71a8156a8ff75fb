# tests/conftest.py
"""
Fixtures compartilhados para testes do venv_reconciler.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório de ambiente virtual com layout válido (sem venv real)
- um CommandRunner fake que simula o pip do ambiente
- uma fábrica de Reconciler com colaboradores injetados
- um ReconcileContext isolado

Decisões arquiteturais:
    - Nenhum teste executa pip ou `python -m venv` reais
    - O runner fake é injetado explicitamente (sem monkeypatch global)
    - O layout do ambiente é materializado em `tmp_path`

Invariantes:
    - Cada teste recebe um ambiente isolado
    - O fingerprint do ambiente é controlado por `fake_runner.freeze_output`

Limites explícitos:
    - Não valida integração com pip real
    - Não substitui testes manuais de bootstrap
"""

import pytest

from tests.fixtures.runner import FakeRunner, make_venv_layout


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def venv_dir(tmp_path):
    """Diretório de ambiente com bin/python, bin/pip e bin/activate válidos."""
    return make_venv_layout(tmp_path / "venv")


@pytest.fixture
def requirements_file(tmp_path):
    """Fábrica de arquivos de requirements absolutos em `tmp_path/reqs`."""
    reqs_dir = tmp_path / "reqs"
    reqs_dir.mkdir()

    def _make(name: str, content: str):
        path = reqs_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def make_reconciler(venv_dir, fake_runner):
    """
    Fábrica de Reconciler apontando para `venv_dir` com o runner fake.

    Aceita os mesmos campos de `VenvDeclaration` (exceto `path`, que
    pode ser sobrescrito).
    """
    from venv_reconciler.core.config.declaration import VenvDeclaration
    from venv_reconciler.core.reconcile.reconciler import Reconciler

    def _make(**fields):
        fields.setdefault("path", str(venv_dir))
        for key in ("requirements", "requirements_files", "pip_args"):
            if key in fields:
                fields[key] = tuple(str(v) for v in fields[key])
        return Reconciler(VenvDeclaration(**fields), runner=fake_runner)

    return _make


@pytest.fixture
def ctx(venv_dir):
    from venv_reconciler.core.context import ReconcileContext

    return ReconcileContext(env_path=str(venv_dir), pass_id="pass-test-001")
