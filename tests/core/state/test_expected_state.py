# tests/core/state/test_expected_state.py
"""
Testes da construção do ExpectedState.

Invariantes:
    - chaves `file:`/`file_list:` por arquivo declarado
    - chaves inline só existem quando a lista inline não é vazia
    - o estado é função pura da declaração
    - arquivo declarado inexistente ou diretório → ConfigurationError
"""

import pytest

from venv_reconciler.core.config.declaration import VenvDeclaration
from venv_reconciler.core.errors import ErrorKind
from venv_reconciler.core.exceptions import ConfigurationError
from venv_reconciler.core.fingerprint.hashing import file_hash, list_hash
from venv_reconciler.core.state.expected import build_expected_state


def test_expected_state_keys(venv_dir, requirements_file, ctx):
    base = requirements_file("base.txt", "six==1.16.0\n# comment\nattrs\n")
    decl = VenvDeclaration(
        path=str(venv_dir),
        requirements=("wheel", "setuptools"),
        requirements_files=(str(base),),
    )

    state = build_expected_state(decl, ctx=ctx)

    assert state == {
        f"file:{base}": file_hash(base),
        f"file_list:{base}": ["attrs", "six==1.16.0"],
        "individual_requirements": list_hash(["setuptools", "wheel"]),
        "individual_requirements_list": ["setuptools", "wheel"],
    }


def test_expected_state_without_inline(venv_dir, requirements_file, ctx):
    base = requirements_file("base.txt", "six\n")
    state = build_expected_state(VenvDeclaration(path=str(venv_dir), requirements_files=(str(base),)), ctx=ctx)
    assert "individual_requirements" not in state
    assert "individual_requirements_list" not in state


def test_expected_state_is_pure(venv_dir, requirements_file, ctx):
    base = requirements_file("base.txt", "six\n")
    decl = VenvDeclaration(path=str(venv_dir), requirements=("b", "a"), requirements_files=(str(base),))
    assert build_expected_state(decl, ctx=ctx) == build_expected_state(decl, ctx=ctx)


def test_inline_order_does_not_matter(venv_dir, ctx):
    a = build_expected_state(VenvDeclaration(path=str(venv_dir), requirements=("x", "y")), ctx=ctx)
    b = build_expected_state(VenvDeclaration(path=str(venv_dir), requirements=("y", "x")), ctx=ctx)
    assert a == b


def test_missing_file_raises_configuration_error(venv_dir, requirements_file, ctx, tmp_path):
    present = requirements_file("base.txt", "six\n")
    missing = tmp_path / "reqs" / "missing.txt"
    decl = VenvDeclaration(path=str(venv_dir), requirements_files=(str(present), str(missing)))

    with pytest.raises(ConfigurationError) as exc:
        build_expected_state(decl, ctx=ctx)

    assert exc.value.kind is ErrorKind.CONFIGURATION_ERROR
    assert exc.value.details == {"path": str(missing), "reason": "missing"}


def test_directory_declared_as_requirements_file_raises_configuration_error(venv_dir, ctx, tmp_path):
    directory = tmp_path / "reqs.d"
    directory.mkdir()
    decl = VenvDeclaration(path=str(venv_dir), requirements_files=(str(directory),))

    with pytest.raises(ConfigurationError) as exc:
        build_expected_state(decl, ctx=ctx)

    assert exc.value.details == {"path": str(directory), "reason": "not_a_file"}
