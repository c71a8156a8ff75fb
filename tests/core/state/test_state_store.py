# tests/core/state/test_state_store.py
"""
Testes do State Store (registro `<env>/.requirements_state`).

Os testes asseguram que:
- registro ausente é tratado como {} ("nunca reconciliado")
- JSON malformado ou raiz não-objeto vira {} com warning STATE_CORRUPTION
- a escrita é legível (indentada) e substitui o registro por inteiro
- nenhum arquivo temporário sobra após a escrita
"""

import json

from venv_reconciler.core.errors import ErrorKind
from venv_reconciler.core.state.store import StateStore


def test_missing_record_is_empty_without_corruption_warning(venv_dir, ctx):
    store = StateStore(path=venv_dir / ".requirements_state")
    assert store.load(ctx=ctx) == {}
    assert ctx.warnings == []
    assert ctx.events[-1]["level"] == "WARNING"


def test_malformed_json_is_state_corruption(venv_dir, ctx):
    path = venv_dir / ".requirements_state"
    path.write_text("{not json", encoding="utf-8")

    assert StateStore(path=path).load(ctx=ctx) == {}
    assert [w.kind for w in ctx.warnings] == [ErrorKind.STATE_CORRUPTION]
    assert ctx.warnings[0].details["path"] == str(path)


def test_non_object_root_is_state_corruption(venv_dir, ctx):
    path = venv_dir / ".requirements_state"
    path.write_text("[1, 2]", encoding="utf-8")

    assert StateStore(path=path).load(ctx=ctx) == {}
    assert [w.kind for w in ctx.warnings] == [ErrorKind.STATE_CORRUPTION]


def test_save_then_load_round_trip(venv_dir, ctx):
    store = StateStore(path=venv_dir / ".requirements_state")
    state = {
        "individual_requirements": "abc",
        "individual_requirements_list": ["setuptools", "six==1.16.0"],
        "environment_fingerprint": "f1",
    }
    store.save(state, ctx=ctx)

    raw = (venv_dir / ".requirements_state").read_text(encoding="utf-8")
    assert raw == json.dumps(state, ensure_ascii=False, indent=2)
    assert store.load(ctx=ctx) == state


def test_save_replaces_record_wholesale(venv_dir):
    store = StateStore(path=venv_dir / ".requirements_state")
    store.save({"a": 1, "environment_fingerprint": "f1"})
    store.save({"b": 2})

    assert store.load() == {"b": 2}
    leftovers = [p.name for p in venv_dir.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []

