# tests/core/reconcile/test_changelog.py
"""
Testes do Change Logger.

O changelog é apenas observabilidade: os testes validam o diff legível
(adicionados, removidos, versões alteradas) e as mensagens emitidas no
contexto, nunca decisões de reinstalação.
"""

from venv_reconciler.core.reconcile.changelog import ChangeLogger, collect_changes, diff_requirement_lists
from venv_reconciler.core.reconcile.drift import DriftReason, DriftReport, SyncState


def test_diff_added_removed_and_version_changed():
    diff = diff_requirement_lists(
        "Requirements individuais",
        ["flask==2.2.2", "httpx==1.0.0", "wheel"],
        ["flask==2.2.2", "httpx==0.9.0", "attrs"],
    )
    assert diff.added == ("wheel",)
    assert diff.removed == ("attrs",)
    assert diff.changed == (("httpx==0.9.0", "httpx==1.0.0"),)
    assert diff.lines() == [
        "      + wheel",
        "      - attrs",
        "      ~ httpx==0.9.0 => httpx==1.0.0",
    ]


def test_version_change_matches_case_insensitive_names():
    diff = diff_requirement_lists("x", ["Django>=4.2"], ["django==3.2"])
    assert diff.changed == (("django==3.2", "Django>=4.2"),)
    assert diff.added == ()
    assert diff.removed == ()


def test_ambiguous_pairing_takes_first_removed():
    diff = diff_requirement_lists("x", ["pkg==3"], ["pkg==1", "pkg==2"])
    assert diff.changed == (("pkg==1", "pkg==3"),)
    assert diff.removed == ("pkg==2",)


def test_diff_of_identical_lists_is_empty():
    assert diff_requirement_lists("x", ["a", "b"], ["b", "a"]).is_empty


def test_collect_changes_for_files_and_inline():
    expected = {
        "file:/r.txt": "h2",
        "file_list:/r.txt": ["six==1.17.0"],
        "file:/new.txt": "n1",
        "file_list:/new.txt": ["attrs"],
        "individual_requirements": "i2",
        "individual_requirements_list": ["wheel"],
    }
    actual = {
        "file:/r.txt": "h1",
        "file_list:/r.txt": ["six==1.16.0"],
        "individual_requirements": "i1",
        "individual_requirements_list": [],
    }

    changes = collect_changes(expected, actual)

    labels = [label for label, _ in changes]
    assert labels == [
        "Arquivo de requirements: /r.txt",
        "Arquivo de requirements: /new.txt",
        "Requirements individuais",
    ]
    assert changes[0][1].changed == (("six==1.16.0", "six==1.17.0"),)
    assert changes[1][1] is None
    assert changes[2][1].added == ("wheel",)


def test_never_synced_logs_initial_setup_only(ctx):
    ChangeLogger().log_changes({"individual_requirements": "h"}, {}, DriftReport(state=SyncState.NEVER_SYNCED), ctx=ctx)
    assert ctx.messages() == [f"Ambiente {ctx.env_path}: instalando requirements (setup inicial)"]


def test_comment_only_file_edit_is_reported_without_entries(ctx):
    expected = {"file:/r.txt": "h2", "file_list:/r.txt": ["six"]}
    actual = {"file:/r.txt": "h1", "file_list:/r.txt": ["six"]}
    report = DriftReport(state=SyncState.DRIFTED, reason=DriftReason.SPEC_CHANGED, changed_keys=("file:/r.txt",))

    ChangeLogger().log_changes(expected, actual, report, ctx=ctx)

    assert ctx.messages()[-1] == "  - Arquivo de requirements: /r.txt alterado (sem mudança de especificadores)"


def test_external_modification_is_reported(ctx):
    state = {"individual_requirements": "h", "individual_requirements_list": ["six"]}
    report = DriftReport(
        state=SyncState.DRIFTED,
        reason=DriftReason.EXTERNALLY_MODIFIED,
        persisted_fingerprint="f1",
        current_fingerprint="f2",
    )

    ChangeLogger().log_changes(state, dict(state, environment_fingerprint="f1"), report, ctx=ctx)

    assert ctx.messages() == [
        f"Ambiente {ctx.env_path}: mudanças detectadas - reinstalando requirements",
        "  - Pacotes instalados modificados externamente",
    ]


def test_inline_diff_lines_are_logged(ctx):
    expected = {"individual_requirements": "h2", "individual_requirements_list": ["setuptools", "six==1.16.0", "wheel"]}
    actual = {"individual_requirements": "h1", "individual_requirements_list": ["setuptools", "six==1.16.0"]}
    report = DriftReport(state=SyncState.DRIFTED, reason=DriftReason.SPEC_CHANGED)

    ChangeLogger().log_changes(expected, actual, report, ctx=ctx)

    assert ctx.messages()[1:] == ["  - Requirements individuais alterado:", "      + wheel"]
