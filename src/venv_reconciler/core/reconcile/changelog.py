# src/venv_reconciler/core/reconcile/changelog.py
"""
Change Logger — diff legível entre listas de requirements.

Usado apenas para observabilidade: o resultado nunca participa da decisão
de reinstalação.

Política de diff (v1):
    - adicionados = entradas só na lista esperada
    - removidos   = entradas só na lista persistida
    - um adicionado e um removido com o mesmo nome de pacote viram uma única
      entrada "versão alterada" (antigo → novo)
    - havendo mais de um removido com o mesmo nome, o primeiro em ordem
      lexicográfica é pareado; cada removido é pareado no máximo uma vez

Formato das linhas:
    + <novo>
    - <removido>
    ~ <antigo> => <novo>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..context import ReconcileContext
from ..requirements.parser import package_name
from ..state.expected import (
    FILE_KEY_PREFIX,
    INDIVIDUAL_REQUIREMENTS_KEY,
    INDIVIDUAL_REQUIREMENTS_LIST_KEY,
    file_list_key,
)
from .drift import DriftReason, DriftReport, SyncState


STEP_ID = "changelog"


@dataclass(frozen=True)
class RequirementChanges:
    label: str
    added: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = ()
    changed: Tuple[Tuple[str, str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def lines(self) -> List[str]:
        out = [f"      + {req}" for req in self.added]
        out += [f"      - {req}" for req in self.removed]
        out += [f"      ~ {old} => {new}" for old, new in self.changed]
        return out


def diff_requirement_lists(
    label: str,
    expected_list: Optional[Sequence[str]],
    actual_list: Optional[Sequence[str]],
) -> RequirementChanges:
    expected_set = set(expected_list or [])
    actual_set = set(actual_list or [])

    added = sorted(expected_set - actual_set)
    removed = sorted(actual_set - expected_set)

    changed: List[Tuple[str, str]] = []
    for new_req in list(added):
        new_pkg = package_name(new_req)
        for old_req in removed:
            if package_name(old_req) == new_pkg:
                changed.append((old_req, new_req))
                added.remove(new_req)
                removed.remove(old_req)
                break

    return RequirementChanges(
        label=label,
        added=tuple(added),
        removed=tuple(removed),
        changed=tuple(changed),
    )


def collect_changes(expected: Dict[str, Any], actual: Dict[str, Any]) -> List[Tuple[str, Optional[RequirementChanges]]]:
    """
    Lista as unidades alteradas, na ordem do estado esperado.

    Returns:
        Lista de (descrição, diff). O diff é None quando não há lista
        persistida para comparar (ex.: arquivo recém-declarado).
    """
    changes: List[Tuple[str, Optional[RequirementChanges]]] = []

    for key, expected_value in expected.items():
        if actual.get(key) == expected_value:
            continue

        if key.startswith(FILE_KEY_PREFIX):
            file_path = key[len(FILE_KEY_PREFIX):]
            list_key = file_list_key(file_path)
            label = f"Arquivo de requirements: {file_path}"
            if expected.get(list_key) is not None and actual.get(list_key) is not None:
                changes.append((label, diff_requirement_lists(label, expected[list_key], actual[list_key])))
            else:
                changes.append((label, None))

        elif key == INDIVIDUAL_REQUIREMENTS_KEY:
            label = "Requirements individuais"
            changes.append(
                (
                    label,
                    diff_requirement_lists(
                        label,
                        expected.get(INDIVIDUAL_REQUIREMENTS_LIST_KEY),
                        actual.get(INDIVIDUAL_REQUIREMENTS_LIST_KEY),
                    ),
                )
            )

    return changes


class ChangeLogger:
    def log_changes(
        self,
        expected: Dict[str, Any],
        actual: Dict[str, Any],
        report: DriftReport,
        *,
        ctx: ReconcileContext,
    ) -> None:
        env_path = ctx.env_path

        if report.state is SyncState.NEVER_SYNCED:
            ctx.log(step_id=STEP_ID, level="INFO", message=f"Ambiente {env_path}: instalando requirements (setup inicial)")
            return

        ctx.log(step_id=STEP_ID, level="INFO", message=f"Ambiente {env_path}: mudanças detectadas - reinstalando requirements")

        for label, diff in collect_changes(expected, actual):
            if diff is None:
                ctx.log(step_id=STEP_ID, level="INFO", message=f"  - {label} alterado")
                continue
            if diff.is_empty:
                ctx.log(step_id=STEP_ID, level="INFO", message=f"  - {label} alterado (sem mudança de especificadores)")
                continue
            ctx.log(step_id=STEP_ID, level="INFO", message=f"  - {label} alterado:")
            for line in diff.lines():
                ctx.log(step_id=STEP_ID, level="INFO", message=line)

        if report.reason is DriftReason.EXTERNALLY_MODIFIED:
            ctx.log(step_id=STEP_ID, level="INFO", message="  - Pacotes instalados modificados externamente")
