# src/venv_reconciler/core/reconcile/drift.py
"""
Drift Detector — classificação do ambiente em uma passada.

Estados (v1):
    - NEVER_SYNCED → não existe ActualState persistido (ou ele foi descartado)
    - IN_SYNC      → toda chave esperada bate e o fingerprint não divergiu
    - DRIFTED      → com motivo SPEC_CHANGED ou EXTERNALLY_MODIFIED

Procedimento:
    1. ActualState vazio → NEVER_SYNCED
    2. qualquer chave do ExpectedState diferente no ActualState → SPEC_CHANGED
    3. sem divergência e com `environment_fingerprint` persistido, consulta o
       fingerprint atual: diferente → EXTERNALLY_MODIFIED; indisponível → ignora
    4. caso contrário → IN_SYNC

Chaves presentes apenas no ActualState (ex.: arquivo removido da
declaração) não são comparadas.

O fingerprint só é consultado quando nenhuma chave divergiu, de modo que
uma passada com SPEC_CHANGED não executa a listagem de pacotes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..state.expected import ENVIRONMENT_FINGERPRINT_KEY


class SyncState(str, Enum):
    NEVER_SYNCED = "never_synced"
    IN_SYNC = "in_sync"
    DRIFTED = "drifted"


class DriftReason(str, Enum):
    SPEC_CHANGED = "spec_changed"
    EXTERNALLY_MODIFIED = "externally_modified"


@dataclass(frozen=True)
class DriftReport:
    """
    Resultado imutável da classificação de uma passada.

    Campos:
        - state: estado classificado
        - reason: motivo do drift (apenas quando state == DRIFTED)
        - changed_keys: chaves do ExpectedState que divergiram, na ordem do estado esperado
        - persisted_fingerprint: fingerprint registrado na última instalação
        - current_fingerprint: fingerprint consultado nesta passada (None se não consultado/indisponível)
    """

    state: SyncState
    reason: Optional[DriftReason] = None
    changed_keys: Tuple[str, ...] = ()
    persisted_fingerprint: Optional[str] = None
    current_fingerprint: Optional[str] = None

    @property
    def needs_install(self) -> bool:
        return self.state is not SyncState.IN_SYNC

    @property
    def label(self) -> str:
        if self.reason is None:
            return self.state.value
        return f"{self.state.value}({self.reason.value})"


def changed_keys(expected: Dict[str, Any], actual: Dict[str, Any]) -> Tuple[str, ...]:
    return tuple(key for key, value in expected.items() if actual.get(key) != value)


def detect_drift(
    expected: Dict[str, Any],
    actual: Dict[str, Any],
    *,
    current_fingerprint: Callable[[], Optional[str]],
) -> DriftReport:
    """
    Classifica o ambiente comparando ExpectedState e ActualState.

    Args:
        expected: Estado esperado da passada corrente.
        actual: Último estado persistido ({} quando ausente ou corrompido).
        current_fingerprint: Consulta tardia do fingerprint do ambiente;
            só é chamada quando necessária.

    Returns:
        DriftReport: Classificação da passada.
    """
    if not actual:
        return DriftReport(state=SyncState.NEVER_SYNCED)

    persisted = actual.get(ENVIRONMENT_FINGERPRINT_KEY)

    diff = changed_keys(expected, actual)
    if diff:
        return DriftReport(
            state=SyncState.DRIFTED,
            reason=DriftReason.SPEC_CHANGED,
            changed_keys=diff,
            persisted_fingerprint=persisted,
        )

    if persisted:
        current = current_fingerprint()
        if current is not None and current != persisted:
            return DriftReport(
                state=SyncState.DRIFTED,
                reason=DriftReason.EXTERNALLY_MODIFIED,
                persisted_fingerprint=persisted,
                current_fingerprint=current,
            )
        return DriftReport(
            state=SyncState.IN_SYNC,
            persisted_fingerprint=persisted,
            current_fingerprint=current,
        )

    return DriftReport(state=SyncState.IN_SYNC)
