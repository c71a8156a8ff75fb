# src/venv_reconciler/core/environment/fingerprint.py
"""
Environment Fingerprint Provider — identidade do conjunto instalado.

O fingerprint é o SHA-256 da saída integral de "listar pacotes instalados,
somente locais" do backend. Ele representa a verdade sobre o que está
presente no ambiente, independente do que foi declarado.

Contrato:
    - `current_fingerprint()` retorna o digest, ou None quando indisponível
    - indisponível = ambiente inexistente ou falha da ferramenta
    - falha da ferramenta registra um warning FINGERPRINT_UNAVAILABLE
    - None significa "ignorar a verificação nesta passada", nunca
      "assumir limpo" nem "forçar reinstalação"
"""

from __future__ import annotations

from typing import Optional

from ..backend.base import PackageManagerBackend
from ..backend.runner import CommandFailedError
from ..context import ReconcileContext
from ..errors import fingerprint_unavailable
from ..fingerprint.hashing import hash_bytes
from .layout import VenvLayout


STEP_ID = "fingerprint"


class EnvironmentFingerprintProvider:
    def __init__(self, *, layout: VenvLayout, backend: PackageManagerBackend):
        self.layout = layout
        self.backend = backend

    def current_fingerprint(self, *, ctx: ReconcileContext) -> Optional[str]:
        if not self.layout.exists():
            return None

        try:
            output = self.backend.list_installed()
        except CommandFailedError as e:
            ctx.add_warning(
                step_id=STEP_ID,
                payload=fingerprint_unavailable(env_path=str(self.layout.path), reason=str(e)),
            )
            return None

        digest = hash_bytes(output)
        ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Fingerprint do ambiente: {digest[:8]}...")
        return digest
