# src/venv_reconciler/core/state/store.py
"""
State Store — persistência do último estado reconciliado (ActualState).

O registro é um objeto JSON em `<env>/.requirements_state`, escrito de
forma legível (indentação). Ele é o único registro durável do core.

Decisões arquiteturais:
    - A escrita substitui o registro por inteiro (arquivo temporário +
      os.replace), nunca atualiza parcialmente
    - Registro ausente → {} ("nunca reconciliado"), log de warning sem payload
    - Registro ilegível ou JSON malformado → {} + warning STATE_CORRUPTION
    - Raiz JSON que não é objeto é tratada como malformada
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ..context import ReconcileContext
from ..errors import state_corrupted


STEP_LOAD = "state.load"
STEP_SAVE = "state.save"


class StateStore:
    """Store canônica do registro de estado de um ambiente."""

    def __init__(self, *, path: Path):
        self.path = Path(path)

    def load(self, *, ctx: Optional[ReconcileContext] = None) -> Dict[str, Any]:
        if not self.path.exists():
            if ctx is not None:
                ctx.log(
                    step_id=STEP_LOAD,
                    level="WARNING",
                    message=f"Registro de estado ausente em {self.path}; ambiente nunca reconciliado",
                )
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            self._corrupted(ctx, reason=str(e))
            return {}

        if not isinstance(data, dict):
            self._corrupted(ctx, reason=f"raiz JSON deve ser objeto, recebido: {type(data).__name__}")
            return {}

        if ctx is not None:
            ctx.log(step_id=STEP_LOAD, level="DEBUG", message=f"Estado carregado: {data!r}")
        return data

    def save(self, state: Dict[str, Any], *, ctx: Optional[ReconcileContext] = None) -> None:
        """
        Persiste o registro inteiro de forma atômica.

        Raises:
            OSError: Em caso de falha de escrita.
            TypeError: Se o estado não for serializável em JSON.
        """
        content = json.dumps(state, ensure_ascii=False, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f"{self.path.name}.", suffix=".tmp", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        if ctx is not None:
            ctx.log(step_id=STEP_SAVE, level="DEBUG", message=f"Estado salvo: {state!r}")

    def _corrupted(self, ctx: Optional[ReconcileContext], *, reason: str) -> None:
        if ctx is not None:
            ctx.add_warning(step_id=STEP_LOAD, payload=state_corrupted(path=str(self.path), reason=reason))
