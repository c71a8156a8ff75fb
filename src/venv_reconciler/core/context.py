# src/venv_reconciler/core/context.py
"""
ReconcileContext — contexto canônico de uma passada de reconciliação.

O ReconcileContext é o ponto central de observabilidade de uma passada:
- registro de logs estruturados (eventos)
- coleta de sinais consultivos não fatais (ErrorPayload)

Cada evento também é encaminhado ao logger `venv_reconciler`, de modo que
a saída legível (changelog, progresso de instalação) chega ao operador
pelo mecanismo padrão de logging do Python, sem que o core dependa de
handlers específicos.

Princípios fundamentais:
- Isolamento por passada (cada reconcile() cria seu próprio contexto)
- Logs são eventos estruturados, não strings livres
- Warnings nunca interrompem a passada
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from .errors import ErrorPayload


LOGGER_NAME = "venv_reconciler"

logger = logging.getLogger(LOGGER_NAME)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ReconcileContext:
    """
    Contexto de execução de uma passada de reconciliação.

    Campos canônicos:
    - env_path: diretório do ambiente alvo
    - pass_id: identificador único da passada
    - started_at: timestamp UTC de criação do contexto
    - events: log estruturado de eventos
    - warnings: payloads consultivos (STATE_CORRUPTION, FINGERPRINT_UNAVAILABLE)
    """

    env_path: str
    pass_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    started_at: str = field(default_factory=_utc_now_iso)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[ErrorPayload] = field(default_factory=list)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "pass_id": self.pass_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": _utc_now_iso(),
        }
        event.update(extra)
        self.events.append(event)

        logger.log(getattr(logging, level.upper(), logging.INFO), "%s", message)

    def add_warning(self, *, step_id: str, payload: ErrorPayload) -> None:
        self.warnings.append(payload)
        self.log(step_id=step_id, level="WARNING", message=payload.message, kind=payload.kind.value)

    def messages(self, level: str | None = None) -> List[str]:
        """Mensagens registradas, opcionalmente filtradas por nível."""
        return [e["message"] for e in self.events if level is None or e["level"] == level]
