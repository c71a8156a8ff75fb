# src/venv_reconciler/core/backend/runner.py
"""
Execução de processos — colaborador de baixo nível.

Contrato:
    - `run(argv)` executa o comando de forma síncrona e bloqueante
    - stdout e stderr são combinados e retornados como texto
    - código de saída diferente de zero levanta `CommandFailedError`

Timeout e cancelamento são responsabilidade exclusiva desta camada;
o core não os implementa.
"""

from __future__ import annotations

import subprocess
from typing import List, Optional, Protocol, Sequence, runtime_checkable


class CommandFailedError(Exception):
    """Comando terminou com código de saída diferente de zero (ou não pôde ser iniciado)."""

    def __init__(self, argv: Sequence[str], returncode: Optional[int], output: str = ""):
        self.argv: List[str] = list(argv)
        self.returncode = returncode
        self.output = output
        super().__init__(f"Comando falhou ({returncode}): {' '.join(self.argv)}")


@runtime_checkable
class CommandRunner(Protocol):
    def run(self, argv: Sequence[str]) -> str:
        ...


class SubprocessRunner:
    """CommandRunner baseado em `subprocess.run`."""

    def __init__(self, *, timeout: Optional[float] = None, env: Optional[dict] = None):
        self.timeout = timeout
        self.env = env

    def run(self, argv: Sequence[str]) -> str:
        try:
            completed = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                env=self.env,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CommandFailedError(argv, None, str(e)) from e

        if completed.returncode != 0:
            raise CommandFailedError(argv, completed.returncode, completed.stdout or "")

        return completed.stdout or ""
