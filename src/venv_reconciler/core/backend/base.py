# src/venv_reconciler/core/backend/base.py
"""
Protocolo de backend do gerenciador de pacotes.

Um backend encapsula as duas capacidades de que o core precisa:
    - instalar uma unidade de requirements (arquivo)
    - listar os pacotes instalados localmente (base do fingerprint)

Hoje existe uma única implementação (`PipBackend`); outros gerenciadores
podem ser adicionados atrás do mesmo protocolo.

Ambos os métodos levantam `CommandFailedError` em caso de falha; a
classificação (fatal vs. consultivo) é decidida pelo chamador.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class PackageManagerBackend(Protocol):
    name: str

    def install_requirements_file(self, requirements_file: str, extra_args: Sequence[str] = ()) -> str:
        ...

    def list_installed(self) -> str:
        ...

    def upgrade_self(self) -> str:
        ...
