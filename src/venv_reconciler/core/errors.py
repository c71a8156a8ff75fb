"""
venv_reconciler — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do venv_reconciler.

Erros são classificados por um `ErrorKind` estável, e nunca por
correspondência de texto de mensagem. Cada erro pode ser representado
como um payload serializável, que é:
- explícito
- serializável
- rastreável
- acionável

Taxonomia (v1):
- CONFIGURATION_ERROR      → fatal, arquivo de requirements declarado ausente
- INSTALL_ERROR            → fatal, instalação de uma unidade falhou
- STATE_CORRUPTION         → consultivo, registro de estado ilegível
- FINGERPRINT_UNAVAILABLE  → consultivo, consulta de pacotes instalados falhou
- BOOTSTRAP_ERROR          → fatal, criação do ambiente falhou
- DECLARATION_INVALID      → fatal, declaração estruturalmente inválida
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Código estável de erro (valor textual usado em payloads e logs)."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INSTALL_ERROR = "INSTALL_ERROR"
    STATE_CORRUPTION = "STATE_CORRUPTION"
    FINGERPRINT_UNAVAILABLE = "FINGERPRINT_UNAVAILABLE"
    BOOTSTRAP_ERROR = "BOOTSTRAP_ERROR"
    DECLARATION_INVALID = "DECLARATION_INVALID"

    @property
    def fatal(self) -> bool:
        return self not in _ADVISORY_KINDS


_ADVISORY_KINDS = frozenset({ErrorKind.STATE_CORRUPTION, ErrorKind.FINGERPRINT_UNAVAILABLE})


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do venv_reconciler.

    Campos:
    - kind: código estável do erro (ErrorKind)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    kind: ErrorKind
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    @property
    def fatal(self) -> bool:
        return self.kind.fatal

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["fatal"] = self.fatal
        return data


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def requirements_file_missing(
    *,
    path: str,
    hint: str = "Crie o arquivo de requirements declarado ou remova-o da declaração antes de reexecutar.",
) -> ErrorPayload:
    return ErrorPayload(
        kind=ErrorKind.CONFIGURATION_ERROR,
        message=f"Arquivo de requirements não existe: {path}",
        details={"path": path, "reason": "missing"},
        hint=hint,
    )


def requirements_file_not_a_file(
    *,
    path: str,
    hint: str = "Aponte a declaração para um arquivo de requirements regular, não para um diretório.",
) -> ErrorPayload:
    return ErrorPayload(
        kind=ErrorKind.CONFIGURATION_ERROR,
        message=f"Arquivo de requirements não é um arquivo regular: {path}",
        details={"path": path, "reason": "not_a_file"},
        hint=hint,
    )


def unit_install_failed(
    *,
    unit: str,
    env_path: str,
    returncode: Optional[int] = None,
    output: Optional[str] = None,
    hint: str = "Verifique a saída do gerenciador de pacotes; a próxima passada reinstala todas as unidades.",
) -> ErrorPayload:
    return ErrorPayload(
        kind=ErrorKind.INSTALL_ERROR,
        message=f"Falha ao instalar requirements de {unit} em {env_path}",
        details={
            "unit": unit,
            "env_path": env_path,
            "returncode": returncode,
            "output": output,
        },
        hint=hint,
    )


def state_corrupted(
    *,
    path: str,
    reason: str,
    hint: str = "O registro será regravado na próxima instalação bem-sucedida; nenhuma ação é necessária.",
) -> ErrorPayload:
    return ErrorPayload(
        kind=ErrorKind.STATE_CORRUPTION,
        message=f"Falha ao ler o registro de estado: {reason}",
        details={"path": path, "reason": reason},
        hint=hint,
    )


def fingerprint_unavailable(
    *,
    env_path: str,
    reason: str,
    hint: str = "A verificação de modificação externa foi ignorada nesta passada.",
) -> ErrorPayload:
    return ErrorPayload(
        kind=ErrorKind.FINGERPRINT_UNAVAILABLE,
        message=f"Falha ao listar pacotes instalados: {reason}",
        details={"env_path": env_path, "reason": reason},
        hint=hint,
    )
