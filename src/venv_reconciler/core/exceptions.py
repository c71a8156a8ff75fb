"""
venv_reconciler — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do venv_reconciler.

Objetivo:
- Permitir que o core levante exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Permitir que chamadores decidam por `kind`, nunca pelo texto da mensagem

Regras:
- Apenas tipos fatais possuem exceção; tipos consultivos
  (STATE_CORRUPTION, FINGERPRINT_UNAVAILABLE) são absorvidos pelo core
  e reportados como warnings.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import ErrorKind, ErrorPayload


@dataclass(frozen=True, eq=False)
class ReconcilerException(Exception):
    """Base class para exceções internas do venv_reconciler.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    kind: ClassVar[ErrorKind]

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            kind=self.kind,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )

    @classmethod
    def from_payload(cls, payload: ErrorPayload) -> "ReconcilerException":
        if payload.kind is not cls.kind:
            raise ValueError(f"{cls.__name__} não aceita payload do tipo {payload.kind.value}")
        return cls(message=payload.message, details=dict(payload.details), hint=payload.hint)


@dataclass(frozen=True, eq=False)
class ConfigurationError(ReconcilerException):
    """Arquivo de requirements declarado não existe em disco."""

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIGURATION_ERROR


@dataclass(frozen=True, eq=False)
class InstallError(ReconcilerException):
    """Instalação de uma unidade de requirements falhou."""

    kind: ClassVar[ErrorKind] = ErrorKind.INSTALL_ERROR


@dataclass(frozen=True, eq=False)
class BootstrapError(ReconcilerException):
    """Criação do ambiente virtual falhou ou produziu um ambiente inválido."""

    kind: ClassVar[ErrorKind] = ErrorKind.BOOTSTRAP_ERROR
