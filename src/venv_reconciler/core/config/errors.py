# src/venv_reconciler/core/config/errors.py
"""
Exceções canônicas da camada de declaração do venv_reconciler.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, validação estrutural e resolução da declaração de um
ambiente virtual.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Todas as exceções deste módulo correspondem ao tipo
`ErrorKind.DECLARATION_INVALID`.
"""

from typing import Optional

from ..errors import ErrorKind, ErrorPayload


class DeclarationError(Exception):
    """
    Exceção base para erros relacionados à declaração do ambiente.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e resolução da declaração devem herdar desta classe.

    Limites explícitos:
        - Não representa falha de instalação
        - Não representa ausência de arquivo de requirements
          (isso é `ConfigurationError`, verificado pelo core a cada passada)
    """

    kind = ErrorKind.DECLARATION_INVALID

    def __init__(self, message: str, *, source: Optional[str] = None):
        super().__init__(message)
        self.source = source

    def to_payload(self) -> ErrorPayload:
        details = {"error": type(self).__name__}
        if self.source is not None:
            details["source"] = self.source
        return ErrorPayload(
            kind=self.kind,
            message=str(self),
            details=details,
            hint="Corrija o arquivo de declaração antes de reexecutar.",
        )


class DeclarationNotFoundError(DeclarationError):
    """
    Exceção levantada quando o arquivo de declaração base (defaults)
    não é encontrado no caminho especificado.
    """


class UnsupportedDeclarationFormatError(DeclarationError):
    """
    Exceção levantada quando o formato do arquivo de declaração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidDeclarationRootTypeError(DeclarationError):
    """
    Exceção levantada quando o conteúdo raiz da declaração
    não é um dicionário (`dict`).
    """


class DeclarationTypeConflictError(DeclarationError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"pip_args": ["--no-cache-dir"]}
        - override: {"pip_args": "--no-cache-dir"}
    """


class InvalidDeclarationValueError(DeclarationError):
    """
    Exceção levantada quando um campo da declaração viola sua validação
    estrutural (path relativo, string vazia, tipo incorreto).

    Limites explícitos:
        - Não tenta normalizar ou coagir valores inválidos
    """


class MalformedDeclarationError(DeclarationError):
    """
    Exceção levantada quando o arquivo de declaração existe, mas seu
    conteúdo não pode ser interpretado (YAML/JSON sintaticamente inválido
    ou bytes que não são UTF-8).
    """
