# src/venv_reconciler/core/state/expected.py
"""
ExpectedState — estado esperado derivado da declaração corrente.

O ExpectedState é um mapa plano recalculado a cada passada e nunca
persistido isoladamente.

Chaves (v1):
    - "file:<path>"                   → SHA-256 do conteúdo bruto do arquivo
    - "file_list:<path>"              → lista canônica parseada do arquivo
    - "individual_requirements"       → hash da lista inline canônica
    - "individual_requirements_list"  → lista inline canônica

As chaves inline só existem quando a lista inline não é vazia.

Invariantes:
    - O ExpectedState é função pura da declaração e do conteúdo dos arquivos
    - Arquivo declarado ausente (ou diretório) → ConfigurationError antes de qualquer leitura
      ou escrita de estado
"""

from __future__ import annotations

import os
from typing import Any, Dict

from ..config.declaration import VenvDeclaration
from ..context import ReconcileContext
from ..errors import requirements_file_missing, requirements_file_not_a_file
from ..exceptions import ConfigurationError
from ..fingerprint.hashing import file_hash, list_hash, sort_entries
from ..requirements.parser import parse_requirements_file


FILE_KEY_PREFIX = "file:"
FILE_LIST_KEY_PREFIX = "file_list:"
INDIVIDUAL_REQUIREMENTS_KEY = "individual_requirements"
INDIVIDUAL_REQUIREMENTS_LIST_KEY = "individual_requirements_list"
ENVIRONMENT_FINGERPRINT_KEY = "environment_fingerprint"

ExpectedState = Dict[str, Any]


def file_key(path: str) -> str:
    return f"{FILE_KEY_PREFIX}{path}"


def file_list_key(path: str) -> str:
    return f"{FILE_LIST_KEY_PREFIX}{path}"


def check_requirements_files(declaration: VenvDeclaration) -> None:
    """
    Raises:
        ConfigurationError: Para o primeiro arquivo declarado inexistente
            (`reason="missing"`) ou que não é arquivo regular (`reason="not_a_file"`).
    """
    for req_file in declaration.requirements_files:
        if not os.path.exists(req_file):
            raise ConfigurationError.from_payload(requirements_file_missing(path=req_file))
        if not os.path.isfile(req_file):
            raise ConfigurationError.from_payload(requirements_file_not_a_file(path=req_file))


def build_expected_state(declaration: VenvDeclaration, *, ctx: ReconcileContext) -> ExpectedState:
    check_requirements_files(declaration)

    state: ExpectedState = {}

    for req_file in declaration.requirements_files:
        state[file_key(req_file)] = file_hash(req_file)
        state[file_list_key(req_file)] = parse_requirements_file(req_file, ctx=ctx)

    if declaration.requirements:
        state[INDIVIDUAL_REQUIREMENTS_KEY] = list_hash(declaration.requirements)
        state[INDIVIDUAL_REQUIREMENTS_LIST_KEY] = sort_entries(declaration.requirements)

    ctx.log(step_id="state.expected", level="DEBUG", message=f"Estado esperado calculado: {state!r}")
    return state
