# src/venv_reconciler/core/config/hashing.py
"""
Hashing canônico da declaração.

O hash gerado representa a identidade estrutural da declaração e é
reportado no resultado de cada passada para rastreabilidade. Ele não
participa da decisão de reinstalação (que usa o estado esperado).

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Declarações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict, Union

from .declaration import VenvDeclaration


def compute_declaration_hash(declaration: Union[VenvDeclaration, Dict[str, Any]]) -> str:
    """
    Gera um hash determinístico da declaração.

    Args:
        declaration: `VenvDeclaration` ou sua forma em dicionário.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for declaração nem dicionário.
    """
    if isinstance(declaration, VenvDeclaration):
        data = declaration.to_dict()
    elif isinstance(declaration, dict):
        data = declaration
    else:
        raise TypeError(
            f"Declaração para hashing deve ser VenvDeclaration ou dict, recebido: {type(declaration).__name__}"
        )

    canonical_json = json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
