# src/venv_reconciler/core/fingerprint/hashing.py
"""
Fingerprint Engine — hashing determinístico de conteúdo.

Este módulo implementa as primitivas de identidade usadas para detectar
drift de declaração e drift do ambiente.

Política de hashing (v1):
    - Algoritmo criptográfico estável (SHA-256, hexdigest)
    - Listas são canonicalizadas por ordenação lexicográfica estável e
      junção com "\\n" antes do hashing
    - Duplicatas são preservadas: ["a", "a"] e ["a"] são listas distintas
    - Arquivos são hasheados byte a byte, sem qualquer normalização

Invariantes:
    - Listas com o mesmo multiconjunto de entradas produzem o mesmo hash
    - O hash de arquivo muda com qualquer byte alterado, inclusive comentários
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres

Limites explícitos:
    - Não faz parsing de requirements (ver core.requirements)
    - Não captura FileNotFoundError: a ausência de arquivo é decidida pelo chamador
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable, List, Union


def hash_bytes(data: Union[bytes, str]) -> str:
    """
    Gera o digest SHA-256 hexadecimal de um conteúdo.

    Strings são codificadas em UTF-8 antes do hashing.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def sort_entries(items: Iterable[str]) -> List[str]:
    """Retorna uma nova lista ordenada lexicograficamente (sem deduplicar)."""
    return sorted(items)


def canonicalize(items: Iterable[str]) -> str:
    """
    Forma canônica de uma lista: ordenação estável + junção por newline.

    Duplicatas não são colapsadas.
    """
    return "\n".join(sort_entries(items))


def list_hash(items: Iterable[str]) -> str:
    return hash_bytes(canonicalize(items))


def file_hash(path: Union[str, Path]) -> str:
    """
    Gera o digest SHA-256 do conteúdo bruto de um arquivo.

    Raises:
        FileNotFoundError: Se o arquivo não existir.
    """
    return hash_bytes(Path(path).read_bytes())
