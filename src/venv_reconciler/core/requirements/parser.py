# src/venv_reconciler/core/requirements/parser.py
"""
Specification Loader — parsing de arquivos de requirements.

Este módulo converte o texto bruto de um arquivo de requirements em uma
lista canônica e comparável de especificadores.

Política de parsing (v1):
    - tudo a partir do primeiro "#" é descartado (comentário inline ou de linha)
    - espaços em volta são removidos
    - linhas que ficam vazias são descartadas
    - o resultado é ordenado lexicograficamente (duplicatas preservadas)

A lista parseada alimenta apenas o changelog legível. A decisão de
reinstalação usa o hash bruto do arquivo, de modo que uma edição somente
de comentário muda o hash do arquivo mas não a lista.

Limites explícitos:
    - Não interpreta opções do pip (-r, -c, --index-url): são entradas opacas
    - Não valida especificadores (PEP 508)
    - Falhas de I/O não são fatais aqui: são registradas e resultam em []
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from ..context import ReconcileContext
from ..fingerprint.hashing import sort_entries


logger = logging.getLogger(__name__)

# Ordem importa: tokens de dois caracteres antes de ">" e "<".
_COMPARATOR_RE = re.compile(r"==|>=|<=|!=|~=|>|<")


def parse_requirements_text(text: str) -> List[str]:
    entries: List[str] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            entries.append(line)
    return sort_entries(entries)


def parse_requirements_file(
    path: Union[str, Path],
    *,
    ctx: Optional[ReconcileContext] = None,
) -> List[str]:
    """
    Lê um arquivo de requirements e retorna sua lista canônica.

    Args:
        path: Caminho do arquivo de requirements.
        ctx: Contexto da passada, usado para registrar falhas de leitura.

    Returns:
        List[str]: Especificadores ordenados; lista vazia em caso de falha de I/O.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        message = f"Falha ao fazer parsing do arquivo de requirements {path}: {e}"
        if ctx is not None:
            ctx.log(step_id="requirements.parse", level="WARNING", message=message, path=str(path))
        else:
            logger.warning(message)
        return []

    return parse_requirements_text(text)


def package_name(specifier: str) -> str:
    """
    Extrai o nome do pacote de um especificador (ex.: "HTTPX==1.0" → "httpx").

    Usado apenas para o changelog legível, nunca para decisões de identidade.
    """
    return _COMPARATOR_RE.split(specifier, maxsplit=1)[0].strip().lower()
