# src/venv_reconciler/core/config/loader.py
"""
Loader da declaração de ambiente do venv_reconciler.

A declaração efetiva é resolvida a partir de:
    - um arquivo base (obrigatório)
    - um arquivo local de overrides (opcional, ignorado se ausente em disco)

Formatos (v1), escolhidos pela extensão do arquivo:
    - YAML → .yaml, .yml (`yaml.safe_load`)
    - JSON → .json

Toda falha de leitura ou interpretação vira uma `DeclarationError` tipada
(`DECLARATION_INVALID`); exceções do parser nunca escapam do módulo.

Limites explícitos:
    - Não verifica existência de arquivos de requirements
    - Não persiste a declaração nem seu hash
    - Não interage com o ambiente
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml  # PyYAML

from .declaration import VenvDeclaration
from .errors import (
    DeclarationNotFoundError,
    InvalidDeclarationRootTypeError,
    MalformedDeclarationError,
    UnsupportedDeclarationFormatError,
)
from .merge import deep_merge


_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}

_PARSE_ERRORS = (yaml.YAMLError, json.JSONDecodeError)


def read_declaration_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de declaração e devolve seu conteúdo como dicionário.

    Arquivo vazio (ou YAML contendo apenas `null`) equivale a `{}`.

    Raises:
        DeclarationNotFoundError: Se o arquivo não existir.
        UnsupportedDeclarationFormatError: Se a extensão não tiver parser.
        MalformedDeclarationError: Se o conteúdo não puder ser interpretado.
        InvalidDeclarationRootTypeError: Se a raiz não for um mapeamento.
    """
    source = str(path)

    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise UnsupportedDeclarationFormatError(
            f"Formato de declaração não suportado: {path.suffix or '(sem extensão)'}", source=source
        )

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DeclarationNotFoundError(f"Arquivo de declaração não encontrado: {path}", source=source) from None
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDeclarationError(f"Falha ao ler a declaração {path}: {e}", source=source) from e

    try:
        data = parse(text) if text.strip() else None
    except _PARSE_ERRORS as e:
        raise MalformedDeclarationError(f"Declaração malformada em {path}: {e}", source=source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidDeclarationRootTypeError(
            f"A raiz da declaração deve ser um mapeamento, recebido: {type(data).__name__}", source=source
        )
    return data


def load_declaration_dict(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve a declaração efetiva como dicionário puro (base + override local).

    Raises:
        DeclarationError: Qualquer falha de leitura, interpretação ou merge.
    """
    effective = read_declaration_file(Path(defaults_path))

    if local_path is not None and Path(local_path).exists():
        effective = deep_merge(effective, read_declaration_file(Path(local_path)))

    return effective


def load_declaration(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> VenvDeclaration:
    """Carrega, resolve e valida a declaração de um ambiente virtual."""
    return VenvDeclaration.from_dict(
        load_declaration_dict(defaults_path=defaults_path, local_path=local_path)
    )
