# src/venv_reconciler/core/config/merge.py
"""
Merge do override local sobre a declaração base.

Política (v1):
    - mapeamento + mapeamento → merge recursivo por chave
    - lista + lista → a lista do override substitui a da base
    - valor ausente ou None na base → o override é adotado
    - qualquer outro par de tipos diferentes → DeclarationTypeConflictError

Listas nunca são concatenadas: a ordem de `requirements_files` define a
ordem de instalação, e o override descreve a lista completa desejada.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import DeclarationTypeConflictError


def _merge_value(key_path: Tuple[str, ...], base: Any, override: Any) -> Any:
    if base is None:
        return deepcopy(override)

    if isinstance(base, dict) and isinstance(override, dict):
        merged = dict(base)
        for key, value in override.items():
            merged[key] = _merge_value(key_path + (str(key),), base.get(key), value)
        return deepcopy(merged)

    if type(base) is not type(override):
        raise DeclarationTypeConflictError(
            f"Conflito de tipo em '{'.'.join(key_path)}': "
            f"base={type(base).__name__}, override={type(override).__name__}"
        )

    return deepcopy(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e devolve um novo dicionário.

    Nenhum dos inputs é mutado.

    Raises:
        DeclarationTypeConflictError: Se um valor do override tiver tipo
            incompatível com o da base (ex.: lista vs string).
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise DeclarationTypeConflictError(
            f"Merge de declaração requer mapeamentos na raiz: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_value((), base, override)
