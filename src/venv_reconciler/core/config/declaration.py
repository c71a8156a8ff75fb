# src/venv_reconciler/core/config/declaration.py
"""
Declaração canônica de um ambiente virtual gerenciado.

Este módulo define `VenvDeclaration`, o objeto de entrada do core de
reconciliação. A declaração descreve o que deve existir, e nunca o que
existe: o estado observado vive apenas no registro persistido.

Campos:
    - path: diretório absoluto do ambiente virtual
    - requirements: especificadores inline (ex.: "six==1.16.0")
    - requirements_files: arquivos de requirements absolutos, em ordem
    - pip_args: flags extras repassadas literalmente a cada instalação
    - python_executable: interpretador usado apenas no bootstrap
    - system_site_packages: flag repassada apenas no bootstrap

Validação estrutural (v1):
    - `path` e cada item de `requirements_files` devem ser absolutos
    - `python_executable` deve ser string não vazia
    - cada item de `requirements` deve ser string não vazia após strip
    - cada item de `pip_args` deve ser string
    - `system_site_packages` aceita bool ou "true"/"false" (inteiros não)
    - chaves desconhecidas são rejeitadas

Limites explícitos:
    - Não verifica existência de arquivos (responsabilidade do core)
    - Não deduplica nem ordena especificadores
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from .errors import InvalidDeclarationValueError


DEFAULT_PYTHON_EXECUTABLE = "python3"

_FIELDS = frozenset(
    {
        "path",
        "requirements",
        "requirements_files",
        "pip_args",
        "python_executable",
        "system_site_packages",
    }
)


def _require_list(name: str, value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidDeclarationValueError(
            f"'{name}' deve ser uma lista, recebido: {type(value).__name__}"
        )
    return list(value)


def _munge_bool(value: Any) -> bool:
    if value is True or value == "true":
        return True
    if value is False or value is None or value == "false":
        return False
    raise InvalidDeclarationValueError(f"Valor inválido para system_site_packages: {value!r}")


@dataclass(frozen=True)
class VenvDeclaration:
    """Declaração imutável de um ambiente virtual e de seus requirements."""

    path: str
    requirements: Tuple[str, ...] = ()
    requirements_files: Tuple[str, ...] = ()
    pip_args: Tuple[str, ...] = ()
    python_executable: str = DEFAULT_PYTHON_EXECUTABLE
    system_site_packages: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not os.path.isabs(self.path):
            raise InvalidDeclarationValueError(f"Path deve ser absoluto, recebido: {self.path!r}")

        if not isinstance(self.python_executable, str) or not self.python_executable:
            raise InvalidDeclarationValueError(
                f"python_executable deve ser string não vazia, recebido: {self.python_executable!r}"
            )

        for req in self.requirements:
            if not isinstance(req, str) or not req.strip():
                raise InvalidDeclarationValueError(
                    f"Cada requirement deve ser string não vazia, recebido: {req!r}"
                )

        for req_file in self.requirements_files:
            if not isinstance(req_file, str) or not os.path.isabs(req_file):
                raise InvalidDeclarationValueError(
                    f"Cada arquivo de requirements deve ser path absoluto, recebido: {req_file!r}"
                )

        for arg in self.pip_args:
            if not isinstance(arg, str):
                raise InvalidDeclarationValueError(f"Cada pip arg deve ser string, recebido: {arg!r}")

    @property
    def has_requirements(self) -> bool:
        return bool(self.requirements) or bool(self.requirements_files)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VenvDeclaration":
        """
        Constrói uma declaração a partir de um dicionário já resolvido.

        Chaves desconhecidas (ex.: `requirement_files`) são rejeitadas.

        Raises:
            InvalidDeclarationValueError: Se algum campo violar a validação estrutural.
        """
        unknown = sorted(str(k) for k in data if k not in _FIELDS)
        if unknown:
            raise InvalidDeclarationValueError(f"Campos desconhecidos na declaração: {', '.join(unknown)}")
        if "path" not in data:
            raise InvalidDeclarationValueError("Campo obrigatório ausente: 'path'")

        python_executable = data.get("python_executable")
        if python_executable is None:
            python_executable = DEFAULT_PYTHON_EXECUTABLE

        return cls(
            path=data["path"],
            requirements=tuple(_require_list("requirements", data.get("requirements"))),
            requirements_files=tuple(_require_list("requirements_files", data.get("requirements_files"))),
            pip_args=tuple(_require_list("pip_args", data.get("pip_args"))),
            python_executable=python_executable,
            system_site_packages=_munge_bool(data.get("system_site_packages", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "requirements": list(self.requirements),
            "requirements_files": list(self.requirements_files),
            "pip_args": list(self.pip_args),
            "python_executable": self.python_executable,
            "system_site_packages": self.system_site_packages,
        }
