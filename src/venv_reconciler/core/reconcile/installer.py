# src/venv_reconciler/core/reconcile/installer.py
"""
Installer — instalação sequencial das unidades de requirements.

Unidades (v1), em ordem:
    1. um arquivo por `requirements_files`, na ordem declarada
    2. se a lista inline não for vazia, a unidade sintética
       `<env>/.individual_requirements.txt` com a lista canônica, uma
       entrada por linha e newline final

Política de instalação:
    - toda unidade é reenviada ao gerenciador em toda passada de
      reinstalação, independente de qual unidade mudou
    - a execução é estritamente sequencial (arquivos primeiro, inline por último)
    - a primeira falha levanta InstallError e aborta as unidades restantes
    - unidades já aplicadas permanecem aplicadas (sem rollback)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..backend.base import PackageManagerBackend
from ..backend.runner import CommandFailedError
from ..config.declaration import VenvDeclaration
from ..context import ReconcileContext
from ..environment.layout import VenvLayout
from ..errors import unit_install_failed
from ..exceptions import InstallError
from ..fingerprint.hashing import sort_entries


STEP_ID = "install"


@dataclass(frozen=True)
class RequirementUnit:
    """Uma fonte endereçável de especificadores (arquivo declarado ou inline)."""

    path: str
    inline: bool = False


def inline_requirements_content(requirements: Sequence[str]) -> str:
    return "\n".join(sort_entries(requirements)) + "\n"


def build_units(declaration: VenvDeclaration, layout: VenvLayout) -> List[RequirementUnit]:
    units = [RequirementUnit(path=req_file) for req_file in declaration.requirements_files]
    if declaration.requirements:
        units.append(RequirementUnit(path=str(layout.individual_requirements_file), inline=True))
    return units


class Installer:
    def __init__(self, *, backend: PackageManagerBackend, layout: VenvLayout):
        self.backend = backend
        self.layout = layout

    def materialize_inline(self, declaration: VenvDeclaration) -> Path:
        target = self.layout.individual_requirements_file
        target.write_text(inline_requirements_content(declaration.requirements), encoding="utf-8")
        return target

    def install_all(self, declaration: VenvDeclaration, *, ctx: ReconcileContext) -> List[RequirementUnit]:
        """
        Instala todas as unidades da declaração, em ordem.

        Returns:
            List[RequirementUnit]: Unidades instaladas, na ordem de execução.

        Raises:
            InstallError: Na primeira unidade cuja instalação falhar.
        """
        units = build_units(declaration, self.layout)

        if any(unit.inline for unit in units):
            self.materialize_inline(declaration)

        installed: List[RequirementUnit] = []
        for unit in units:
            self.install_unit(unit, declaration.pip_args, ctx=ctx)
            installed.append(unit)
        return installed

    def install_unit(self, unit: RequirementUnit, pip_args: Sequence[str], *, ctx: ReconcileContext) -> None:
        env_path = str(self.layout.path)
        ctx.log(
            step_id=STEP_ID,
            level="INFO",
            message=f"Executando {self.backend.name} install: -r {unit.path} {' '.join(pip_args)}".rstrip(),
            unit=unit.path,
        )

        try:
            output = self.backend.install_requirements_file(unit.path, pip_args)
        except CommandFailedError as e:
            payload = unit_install_failed(
                unit=unit.path,
                env_path=env_path,
                returncode=e.returncode,
                output=e.output,
            )
            ctx.log(step_id=STEP_ID, level="ERROR", message=payload.message, unit=unit.path)
            raise InstallError.from_payload(payload) from e

        ctx.log(step_id=STEP_ID, level="INFO", message=f"Instalação concluída com sucesso para {unit.path}")
        ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Saída da instalação: {output}")
