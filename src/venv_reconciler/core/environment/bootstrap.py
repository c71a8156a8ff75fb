# src/venv_reconciler/core/environment/bootstrap.py
"""
Bootstrap do ambiente virtual — criação e remoção.

Este módulo é o colaborador responsável por materializar o diretório do
ambiente e seus links de interpretador/ferramentas. O core de
reconciliação não depende dele: recebe apenas `exists()`.

Política de criação (v1):
    - comando: <python_executable> -m venv [--system-site-packages] <path>
    - falha do comando → BootstrapError
    - layout ausente após sucesso aparente → BootstrapError
    - arquivos truncados (tamanho zero) → remoção do diretório + BootstrapError
    - upgrade do pip é best-effort: falha apenas registrada
"""

from __future__ import annotations

import shutil
from typing import List, Optional

from ..backend.base import PackageManagerBackend
from ..backend.runner import CommandFailedError, CommandRunner
from ..config.declaration import VenvDeclaration
from ..context import ReconcileContext
from ..exceptions import BootstrapError
from .layout import VenvLayout


STEP_ID = "bootstrap"


class VenvBootstrapper:
    def __init__(
        self,
        *,
        layout: VenvLayout,
        runner: CommandRunner,
        backend: Optional[PackageManagerBackend] = None,
    ):
        self.layout = layout
        self.runner = runner
        self.backend = backend

    def create_command(self, declaration: VenvDeclaration) -> List[str]:
        cmd = [declaration.python_executable, "-m", "venv"]
        if declaration.system_site_packages:
            cmd.append("--system-site-packages")
        cmd.append(str(self.layout.path))
        return cmd

    def create(self, declaration: VenvDeclaration, *, ctx: ReconcileContext) -> None:
        path = str(self.layout.path)
        ctx.log(step_id=STEP_ID, level="INFO", message=f"Criando ambiente virtual Python em {path}")

        try:
            self.runner.run(self.create_command(declaration))
        except CommandFailedError as e:
            raise BootstrapError(
                message=f"Falha ao criar ambiente virtual em {path}: {e}",
                details={"path": path, "returncode": e.returncode, "output": e.output},
            ) from e

        if not self.layout.exists(ctx=ctx):
            if self.layout.path.is_dir() and not self.layout.files_valid():
                ctx.log(
                    step_id=STEP_ID,
                    level="ERROR",
                    message=f"Criação do ambiente falhou: {path} contém arquivos de tamanho zero",
                )
                self.destroy(ctx=ctx)
                raise BootstrapError(
                    message=f"Falha ao criar ambiente virtual válido em {path}: arquivos truncados",
                    details={"path": path, "reason": "zero_sized_files"},
                    hint="Verifique espaço em disco e o interpretador declarado.",
                )
            raise BootstrapError(
                message=f"Criação do ambiente aparentou sucesso, mas {path} não é funcional",
                details={"path": path, "reason": "layout_incomplete"},
            )

        self._upgrade_package_manager(ctx=ctx)

    def _upgrade_package_manager(self, *, ctx: ReconcileContext) -> None:
        if self.backend is None:
            return
        ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Atualizando {self.backend.name} em {self.layout.path}")
        try:
            self.backend.upgrade_self()
        except CommandFailedError as e:
            ctx.log(
                step_id=STEP_ID,
                level="WARNING",
                message=f"Falha ao atualizar {self.backend.name} em {self.layout.path}: {e}",
            )

    def destroy(self, *, ctx: ReconcileContext) -> None:
        if self.layout.path.exists():
            ctx.log(step_id=STEP_ID, level="INFO", message=f"Removendo ambiente virtual em {self.layout.path}")
            shutil.rmtree(self.layout.path)
