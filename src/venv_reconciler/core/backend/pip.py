# src/venv_reconciler/core/backend/pip.py
"""
PipBackend — backend baseado no pip do próprio ambiente virtual.

Comandos (v1):
    - instalação: <env>/bin/pip install -r <arquivo> <pip_args...>
    - listagem:   <env>/bin/pip freeze -l
    - upgrade:    <env>/bin/pip install --upgrade pip

`freeze -l` restringe a listagem aos pacotes locais do ambiente, de modo
que pacotes do sistema (system_site_packages) não participam do fingerprint.
"""

from __future__ import annotations

from typing import List, Sequence

from ..environment.layout import VenvLayout
from .runner import CommandRunner


class PipBackend:
    name = "pip"

    def __init__(self, *, layout: VenvLayout, runner: CommandRunner):
        self.layout = layout
        self.runner = runner

    def install_command(self, requirements_file: str, extra_args: Sequence[str] = ()) -> List[str]:
        return [str(self.layout.pip), "install", "-r", str(requirements_file), *extra_args]

    def install_requirements_file(self, requirements_file: str, extra_args: Sequence[str] = ()) -> str:
        return self.runner.run(self.install_command(requirements_file, extra_args))

    def list_installed(self) -> str:
        return self.runner.run([str(self.layout.pip), "freeze", "-l"])

    def upgrade_self(self) -> str:
        return self.runner.run([str(self.layout.pip), "install", "--upgrade", "pip"])
