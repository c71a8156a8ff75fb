# src/venv_reconciler/core/environment/layout.py
"""
Layout canônico de um ambiente virtual em disco.

Um ambiente é considerado existente e estruturalmente válido quando:
    - o diretório existe
    - bin/python e bin/pip existem e são executáveis
    - bin/python e bin/activate existem e não têm tamanho zero

O caso de tamanho zero cobre `python -m venv` que termina com código 0
mas deixa arquivos truncados.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from ..context import ReconcileContext


STATE_FILE_NAME = ".requirements_state"
INDIVIDUAL_REQUIREMENTS_FILE_NAME = ".individual_requirements.txt"


class VenvLayout:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"VenvLayout({str(self.path)!r})"

    @property
    def bin_dir(self) -> Path:
        return self.path / "bin"

    @property
    def python(self) -> Path:
        return self.bin_dir / "python"

    @property
    def pip(self) -> Path:
        return self.bin_dir / "pip"

    @property
    def activate(self) -> Path:
        return self.bin_dir / "activate"

    @property
    def state_file(self) -> Path:
        return self.path / STATE_FILE_NAME

    @property
    def individual_requirements_file(self) -> Path:
        return self.path / INDIVIDUAL_REQUIREMENTS_FILE_NAME

    def files_valid(self, *, ctx: Optional[ReconcileContext] = None) -> bool:
        """Verifica que python e activate existem e não estão truncados."""
        if not (self.python.exists() and self.activate.exists()):
            return False

        python_size = self.python.stat().st_size
        activate_size = self.activate.stat().st_size

        if python_size == 0 or activate_size == 0:
            if ctx is not None:
                ctx.log(
                    step_id="environment.layout",
                    level="WARNING",
                    message=(
                        f"Ambiente inválido detectado em {self.path}: "
                        f"python size={python_size}, activate size={activate_size}"
                    ),
                )
            return False

        return True

    def exists(self, *, ctx: Optional[ReconcileContext] = None) -> bool:
        return (
            self.path.is_dir()
            and os.access(self.python, os.X_OK)
            and os.access(self.pip, os.X_OK)
            and self.files_valid(ctx=ctx)
        )
