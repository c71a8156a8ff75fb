# src/venv_reconciler/core/backend/__init__.py
"""
Backends de gerenciador de pacotes e execução de comandos.

O core nunca resolve executáveis por lookup global: o comando do
gerenciador de pacotes é derivado do layout do ambiente e executado por
um `CommandRunner` injetado explicitamente.

Módulos:
    - runner → protocolo CommandRunner e implementação via subprocess
    - base   → protocolo PackageManagerBackend
    - pip    → implementação atual do backend (pip do próprio ambiente)
"""
