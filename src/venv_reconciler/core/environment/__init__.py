# src/venv_reconciler/core/environment/__init__.py
"""
Ambiente virtual: layout em disco, bootstrap e fingerprint de pacotes.

Módulos:
    - layout      → caminhos canônicos e verificação estrutural (exists)
    - bootstrap   → criação e remoção do ambiente
    - fingerprint → hash do conjunto de pacotes efetivamente instalados
"""
