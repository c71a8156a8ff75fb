# src/venv_reconciler/__init__.py
"""
venv_reconciler — reconciliação declarativa de ambientes virtuais Python.

Este pacote raiz define o namespace público do venv_reconciler, uma
ferramenta que converge o conjunto de pacotes instalados em um ambiente
virtual isolado para uma declaração explícita (arquivos de requirements
e especificadores inline), mantendo essa convergência entre execuções
repetidas.

Princípios centrais:
    - A declaração é a fonte de verdade do que deve estar instalado
    - Cada passada de reconciliação é determinística e auditável
    - Mudanças externas no ambiente são detectadas via fingerprint
    - Falhas fatais e sinais consultivos são tipados explicitamente

Arquitetura em alto nível:
    - core.config       → carregamento, merge e validação da declaração
    - core.fingerprint  → hashing canônico de arquivos e listas
    - core.requirements → parsing de arquivos de requirements
    - core.backend      → execução de comandos e backend do gerenciador de pacotes
    - core.environment  → layout, bootstrap e fingerprint do ambiente
    - core.state        → estado esperado e registro persistido
    - core.reconcile    → detecção de drift, instalação, changelog e orquestração

Limites explícitos:
    - Não resolve dependências (o gerenciador de pacotes é uma caixa-preta)
    - Não orquestra múltiplos ambientes concorrentemente
    - Não garante instalação atômica de múltiplas unidades
"""
from .core.reconcile.reconciler import Reconciler, ReconcileResult
from .core.config.declaration import VenvDeclaration

__all__ = ["Reconciler", "ReconcileResult", "VenvDeclaration"]

__version__ = "0.1.0"
