# src/venv_reconciler/core/__init__.py
"""
Core do venv_reconciler.

Este pacote contém o motor de reconciliação e seus colaboradores
imediatos: modelo de estado, esquema de fingerprinting, procedimento de
decisão de reinstalação, orquestração de instalação e registro de estado
persistido.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada (colaboradores injetados explicitamente)
    - livre de lookup global de executáveis

Invariantes:
    - Cada passada opera sobre exatamente um ambiente
    - Nenhum estado oculto participa do estado esperado
    - O registro persistido só é escrito após instalação bem-sucedida

Limites explícitos:
    - Não resolve grafos de dependência
    - Não implementa timeout ou cancelamento de processos
    - Não serializa passadas concorrentes (responsabilidade do chamador)
"""
