# src/venv_reconciler/core/state/__init__.py
"""
Estado esperado (derivado da declaração) e estado persistido (registro).

Módulos:
    - expected → construção do ExpectedState a cada passada
    - store    → leitura/escrita do ActualState em <env>/.requirements_state
"""
