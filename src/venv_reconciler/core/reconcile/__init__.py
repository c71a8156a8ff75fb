# src/venv_reconciler/core/reconcile/__init__.py
"""
Reconciliação: detecção de drift, instalação, changelog e orquestração.

Fluxo de uma passada:
    ExpectedState → ActualState → detect_drift →
    [no-op | ChangeLogger → Installer → fingerprint → StateStore.save]
"""
