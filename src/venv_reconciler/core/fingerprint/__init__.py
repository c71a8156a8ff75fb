# src/venv_reconciler/core/fingerprint/__init__.py
"""Hashing canônico de conteúdo (arquivos e listas) do venv_reconciler."""

from .hashing import canonicalize, file_hash, hash_bytes, list_hash

__all__ = ["canonicalize", "file_hash", "hash_bytes", "list_hash"]
