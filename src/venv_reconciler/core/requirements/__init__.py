# src/venv_reconciler/core/requirements/__init__.py
"""Parsing de arquivos de requirements e extração de nomes de pacote."""

from .parser import package_name, parse_requirements_file, parse_requirements_text

__all__ = ["package_name", "parse_requirements_file", "parse_requirements_text"]
