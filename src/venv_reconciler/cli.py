# src/venv_reconciler/cli.py
"""
CLI do venv_reconciler (`venv-reconcile`).

Subcomandos:
    - sync    → cria o ambiente se necessário e reconcilia
    - status  → imprime in-sync/out-of-sync (exit 0/1), sem instalar
    - destroy → remove o diretório do ambiente

Erros fatais tipados imprimem o payload JSON em stderr e terminam com exit 2.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .core.backend.runner import SubprocessRunner
from .core.config.errors import DeclarationError
from .core.config.loader import load_declaration
from .core.exceptions import ReconcilerException
from .core.reconcile.reconciler import Reconciler


EXIT_OK = 0
EXIT_OUT_OF_SYNC = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="venv-reconcile",
        description="Converge um ambiente virtual Python para uma declaração de requirements.",
    )
    parser.add_argument("command", choices=["sync", "status", "destroy"])
    parser.add_argument("--config", required=True, help="Arquivo de declaração (YAML ou JSON).")
    parser.add_argument("--local", default=None, help="Arquivo opcional de overrides locais.")
    parser.add_argument("--timeout", type=float, default=None, help="Timeout por comando, em segundos.")
    parser.add_argument("--json", action="store_true", help="Imprime o resultado do sync em JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Habilita logs DEBUG.")
    return parser


def main(argv: Optional[List[str]] = None, *, runner=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        declaration = load_declaration(defaults_path=args.config, local_path=args.local)
        reconciler = Reconciler(declaration, runner=runner or SubprocessRunner(timeout=args.timeout))

        if args.command == "destroy":
            reconciler.destroy()
            return EXIT_OK

        if args.command == "status":
            in_sync = reconciler.in_sync()
            print("in-sync" if in_sync else "out-of-sync")
            return EXIT_OK if in_sync else EXIT_OUT_OF_SYNC

        result = reconciler.ensure_present()
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    except (ReconcilerException, DeclarationError) as e:
        print(json.dumps(e.to_payload().to_dict(), ensure_ascii=False, indent=2), file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
