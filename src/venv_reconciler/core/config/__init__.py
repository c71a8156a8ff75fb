# src/venv_reconciler/core/config/__init__.py

"""
Camada de configuração (declaração) do venv_reconciler.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar a declaração de um
ambiente virtual gerenciado.

A declaração no venv_reconciler é:
    - declarativa
    - determinística
    - explicitamente versionável

Responsabilidades do pacote:
    - Carregamento de arquivos de declaração (defaults + overrides locais)
    - Resolução da declaração final via deep-merge determinístico
    - Validação estrutural (paths absolutos, listas de strings)
    - Geração de hash canônico para rastreabilidade

Limites explícitos:
    - Não verifica existência de arquivos de requirements (isso é do core)
    - Não cria nem inspeciona o ambiente
    - Não executa instalação
"""

from .declaration import VenvDeclaration
from .errors import DeclarationError
from .loader import load_declaration

__all__ = ["VenvDeclaration", "DeclarationError", "load_declaration"]
