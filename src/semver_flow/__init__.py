# src/semver_flow/__init__.py
"""
SemVer Flow — derivação de versões semânticas a partir de repositórios git.

Este pacote raiz define o namespace público do SemVer Flow, que combina:
    - um modelo de configuração em camadas, ciente de branches
    - um orquestrador de cálculo que reutiliza resultados em cache

Arquitetura em alto nível:
    - core.config  → modelo, carregamento, merge, hashing e resolução de configuração
    - core.engine  → orquestração do cálculo (cache + version finder)
    - core.cache   → chave de cache e cache em disco
    - core.events  → Event Log estruturado da execução

Limites explícitos:
    - Não implementa o algoritmo de busca de versão (sempre injetado)
    - Não define formato de saída para build servers
"""

from .core.config.defaults import resolve
from .core.config.model import BranchConfig, GlobalConfig
from .core.engine.computer import ComputeArguments, VersionComputer
from .core.variables import SemanticVersion, VersionVariables

__all__ = [
    "BranchConfig",
    "ComputeArguments",
    "GlobalConfig",
    "SemanticVersion",
    "VersionComputer",
    "VersionVariables",
    "resolve",
]
