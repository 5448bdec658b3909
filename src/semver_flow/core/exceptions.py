"""
SemVer Flow — Canonical Exceptions (v1)

Este módulo define exceções tipadas de runtime do SemVer Flow.

Objetivo:
- Permitir que orquestrador, preparer e cache levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos em falhas conhecidas

Regras:
- Exceções de configuração vivem em `core.config.errors`.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SemverFlowException(Exception):
    """Base class para exceções de runtime do SemVer Flow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Repositório
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RepositoryLocationError(SemverFlowException):
    """Diretório .git ou raiz do projeto não encontrados para o caminho alvo."""


@dataclass(frozen=True)
class GitError(SemverFlowException):
    """Comando git falhou ou não pôde ser executado."""


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CacheWriteError(SemverFlowException):
    """Uma ou mais falhas de I/O durante a gravação do cache.

    `details["errors"]` lista as falhas agregadas (classe + mensagem).
    """
