"""
SemVer Flow — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros do SemVer Flow.
Payloads são usados para registrar falhas no Event Log de forma:

- explícita
- serializável
- acionável
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .config.errors import ConfigError, ConfigurationError
from .exceptions import CacheWriteError, RepositoryLocationError, SemverFlowException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do SemVer Flow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
REPOSITORY_NOT_FOUND = "REPOSITORY_NOT_FOUND"
CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
CACHE_READ_FAILED = "CACHE_READ_FAILED"
VERSION_COMPUTATION_FAILED = "VERSION_COMPUTATION_FAILED"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def cache_write_failed(
    *,
    cache_key: str,
    errors: List[str],
    hint: str = "Verifique permissões do diretório de cache. O resultado calculado não é afetado.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CACHE_WRITE_FAILED,
        message="Uma ou mais falhas durante a gravação do cache",
        details={"cache_key": cache_key, "errors": errors},
        hint=hint,
    )


def cache_read_failed(
    *,
    cache_key: str,
    exc_type: str,
    exc_message: str,
) -> ErrorPayload:
    return ErrorPayload(
        type=CACHE_READ_FAILED,
        message="Falha ao ler o cache; a versão será recalculada",
        details={"cache_key": cache_key, "exc_type": exc_type, "exc_message": exc_message},
        hint=None,
    )


def exception_to_payload(exc: BaseException) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - ConfigurationError → CONFIGURATION_ERROR com branch e campo ausente.
    - RepositoryLocationError → REPOSITORY_NOT_FOUND.
    - Demais exceções do SemVer Flow: `details`/`hint` da própria exceção.
    - Outras exceções: VERSION_COMPUTATION_FAILED sem stack trace.
    """
    if isinstance(exc, ConfigurationError):
        return ErrorPayload(
            type=CONFIGURATION_ERROR,
            message=str(exc),
            details={"branch_key": exc.branch_key, "field": exc.field},
            hint=exc.hint,
        )

    if isinstance(exc, ConfigError):
        return ErrorPayload(
            type=CONFIGURATION_ERROR,
            message=str(exc),
            details={"exception_class": exc.__class__.__name__},
        )

    if isinstance(exc, RepositoryLocationError):
        return ErrorPayload(
            type=REPOSITORY_NOT_FOUND,
            message=exc.message,
            details=dict(exc.details),
            hint=exc.hint,
        )

    if isinstance(exc, CacheWriteError):
        return ErrorPayload(
            type=CACHE_WRITE_FAILED,
            message=exc.message,
            details=dict(exc.details),
            hint=exc.hint,
        )

    if isinstance(exc, SemverFlowException):
        return ErrorPayload(
            type=VERSION_COMPUTATION_FAILED,
            message=exc.message,
            details=dict(exc.details),
            hint=exc.hint,
        )

    return ErrorPayload(
        type=VERSION_COMPUTATION_FAILED,
        message=str(exc) or "Erro inesperado durante o cálculo da versão",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o Event Log e a configuração do repositório",
    )
