# src/semver_flow/core/cache/store.py
"""
Cache em disco das variáveis de saída.

Cada entrada é um arquivo YAML em `<.git>/gitversion_cache/<chave>.yml`.

Política (v1):
    - Entrada ausente, ilegível ou corrompida → `None` (cache miss)
    - Entradas corrompidas são removidas em best-effort
    - Gravação via arquivo temporário + rename: um leitor nunca vê uma
      entrada parcial
    - Falhas de gravação são agregadas em `CacheWriteError`

Limites explícitos:
    - Sem lock por chave; escritores concorrentes: a última gravação prevalece
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Optional

import yaml  # PyYAML

from ..events import EventLog
from ..exceptions import CacheWriteError
from ..variables import VersionVariables
from .key import CacheKey

CACHE_DIRECTORY_NAME = "gitversion_cache"
STAGE = "cache"


class DiskVersionCache:
    """Cache YAML de VersionVariables, indexado por CacheKey."""

    def __init__(self, events: Optional[EventLog] = None):
        self.events = events

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.events is None:
            return
        if level == "warning":
            self.events.warn(stage=STAGE, message=message, **extra)
        else:
            self.events.log(stage=STAGE, level=level, message=message, **extra)

    def cache_directory(self, preparer: Any) -> Path:
        return Path(preparer.get_dot_git_directory()) / CACHE_DIRECTORY_NAME

    def cache_file(self, preparer: Any, key: CacheKey) -> Path:
        return self.cache_directory(preparer) / f"{key.value}.yml"

    def load(self, preparer: Any, key: CacheKey) -> Optional[VersionVariables]:
        path = self.cache_file(preparer, key)
        if not path.is_file():
            self._log("debug", "cache entry not found", cache_file=str(path))
            return None

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict):
                raise ValueError(f"entrada de cache inválida: {type(data).__name__}")
        except (OSError, yaml.YAMLError, ValueError) as exc:
            self._log("warning", "corrupt cache entry ignored", cache_file=str(path), error=str(exc))
            self._discard(path)
            return None

        self._log("info", "loaded version variables from cache", cache_file=str(path))
        return VersionVariables.from_dict(data)

    def _discard(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            self._log("warning", "could not remove corrupt cache entry", cache_file=str(path), error=str(exc))

    def save(self, preparer: Any, key: CacheKey, variables: VersionVariables) -> None:
        path = self.cache_file(preparer, key)
        tmp_path = path.with_name(f"{path.name}.{os.getpid()}.tmp")
        errors: List[str] = []

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(variables.to_dict(), f, default_flow_style=False, sort_keys=True)
            os.replace(tmp_path, path)
        except OSError as exc:
            errors.append(f"{exc.__class__.__name__}: {exc}")
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError as cleanup_exc:
                    errors.append(f"{cleanup_exc.__class__.__name__}: {cleanup_exc}")

        if errors:
            raise CacheWriteError(
                message="Uma ou mais falhas durante a gravação do cache",
                details={"cache_key": key.value, "cache_file": str(path), "errors": errors},
                hint="Verifique permissões do diretório .git",
            )

        self._log("info", "wrote version variables to cache", cache_file=str(path))
