# src/semver_flow/core/cache/key.py
"""
Fingerprint canônico para o cache do cálculo de versão.

Dois cálculos são considerados equivalentes se, e somente se, seus
fingerprints forem iguais. O fingerprint combina:
    - o estado das refs do repositório (`HEAD`, `packed-refs`, arquivos em `refs/`)
    - o conteúdo do arquivo de configuração localizado (se houver)
    - o hash canônico da configuração de override
    - o branch efetivo e o commit alvo do cálculo
    - a versão do formato do cache
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..config.hashing import compute_config_hash

if TYPE_CHECKING:
    from ..config.loader import ConfigFileLocator

CACHE_FORMAT_VERSION = "1"


@dataclass(frozen=True)
class CacheKey:
    """Fingerprint opaco (hexadecimal)."""

    value: str

    def __str__(self) -> str:
        return self.value


def _hash_refs(dot_git: Path) -> str:
    digest = hashlib.sha1()
    for name in ("HEAD", "packed-refs"):
        path = dot_git / name
        if path.is_file():
            digest.update(name.encode("utf-8"))
            digest.update(path.read_bytes())

    refs = dot_git / "refs"
    if refs.is_dir():
        for path in sorted(p for p in refs.rglob("*") if p.is_file()):
            digest.update(path.relative_to(dot_git).as_posix().encode("utf-8"))
            digest.update(path.read_bytes())
    return digest.hexdigest()


def _hash_config_file(path: Optional[Path]) -> str:
    if path is None:
        return ""
    return hashlib.sha1(path.read_bytes()).hexdigest()


class GitCacheKeyFactory:
    """Deriva a CacheKey a partir do preparer, do override e do localizador de config."""

    def create(
        self,
        preparer: Any,
        override_config: Optional[Dict[str, Any]],
        locator: "ConfigFileLocator",
    ) -> CacheKey:
        dot_git = Path(preparer.get_dot_git_directory())
        config_path = locator.locate(preparer.working_directory, preparer.get_project_root_directory())

        parts = (
            CACHE_FORMAT_VERSION,
            _hash_refs(dot_git),
            _hash_config_file(config_path),
            compute_config_hash(override_config),
            preparer.current_branch or "",
            preparer.commit_id or "",
        )
        return CacheKey(hashlib.sha1(":".join(parts).encode("utf-8")).hexdigest())
