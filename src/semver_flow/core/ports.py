# src/semver_flow/core/ports.py
"""
Contratos dos colaboradores externos do orquestrador.

O orquestrador (`core.engine.computer.VersionComputer`) conversa com o mundo
exterior apenas através destes protocolos estreitos. Implementações default
vivem em `core.buildservers`, `core.repository`, `core.cache` e
`core.variables`; o version finder é sempre injetado.

Os protocolos não impõem herança, apenas conformidade estrutural.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol, TypeVar, runtime_checkable

from .cache.key import CacheKey
from .config.model import GlobalConfig
from .variables import SemanticVersion, VersionVariables

if TYPE_CHECKING:
    from .config.loader import ConfigFileLocator
    from .engine.context import VersionContext

T = TypeVar("T")


@runtime_checkable
class BuildServer(Protocol):
    def get_current_branch(self, is_dynamic_repository: bool) -> Optional[str]: ...

    def prevent_fetch(self) -> bool: ...

    def should_clean_up_remotes(self) -> bool: ...


class BuildServerResolver(Protocol):
    def get_current_build_server(self) -> Optional[BuildServer]: ...


@runtime_checkable
class Repository(Protocol):
    """Handle de repositório entregue ao escopo de `with_repository`."""

    def is_commit_tagged(self, commit_id: Optional[str]) -> bool: ...


class RepositoryPreparer(Protocol):
    target_path: str
    working_directory: str
    current_branch: Optional[str]
    commit_id: Optional[str]

    def initialize(self, normalize: bool, current_branch: Optional[str], cleanup_remotes: bool) -> None: ...

    def get_dot_git_directory(self) -> str: ...

    def get_project_root_directory(self) -> str: ...

    def with_repository(self, fn: Callable[[Repository], T]) -> T:
        """Executa `fn` com um handle de repositório, liberado em qualquer saída."""
        ...


class CacheKeyFactory(Protocol):
    def create(
        self,
        preparer: RepositoryPreparer,
        override_config: Optional[Dict[str, Any]],
        locator: "ConfigFileLocator",
    ) -> CacheKey: ...


class VersionCache(Protocol):
    def load(self, preparer: RepositoryPreparer, key: CacheKey) -> Optional[VersionVariables]: ...

    def save(self, preparer: RepositoryPreparer, key: CacheKey, variables: VersionVariables) -> None: ...


class VersionFinder(Protocol):
    def find_version(self, context: "VersionContext") -> SemanticVersion: ...


class VariableProvider(Protocol):
    def get_variables_for(
        self,
        semver: SemanticVersion,
        config: GlobalConfig,
        is_current_commit_tagged: bool,
    ) -> VersionVariables: ...
