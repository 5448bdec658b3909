# src/semver_flow/core/engine/computer.py
"""
Orquestrador do cálculo de versão do SemVer Flow.

Fluxo de `compute_version_variables`:
    1. Resolver o build server corrente (None em execução local)
    2. Decidir normalização, fetch e limpeza de remotes
    3. Resolver o branch efetivo (CI tem prioridade sobre o chamador)
    4. Preparar o repositório; sem `.git`/raiz → RepositoryLocationError
    5. Derivar a chave de cache
    6. Ler o cache (exceto com `no_cache`); hit encerra o fluxo
    7. Miss: resolver configuração, chamar o version finder e formatar variáveis
    8. Gravar o cache (exceto com `no_cache`); falha vira warning no Event Log

`try_get_version` é um adapter fino sobre o caminho estrito: qualquer
exceção vira warning + `(None, False)`.

Limites explícitos:
    - Sem lock por chave de cache (última gravação prevalece)
    - Sem timeout ou cancelamento: execução síncrona até o fim
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from ..buildservers import EnvironmentBuildServerResolver
from ..cache.key import CacheKey, GitCacheKeyFactory
from ..cache.store import DiskVersionCache
from ..config.loader import ConfigFileLocator, provide_configuration
from ..errors import cache_read_failed, cache_write_failed, exception_to_payload
from ..events import EventLog
from ..exceptions import CacheWriteError, RepositoryLocationError
from ..ports import (
    BuildServer,
    BuildServerResolver,
    CacheKeyFactory,
    RepositoryPreparer,
    VariableProvider,
    VersionCache,
    VersionFinder,
)
from ..repository import GitPreparer
from ..variables import DefaultVariableProvider, VersionVariables
from .context import VersionContext

STAGE = "engine"


@dataclass(frozen=True)
class ComputeArguments:
    """Argumentos de um cálculo de versão."""

    target_path: str
    target_branch: Optional[str] = None
    commit_id: Optional[str] = None
    override_config: Optional[Dict[str, Any]] = None
    no_fetch: bool = False
    no_cache: bool = False
    no_normalize: bool = False
    dynamic_repository_location: Optional[str] = None


PreparerFactory = Callable[[ComputeArguments, EventLog], RepositoryPreparer]


def default_preparer_factory(arguments: ComputeArguments, events: EventLog) -> RepositoryPreparer:
    return GitPreparer(
        arguments.target_path,
        no_fetch=arguments.no_fetch,
        commit_id=arguments.commit_id,
        events=events,
    )


class VersionComputer:
    """Orquestrador canônico (build server + repositório + cache + version finder)."""

    def __init__(
        self,
        *,
        version_finder: VersionFinder,
        variable_provider: Optional[VariableProvider] = None,
        build_server_resolver: Optional[BuildServerResolver] = None,
        preparer_factory: Optional[PreparerFactory] = None,
        cache: Optional[VersionCache] = None,
        cache_key_factory: Optional[CacheKeyFactory] = None,
        config_locator: Optional[ConfigFileLocator] = None,
        events: Optional[EventLog] = None,
    ):
        self.events: EventLog = events or EventLog()
        self.version_finder = version_finder
        self.variable_provider = variable_provider or DefaultVariableProvider()
        self.build_server_resolver = build_server_resolver or EnvironmentBuildServerResolver()
        self.preparer_factory = preparer_factory or default_preparer_factory
        self.cache = cache or DiskVersionCache(events=self.events)
        self.cache_key_factory = cache_key_factory or GitCacheKeyFactory()
        self.config_locator = config_locator or ConfigFileLocator()

    # ------------------------------------------------------------------
    # Entrada estrita
    # ------------------------------------------------------------------

    def compute_version_variables(self, arguments: ComputeArguments) -> VersionVariables:
        """
        Calcula (ou reutiliza do cache) as variáveis de versão do repositório alvo.

        Raises:
            RepositoryLocationError: se `.git` ou a raiz do projeto não forem encontrados.
            ConfigError: se a configuração for inválida (ex.: branch sem `regex`).
        """
        build_server = self.build_server_resolver.get_current_build_server()

        # normaliza apenas sob build server
        normalize = not arguments.no_normalize and build_server is not None
        no_fetch = arguments.no_fetch or (build_server is not None and build_server.prevent_fetch())
        cleanup_remotes = build_server is not None and build_server.should_clean_up_remotes()

        effective_arguments = replace(arguments, no_fetch=no_fetch)
        preparer = self.preparer_factory(effective_arguments, self.events)

        is_dynamic = bool(arguments.dynamic_repository_location and arguments.dynamic_repository_location.strip())
        current_branch = self._resolve_current_branch(build_server, arguments.target_branch, is_dynamic)

        preparer.initialize(normalize, current_branch, cleanup_remotes)

        dot_git_directory = preparer.get_dot_git_directory()
        project_root = preparer.get_project_root_directory()

        self.events.log(stage=STAGE, level="info", message=f"Project root is: {project_root}")
        self.events.log(stage=STAGE, level="info", message=f"DotGit directory is: {dot_git_directory}")
        if not dot_git_directory or not project_root:
            raise RepositoryLocationError(
                message=f"Falha ao preparar ou localizar o diretório .git no caminho '{arguments.target_path}'",
                details={"target_path": arguments.target_path},
                hint="Execute a partir de um repositório git ou informe o caminho correto",
            )

        return self._get_cached_version_variables(effective_arguments, current_branch, preparer)

    # ------------------------------------------------------------------
    # Entrada best-effort
    # ------------------------------------------------------------------

    def try_get_version(self, directory: str, no_fetch: bool) -> Tuple[Optional[VersionVariables], bool]:
        try:
            variables = self.compute_version_variables(ComputeArguments(target_path=directory, no_fetch=no_fetch))
        except Exception as exc:
            self.events.warn(
                stage=STAGE,
                message=f"Could not determine version: {exc}",
                error=exception_to_payload(exc).to_dict(),
            )
            return None, False
        return variables, True

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _resolve_current_branch(
        self,
        build_server: Optional[BuildServer],
        target_branch: Optional[str],
        is_dynamic_repository: bool,
    ) -> Optional[str]:
        if build_server is None:
            return target_branch

        current_branch = build_server.get_current_branch(is_dynamic_repository) or target_branch
        self.events.log(stage=STAGE, level="info", message=f"Branch from build environment: {current_branch}")
        return current_branch

    def _load_from_cache(self, preparer: RepositoryPreparer, key: CacheKey) -> Optional[VersionVariables]:
        try:
            return self.cache.load(preparer, key)
        except Exception as exc:
            payload = cache_read_failed(
                cache_key=key.value,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )
            self.events.warn(stage=STAGE, message=payload.message, error=payload.to_dict())
            return None

    def _get_cached_version_variables(
        self,
        arguments: ComputeArguments,
        current_branch: Optional[str],
        preparer: RepositoryPreparer,
    ) -> VersionVariables:
        key = self.cache_key_factory.create(preparer, arguments.override_config, self.config_locator)

        variables = None if arguments.no_cache else self._load_from_cache(preparer, key)
        if variables is not None:
            self.events.log(stage=STAGE, level="info", message="cache hit", cache_key=key.value)
            return variables

        self.events.log(stage=STAGE, level="info", message="cache miss", cache_key=key.value, no_cache=arguments.no_cache)
        variables = self._execute(arguments, current_branch, preparer)

        if not arguments.no_cache:
            try:
                self.cache.save(preparer, key, variables)
            except Exception as exc:
                if isinstance(exc, CacheWriteError):
                    errors = list(exc.details.get("errors", [])) or [exc.message]
                else:
                    errors = [f"{exc.__class__.__name__}: {exc}"]
                payload = cache_write_failed(cache_key=key.value, errors=errors)
                self.events.warn(
                    stage=STAGE,
                    message=f"One or more exceptions during cache write: {exc}",
                    error=payload.to_dict(),
                )

        return variables

    def _execute(
        self,
        arguments: ComputeArguments,
        current_branch: Optional[str],
        preparer: RepositoryPreparer,
    ) -> VersionVariables:
        configuration = provide_configuration(
            project_root=preparer.get_project_root_directory(),
            working_directory=preparer.working_directory,
            override_config=arguments.override_config,
            locator=self.config_locator,
        )

        def _compute(repository: Any) -> VersionVariables:
            context = VersionContext(
                repository=repository,
                current_branch=current_branch,
                configuration=configuration,
                commit_id=arguments.commit_id,
            )
            semantic_version = self.version_finder.find_version(context)
            return self.variable_provider.get_variables_for(
                semantic_version,
                context.configuration,
                context.is_current_commit_tagged,
            )

        return preparer.with_repository(_compute)
