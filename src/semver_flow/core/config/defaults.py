# src/semver_flow/core/config/defaults.py
"""
Motor de resolução de configuração do SemVer Flow.

Este módulo transforma uma configuração esparsa (poucos campos informados,
alguns branches definidos) em uma configuração totalmente populada, onde
todo branch built-in e customizado possui comportamento definido.

Algoritmo (ordem fixa, cada etapa apenas preenche o que está ausente):
    1. Snapshot das entradas de branch exatamente como informadas, validado
       antes de qualquer alteração (`regex` e `source-branches` das entradas
       customizadas, alvos de `is-source-branch-for`)
    2. Defaults globais (fill-if-absent)
    3. Defaults dos 7 branches built-in, na ordem da tabela de perfis
       (get-or-create da entrada + fill-if-absent)
    4. Defaults genéricos sobre o snapshot
    5. Propagação recíproca de `is-source-branch-for` (segunda passada,
       anexando a chave apenas quando ainda não listada)

Invariantes:
    - Valores informados pelo usuário nunca são sobrescritos
    - Listas nunca são mescladas: `source-branches` não vazio é mantido literalmente
    - Uma segunda resolução sobre uma configuração já resolvida não altera nada
    - Um erro de validação deixa a configuração recebida intacta

Limites explícitos:
    - Não lê arquivos nem aplica overrides (responsabilidade de `loader`)
    - Não cria entradas customizadas; apenas valida e completa
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Tuple

from .branches import (
    BUILTIN_BRANCH_KEYS,
    BUILTIN_BRANCH_PROFILES,
    DEFAULT_TAG,
    BranchProfile,
    pre_release_weight_for,
)
from .errors import ConfigurationError
from .model import (
    AssemblyVersioningScheme,
    BranchConfig,
    CommitMessageIncrementMode,
    GlobalConfig,
    IncrementStrategy,
    VersioningMode,
)

DEFAULT_TAG_PREFIX = "[vV]"
DEFAULT_MAJOR_PATTERN = r"\+semver:\s?(breaking|major)"
DEFAULT_MINOR_PATTERN = r"\+semver:\s?(feature|minor)"
DEFAULT_PATCH_PATTERN = r"\+semver:\s?(fix|patch)"
DEFAULT_NO_BUMP_PATTERN = r"\+semver:\s?(none|skip)"
DEFAULT_INCREMENT_STRATEGY = IncrementStrategy.INHERIT
DEFAULT_TAG_PRE_RELEASE_WEIGHT = 60000

# (campo, default) na ordem de aplicação
GLOBAL_DEFAULTS: Tuple[Tuple[str, Any], ...] = (
    ("assembly_versioning_scheme", AssemblyVersioningScheme.MAJOR_MINOR_PATCH),
    ("assembly_file_versioning_scheme", AssemblyVersioningScheme.MAJOR_MINOR_PATCH),
    ("tag_prefix", DEFAULT_TAG_PREFIX),
    ("versioning_mode", VersioningMode.CONTINUOUS_DELIVERY),
    ("continuous_delivery_fallback_tag", "ci"),
    ("major_version_bump_message", DEFAULT_MAJOR_PATTERN),
    ("minor_version_bump_message", DEFAULT_MINOR_PATTERN),
    ("patch_version_bump_message", DEFAULT_PATCH_PATTERN),
    ("no_bump_message", DEFAULT_NO_BUMP_PATTERN),
    ("commit_message_incrementing", CommitMessageIncrementMode.ENABLED),
    ("legacy_semver_padding", 4),
    ("build_metadata_padding", 4),
    ("commits_since_version_source_padding", 4),
    ("commit_date_format", "yyyy-MM-dd"),
    ("update_build_number", True),
    ("tag_pre_release_weight", DEFAULT_TAG_PRE_RELEASE_WEIGHT),
)


def _is_unset(value: Any) -> bool:
    return value is None


def _is_blank(value: Any) -> bool:
    return value is None or len(value) == 0


def fill_if_absent(
    target: Any,
    attr: str,
    value: Any,
    *,
    absent: Callable[[Any], bool] = _is_unset,
) -> bool:
    """Atribui `value` a `target.attr` somente se o valor atual for ausente.

    Returns:
        bool: True quando o campo foi preenchido.
    """
    if absent(getattr(target, attr)):
        setattr(target, attr, value)
        return True
    return False


def apply_global_defaults(config: GlobalConfig) -> None:
    for attr, value in GLOBAL_DEFAULTS:
        fill_if_absent(config, attr, value)


def apply_branch_defaults(
    config: GlobalConfig,
    branch: BranchConfig,
    branch_regex: str,
    source_branches: Iterable[str],
    *,
    tag: str = DEFAULT_TAG,
    increment: Optional[IncrementStrategy] = None,
    prevent_increment: bool = False,
    versioning_mode: Optional[VersioningMode] = None,
    track_merge_target: bool = False,
    tag_number_pattern: Optional[str] = None,
    tracks_release_branches: bool = False,
    is_release_branch: bool = False,
    is_mainline: bool = False,
) -> None:
    """
    Completa uma entrada de branch com os defaults informados.

    Usada tanto para os branches built-in (defaults da tabela de perfis)
    quanto para as entradas do snapshot (regex/source-branches da própria
    entrada e defaults genéricos). `increment` e `versioning_mode` ausentes
    são lidos da configuração global; o peso de pre-release é procurado
    pelo texto de `branch_regex`.
    """
    fill_if_absent(branch, "regex", branch_regex, absent=_is_blank)
    fill_if_absent(branch, "source_branches", list(source_branches), absent=_is_blank)
    fill_if_absent(branch, "tag", tag)
    fill_if_absent(branch, "tag_number_pattern", tag_number_pattern)
    fill_if_absent(branch, "increment", increment or config.increment or DEFAULT_INCREMENT_STRATEGY)
    fill_if_absent(branch, "prevent_increment_of_merged_branch_version", prevent_increment)
    fill_if_absent(branch, "track_merge_target", track_merge_target)
    fill_if_absent(branch, "versioning_mode", versioning_mode or config.versioning_mode)
    fill_if_absent(branch, "tracks_release_branches", tracks_release_branches)
    fill_if_absent(branch, "is_release_branch", is_release_branch)
    fill_if_absent(branch, "is_mainline", is_mainline)
    fill_if_absent(branch, "pre_release_weight", pre_release_weight_for(branch_regex))


def _get_or_create_branch(config: GlobalConfig, branch_key: str) -> BranchConfig:
    branch = config.branches.get(branch_key)
    if branch is None:
        branch = BranchConfig(name=branch_key)
        config.branches[branch_key] = branch
    return branch


def _apply_profile(config: GlobalConfig, branch: BranchConfig, profile: BranchProfile) -> None:
    apply_branch_defaults(
        config,
        branch,
        profile.regex,
        profile.source_branches,
        tag=profile.tag,
        increment=profile.increment,
        prevent_increment=profile.prevent_increment,
        versioning_mode=profile.default_versioning_mode(config.versioning_mode),
        track_merge_target=profile.track_merge_target,
        tag_number_pattern=profile.tag_number_pattern,
        tracks_release_branches=profile.tracks_release_branches,
        is_release_branch=profile.is_release_branch,
        is_mainline=profile.is_mainline,
    )


def _validate_snapshot(snapshot: List[Tuple[str, BranchConfig]]) -> None:
    """
    Valida as entradas informadas antes de qualquer alteração na configuração.

    Entradas built-in recebem `regex`/`source-branches` da tabela de perfis e
    nunca falham aqui. Alvos de `is-source-branch-for` podem ser qualquer
    entrada informada ou qualquer chave built-in.
    """
    known_keys = set(BUILTIN_BRANCH_KEYS).union(key for key, _ in snapshot)

    for key, branch in snapshot:
        if key not in BUILTIN_BRANCH_KEYS:
            if _is_blank(branch.regex):
                raise ConfigurationError(key, "regex")
            if _is_blank(branch.source_branches):
                raise ConfigurationError(key, "source-branches")

        for target_key in branch.is_source_branch_for or []:
            if target_key not in known_keys:
                raise ConfigurationError(
                    key,
                    "is-source-branch-for",
                    detail=(
                        f"Configuração do branch '{key}' declara 'is-source-branch-for' "
                        f"para o branch desconhecido '{target_key}'"
                    ),
                )


def _propagate_source_branches(config: GlobalConfig, snapshot: List[Tuple[str, BranchConfig]]) -> None:
    # coleta primeiro, aplica depois: nenhuma lista é alterada durante a varredura
    pending = [
        (target_key, key)
        for key, branch in snapshot
        for target_key in branch.is_source_branch_for or []
    ]

    for target_key, source_key in pending:
        target = config.branches[target_key]
        if source_key not in target.source_branches:
            target.source_branches.append(source_key)


def resolve(config: GlobalConfig) -> None:
    """
    Resolve a configuração in-place, produzindo uma instância totalmente populada.

    Toda validação acontece antes da primeira alteração: em caso de erro a
    instância recebida permanece intacta.

    Raises:
        ConfigurationError: quando uma entrada customizada não possui `regex`
            ou `source-branches`, ou quando uma entrada declara
            `is-source-branch-for` para um branch inexistente.
    """
    snapshot = list(config.branches.items())
    _validate_snapshot(snapshot)

    apply_global_defaults(config)

    for key, profile in BUILTIN_BRANCH_PROFILES:
        _apply_profile(config, _get_or_create_branch(config, key), profile)

    for key, branch in snapshot:
        apply_branch_defaults(config, branch, branch.regex, branch.source_branches)

    _propagate_source_branches(config, snapshot)
