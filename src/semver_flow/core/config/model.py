# src/semver_flow/core/config/model.py
"""
Modelo canônico de configuração do SemVer Flow.

Este módulo define as estruturas que representam a configuração de cálculo
de versão: a configuração global (`GlobalConfig`) e uma entrada por grupo
de branches (`BranchConfig`).

Ambas são esparsas na construção: todo campo ausente vale `None` até que o
motor de resolução (`core.config.defaults.resolve`) preencha os defaults.

Componentes principais:
    - VersioningMode, IncrementStrategy, AssemblyVersioningScheme,
      CommitMessageIncrementMode → enums com valores textuais do YAML
    - BranchConfig → comportamento de um grupo de branches
    - GlobalConfig → configuração de processo + mapa de branches

Invariantes:
    - Chaves YAML são kebab-case e estáveis
    - `None` significa "não informado", nunca "desligado"
    - Referências entre branches são feitas por chave (string), nunca por identidade

Limites explícitos:
    - Não aplica defaults (responsabilidade de `defaults`)
    - Não lê arquivos (responsabilidade de `loader`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidConfigValueError


class VersioningMode(str, Enum):
    """Modo de versionamento de um branch (ou global)."""

    CONTINUOUS_DELIVERY = "ContinuousDelivery"
    CONTINUOUS_DEPLOYMENT = "ContinuousDeployment"
    MAINLINE = "Mainline"


class IncrementStrategy(str, Enum):
    """Estratégia de incremento; `Inherit` herda do branch de origem."""

    NONE = "None"
    MAJOR = "Major"
    MINOR = "Minor"
    PATCH = "Patch"
    INHERIT = "Inherit"


class AssemblyVersioningScheme(str, Enum):
    MAJOR_MINOR_PATCH_TAG = "MajorMinorPatchTag"
    MAJOR_MINOR_PATCH = "MajorMinorPatch"
    MAJOR_MINOR = "MajorMinor"
    MAJOR = "Major"
    NONE = "None"


class CommitMessageIncrementMode(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"
    MERGE_MESSAGE_ONLY = "MergeMessageOnly"


def _key(yaml_key: str, kind: Any) -> Dict[str, Any]:
    return {"key": yaml_key, "kind": kind}


def _convert(yaml_key: str, kind: Any, value: Any) -> Any:
    """Converte um valor cru (YAML/JSON) para o tipo declarado do campo."""
    if value is None:
        return None

    if isinstance(kind, type) and issubclass(kind, Enum):
        text = str(value)
        for member in kind:
            if member.value.lower() == text.lower():
                return member
        allowed = ", ".join(m.value for m in kind)
        raise InvalidConfigValueError(
            f"Valor inválido para '{yaml_key}': {value!r} (aceitos: {allowed})"
        )

    if kind is bool:
        if not isinstance(value, bool):
            raise InvalidConfigValueError(f"'{yaml_key}' deve ser booleano, recebido: {value!r}")
        return value

    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfigValueError(f"'{yaml_key}' deve ser inteiro, recebido: {value!r}")
        return value

    if kind is list:
        if not isinstance(value, list):
            raise InvalidConfigValueError(f"'{yaml_key}' deve ser lista, recebido: {value!r}")
        return [str(v) for v in value]

    if isinstance(value, (dict, list)):
        raise InvalidConfigValueError(f"'{yaml_key}' deve ser texto, recebido: {value!r}")
    return str(value)


def _export(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return list(value)
    return value


@dataclass
class BranchConfig:
    """
    Configuração de um grupo de branches (identificado por uma chave).

    Campos:
        - name: nome de exibição (a chave do mapa, por padrão)
        - regex: padrão aplicado ao nome curto do branch
        - source_branches: chaves dos branches dos quais a versão pode derivar
        - is_source_branch_for: declaração recíproca (somente escrita)
        - tag: rótulo de pre-release ("" = sem pre-release)
        - tag_number_pattern: regex com grupo nomeado `number`
        - demais flags: comportamento consumido pelo version finder

    Invariantes (após resolução):
        - `regex` e `source_branches` não são vazios
        - `source_branches` mantém a ordem e as repetições informadas; a
          propagação de `is-source-branch-for` só anexa chaves ainda não listadas
    """

    name: Optional[str] = None
    regex: Optional[str] = field(default=None, metadata=_key("regex", str))
    source_branches: Optional[List[str]] = field(default=None, metadata=_key("source-branches", list))
    is_source_branch_for: Optional[List[str]] = field(
        default=None, metadata=_key("is-source-branch-for", list)
    )
    tag: Optional[str] = field(default=None, metadata=_key("tag", str))
    tag_number_pattern: Optional[str] = field(default=None, metadata=_key("tag-number-pattern", str))
    increment: Optional[IncrementStrategy] = field(
        default=None, metadata=_key("increment", IncrementStrategy)
    )
    prevent_increment_of_merged_branch_version: Optional[bool] = field(
        default=None, metadata=_key("prevent-increment-of-merged-branch-version", bool)
    )
    track_merge_target: Optional[bool] = field(default=None, metadata=_key("track-merge-target", bool))
    versioning_mode: Optional[VersioningMode] = field(default=None, metadata=_key("mode", VersioningMode))
    tracks_release_branches: Optional[bool] = field(
        default=None, metadata=_key("tracks-release-branches", bool)
    )
    is_release_branch: Optional[bool] = field(default=None, metadata=_key("is-release-branch", bool))
    is_mainline: Optional[bool] = field(default=None, metadata=_key("is-mainline", bool))
    pre_release_weight: Optional[int] = field(default=None, metadata=_key("pre-release-weight", int))

    @classmethod
    def from_dict(cls, branch_key: str, data: Optional[Dict[str, Any]]) -> "BranchConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise InvalidConfigValueError(
                f"Configuração do branch '{branch_key}' deve ser um mapa, recebido: {type(data).__name__}"
            )
        branch = cls(name=branch_key)
        by_key = {f.metadata["key"]: f for f in fields(cls) if "key" in f.metadata}
        for yaml_key, raw in data.items():
            f = by_key.get(yaml_key)
            if f is None:
                raise InvalidConfigValueError(
                    f"Chave desconhecida '{yaml_key}' na configuração do branch '{branch_key}'"
                )
            setattr(branch, f.name, _convert(yaml_key, f.metadata["kind"], raw))
        return branch

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            if "key" not in f.metadata:
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.metadata["key"]] = _export(value)
        return out


@dataclass
class GlobalConfig:
    """
    Configuração de processo do cálculo de versão.

    Construída esparsa a partir do input do usuário e resolvida exatamente
    uma vez por cálculo; não é mutada depois da resolução.
    """

    assembly_versioning_scheme: Optional[AssemblyVersioningScheme] = field(
        default=None, metadata=_key("assembly-versioning-scheme", AssemblyVersioningScheme)
    )
    assembly_file_versioning_scheme: Optional[AssemblyVersioningScheme] = field(
        default=None, metadata=_key("assembly-file-versioning-scheme", AssemblyVersioningScheme)
    )
    assembly_informational_format: Optional[str] = field(
        default=None, metadata=_key("assembly-informational-format", str)
    )
    assembly_versioning_format: Optional[str] = field(
        default=None, metadata=_key("assembly-versioning-format", str)
    )
    assembly_file_versioning_format: Optional[str] = field(
        default=None, metadata=_key("assembly-file-versioning-format", str)
    )
    tag_prefix: Optional[str] = field(default=None, metadata=_key("tag-prefix", str))
    versioning_mode: Optional[VersioningMode] = field(default=None, metadata=_key("mode", VersioningMode))
    continuous_delivery_fallback_tag: Optional[str] = field(
        default=None, metadata=_key("continuous-delivery-fallback-tag", str)
    )
    major_version_bump_message: Optional[str] = field(
        default=None, metadata=_key("major-version-bump-message", str)
    )
    minor_version_bump_message: Optional[str] = field(
        default=None, metadata=_key("minor-version-bump-message", str)
    )
    patch_version_bump_message: Optional[str] = field(
        default=None, metadata=_key("patch-version-bump-message", str)
    )
    no_bump_message: Optional[str] = field(default=None, metadata=_key("no-bump-message", str))
    commit_message_incrementing: Optional[CommitMessageIncrementMode] = field(
        default=None, metadata=_key("commit-message-incrementing", CommitMessageIncrementMode)
    )
    legacy_semver_padding: Optional[int] = field(default=None, metadata=_key("legacy-semver-padding", int))
    build_metadata_padding: Optional[int] = field(default=None, metadata=_key("build-metadata-padding", int))
    commits_since_version_source_padding: Optional[int] = field(
        default=None, metadata=_key("commits-since-version-source-padding", int)
    )
    commit_date_format: Optional[str] = field(default=None, metadata=_key("commit-date-format", str))
    update_build_number: Optional[bool] = field(default=None, metadata=_key("update-build-number", bool))
    increment: Optional[IncrementStrategy] = field(default=None, metadata=_key("increment", IncrementStrategy))
    tag_pre_release_weight: Optional[int] = field(default=None, metadata=_key("tag-pre-release-weight", int))
    branches: Dict[str, BranchConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GlobalConfig":
        """Constrói uma configuração esparsa a partir de um mapa YAML/JSON."""
        data = data or {}
        config = cls()
        by_key = {f.metadata["key"]: f for f in fields(cls) if "key" in f.metadata}

        for yaml_key, raw in data.items():
            if yaml_key == "branches":
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise InvalidConfigValueError(
                        f"'branches' deve ser um mapa, recebido: {type(raw).__name__}"
                    )
                for branch_key, branch_data in raw.items():
                    config.branches[str(branch_key)] = BranchConfig.from_dict(str(branch_key), branch_data)
                continue

            f = by_key.get(yaml_key)
            if f is None:
                raise InvalidConfigValueError(f"Chave desconhecida '{yaml_key}' na configuração")
            setattr(config, f.name, _convert(yaml_key, f.metadata["kind"], raw))

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Mapa esparso (campos não informados são omitidos) com chaves YAML."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            if "key" not in f.metadata:
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.metadata["key"]] = _export(value)
        if self.branches:
            out["branches"] = {key: branch.to_dict() for key, branch in self.branches.items()}
        return out

    def get_branch_config(self, branch_name: str) -> Optional[Tuple[str, BranchConfig]]:
        """Retorna a primeira entrada cujo regex casa com o nome curto do branch."""
        short_name = branch_name
        if short_name.startswith("refs/heads/"):
            short_name = short_name[len("refs/heads/"):]

        for key, branch in self.branches.items():
            if branch.regex and re.search(branch.regex, short_name, re.IGNORECASE):
                return key, branch
        return None
