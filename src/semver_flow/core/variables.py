# src/semver_flow/core/variables.py
"""
Versão semântica e variáveis de saída do SemVer Flow.

Este módulo define:
    - SemanticVersion (+ PreReleaseTag, BuildMetaData) → valor devolvido pelo
      version finder externo
    - VersionVariables → conjunto imutável de variáveis de saída (nome → texto),
      que é o valor reutilizado pelo cache
    - DefaultVariableProvider → formatação default de SemanticVersion em
      VersionVariables a partir da configuração resolvida

Invariantes:
    - Toda variável de saída é uma string (ausente → "")
    - O provider não muta a SemanticVersion recebida
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterator, Optional

from .config.model import AssemblyVersioningScheme, GlobalConfig, VersioningMode


@dataclass(frozen=True)
class PreReleaseTag:
    name: str = ""
    number: Optional[int] = None

    def has_tag(self) -> bool:
        return bool(self.name) or self.number is not None

    def __str__(self) -> str:
        if not self.has_tag():
            return ""
        if self.number is None:
            return self.name
        if not self.name:
            return str(self.number)
        return f"{self.name}.{self.number}"

    def legacy(self, padding: int = 0) -> str:
        if not self.has_tag():
            return ""
        number = "" if self.number is None else str(self.number).zfill(padding)
        return f"{self.name}{number}"


@dataclass(frozen=True)
class BuildMetaData:
    commits_since_tag: Optional[int] = None
    branch: Optional[str] = None
    sha: Optional[str] = None
    short_sha: Optional[str] = None
    commit_date: Optional[datetime] = None
    version_source_sha: Optional[str] = None
    commits_since_version_source: int = 0
    other_metadata: Optional[str] = None

    def full(self) -> str:
        parts = []
        if self.commits_since_tag is not None:
            parts.append(str(self.commits_since_tag))
        if self.branch:
            parts.append(f"Branch.{escape_branch_name(self.branch)}")
        if self.sha:
            parts.append(f"Sha.{self.sha}")
        if self.other_metadata:
            parts.append(self.other_metadata)
        return ".".join(parts)


@dataclass(frozen=True)
class SemanticVersion:
    major: int = 0
    minor: int = 0
    patch: int = 0
    pre_release_tag: PreReleaseTag = field(default_factory=PreReleaseTag)
    build_metadata: BuildMetaData = field(default_factory=BuildMetaData)

    def major_minor_patch(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        tag = str(self.pre_release_tag)
        return self.major_minor_patch() + (f"-{tag}" if tag else "")


@dataclass(frozen=True)
class VersionVariables:
    """Conjunto imutável de variáveis de saída (nome → texto)."""

    values: Dict[str, str] = field(default_factory=dict)

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(name, default)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionVariables":
        return cls(values={str(k): "" if v is None else str(v) for k, v in data.items()})


def escape_branch_name(branch_name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9-]", "-", branch_name)


_DATE_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "MM": "%m",
    "dd": "%d",
    "HH": "%H",
    "mm": "%M",
    "ss": "%S",
}


def format_commit_date(value: Optional[datetime], date_format: str) -> str:
    """Formata a data do commit usando tokens no estilo `yyyy-MM-dd`."""
    if value is None:
        return ""
    pattern = re.sub(r"yyyy|yy|MM|dd|HH|mm|ss", lambda m: _DATE_TOKENS[m.group(0)], date_format)
    return value.strftime(pattern)


def _apply_format(template: str, variables: Dict[str, str]) -> str:
    return re.sub(r"\{(\w+)\}", lambda m: variables.get(m.group(1), m.group(0)), template)


def _assembly_version(scheme: Optional[AssemblyVersioningScheme], semver: SemanticVersion) -> str:
    if scheme == AssemblyVersioningScheme.MAJOR_MINOR_PATCH_TAG:
        return f"{semver.major}.{semver.minor}.{semver.patch}.{semver.pre_release_tag.number or 0}"
    if scheme == AssemblyVersioningScheme.MAJOR_MINOR_PATCH:
        return f"{semver.major}.{semver.minor}.{semver.patch}.0"
    if scheme == AssemblyVersioningScheme.MAJOR_MINOR:
        return f"{semver.major}.{semver.minor}.0.0"
    if scheme == AssemblyVersioningScheme.MAJOR:
        return f"{semver.major}.0.0.0"
    return ""


class DefaultVariableProvider:
    """
    Converte uma SemanticVersion nas variáveis de saída.

    Regras:
    - Em ContinuousDeployment (modo do branch, ou global) e commit não
      tagueado, o número de pre-release passa a ser
      `commits_since_version_source`; sem rótulo, usa o fallback tag global.
    - WeightedPreReleaseNumber soma o peso do branch ao número de
      pre-release, ou usa `tag_pre_release_weight` quando não há pre-release.
    - Formatos `assembly-*-format` substituem o esquema, com placeholders
      `{Variavel}`.
    """

    def get_variables_for(
        self,
        semver: SemanticVersion,
        config: GlobalConfig,
        is_current_commit_tagged: bool,
    ) -> VersionVariables:
        meta = semver.build_metadata
        match = config.get_branch_config(meta.branch) if meta.branch else None
        branch = match[1] if match else None

        mode = (branch.versioning_mode if branch else None) or config.versioning_mode
        if mode == VersioningMode.CONTINUOUS_DEPLOYMENT and not is_current_commit_tagged:
            semver = replace(
                semver,
                pre_release_tag=PreReleaseTag(
                    name=semver.pre_release_tag.name or (config.continuous_delivery_fallback_tag or ""),
                    number=meta.commits_since_version_source,
                ),
                build_metadata=replace(meta, commits_since_tag=None),
            )
            meta = semver.build_metadata

        tag = semver.pre_release_tag
        pre_release_weight = (branch.pre_release_weight if branch else None) or 0
        if tag.has_tag():
            weighted = (tag.number or 0) + pre_release_weight
        else:
            weighted = config.tag_pre_release_weight or 0

        tag_text = str(tag)
        mmp = semver.major_minor_patch()
        build_meta = "" if meta.commits_since_tag is None else str(meta.commits_since_tag)
        build_meta_padded = (
            "" if meta.commits_since_tag is None
            else str(meta.commits_since_tag).zfill(config.build_metadata_padding or 0)
        )
        semver_text = mmp + (f"-{tag_text}" if tag_text else "")
        full_build_meta = meta.full()
        legacy = tag.legacy()
        legacy_padded = tag.legacy(config.legacy_semver_padding or 0)

        variables: Dict[str, str] = {
            "Major": str(semver.major),
            "Minor": str(semver.minor),
            "Patch": str(semver.patch),
            "PreReleaseTag": tag_text,
            "PreReleaseTagWithDash": f"-{tag_text}" if tag_text else "",
            "PreReleaseLabel": tag.name,
            "PreReleaseLabelWithDash": f"-{tag.name}" if tag.name else "",
            "PreReleaseNumber": "" if tag.number is None else str(tag.number),
            "WeightedPreReleaseNumber": str(weighted),
            "BuildMetaData": build_meta,
            "BuildMetaDataPadded": build_meta_padded,
            "FullBuildMetaData": full_build_meta,
            "MajorMinorPatch": mmp,
            "SemVer": semver_text,
            "LegacySemVer": mmp + (f"-{legacy}" if legacy else ""),
            "LegacySemVerPadded": mmp + (f"-{legacy_padded}" if legacy_padded else ""),
            "AssemblySemVer": _assembly_version(config.assembly_versioning_scheme, semver),
            "AssemblySemFileVer": _assembly_version(config.assembly_file_versioning_scheme, semver),
            "FullSemVer": semver_text + (f"+{build_meta}" if build_meta else ""),
            "BranchName": meta.branch or "",
            "EscapedBranchName": escape_branch_name(meta.branch or ""),
            "Sha": meta.sha or "",
            "ShortSha": meta.short_sha or "",
            "VersionSourceSha": meta.version_source_sha or "",
            "CommitsSinceVersionSource": str(meta.commits_since_version_source),
            "CommitsSinceVersionSourcePadded": str(meta.commits_since_version_source).zfill(
                config.commits_since_version_source_padding or 0
            ),
            "CommitDate": format_commit_date(meta.commit_date, config.commit_date_format or "yyyy-MM-dd"),
        }
        variables["InformationalVersion"] = semver_text + (f"+{full_build_meta}" if full_build_meta else "")

        if config.assembly_versioning_format:
            variables["AssemblySemVer"] = _apply_format(config.assembly_versioning_format, variables)
        if config.assembly_file_versioning_format:
            variables["AssemblySemFileVer"] = _apply_format(config.assembly_file_versioning_format, variables)
        if config.assembly_informational_format:
            variables["InformationalVersion"] = _apply_format(config.assembly_informational_format, variables)

        return VersionVariables(values=variables)
