# src/semver_flow/core/config/branches.py
"""
Tabela canônica de perfis de branches built-in.

Este módulo define as 7 categorias de branch reconhecidas nativamente
(develop, master, release, feature, pull-request, hotfix, support), cada uma
com seus parâmetros de comportamento default e peso de pre-release.

A tabela é um dado de processo, somente leitura, construído uma única vez
no import: uma tupla ordenada de pares (chave, perfil). A ordem da tupla é
a ordem de aplicação durante a resolução.

Invariantes:
    - As chaves reservadas são exatamente as 7 de `BUILTIN_BRANCH_KEYS`
    - O peso de pre-release é indexado pelo texto do regex, não pela chave
    - Nenhum perfil é mutável
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .model import IncrementStrategy, VersioningMode

DEVELOP_BRANCH_KEY = "develop"
MASTER_BRANCH_KEY = "master"
RELEASE_BRANCH_KEY = "release"
FEATURE_BRANCH_KEY = "feature"
PULL_REQUEST_BRANCH_KEY = "pull-request"
HOTFIX_BRANCH_KEY = "hotfix"
SUPPORT_BRANCH_KEY = "support"

DEVELOP_BRANCH_REGEX = "^dev(elop)?(ment)?$"
MASTER_BRANCH_REGEX = "^master$|^main$"
RELEASE_BRANCH_REGEX = "^releases?[/-]"
FEATURE_BRANCH_REGEX = "^features?[/-]"
PULL_REQUEST_REGEX = r"^(pull|pull\-requests|pr)[/-]"
HOTFIX_BRANCH_REGEX = "^hotfix(es)?[/-]"
SUPPORT_BRANCH_REGEX = "^support[/-]"

DEFAULT_TAG = "useBranchName"
PULL_REQUEST_TAG_NUMBER_PATTERN = r"[/-](?P<number>\d+)"

DEFAULT_PRE_RELEASE_WEIGHT: Dict[str, int] = {
    DEVELOP_BRANCH_REGEX: 0,
    HOTFIX_BRANCH_REGEX: 30000,
    RELEASE_BRANCH_REGEX: 30000,
    FEATURE_BRANCH_REGEX: 30000,
    PULL_REQUEST_REGEX: 30000,
    SUPPORT_BRANCH_REGEX: 55000,
    MASTER_BRANCH_REGEX: 55000,
}


@dataclass(frozen=True)
class BranchProfile:
    """
    Defaults de uma categoria built-in de branch.

    `versioning_mode` None significa "herdar o modo global". Quando
    `follows_global_mainline` é verdadeiro, o modo vira Mainline sempre que o
    modo global for Mainline (caso do develop).
    """

    regex: str
    source_branches: Tuple[str, ...]
    tag: str = DEFAULT_TAG
    increment: Optional[IncrementStrategy] = None
    prevent_increment: bool = False
    versioning_mode: Optional[VersioningMode] = None
    follows_global_mainline: bool = False
    track_merge_target: bool = False
    tag_number_pattern: Optional[str] = None
    tracks_release_branches: bool = False
    is_release_branch: bool = False
    is_mainline: bool = False

    def default_versioning_mode(self, global_mode: Optional[VersioningMode]) -> Optional[VersioningMode]:
        if self.follows_global_mainline and global_mode == VersioningMode.MAINLINE:
            return VersioningMode.MAINLINE
        return self.versioning_mode


BUILTIN_BRANCH_PROFILES: Tuple[Tuple[str, BranchProfile], ...] = (
    (
        DEVELOP_BRANCH_KEY,
        BranchProfile(
            regex=DEVELOP_BRANCH_REGEX,
            source_branches=(MASTER_BRANCH_KEY,),
            tag="alpha",
            increment=IncrementStrategy.MINOR,
            versioning_mode=VersioningMode.CONTINUOUS_DEPLOYMENT,
            follows_global_mainline=True,
            track_merge_target=True,
            tracks_release_branches=True,
        ),
    ),
    (
        MASTER_BRANCH_KEY,
        BranchProfile(
            regex=MASTER_BRANCH_REGEX,
            source_branches=(DEVELOP_BRANCH_KEY, RELEASE_BRANCH_KEY),
            tag="",
            increment=IncrementStrategy.PATCH,
            prevent_increment=True,
            is_mainline=True,
        ),
    ),
    (
        RELEASE_BRANCH_KEY,
        BranchProfile(
            regex=RELEASE_BRANCH_REGEX,
            source_branches=(DEVELOP_BRANCH_KEY, MASTER_BRANCH_KEY, SUPPORT_BRANCH_KEY, RELEASE_BRANCH_KEY),
            tag="beta",
            increment=IncrementStrategy.NONE,
            prevent_increment=True,
            is_release_branch=True,
        ),
    ),
    (
        FEATURE_BRANCH_KEY,
        BranchProfile(
            regex=FEATURE_BRANCH_REGEX,
            source_branches=(
                DEVELOP_BRANCH_KEY,
                MASTER_BRANCH_KEY,
                RELEASE_BRANCH_KEY,
                FEATURE_BRANCH_KEY,
                SUPPORT_BRANCH_KEY,
                HOTFIX_BRANCH_KEY,
            ),
            increment=IncrementStrategy.INHERIT,
        ),
    ),
    (
        PULL_REQUEST_BRANCH_KEY,
        BranchProfile(
            regex=PULL_REQUEST_REGEX,
            source_branches=(
                DEVELOP_BRANCH_KEY,
                MASTER_BRANCH_KEY,
                RELEASE_BRANCH_KEY,
                FEATURE_BRANCH_KEY,
                SUPPORT_BRANCH_KEY,
                HOTFIX_BRANCH_KEY,
            ),
            tag="PullRequest",
            tag_number_pattern=PULL_REQUEST_TAG_NUMBER_PATTERN,
            increment=IncrementStrategy.INHERIT,
        ),
    ),
    (
        HOTFIX_BRANCH_KEY,
        BranchProfile(
            regex=HOTFIX_BRANCH_REGEX,
            source_branches=(DEVELOP_BRANCH_KEY, MASTER_BRANCH_KEY, SUPPORT_BRANCH_KEY),
            tag="beta",
            increment=IncrementStrategy.PATCH,
        ),
    ),
    (
        SUPPORT_BRANCH_KEY,
        BranchProfile(
            regex=SUPPORT_BRANCH_REGEX,
            source_branches=(MASTER_BRANCH_KEY,),
            tag="",
            increment=IncrementStrategy.PATCH,
            prevent_increment=True,
            is_mainline=True,
        ),
    ),
)

BUILTIN_BRANCH_KEYS: Tuple[str, ...] = tuple(key for key, _ in BUILTIN_BRANCH_PROFILES)


def pre_release_weight_for(regex: Optional[str]) -> int:
    """Peso default para um regex; 0 quando não é um regex built-in."""
    if regex is None:
        return 0
    return DEFAULT_PRE_RELEASE_WEIGHT.get(regex, 0)
