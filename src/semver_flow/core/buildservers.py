# src/semver_flow/core/buildservers.py
"""
Detecção do build server corrente a partir de variáveis de ambiente.

Cada build server conhece:
    - como detectar que está em execução (`can_apply`)
    - qual branch o CI está construindo
    - se o fetch deve ser impedido e se remotes devem ser limpos

O resolver devolve o primeiro build server aplicável, ou `None` em execuções
locais. O ambiente é injetável para facilitar testes.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Sequence, Tuple, Type


class BuildServerBase:
    """Base comum: fetch impedido, remotes preservados."""

    name = "base"
    branch_variable: Optional[str] = None

    def __init__(self, environ: Mapping[str, str]):
        self.environ = environ

    @classmethod
    def can_apply(cls, environ: Mapping[str, str]) -> bool:
        raise NotImplementedError

    def get_current_branch(self, is_dynamic_repository: bool) -> Optional[str]:
        if self.branch_variable is None:
            return None
        return self.environ.get(self.branch_variable) or None

    def prevent_fetch(self) -> bool:
        return True

    def should_clean_up_remotes(self) -> bool:
        return False


class GitHubActions(BuildServerBase):
    name = "GitHubActions"
    branch_variable = "GITHUB_REF"

    @classmethod
    def can_apply(cls, environ: Mapping[str, str]) -> bool:
        return environ.get("GITHUB_ACTIONS", "").lower() == "true"

    def get_current_branch(self, is_dynamic_repository: bool) -> Optional[str]:
        # pull requests expõem o branch de origem em GITHUB_HEAD_REF
        return self.environ.get("GITHUB_HEAD_REF") or super().get_current_branch(is_dynamic_repository)


class GitLabCi(BuildServerBase):
    name = "GitLabCi"
    branch_variable = "CI_COMMIT_REF_NAME"

    @classmethod
    def can_apply(cls, environ: Mapping[str, str]) -> bool:
        return bool(environ.get("GITLAB_CI"))


class AzurePipelines(BuildServerBase):
    name = "AzurePipelines"
    branch_variable = "BUILD_SOURCEBRANCH"

    @classmethod
    def can_apply(cls, environ: Mapping[str, str]) -> bool:
        return bool(environ.get("TF_BUILD"))


class Jenkins(BuildServerBase):
    name = "Jenkins"

    @classmethod
    def can_apply(cls, environ: Mapping[str, str]) -> bool:
        return bool(environ.get("JENKINS_URL"))

    def get_current_branch(self, is_dynamic_repository: bool) -> Optional[str]:
        return self.environ.get("GIT_LOCAL_BRANCH") or self.environ.get("BRANCH_NAME") or self.environ.get("GIT_BRANCH")

    def should_clean_up_remotes(self) -> bool:
        # Jenkins deixa remotes de builds anteriores no workspace
        return True


DEFAULT_BUILD_SERVERS: Tuple[Type[BuildServerBase], ...] = (
    GitHubActions,
    GitLabCi,
    AzurePipelines,
    Jenkins,
)


class EnvironmentBuildServerResolver:
    """Resolve o build server corrente a partir do ambiente do processo."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        build_servers: Sequence[Type[BuildServerBase]] = DEFAULT_BUILD_SERVERS,
    ):
        self.environ = os.environ if environ is None else environ
        self.build_servers = tuple(build_servers)

    def get_current_build_server(self) -> Optional[BuildServerBase]:
        for server_cls in self.build_servers:
            if server_cls.can_apply(self.environ):
                return server_cls(self.environ)
        return None
