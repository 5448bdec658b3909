# src/semver_flow/core/engine/context.py
"""
Contexto do cálculo de versão entregue ao version finder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from ..config.model import BranchConfig, GlobalConfig


@dataclass
class VersionContext:
    """
    Contexto de um cálculo de versão.

    Campos:
        - repository: handle entregue por `with_repository`
        - current_branch: branch efetivo (CI ou informado pelo chamador)
        - configuration: configuração totalmente resolvida
        - commit_id: commit alvo (None = HEAD)
        - is_current_commit_tagged: calculado na construção via repositório
    """

    repository: Any
    current_branch: Optional[str]
    configuration: GlobalConfig
    commit_id: Optional[str] = None
    is_current_commit_tagged: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.is_current_commit_tagged = bool(self.repository.is_commit_tagged(self.commit_id))

    @property
    def branch_configuration(self) -> Optional[Tuple[str, BranchConfig]]:
        if not self.current_branch:
            return None
        return self.configuration.get_branch_config(self.current_branch)
