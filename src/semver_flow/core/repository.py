# src/semver_flow/core/repository.py
"""
Preparação do repositório git.

Este módulo localiza o diretório `.git` a partir do caminho alvo, executa a
normalização opcional (fetch) via CLI do git e entrega um handle de
repositório com escopo controlado (`with_repository`).

Invariantes:
    - O diretório `.git` é procurado do caminho alvo em direção à raiz
    - Um arquivo `.git` (worktree/submódulo) é seguido via `gitdir:`
    - O handle entregue a `with_repository` é liberado em qualquer saída
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from .events import EventLog
from .exceptions import GitError

T = TypeVar("T")

STAGE = "repository"


def _run_git(
    args: List[str],
    cwd: Optional[str] = None,
    events: Optional[EventLog] = None,
) -> subprocess.CompletedProcess:
    """Executa um comando git e retorna o processo concluído."""

    cmd = ["git", *args]
    if events is not None:
        events.log(stage=STAGE, level="debug", message="running git command", command=" ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise GitError(message=f"falha ao executar git: {exc}", details={"command": cmd}) from exc

    if completed.returncode != 0:
        raise GitError(
            message=f"comando git falhou: {' '.join(cmd)}",
            details={"command": cmd, "stderr": completed.stderr.strip()},
        )

    return completed


def find_dot_git(start: Path) -> Optional[Path]:
    """Procura `.git` em `start` e nos diretórios ancestrais."""
    try:
        current = start.resolve()
    except OSError:
        return None

    if not current.exists():
        return None
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / ".git"
        if candidate.is_dir():
            return candidate
        if candidate.is_file():
            content = candidate.read_text(encoding="utf-8").strip()
            if content.startswith("gitdir:"):
                gitdir = Path(content[len("gitdir:"):].strip())
                if not gitdir.is_absolute():
                    gitdir = (directory / gitdir).resolve()
                return gitdir
    return None


class GitRepository:
    """Handle leve sobre a árvore de trabalho de um repositório."""

    def __init__(self, work_tree: str, events: Optional[EventLog] = None):
        self.work_tree = work_tree
        self.events = events
        self.closed = False

    def is_commit_tagged(self, commit_id: Optional[str]) -> bool:
        target = commit_id or "HEAD"
        completed = _run_git(["tag", "--points-at", target], cwd=self.work_tree, events=self.events)
        return bool(completed.stdout.strip())

    def close(self) -> None:
        self.closed = True


class GitPreparer:
    """
    Prepara o repositório alvo para o cálculo de versão.

    A normalização (quando solicitada pelo orquestrador) consiste em um
    `git fetch` (com `--prune` quando o build server pede limpeza de
    remotes), a menos que o fetch esteja desabilitado.
    """

    def __init__(
        self,
        target_path: str,
        *,
        no_fetch: bool = False,
        commit_id: Optional[str] = None,
        events: Optional[EventLog] = None,
    ):
        self.target_path = target_path
        self.working_directory = target_path
        self.no_fetch = no_fetch
        self.commit_id = commit_id
        self.events = events
        self.current_branch: Optional[str] = None
        self._dot_git: Optional[Path] = None
        self._project_root: Optional[Path] = None

    def _locate(self) -> None:
        dot_git = find_dot_git(Path(self.target_path))
        if dot_git is None:
            self._dot_git = None
            self._project_root = None
            return
        self._dot_git = dot_git
        if dot_git.name == ".git":
            self._project_root = dot_git.parent
        else:
            # gitdir externo: a raiz é o ancestral do alvo que contém o arquivo `.git`
            start = Path(self.target_path).resolve()
            self._project_root = next(
                (d for d in (start, *start.parents) if (d / ".git").exists()),
                None,
            )

    def initialize(self, normalize: bool, current_branch: Optional[str], cleanup_remotes: bool) -> None:
        self.current_branch = current_branch
        self._locate()
        if self._project_root is None:
            return

        if normalize and not self.no_fetch:
            args = ["fetch", "--prune"] if cleanup_remotes else ["fetch"]
            _run_git(args, cwd=str(self._project_root), events=self.events)

    def get_dot_git_directory(self) -> str:
        return str(self._dot_git) if self._dot_git is not None else ""

    def get_project_root_directory(self) -> str:
        return str(self._project_root) if self._project_root is not None else ""

    def with_repository(self, fn: Callable[[GitRepository], T]) -> T:
        repo = GitRepository(self.get_project_root_directory(), events=self.events)
        try:
            return fn(repo)
        finally:
            repo.close()
