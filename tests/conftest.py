# tests/conftest.py
"""
Fixtures compartilhados para testes do SemVer Flow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML esparsas semelhantes ao uso real
- um layout mínimo de `.git` em disco (sem invocar o git)
- colaboradores duck-typed: version finder com contador de chamadas,
  preparer, repositório e build server falsos

Decisões arquiteturais:
    - Colaboradores usam duck typing em vez de herança
    - Nenhuma fixture executa o binário `git`
    - Imports do core são realizados de forma lazy

Limites explícitos:
    - Não substituir testes de integração com repositórios reais
"""

from pathlib import Path

import pytest


# =====================================================
# Configuração
# =====================================================

@pytest.fixture
def sparse_config_yaml() -> str:
    """
    YAML de configuração esparso: um built-in sobrescrito e um branch customizado.

    Returns:
        str: Conteúdo de um `GitVersion.yml` típico.
    """
    return """\
mode: ContinuousDelivery
branches:
  develop:
    tag: dev
  docs:
    regex: ^docs?[/-]
    source-branches: [develop]
    is-source-branch-for: [feature]
"""


# =====================================================
# Repositório em disco
# =====================================================

@pytest.fixture
def git_repo(tmp_path) -> Path:
    """Cria `<tmp>/repo/.git` com HEAD e uma ref de branch (sem git real)."""
    repo = tmp_path / "repo"
    heads = repo / ".git" / "refs" / "heads"
    heads.mkdir(parents=True)
    (repo / ".git" / "HEAD").write_text("ref: refs/heads/master\n", encoding="utf-8")
    (heads / "master").write_text("1111111111111111111111111111111111111111\n", encoding="utf-8")
    return repo


# =====================================================
# Colaboradores falsos
# =====================================================

class FakeRepository:
    def __init__(self, tagged: bool = False):
        self.tagged = tagged
        self.tag_queries = []

    def is_commit_tagged(self, commit_id):
        self.tag_queries.append(commit_id)
        return self.tagged


class FakePreparer:
    """Preparer que aponta para um diretório pré-existente e registra chamadas."""

    def __init__(self, target_path, *, no_fetch=False, commit_id=None, repository=None, locate=True):
        self.target_path = str(target_path)
        self.working_directory = str(target_path)
        self.no_fetch = no_fetch
        self.commit_id = commit_id
        self.current_branch = None
        self.repository = repository or FakeRepository()
        self.locate = locate
        self.initialize_calls = []
        self.open_handles = 0
        self.released_handles = 0

    def initialize(self, normalize, current_branch, cleanup_remotes):
        self.current_branch = current_branch
        self.initialize_calls.append((normalize, current_branch, cleanup_remotes))

    def get_dot_git_directory(self):
        dot_git = Path(self.target_path) / ".git"
        return str(dot_git) if self.locate and dot_git.is_dir() else ""

    def get_project_root_directory(self):
        return self.target_path if self.locate and (Path(self.target_path) / ".git").is_dir() else ""

    def with_repository(self, fn):
        self.open_handles += 1
        try:
            return fn(self.repository)
        finally:
            self.released_handles += 1


class CountingFinder:
    """Version finder que devolve uma versão fixa e conta invocações."""

    def __init__(self, version=None):
        self.calls = 0
        self.contexts = []
        self.version = version

    def find_version(self, context):
        from semver_flow.core.variables import BuildMetaData, PreReleaseTag, SemanticVersion

        self.calls += 1
        self.contexts.append(context)
        if self.version is not None:
            return self.version
        return SemanticVersion(
            major=1,
            minor=2,
            patch=3,
            pre_release_tag=PreReleaseTag(name="beta", number=4),
            build_metadata=BuildMetaData(
                commits_since_tag=5,
                branch="release/1.2.3",
                sha="abcdef1234567890",
                short_sha="abcdef1",
                commits_since_version_source=5,
            ),
        )


class FakeBuildServer:
    def __init__(self, branch=None, prevent_fetch=True, cleanup_remotes=False):
        self.branch = branch
        self._prevent_fetch = prevent_fetch
        self._cleanup_remotes = cleanup_remotes
        self.branch_queries = []

    def get_current_branch(self, is_dynamic_repository):
        self.branch_queries.append(is_dynamic_repository)
        return self.branch

    def prevent_fetch(self):
        return self._prevent_fetch

    def should_clean_up_remotes(self):
        return self._cleanup_remotes


class FixedBuildServerResolver:
    def __init__(self, build_server=None):
        self.build_server = build_server

    def get_current_build_server(self):
        return self.build_server


@pytest.fixture
def counting_finder():
    return CountingFinder()


@pytest.fixture
def make_computer(git_repo, counting_finder):
    """
    Factory de VersionComputer com colaboradores controlados.

    Retorna `(computer, preparers)`, onde `preparers` acumula cada
    FakePreparer criado pela factory (um por cálculo).
    """
    from semver_flow.core.engine.computer import VersionComputer

    def _make(*, build_server=None, cache=None, locate=True, repository=None, finder=None):
        preparers = []

        def factory(arguments, events):
            preparer = FakePreparer(
                arguments.target_path,
                no_fetch=arguments.no_fetch,
                commit_id=arguments.commit_id,
                repository=repository,
                locate=locate,
            )
            preparers.append(preparer)
            return preparer

        kwargs = {}
        if cache is not None:
            kwargs["cache"] = cache
        computer = VersionComputer(
            version_finder=finder or counting_finder,
            build_server_resolver=FixedBuildServerResolver(build_server),
            preparer_factory=factory,
            **kwargs,
        )
        return computer, preparers

    return _make


@pytest.fixture
def BuildServerStub():
    """Retorna a classe FakeBuildServer (instanciada pelos testes)."""
    return FakeBuildServer


@pytest.fixture
def RepositoryStub():
    """Retorna a classe FakeRepository (instanciada pelos testes)."""
    return FakeRepository


@pytest.fixture
def FinderStub():
    """Retorna a classe CountingFinder (instanciada pelos testes)."""
    return CountingFinder
