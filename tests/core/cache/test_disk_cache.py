# tests/core/cache/test_disk_cache.py
"""
Testes do cache YAML em disco.

Os testes asseguram que:
- uma entrada gravada é lida de volta com as mesmas variáveis
- entrada ausente é cache miss
- entrada corrompida é descartada (miss + warning)
- falhas de I/O na gravação são agregadas em CacheWriteError
"""

import pytest

from semver_flow.core.cache.key import CacheKey
from semver_flow.core.cache.store import CACHE_DIRECTORY_NAME, DiskVersionCache
from semver_flow.core.events import EventLog
from semver_flow.core.exceptions import CacheWriteError
from semver_flow.core.variables import VersionVariables


class DotGitPreparer:
    def __init__(self, dot_git):
        self.dot_git = dot_git

    def get_dot_git_directory(self):
        return str(self.dot_git)


@pytest.fixture
def preparer(git_repo):
    return DotGitPreparer(git_repo / ".git")


def test_save_then_load(preparer, git_repo):
    cache = DiskVersionCache()
    key = CacheKey("abc123")
    variables = VersionVariables({"SemVer": "1.0.0", "PreReleaseNumber": "", "Major": "1"})

    cache.save(preparer, key, variables)

    path = git_repo / ".git" / CACHE_DIRECTORY_NAME / "abc123.yml"
    assert path.is_file()
    assert cache.load(preparer, key) == variables
    assert list(path.parent.glob("*.tmp")) == []


def test_missing_entry_is_miss(preparer):
    assert DiskVersionCache().load(preparer, CacheKey("nope")) is None


def test_corrupt_entry_is_discarded(preparer, git_repo):
    events = EventLog()
    cache = DiskVersionCache(events=events)
    cache_dir = git_repo / ".git" / CACHE_DIRECTORY_NAME
    cache_dir.mkdir()
    entry = cache_dir / "bad.yml"
    entry.write_text("just a string\n", encoding="utf-8")

    assert cache.load(preparer, CacheKey("bad")) is None
    assert not entry.exists()
    assert events.warnings["cache"] == ["corrupt cache entry ignored"]


def test_write_failure_raises_cache_write_error(tmp_path):
    # `.git` é um arquivo: o diretório de cache não pode ser criado
    blocker = tmp_path / "dotgit"
    blocker.write_text("not a directory", encoding="utf-8")
    cache = DiskVersionCache()

    with pytest.raises(CacheWriteError) as exc:
        cache.save(DotGitPreparer(blocker), CacheKey("k1"), VersionVariables({"SemVer": "1.0.0"}))

    assert exc.value.details["cache_key"] == "k1"
    assert len(exc.value.details["errors"]) >= 1


def test_last_write_wins(preparer):
    cache = DiskVersionCache()
    key = CacheKey("same")

    cache.save(preparer, key, VersionVariables({"SemVer": "1.0.0"}))
    cache.save(preparer, key, VersionVariables({"SemVer": "2.0.0"}))

    assert cache.load(preparer, key)["SemVer"] == "2.0.0"
