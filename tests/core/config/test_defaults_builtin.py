# tests/core/config/test_defaults_builtin.py
"""
Testes dos defaults globais e dos 7 branches built-in.

Os testes asseguram que uma configuração vazia é resolvida para a tabela
canônica de perfis, e que valores informados pelo usuário nunca são
sobrescritos pelos defaults.
"""

import pytest

from semver_flow.core.config.branches import BUILTIN_BRANCH_KEYS, PULL_REQUEST_TAG_NUMBER_PATTERN
from semver_flow.core.config.defaults import DEFAULT_TAG_PREFIX, resolve
from semver_flow.core.config.model import (
    AssemblyVersioningScheme,
    CommitMessageIncrementMode,
    GlobalConfig,
    IncrementStrategy,
    VersioningMode,
)


@pytest.fixture
def resolved():
    config = GlobalConfig()
    resolve(config)
    return config


def test_global_defaults(resolved):
    assert resolved.assembly_versioning_scheme == AssemblyVersioningScheme.MAJOR_MINOR_PATCH
    assert resolved.assembly_file_versioning_scheme == AssemblyVersioningScheme.MAJOR_MINOR_PATCH
    assert resolved.tag_prefix == DEFAULT_TAG_PREFIX
    assert resolved.versioning_mode == VersioningMode.CONTINUOUS_DELIVERY
    assert resolved.continuous_delivery_fallback_tag == "ci"
    assert resolved.commit_message_incrementing == CommitMessageIncrementMode.ENABLED
    assert resolved.legacy_semver_padding == 4
    assert resolved.build_metadata_padding == 4
    assert resolved.commits_since_version_source_padding == 4
    assert resolved.commit_date_format == "yyyy-MM-dd"
    assert resolved.update_build_number is True
    assert resolved.tag_pre_release_weight == 60000


def test_formats_and_global_increment_stay_unset(resolved):
    assert resolved.assembly_informational_format is None
    assert resolved.assembly_versioning_format is None
    assert resolved.assembly_file_versioning_format is None
    assert resolved.increment is None


def test_builtin_entries_are_created_in_order(resolved):
    assert tuple(resolved.branches) == BUILTIN_BRANCH_KEYS


@pytest.mark.parametrize(
    "key, tag, increment, weight",
    [
        ("develop", "alpha", IncrementStrategy.MINOR, 0),
        ("master", "", IncrementStrategy.PATCH, 55000),
        ("release", "beta", IncrementStrategy.NONE, 30000),
        ("feature", "useBranchName", IncrementStrategy.INHERIT, 30000),
        ("pull-request", "PullRequest", IncrementStrategy.INHERIT, 30000),
        ("hotfix", "beta", IncrementStrategy.PATCH, 30000),
        ("support", "", IncrementStrategy.PATCH, 55000),
    ],
)
def test_builtin_profile_values(resolved, key, tag, increment, weight):
    branch = resolved.branches[key]

    assert branch.tag == tag
    assert branch.increment == increment
    assert branch.pre_release_weight == weight
    assert branch.regex
    assert branch.source_branches


def test_builtin_flags(resolved):
    b = resolved.branches

    assert b["develop"].versioning_mode == VersioningMode.CONTINUOUS_DEPLOYMENT
    assert b["develop"].track_merge_target is True
    assert b["develop"].tracks_release_branches is True
    assert b["master"].is_mainline is True
    assert b["master"].prevent_increment_of_merged_branch_version is True
    assert b["release"].is_release_branch is True
    assert b["support"].is_mainline is True
    assert b["pull-request"].tag_number_pattern == PULL_REQUEST_TAG_NUMBER_PATTERN
    assert b["feature"].versioning_mode == VersioningMode.CONTINUOUS_DELIVERY


def test_builtin_source_branches(resolved):
    b = resolved.branches

    assert b["develop"].source_branches == ["master"]
    assert b["master"].source_branches == ["develop", "release"]
    assert b["release"].source_branches == ["develop", "master", "support", "release"]
    assert b["hotfix"].source_branches == ["develop", "master", "support"]
    assert b["support"].source_branches == ["master"]


def test_develop_follows_global_mainline():
    config = GlobalConfig(versioning_mode=VersioningMode.MAINLINE)
    resolve(config)

    assert config.branches["develop"].versioning_mode == VersioningMode.MAINLINE
    assert config.branches["feature"].versioning_mode == VersioningMode.MAINLINE


def test_global_increment_does_not_override_builtin_profiles():
    """
    Todo perfil built-in declara o próprio incremento, então o incremento
    global não os alcança. Entradas customizadas herdam o global: veja
    `test_custom_branch_inherits_global_increment`.
    """
    config = GlobalConfig(increment=IncrementStrategy.MINOR)
    resolve(config)

    assert config.branches["master"].increment == IncrementStrategy.PATCH
    assert config.branches["feature"].increment == IncrementStrategy.INHERIT


def test_user_values_survive_builtin_defaults():
    config = GlobalConfig.from_dict(
        {
            "tag-prefix": "release-",
            "branches": {
                "develop": {"tag": "dev", "source-branches": ["master", "support"]},
                "master": {"regex": "^trunk$"},
            },
        }
    )
    resolve(config)

    assert config.tag_prefix == "release-"
    assert config.branches["develop"].tag == "dev"
    assert config.branches["develop"].source_branches == ["master", "support"]
    assert config.branches["develop"].increment == IncrementStrategy.MINOR
    assert config.branches["master"].regex == "^trunk$"
    assert config.branches["master"].is_mainline is True
