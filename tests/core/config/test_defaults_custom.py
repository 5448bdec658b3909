# tests/core/config/test_defaults_custom.py
"""
Testes de resolução para entradas customizadas de branch.

Cobre:
- validação de `regex` e `source-branches` obrigatórios
- defaults genéricos (tag, incremento, peso indexado por regex)
- propagação recíproca de `is-source-branch-for`
- idempotência da resolução
"""

import pytest

from semver_flow.core.config.branches import HOTFIX_BRANCH_REGEX
from semver_flow.core.config.defaults import resolve
from semver_flow.core.config.errors import ConfigurationError
from semver_flow.core.config.model import GlobalConfig, IncrementStrategy, VersioningMode


def _config(branches, **extra):
    data = dict(extra)
    data["branches"] = branches
    return GlobalConfig.from_dict(data)


def test_custom_branch_without_regex_raises():
    config = _config({"docs": {"source-branches": ["develop"]}})

    with pytest.raises(ConfigurationError) as exc:
        resolve(config)

    assert exc.value.branch_key == "docs"
    assert exc.value.field == "regex"
    assert "'docs'" in str(exc.value)
    assert "docs/configuration.md" in str(exc.value)


def test_custom_branch_without_source_branches_raises():
    config = _config({"docs": {"regex": "^docs/"}})

    with pytest.raises(ConfigurationError) as exc:
        resolve(config)

    assert exc.value.field == "source-branches"


def test_empty_source_branches_is_absent():
    config = _config({"docs": {"regex": "^docs/", "source-branches": []}})

    with pytest.raises(ConfigurationError):
        resolve(config)


def test_builtin_key_with_empty_lists_gets_defaults():
    config = _config({"feature": {"regex": "", "source-branches": []}})
    resolve(config)

    assert config.branches["feature"].regex == "^features?[/-]"
    assert "develop" in config.branches["feature"].source_branches


def test_custom_branch_generic_defaults():
    config = _config({"docs": {"regex": "^docs/", "source-branches": ["develop"]}}, mode="Mainline")
    resolve(config)

    docs = config.branches["docs"]
    assert docs.tag == "useBranchName"
    assert docs.increment == IncrementStrategy.INHERIT
    assert docs.versioning_mode == VersioningMode.MAINLINE
    assert docs.prevent_increment_of_merged_branch_version is False
    assert docs.is_mainline is False
    assert docs.pre_release_weight == 0


def test_custom_branch_reusing_builtin_regex_gets_its_weight():
    config = _config({"fix": {"regex": HOTFIX_BRANCH_REGEX, "source-branches": ["master"]}})
    resolve(config)

    assert config.branches["fix"].pre_release_weight == 30000


def test_custom_branch_inherits_global_increment():
    config = _config({"docs": {"regex": "^docs/", "source-branches": ["develop"]}}, increment="Minor")
    resolve(config)

    assert config.branches["docs"].increment == IncrementStrategy.MINOR


def test_custom_user_values_survive():
    config = _config(
        {
            "docs": {
                "regex": "^docs/",
                "source-branches": ["develop"],
                "tag": "docs",
                "increment": "Major",
                "pre-release-weight": 42,
            }
        }
    )
    resolve(config)

    docs = config.branches["docs"]
    assert docs.tag == "docs"
    assert docs.increment == IncrementStrategy.MAJOR
    assert docs.pre_release_weight == 42


@pytest.mark.parametrize("a_first", [True, False])
def test_is_source_branch_for_is_order_independent(a_first):
    a = {"regex": "^a/", "source-branches": ["develop"], "is-source-branch-for": ["b"]}
    b = {"regex": "^b/", "source-branches": ["c"]}
    c = {"regex": "^c/", "source-branches": ["master"]}
    branches = {"a": a, "b": b, "c": c} if a_first else {"b": b, "c": c, "a": a}

    config = _config(branches)
    resolve(config)

    assert config.branches["b"].source_branches == ["c", "a"]
    assert config.branches["a"].source_branches == ["develop"]


def test_is_source_branch_for_targets_builtin():
    config = _config(
        {"docs": {"regex": "^docs/", "source-branches": ["develop"], "is-source-branch-for": ["feature", "hotfix"]}}
    )
    resolve(config)

    assert config.branches["feature"].source_branches[-1] == "docs"
    assert config.branches["hotfix"].source_branches[-1] == "docs"


def test_is_source_branch_for_unknown_target_raises():
    config = _config(
        {"docs": {"regex": "^docs/", "source-branches": ["develop"], "is-source-branch-for": ["ghost"]}}
    )

    with pytest.raises(ConfigurationError) as exc:
        resolve(config)

    assert exc.value.branch_key == "docs"
    assert "ghost" in str(exc.value)


def test_resolution_is_idempotent(sparse_config_yaml):
    import yaml

    config = GlobalConfig.from_dict(yaml.safe_load(sparse_config_yaml))
    resolve(config)
    first = config.to_dict()

    resolve(config)

    assert config.to_dict() == first
    assert config.branches["feature"].source_branches.count("docs") == 1


def test_custom_branch_without_regex_and_source_branches_raises():
    config = _config({"x": {"tag": "foo"}})

    with pytest.raises(ConfigurationError) as exc:
        resolve(config)

    assert exc.value.branch_key == "x"
    assert exc.value.field == "regex"
    assert "'x'" in str(exc.value)


def test_supplied_duplicates_are_kept_and_propagation_appends_once():
    config = _config(
        {
            "a": {"regex": "^a/", "source-branches": ["develop"], "is-source-branch-for": ["b"]},
            "b": {"regex": "^b/", "source-branches": ["c", "c", "a"]},
            "c": {"regex": "^c/", "source-branches": ["master"]},
        }
    )
    resolve(config)

    assert config.branches["b"].source_branches == ["c", "c", "a"]


@pytest.mark.parametrize(
    "branches",
    [
        {"docs": {"regex": "^docs/", "source-branches": ["develop"], "is-source-branch-for": ["ghost"]}},
        {"docs": {"source-branches": ["develop"]}},
        {"develop": {"tag": "dev"}, "docs": {"regex": "^docs/"}},
    ],
)
def test_failed_resolution_leaves_config_untouched(branches):
    config = _config(branches, mode="Mainline")
    before = config.to_dict()

    with pytest.raises(ConfigurationError):
        resolve(config)

    assert config.to_dict() == before
    assert set(config.branches) == set(branches)
    assert config.tag_prefix is None


def test_is_source_branch_for_may_target_builtin_not_yet_supplied():
    config = _config(
        {"docs": {"regex": "^docs/", "source-branches": ["develop"], "is-source-branch-for": ["support"]}}
    )
    resolve(config)

    assert config.branches["support"].source_branches == ["master", "docs"]
