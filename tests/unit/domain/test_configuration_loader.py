"""Unit tests for ConfigurationLoader."""

from stratify_remediator.domain.config import ConfigurationLoader
from stratify_remediator.domain.constants import DEFAULT_NAMESPACE, DEFAULT_TYPE_MAPPINGS


class TestConfigurationLoader:
    def test_defaults_for_empty_config(self) -> None:
        loader = ConfigurationLoader()
        assert loader.namespace == DEFAULT_NAMESPACE
        assert loader.project == "architecture"
        assert loader.backup_strategy == "staging"
        assert loader.max_failures is None
        assert loader.max_workers == 1
        assert loader.fallthrough_on_skip is False
        assert loader.is_rule_enabled("MS-001")
        assert loader.is_fixer_enabled("missing-module")
        assert set(loader.type_mappings) == set(DEFAULT_TYPE_MAPPINGS)

    def test_stratify_section_is_used(self) -> None:
        loader = ConfigurationLoader({"stratify": {"namespace": "com.acme", "project": " agent "}})
        assert loader.namespace == "com.acme"
        assert loader.project == "agent"

    def test_blank_strings_fall_back(self) -> None:
        loader = ConfigurationLoader({"namespace": "   ", "remediation": {"backup_strategy": ""}})
        assert loader.namespace == DEFAULT_NAMESPACE
        assert loader.backup_strategy == "staging"

    def test_disabled_rules_and_fixers(self) -> None:
        loader = ConfigurationLoader({
            "remediation": {"disabled_rules": ["AG-005", 7], "disabled_fixers": ["maven-wrapper"]},
        })
        assert loader.disabled_rules == frozenset({"AG-005"})
        assert not loader.is_rule_enabled("AG-005")
        assert not loader.is_fixer_enabled("maven-wrapper")
        assert loader.is_fixer_enabled("missing-module")

    def test_enabled_fixers_allow_list(self) -> None:
        loader = ConfigurationLoader({"remediation": {"enabled_fixers": ["missing-module"]}})
        assert loader.is_fixer_enabled("missing-module")
        assert not loader.is_fixer_enabled("maven-wrapper")

    def test_numeric_limits_reject_invalid_values(self) -> None:
        assert ConfigurationLoader({"remediation": {"max_failures": 3}}).max_failures == 3
        assert ConfigurationLoader({"remediation": {"max_failures": 0}}).max_failures is None
        assert ConfigurationLoader({"remediation": {"max_failures": True}}).max_failures is None
        assert ConfigurationLoader({"remediation": {"max_workers": "4"}}).max_workers == 1
        assert ConfigurationLoader({"remediation": {"max_workers": 4}}).max_workers == 4

    def test_fallthrough_requires_true(self) -> None:
        assert ConfigurationLoader({"remediation": {"fallthrough_on_skip": True}}).fallthrough_on_skip
        assert not ConfigurationLoader({"remediation": {"fallthrough_on_skip": "yes"}}).fallthrough_on_skip

    def test_configured_type_mappings_overlay_defaults(self) -> None:
        loader = ConfigurationLoader({"remediation": {"type_mappings": {
            "DefaultFoo": {"core": "com.acme.core.DefaultFoo", "api": "com.acme.api.Foo"},
            "Broken": {"core": "only.core"},
            "NotAMapping": "x",
        }}})
        mappings = loader.type_mappings
        assert mappings["DefaultFoo"].api_qualified_name == "com.acme.api.Foo"
        assert "Broken" not in mappings
        assert "NotAMapping" not in mappings
        assert "DefaultAgentRegistry" in mappings

    def test_non_mapping_remediation_section_is_ignored(self) -> None:
        loader = ConfigurationLoader({"remediation": ["not", "a", "dict"]})
        assert loader.backup_strategy == "staging"
