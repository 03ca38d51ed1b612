"""Unit tests for RuleRegistryService."""

from pathlib import Path

from stratify_remediator.infrastructure.services.rule_registry import RuleRegistryService
from tests.conftest import write


class TestRuleRegistryService:
    def test_packaged_registry_covers_bundled_rules(self) -> None:
        registry = RuleRegistryService().get_registry()
        assert {"MS-001", "MS-002", "FA-002", "FX-002", "AG-005"} <= set(registry)

    def test_entries_carry_their_rule_id(self) -> None:
        entry = RuleRegistryService().get_entry("FA-002")
        assert entry is not None
        assert entry["rule_id"] == "FA-002"
        assert entry["fixer"] == "FacadeReturnTypeFixer"

    def test_detection_only_rule_is_not_fixable(self) -> None:
        service = RuleRegistryService()
        assert "FX-002" not in service.get_fixable_rules()
        assert "MS-001" in service.get_fixable_rules()

    def test_unknown_rule(self) -> None:
        assert RuleRegistryService().get_entry("ZZ-999") is None

    def test_returned_entries_are_copies(self) -> None:
        service = RuleRegistryService()
        entry = service.get_entry("MS-001")
        entry["display_name"] = "changed"
        assert service.get_entry("MS-001")["display_name"] != "changed"

    def test_custom_path_and_missing_file(self, tmp_path: Path) -> None:
        path = write(tmp_path / "rules.yaml", "XX-001:\n  display_name: Custom\n  fixable: true\nbad: 3\n")
        service = RuleRegistryService(str(path))
        assert list(service.get_registry()) == ["XX-001"]
        assert RuleRegistryService(str(tmp_path / "missing.yaml")).get_registry() == {}
