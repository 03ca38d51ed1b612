"""Unit tests for MissingModuleDetector (MS-001 / MS-002)."""

from pathlib import Path
from unittest.mock import MagicMock

from stratify_remediator.domain.entities import ModuleInfo, Severity
from stratify_remediator.domain.rules import MissingModuleDetector


def _detector() -> MissingModuleDetector:
    return MissingModuleDetector(MagicMock(), MagicMock())


class TestMissingModuleDetector:
    def test_missing_api_reported(self) -> None:
        module = ModuleInfo("agent", Path("/p/agent"), has_core=True)
        violations = _detector().detect(module)
        assert [v.rule_id for v in violations] == ["MS-001"]
        assert violations[0].location == str(Path("/p/agent"))
        assert violations[0].expected == "agent-api/pom.xml"
        assert "missing its API module" in violations[0].message
        assert violations[0].severity is Severity.ERROR

    def test_missing_core_reported(self) -> None:
        module = ModuleInfo("agent", Path("/p/agent"), has_api=True, has_facade=True)
        assert [v.rule_id for v in _detector().detect(module)] == ["MS-002"]

    def test_both_missing_when_only_facade(self) -> None:
        module = ModuleInfo("agent", Path("/p/agent"), has_facade=True)
        assert [v.rule_id for v in _detector().detect(module)] == ["MS-001", "MS-002"]

    def test_complete_component_is_clean(self) -> None:
        module = ModuleInfo("agent", Path("/p/agent"), has_api=True, has_core=True)
        assert _detector().detect(module) == []

    def test_leaf_module_is_not_a_component(self) -> None:
        assert _detector().detect(ModuleInfo("agent-core", Path("/p/agent/agent-core"))) == []
