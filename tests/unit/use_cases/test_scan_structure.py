"""Unit tests for ScanStructureUseCase."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from stratify_remediator.domain.config import ConfigurationLoader
from stratify_remediator.domain.entities import ModuleInfo
from stratify_remediator.use_cases.scan_structure import ScanStructureUseCase
from tests.conftest import make_violation


def _detector(rule_ids: set[str], per_module: dict[str, list]) -> MagicMock:
    detector = MagicMock()
    detector.rule_ids = frozenset(rule_ids)
    detector.detect.side_effect = lambda module: per_module.get(module.base_name, [])
    return detector


@pytest.fixture
def modules() -> list[ModuleInfo]:
    return [ModuleInfo("agent", Path("/p/agent")), ModuleInfo("memory", Path("/p/memory"))]


@pytest.fixture
def scanner(modules: list[ModuleInfo]) -> MagicMock:
    scanner = MagicMock()
    scanner.scan.return_value = modules
    return scanner


class TestScanStructureUseCase:
    def test_merges_detector_output_in_module_order(self, scanner: MagicMock) -> None:
        structure = _detector({"MS-001"}, {
            "agent": [make_violation(location="agent")],
            "memory": [make_violation(location="memory")],
        })
        wrapper = _detector({"AG-005"}, {"agent": [make_violation(rule_id="AG-005", location="agent/mvnw")]})
        telemetry = MagicMock()
        violations = ScanStructureUseCase(scanner, [structure, wrapper], telemetry=telemetry).execute(Path("/p"))
        assert [v.location for v in violations] == ["agent", "agent/mvnw", "memory"]
        telemetry.step.assert_any_call("Scanning 2 module(s) under /p")
        telemetry.step.assert_called_with("Found 3 violation(s)")

    def test_rule_filter_skips_unrelated_detectors(self, scanner: MagicMock) -> None:
        structure = _detector({"MS-001", "MS-002"}, {"agent": [
            make_violation(rule_id="MS-001"), make_violation(rule_id="MS-002"),
        ]})
        wrapper = _detector({"AG-005"}, {})
        violations = ScanStructureUseCase(scanner, [structure, wrapper]).execute(Path("/p"), rule_ids=["MS-002"])
        assert [v.rule_id for v in violations] == ["MS-002"]
        wrapper.detect.assert_not_called()

    def test_failing_detector_does_not_abort_the_scan(self, scanner: MagicMock) -> None:
        broken = MagicMock()
        broken.rule_ids = frozenset({"AG-005"})
        broken.detect.side_effect = ValueError("bad pom")
        structure = _detector({"MS-001"}, {"memory": [make_violation(location="memory")]})
        telemetry = MagicMock()
        violations = ScanStructureUseCase(scanner, [broken, structure], telemetry=telemetry).execute(Path("/p"))
        assert [v.location for v in violations] == ["memory"]
        assert broken.detect.call_count == 2
        telemetry.warning.assert_called()
        assert "bad pom" in telemetry.warning.call_args_list[0].args[0]

    def test_disabled_rules_are_not_reported(self, scanner: MagicMock) -> None:
        config = ConfigurationLoader({"remediation": {"disabled_rules": ["MS-001"]}})
        structure = _detector({"MS-001"}, {"agent": [make_violation()]})
        use_case = ScanStructureUseCase(scanner, [structure], config_loader=config)
        assert use_case.execute(Path("/p")) == []

    def test_parallel_scan_matches_serial(self, scanner: MagicMock) -> None:
        per_module = {
            "agent": [make_violation(location="a1"), make_violation(location="a2")],
            "memory": [make_violation(location="m1")],
        }
        serial = ScanStructureUseCase(scanner, [_detector({"MS-001"}, per_module)]).execute(Path("/p"))
        parallel = ScanStructureUseCase(
            scanner, [_detector({"MS-001"}, per_module)], max_workers=4).execute(Path("/p"))
        assert parallel == serial
        assert [v.location for v in parallel] == ["a1", "a2", "m1"]

    def test_workers_default_from_config(self, scanner: MagicMock) -> None:
        config = ConfigurationLoader({"remediation": {"max_workers": 3}})
        assert ScanStructureUseCase(scanner, [], config_loader=config).max_workers == 3
        assert ScanStructureUseCase(scanner, []).max_workers == 1
