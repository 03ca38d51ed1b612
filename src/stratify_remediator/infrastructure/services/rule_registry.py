"""RuleRegistryService: loads the packaged rule registry."""

from pathlib import Path
from typing import Optional, cast

import yaml

from stratify_remediator.domain.protocols import RuleRegistryProtocol
from stratify_remediator.domain.registry_types import RuleRegistryEntry


class RuleRegistryService(RuleRegistryProtocol):
    """Loads rule_registry.yaml and answers metadata lookups by rule id."""

    def __init__(self, registry_path: Optional[str] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            if isinstance(data, dict):
                self._registry = {
                    str(rule_id): cast(RuleRegistryEntry, {**entry, "rule_id": str(rule_id)})
                    for rule_id, entry in data.items()
                    if isinstance(entry, dict)
                }
                return
        self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_id: str) -> Optional[RuleRegistryEntry]:
        entry = self._registry.get(rule_id)
        return cast(RuleRegistryEntry, dict(entry)) if entry else None

    def get_fixable_rules(self) -> list[str]:
        """Rule ids the registry marks as auto-fixable, in registry order."""
        return [rule_id for rule_id, entry in self._registry.items() if entry.get("fixable")]
