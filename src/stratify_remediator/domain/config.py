"""Project configuration. Immutable value object created by Infrastructure."""

from typing import Optional

from stratify_remediator.domain.constants import (
    DEFAULT_BACKUP_STRATEGY,
    DEFAULT_NAMESPACE,
    DEFAULT_PROJECT,
    DEFAULT_TYPE_MAPPINGS,
)
from stratify_remediator.domain.entities import TypeMapping


class ConfigurationLoader:
    """
    Immutable configuration for scanning and remediation.

    Created by Infrastructure from the parsed YAML document. Domain does not
    read the filesystem; ConfigFileLoader.load_config_from_fs() runs at the
    composition root and the result is passed in here.

    Recognized layout (every key optional)::

        namespace: dev.engineeringlab
        project: agent
        remediation:
          backup_strategy: staging
          disabled_rules: [AG-005]
          disabled_fixers: []
          enabled_fixers: []
          max_failures: 5
          max_workers: 1
          fallthrough_on_skip: false
          type_mappings:
            DefaultFoo:
              core: com.acme.core.DefaultFoo
              api: com.acme.api.Foo

    The same keys may sit under a top-level ``stratify:`` section.
    """

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        raw = config_dict or {}
        section = raw.get("stratify")
        self._config: dict[str, object] = dict(section) if isinstance(section, dict) else dict(raw)
        remediation = self._config.get("remediation", {})
        self._remediation: dict[str, object] = remediation if isinstance(remediation, dict) else {}

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def namespace(self) -> str:
        return self._string(self._config.get("namespace"), DEFAULT_NAMESPACE)

    @property
    def project(self) -> str:
        return self._string(self._config.get("project"), DEFAULT_PROJECT)

    @property
    def backup_strategy(self) -> str:
        return self._string(self._remediation.get("backup_strategy"), DEFAULT_BACKUP_STRATEGY)

    @property
    def disabled_rules(self) -> frozenset[str]:
        return self._string_set("disabled_rules")

    @property
    def disabled_fixers(self) -> frozenset[str]:
        return self._string_set("disabled_fixers")

    @property
    def enabled_fixers(self) -> frozenset[str]:
        """When non-empty, only these fixers may run."""
        return self._string_set("enabled_fixers")

    @property
    def max_failures(self) -> Optional[int]:
        value = self._remediation.get("max_failures")
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        return None

    @property
    def max_workers(self) -> int:
        value = self._remediation.get("max_workers")
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        return 1

    @property
    def fallthrough_on_skip(self) -> bool:
        return self._remediation.get("fallthrough_on_skip") is True

    def is_rule_enabled(self, rule_id: str) -> bool:
        return rule_id not in self.disabled_rules

    def is_fixer_enabled(self, fixer_name: str) -> bool:
        if fixer_name in self.disabled_fixers:
            return False
        enabled = self.enabled_fixers
        return not enabled or fixer_name in enabled

    @property
    def type_mappings(self) -> dict[str, TypeMapping]:
        """Built-in core-to-API mappings overlaid with the configured ones."""
        mappings = {
            simple: TypeMapping(core, api)
            for simple, (core, api) in DEFAULT_TYPE_MAPPINGS.items()
        }
        raw = self._remediation.get("type_mappings", {})
        if not isinstance(raw, dict):
            return mappings
        for simple, entry in raw.items():
            if not isinstance(entry, dict):
                continue
            core = entry.get("core")
            api = entry.get("api")
            if isinstance(core, str) and isinstance(api, str):
                mappings[str(simple)] = TypeMapping(core, api)
        return mappings

    def _string_set(self, key: str) -> frozenset[str]:
        raw = self._remediation.get(key, [])
        if isinstance(raw, (list, tuple, set)):
            return frozenset(str(x) for x in raw if isinstance(x, str))
        return frozenset()

    @staticmethod
    def _string(value: object, default: str) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return default
