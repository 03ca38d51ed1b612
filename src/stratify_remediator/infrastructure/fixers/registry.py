"""Priority-ordered, rule-id-keyed fixer dispatch table."""

import threading
from typing import Optional

from stratify_remediator.domain.config import ConfigurationLoader
from stratify_remediator.domain.protocols import FixerProtocol, FixerRegistryProtocol


class DefaultFixerRegistry(FixerRegistryProtocol):
    """
    Keeps fixers sorted by descending priority; ties keep registration order.

    Registering a fixer whose name is already present replaces it. Lookups
    only return fixers the configuration enables.
    """

    def __init__(self, config: Optional[ConfigurationLoader] = None) -> None:
        self._config = config
        self._fixers: list[FixerProtocol] = []
        self._lock = threading.Lock()

    def register(self, fixer: FixerProtocol) -> None:
        with self._lock:
            self._fixers = [f for f in self._fixers if f.name != fixer.name]
            self._fixers.append(fixer)
            self._fixers.sort(key=lambda f: -f.priority)

    def unregister(self, name: str) -> bool:
        with self._lock:
            before = len(self._fixers)
            self._fixers = [f for f in self._fixers if f.name != name]
            return len(self._fixers) != before

    def _is_enabled(self, fixer: FixerProtocol) -> bool:
        return self._config is None or self._config.is_fixer_enabled(fixer.name)

    def all(self) -> list[FixerProtocol]:
        with self._lock:
            return list(self._fixers)

    def enabled(self) -> list[FixerProtocol]:
        return [f for f in self.all() if self._is_enabled(f)]

    def find_fixers_for_rule(self, rule_id: str) -> list[FixerProtocol]:
        return [f for f in self.enabled() if rule_id in f.supported_rules]

    def clear(self) -> None:
        with self._lock:
            self._fixers = []

    def __len__(self) -> int:
        return len(self._fixers)
