"""Shared detector plumbing: fail-open parsing over a module's Java sources."""

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from stratify_remediator.domain.entities import ModuleInfo, StructureViolation
from stratify_remediator.domain.exceptions import JavaSyntaxError, RemediationError
from stratify_remediator.domain.java import JavaCompilationUnit
from stratify_remediator.domain.protocols import JavaSourceProtocol, ModuleScannerProtocol

logger = logging.getLogger(__name__)


class BaseDetector(ABC):
    """A rule check over one module. Subclasses implement _detect; detect never raises."""

    rule_ids: frozenset[str] = frozenset()

    def __init__(self, scanner: ModuleScannerProtocol, java_source: JavaSourceProtocol) -> None:
        self.scanner = scanner
        self.java_source = java_source

    def detect(self, module: ModuleInfo) -> list[StructureViolation]:
        try:
            return self._detect(module)
        except (OSError, UnicodeDecodeError, RemediationError) as exc:
            logger.debug("Skipping %s for %s: %s", type(self).__name__, module.path, exc)
            return []

    @abstractmethod
    def _detect(self, module: ModuleInfo) -> list[StructureViolation]: ...

    def parsed_units(self, module: ModuleInfo) -> Iterator[JavaCompilationUnit]:
        """Index every source file of the module, skipping files that fail to read or parse."""
        for path in self.scanner.source_files(module):
            try:
                yield self.java_source.parse_file(path)
            except (JavaSyntaxError, OSError, UnicodeDecodeError) as exc:
                logger.debug("Skipping unparsable file %s: %s", path, exc)
