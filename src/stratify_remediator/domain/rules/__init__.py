"""Rule detectors: read-only checks that turn modules into violations."""

from stratify_remediator.domain.rules.aggregator import MavenWrapperDetector
from stratify_remediator.domain.rules.base import BaseDetector
from stratify_remediator.domain.rules.facade_design import FacadeReturnTypeDetector
from stratify_remediator.domain.rules.fixer_design import NullReturnDetector
from stratify_remediator.domain.rules.module_structure import MissingModuleDetector

__all__ = [
    "BaseDetector",
    "FacadeReturnTypeDetector",
    "MavenWrapperDetector",
    "MissingModuleDetector",
    "NullReturnDetector",
]
