"""Concrete fixers and the fixer registry."""

from stratify_remediator.infrastructure.fixers.base import AbstractStructureFixer
from stratify_remediator.infrastructure.fixers.facade_return_type import FacadeReturnTypeFixer
from stratify_remediator.infrastructure.fixers.maven_wrapper import MavenWrapperFixer
from stratify_remediator.infrastructure.fixers.missing_module import MissingModuleFixer
from stratify_remediator.infrastructure.fixers.registry import DefaultFixerRegistry

__all__ = [
    "AbstractStructureFixer",
    "DefaultFixerRegistry",
    "FacadeReturnTypeFixer",
    "MavenWrapperFixer",
    "MissingModuleFixer",
]
