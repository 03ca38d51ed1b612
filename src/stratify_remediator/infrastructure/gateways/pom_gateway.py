"""Lightweight pom.xml key extraction and module-list editing. Not a structural XML parser."""

import re
from typing import Optional

from stratify_remediator.domain.protocols import PomProtocol

_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_PARENT_BLOCK = re.compile(r"<parent>.*?</parent>", re.DOTALL)
_MODULES_CLOSE = re.compile(r"^([ \t]*)</modules>", re.MULTILINE)
_PROJECT_CLOSE = re.compile(r"</project>")
_RELATIVE_PATH_EMPTY = re.compile(r"<relativePath\s*/>|<relativePath>\s*</relativePath>")

# Sections whose descendants reuse project-level tag names (groupId, version, ...).
# Outer sections come first so that e.g. <dependencies> inside a profile goes with the profile.
_NESTED_SECTIONS = tuple(
    re.compile(rf"<{name}(?:\s[^>]*)?>.*?</{name}>", re.DOTALL)
    for name in (
        "profiles",
        "dependencyManagement",
        "dependencies",
        "build",
        "reporting",
        "properties",
        "repositories",
        "pluginRepositories",
        "distributionManagement",
        "scm",
        "organization",
        "licenses",
        "developers",
        "contributors",
    )
)


class PomGateway(PomProtocol):
    """Regex-level access to the handful of pom.xml values the fixers need."""

    @staticmethod
    def project_level(content: str) -> str:
        """Return content reduced to the direct children of <project>, minus <parent>."""
        text = _PARENT_BLOCK.sub("", _COMMENT.sub("", content), count=1)
        for section in _NESTED_SECTIONS:
            text = section.sub("", text)
        return text

    @staticmethod
    def extract_value(content: str, tag: str, default: Optional[str] = None) -> Optional[str]:
        """
        Return the value of <tag> declared directly under <project>.

        A project that inherits the value (no own <groupId>, say) gets the one
        from its <parent> block. Values nested in dependencies, plugins or
        profiles never count.
        """
        pattern = re.compile(rf"<{tag}>\s*([^<]+?)\s*</{tag}>")
        own = pattern.search(PomGateway.project_level(content))
        if own:
            return own.group(1)
        parent = _PARENT_BLOCK.search(_COMMENT.sub("", content))
        if parent:
            inherited = pattern.search(parent.group(0))
            if inherited:
                return inherited.group(1)
        return default

    @staticmethod
    def packaging(content: str) -> str:
        return PomGateway.extract_value(content, "packaging", "jar") or "jar"

    @staticmethod
    def is_aggregator(content: str) -> bool:
        return PomGateway.packaging(content) == "pom"

    @staticmethod
    def is_root(content: str) -> bool:
        """A root pom declares no parent, or an empty relativePath."""
        content = _COMMENT.sub("", content)
        return _PARENT_BLOCK.search(content) is None or bool(_RELATIVE_PATH_EMPTY.search(content))

    @staticmethod
    def declared_modules(content: str) -> list[str]:
        return [m.strip() for m in re.findall(r"<module>([^<]+)</module>", content)]

    @staticmethod
    def add_module(content: str, module_name: str) -> str:
        """Return content with module_name appended to <modules>; unchanged if already listed."""
        if module_name in PomGateway.declared_modules(content):
            return content
        close = _MODULES_CLOSE.search(content)
        if close:
            indent = close.group(1)
            entry = f"{indent}    <module>{module_name}</module>\n"
            return content[:close.start()] + entry + content[close.start():]
        project_close = _PROJECT_CLOSE.search(content)
        section = f"    <modules>\n        <module>{module_name}</module>\n    </modules>\n"
        if project_close:
            return content[:project_close.start()] + section + content[project_close.start():]
        return content + section
