"""Unit tests for ConfigFileLoader."""

from pathlib import Path

import pytest

from stratify_remediator.domain.exceptions import ConfigurationError
from stratify_remediator.infrastructure.config_file_loader import ConfigFileLoader
from tests.conftest import make_pom, write

ROOT_POM = "<project><artifactId>platform</artifactId><packaging>pom</packaging></project>"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "platform"
    write(root / "pom.xml", ROOT_POM)
    write(root / "agent" / "pom.xml", make_pom("agent"))
    return root


class TestProjectRoot:
    def test_root_pom_without_parent(self, project: Path) -> None:
        assert ConfigFileLoader.is_project_root(project)
        assert not ConfigFileLoader.is_project_root(project / "agent")

    def test_wrapper_marks_root(self, tmp_path: Path) -> None:
        write(tmp_path / "mvnw", "#!/bin/sh")
        assert ConfigFileLoader.is_project_root(tmp_path)

    def test_find_project_root_from_submodule(self, project: Path) -> None:
        assert ConfigFileLoader.find_project_root(project / "agent") == project.resolve()


class TestFindConfigFile:
    def test_module_config_wins_over_root(self, project: Path) -> None:
        write(project / "stratify.yaml", "project: root\n")
        module_config = write(project / "agent" / "stratify.yaml", "project: agent\n")
        assert ConfigFileLoader.find_config_file(project / "agent") == module_config.resolve()

    def test_resources_directory_is_checked(self, project: Path) -> None:
        config = write(project / "agent" / "src/main/resources/application.yml", "project: agent\n")
        assert ConfigFileLoader.find_config_file(project / "agent") == config.resolve()

    def test_walk_stops_at_project_root(self, tmp_path: Path, project: Path) -> None:
        write(tmp_path / "stratify.yaml", "project: outside\n")
        assert ConfigFileLoader.find_config_file(project / "agent") is None


class TestLoadConfigFromFs:
    def test_no_file_gives_empty_config(self, project: Path) -> None:
        assert ConfigFileLoader.load_config_from_fs(project) == ({}, None)

    def test_loads_mapping(self, project: Path) -> None:
        path = write(project / "stratify.yaml", "namespace: com.acme\nremediation:\n  max_failures: 3\n")
        data, found = ConfigFileLoader.load_config_from_fs(project)
        assert data == {"namespace": "com.acme", "remediation": {"max_failures": 3}}
        assert found == path.resolve()

    def test_empty_file_is_empty_mapping(self, project: Path) -> None:
        write(project / "stratify.yaml", "")
        assert ConfigFileLoader.load_config_from_fs(project)[0] == {}

    def test_invalid_yaml_raises(self, project: Path) -> None:
        write(project / "stratify.yaml", "namespace: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigFileLoader.load_config_from_fs(project)

    def test_non_mapping_raises(self, project: Path) -> None:
        write(project / "stratify.yaml", "- a\n- b\n")
        with pytest.raises(ConfigurationError, match="Expected a mapping"):
            ConfigFileLoader.load_config_from_fs(project)
