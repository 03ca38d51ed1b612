"""Rule ids, layer roles and defaults shared across the remediator."""

STRATIFY_BANNER = "STRATIFY :: layered module remediation"

# Rule ids handled by bundled detectors and fixers.
RULE_MISSING_API = "MS-001"
RULE_MISSING_CORE = "MS-002"
RULE_MAVEN_WRAPPER = "AG-005"
RULE_FACADE_RETURN_TYPE = "FA-002"
RULE_FIXER_NULL_RETURN = "FX-002"

# Layer roles, in the order their source roots are scanned.
LAYER_ROLES: tuple[str, ...] = ("api", "core", "spi", "facade")

LAYER_DESCRIPTIONS: dict[str, str] = {
    "api": "API layer - public interfaces and contracts",
    "core": "Core layer - implementations",
    "spi": "SPI layer - service provider interfaces",
    "facade": "Facade layer - unified entry points",
}

MODULE_SUFFIXES: tuple[str, ...] = (
    "parent", "api", "core", "spi", "facade", "plugin", "aggregator", "engine",
)

JAVA_SOURCE_DIR = "src/main/java"
JAVA_EXTENSION = ".java"
PACKAGE_MARKER_FILE = "package-info.java"
POM_FILE = "pom.xml"

DEFAULT_NAMESPACE = "dev.engineeringlab"
DEFAULT_PROJECT = "architecture"
DEFAULT_GROUP_ID = "dev.engineeringlab"
DEFAULT_VERSION = "0.2.0-SNAPSHOT"
DEFAULT_FIXER_PRIORITY = 50

# Staging area for file snapshots, relative to the project root.
STAGING_DIR = ".remediation/staging"
BACKUP_SUFFIX = ".bak"
ABSENT_SUFFIX = ".absent"
DEFAULT_BACKUP_STRATEGY = "staging"
BACKUP_STRATEGY_ENTRY_POINT_GROUP = "stratify_remediator.backup_strategies"

# Fixer contract recognized by the null-return detector.
FIXER_CAPABILITY_INTERFACE = "Fixer"
FIXER_ABSTRACT_BASE = "AbstractStructureFixer"
FIXER_CONTRACT_METHOD = "fix"
FIXER_CONTRACT_ARITY = 2

DEFAULT_TYPE_MAPPINGS: dict[str, tuple[str, str]] = {
    "DefaultAgentRegistry": (
        "dev.engineeringlab.agent.core.DefaultAgentRegistry",
        "dev.engineeringlab.agent.registry.AgentRegistry",
    ),
    "DefaultAgentManager": (
        "dev.engineeringlab.agent.core.DefaultAgentManager",
        "dev.engineeringlab.agent.orchestration.AgentManager",
    ),
    "DefaultCommunicationManager": (
        "dev.engineeringlab.agent.coordination.DefaultCommunicationManager",
        "dev.engineeringlab.agent.communication.CommunicationManager",
    ),
}

MAVEN_WRAPPER_DIR = ".mvn/wrapper"
MAVEN_WRAPPER_FILES: tuple[str, ...] = (
    "mvnw",
    "mvnw.cmd",
    ".mvn/wrapper/maven-wrapper.properties",
)
EXECUTABLE_WRAPPER_FILES: frozenset[str] = frozenset({"mvnw"})

CONFIG_FILE_NAMES: tuple[str, ...] = (
    "stratify.yaml",
    "stratify.yml",
    "application.yaml",
    "application.yml",
    "compliance-config.yaml",
    "compliance-config.yml",
    ".sea/config.yaml",
    ".sea/config.yml",
)
CONFIG_RESOURCE_DIR = "src/main/resources"
