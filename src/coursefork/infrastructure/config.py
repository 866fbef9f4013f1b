"""Configuration management for coursefork.

This module provides a unified configuration system that supports:
- Configuration files in TOML format
- Environment variables
- Multiple configuration file locations (project, user, system)
- Type-safe configuration using Pydantic

Configuration Priority (highest to lowest):
1. Environment variables
2. Project configuration file (.coursefork/config.toml or coursefork.toml)
3. User configuration file (~/.config/coursefork/config.toml)
4. System configuration file (/etc/coursefork/config.toml)
5. Default values

Environment Variable Naming:
- Nested fields: COURSEFORK_<SECTION>__<FIELD> (e.g., COURSEFORK_REMOTES__UPSTREAM_URL)
"""

import logging
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

APP_NAME = "coursefork"


class LayoutConfig(BaseModel):
    """Layout of a course repository."""

    chapters_dir: str = Field(
        default="chapters",
        description="Directory (relative to the repository root) containing the chapters",
    )

    solution_file: str = Field(
        default="student.js",
        description="Name of the file holding the student's solution",
    )

    tests_file: str = Field(
        default="tests.html",
        description="Name of the HTML file running a chapter's tests",
    )

    bundle_file: str = Field(
        default="bundle.js",
        description="Name of the compiled bundle loaded by the tests",
    )

    default_clone_directory: str = Field(
        default="algoritmisch-denken",
        description="Target directory used by 'coursefork initialize'",
    )

    @field_validator("chapters_dir", "solution_file", "tests_file", "bundle_file")
    @classmethod
    def validate_single_segment(cls, v: str) -> str:
        """Names must be a single path segment."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Expected a single path segment, got '{v}'")
        return v


class RemotesConfig(BaseModel):
    """Names and URLs of the git remotes."""

    origin: str = Field(
        default="origin",
        description="Remote holding the student's personal fork",
    )

    upstream: str = Field(
        default="upstream",
        description="Remote holding the shared course repository",
    )

    upstream_url: str = Field(
        default="",
        description="Expected URL of the upstream remote (empty: any URL is accepted)",
    )


class GitConfig(BaseModel):
    """Git executable configuration."""

    executable: str = Field(
        default="git",
        description="Git executable",
    )

    timeout: int = Field(
        default=120,
        ge=1,
        le=3600,
        description="Maximum time a git command may run (seconds)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got {v}")
        return v_upper


class BrowserConfig(BaseModel):
    """Headless browser used to run chapter tests."""

    headless: bool = Field(
        default=True,
        description="Run the browser without a window",
    )

    test_expression: str = Field(
        default="shell.runTests()",
        description="JavaScript expression evaluated to obtain the test results",
    )

    timeout: int = Field(
        default=30,
        ge=1,
        le=600,
        description="Maximum time for loading a test page (seconds)",
    )


class UpdatesConfig(BaseModel):
    """Self-update check configuration."""

    check_url: str = Field(
        default="https://pypi.org/pypi/coursefork/json",
        description="URL returning the release metadata of coursefork",
    )

    timeout: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the update check (seconds)",
    )


class CourseforkConfig(BaseSettings):
    """Main coursefork configuration.

    Loaded from multiple sources in priority order: environment variables >
    project config > user config > system config > defaults.

    Environment Variables:
        - COURSEFORK_REMOTES__UPSTREAM_URL: Expected upstream URL
        - COURSEFORK_LOGGING__LOG_LEVEL: Logging level
        - COURSEFORK_LAYOUT__CHAPTERS_DIR: Chapters directory
        - And many more (see nested config classes)
    """

    model_config = SettingsConfigDict(
        env_prefix="COURSEFORK_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    layout: LayoutConfig = Field(
        default_factory=LayoutConfig,
        description="Course repository layout",
    )

    remotes: RemotesConfig = Field(
        default_factory=RemotesConfig,
        description="Git remotes",
    )

    git: GitConfig = Field(
        default_factory=GitConfig,
        description="Git executable",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    browser: BrowserConfig = Field(
        default_factory=BrowserConfig,
        description="Headless browser configuration",
    )

    updates: UpdatesConfig = Field(
        default_factory=UpdatesConfig,
        description="Self-update check configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the sources and their priority for settings.

        Priority order (highest to lowest):
        1. Environment variables
        2. Project configuration file
        3. User configuration file
        4. System configuration file
        5. Init settings (programmatic)
        """
        config_files = find_config_files()

        # Collected lowest priority first, reversed below
        toml_sources = []
        for location in ("system", "user", "project"):
            config_file = config_files[location]
            if not config_file:
                continue
            try:
                toml_sources.append(
                    TomlConfigSettingsSource(settings_cls, toml_file=config_file)
                )
                logger.debug(f"Loaded {location} config: {config_file}")
            except Exception as e:
                logger.debug(f"Could not load {location} config: {e}")

        return (
            env_settings,
            *reversed(toml_sources),
            init_settings,
        )


def find_config_files() -> dict[str, Path | None]:
    """Find configuration files in standard locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        a Path to the config file if it exists, or None otherwise.
    """
    config_files: dict[str, Path | None] = {
        "system": None,
        "user": None,
        "project": None,
    }

    system_config = Path("/etc") / APP_NAME / "config.toml"
    if system_config.exists():
        config_files["system"] = system_config

    user_config = Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml"
    if user_config.exists():
        config_files["user"] = user_config

    # .coursefork/config.toml takes precedence over coursefork.toml
    cwd = Path.cwd()
    for project_config in (cwd / f".{APP_NAME}" / "config.toml", cwd / f"{APP_NAME}.toml"):
        if project_config.exists():
            config_files["project"] = project_config
            break

    return config_files


def get_config_file_locations() -> dict[str, Path]:
    """Get the standard configuration file locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        the Path where the config file should be located (may not exist).
    """
    return {
        "system": Path("/etc") / APP_NAME / "config.toml",
        "user": Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml",
        "project": Path.cwd() / f".{APP_NAME}" / "config.toml",
    }


_config: CourseforkConfig | None = None


def get_config(reload: bool = False) -> CourseforkConfig:
    """Get the global configuration instance.

    Args:
        reload: If True, reload the configuration from files and environment.
    """
    global _config

    if _config is None or reload:
        _config = CourseforkConfig()

    return _config


def create_example_config() -> str:
    """Create an example configuration file content."""
    return """# coursefork Configuration File
#
# Configuration files are loaded from (in priority order):
#   1. .coursefork/config.toml or coursefork.toml (project directory)
#   2. ~/.config/coursefork/config.toml (user directory)
#   3. /etc/coursefork/config.toml (system directory, Linux/Unix only)
#
# Environment variables can override any setting (highest priority).
# Nested settings use double underscores: COURSEFORK_<SECTION>__<KEY>
#
# Examples:
#   COURSEFORK_REMOTES__UPSTREAM_URL=https://github.com/org/course
#   COURSEFORK_LOGGING__LOG_LEVEL=DEBUG

[layout]
# Directory containing the chapters, relative to the repository root
chapters_dir = "chapters"

# Marker files; a chapter directory must contain all three
solution_file = "student.js"
tests_file = "tests.html"
bundle_file = "bundle.js"

# Target directory for 'coursefork initialize'
default_clone_directory = "algoritmisch-denken"

[remotes]
# Remote holding your personal fork
origin = "origin"

# Remote holding the shared course repository
upstream = "upstream"

# Expected URL of the upstream remote (leave empty to accept any URL)
upstream_url = ""

[git]
executable = "git"

# Maximum time a git command may run (seconds)
timeout = 120

[logging]
# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
log_level = "INFO"

[browser]
headless = true
test_expression = "shell.runTests()"

# Maximum time for loading a test page (seconds)
timeout = 30

[updates]
check_url = "https://pypi.org/pypi/coursefork/json"
timeout = 5.0
"""


def write_example_config(location: str = "user") -> Path:
    """Write an example configuration file to a standard location.

    Args:
        location: One of "user", "project" or "system".

    Returns:
        Path to the created configuration file.

    Raises:
        ValueError: If location is invalid.
        PermissionError: If cannot write to the location.
    """
    locations = get_config_file_locations()

    if location not in locations:
        raise ValueError(f"Invalid location '{location}'. Must be one of: user, project, system")

    config_path = locations[location]
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_example_config())

    logger.info(f"Created example configuration at: {config_path}")

    return config_path
