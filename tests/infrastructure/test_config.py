"""Tests for the configuration system."""

import platformdirs
import pytest
from pydantic import ValidationError

from coursefork.infrastructure.config import (
    CourseforkConfig,
    LayoutConfig,
    create_example_config,
    find_config_files,
    get_config,
    get_config_file_locations,
    write_example_config,
)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty project directory with an empty user config directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *args, **kwargs: str(tmp_path / "user")
    )
    for var in [
        "COURSEFORK_REMOTES__UPSTREAM_URL",
        "COURSEFORK_LOGGING__LOG_LEVEL",
        "COURSEFORK_LAYOUT__CHAPTERS_DIR",
    ]:
        monkeypatch.delenv(var, raising=False)
    return project


class TestConfigDefaults:
    def test_defaults(self, isolated_config):
        config = CourseforkConfig()
        assert config.layout.chapters_dir == "chapters"
        assert config.layout.marker_files == ("student.js", "tests.html", "bundle.js")
        assert config.layout.default_clone_directory == "algoritmisch-denken"
        assert config.remotes.origin == "origin"
        assert config.remotes.upstream == "upstream"
        assert config.remotes.upstream_url == ""
        assert config.git.timeout == 120
        assert config.logging.log_level == "INFO"
        assert config.browser.test_expression == "shell.runTests()"


class TestConfigValidation:
    def test_log_level_is_upper_cased(self):
        assert CourseforkConfig(logging={"log_level": "debug"}).logging.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            CourseforkConfig(logging={"log_level": "LOUD"})

    @pytest.mark.parametrize("name", ["", "a/b", "a\\b"])
    def test_layout_names_are_single_segments(self, name):
        with pytest.raises(ValidationError):
            LayoutConfig(chapters_dir=name)

    def test_git_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            CourseforkConfig(git={"timeout": 0})


class TestConfigSources:
    def test_environment_variables(self, isolated_config, monkeypatch):
        monkeypatch.setenv("COURSEFORK_REMOTES__UPSTREAM_URL", "https://github.com/org/course")
        monkeypatch.setenv("COURSEFORK_LOGGING__LOG_LEVEL", "warning")
        config = CourseforkConfig()
        assert config.remotes.upstream_url == "https://github.com/org/course"
        assert config.logging.log_level == "WARNING"

    def test_project_file(self, isolated_config):
        (isolated_config / "coursefork.toml").write_text(
            '[remotes]\nupstream_url = "https://github.com/org/course"\n\n'
            '[layout]\nchapters_dir = "exercises"\n'
        )
        config = CourseforkConfig()
        assert config.remotes.upstream_url == "https://github.com/org/course"
        assert config.layout.chapters_dir == "exercises"

    def test_project_file_overrides_user_file(self, isolated_config, tmp_path):
        user_dir = tmp_path / "user"
        user_dir.mkdir()
        (user_dir / "config.toml").write_text('[remotes]\norigin = "mine"\nupstream = "course"\n')
        (isolated_config / "coursefork.toml").write_text('[remotes]\norigin = "fork"\n')
        config = CourseforkConfig()
        assert config.remotes.origin == "fork"
        assert config.remotes.upstream == "course"

    def test_environment_overrides_files(self, isolated_config, monkeypatch):
        (isolated_config / "coursefork.toml").write_text('[logging]\nlog_level = "ERROR"\n')
        monkeypatch.setenv("COURSEFORK_LOGGING__LOG_LEVEL", "DEBUG")
        assert CourseforkConfig().logging.log_level == "DEBUG"

    def test_find_config_files(self, isolated_config):
        assert find_config_files()["project"] is None
        (isolated_config / ".coursefork").mkdir()
        (isolated_config / ".coursefork" / "config.toml").write_text("")
        (isolated_config / "coursefork.toml").write_text("")
        assert find_config_files()["project"] == isolated_config / ".coursefork" / "config.toml"


class TestExampleConfig:
    def test_example_config_parses_to_defaults(self, isolated_config):
        path = write_example_config("project")
        assert path == get_config_file_locations()["project"]
        assert path.read_text() == create_example_config()
        assert CourseforkConfig().remotes.upstream_url == ""

    def test_invalid_location(self):
        with pytest.raises(ValueError, match="Invalid location"):
            write_example_config("nowhere")


def test_get_config_is_cached(isolated_config):
    first = get_config(reload=True)
    assert get_config() is first
    assert get_config(reload=True) is not first
