"""Unit tests for configuration system."""

import tempfile
from pathlib import Path

from phpkit.config import (
    PhpkitConfig,
    find_config_file,
    load_config,
    parse_lsp_settings,
)


class TestConfigParsing:
    """Test TOML configuration parsing."""

    def test_find_config_file_exists(self):
        """Test finding .phpkit.toml when it exists."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            project_path = Path(tmp_dir)
            config_file = project_path / ".phpkit.toml"
            config_file.write_text("[runtime]\nphp_path = 'php'\n")

            found = find_config_file(project_path)
            assert found == config_file

    def test_find_config_file_missing(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            assert find_config_file(Path(tmp_dir)) is None

    def test_load_config_defaults(self):
        """Test loading config uses defaults when no file exists."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            project_path = Path(tmp_dir)
            config = load_config(project_path)

            assert config.lsp == {}
            assert config.runtime.php_path is None
            assert config.runtime.node_path is None
            assert config.dap.work_dir is None
            assert config.dap.github_token_env == "GITHUB_TOKEN"
            assert config.project_root == project_path

    def test_load_config_full(self):
        """Test loading every section."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            project_path = Path(tmp_dir)
            (project_path / ".phpkit.toml").write_text("""
[lsp.phpactor.binary]
path = "tools/phpactor"
arguments = ["language-server", "-vvv"]
env = { XDEBUG_MODE = "off" }

[lsp.psalm.initialization_options]
command = ["vendor/bin/psalm-language-server"]

[lsp.intelephense.settings]
files = { maxSize = 5000000 }

[runtime]
php_path = "${PROJECT_ROOT}/bin/php"

[dap]
work_dir = "~/.phpkit-adapters"
github_token_env = "PHPKIT_TOKEN"
""")

            config = load_config(project_path)

            phpactor = config.lsp_settings("phpactor")
            assert phpactor.binary.path == "tools/phpactor"
            assert phpactor.binary.arguments == ["language-server", "-vvv"]
            assert phpactor.binary.env == {"XDEBUG_MODE": "off"}

            psalm = config.lsp_settings("psalm")
            assert psalm.initialization_options == {
                "command": ["vendor/bin/psalm-language-server"]
            }
            assert config.lsp_settings("intelephense").settings == {
                "files": {"maxSize": 5000000}
            }

            assert config.runtime.php_path == "${PROJECT_ROOT}/bin/php"
            assert config.dap.github_token_env == "PHPKIT_TOKEN"
            assert config.work_dir() == Path("~/.phpkit-adapters").expanduser()

    def test_malformed_toml_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            project_path = Path(tmp_dir)
            (project_path / ".phpkit.toml").write_text("[lsp\nbroken = ")

            config = load_config(project_path)

            assert config.lsp == {}
            assert config.project_root == project_path

    def test_unknown_tool_has_empty_settings(self):
        settings = PhpkitConfig().lsp_settings("psalm")

        assert settings.binary is None
        assert settings.settings is None
        assert settings.initialization_options is None


class TestParseLspSettings:
    """Test tolerant parsing of tool settings."""

    def test_wrong_types_are_dropped(self):
        settings = parse_lsp_settings({
            "binary": "not-a-table",
            "settings": ["not", "a", "table"],
            "initialization_options": {"command": ["psalm"]},
        })

        assert settings.binary is None
        assert settings.settings is None
        assert settings.initialization_options == {"command": ["psalm"]}

    def test_non_mapping_section(self):
        assert parse_lsp_settings(None).binary is None
        assert parse_lsp_settings(42).settings is None

    def test_binary_arguments_are_strings(self):
        settings = parse_lsp_settings({"binary": {"arguments": ["--threads", 4], "path": 7}})

        assert settings.binary.arguments == ["--threads", "4"]
        assert settings.binary.path is None


class TestPathResolution:
    """Test path template resolution."""

    def test_resolve_project_root(self):
        config = PhpkitConfig(project_root=Path("/work/app"))

        assert config.resolve_path("${PROJECT_ROOT}/bin/php") == "/work/app/bin/php"

    def test_resolve_home(self):
        config = PhpkitConfig(project_root=Path("/work/app"))

        assert config.resolve_path("~/bin/php") == str(Path.home() / "bin" / "php")


class TestWorkDir:
    """Test where debug adapters are cached."""

    def test_config_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("PHPKIT_WORK_DIR", "/from/env")
        config = PhpkitConfig(project_root=Path("/work/app"))
        config.dap.work_dir = "${PROJECT_ROOT}/.adapters"

        assert config.work_dir() == Path("/work/app/.adapters")

    def test_env_wins_over_default(self, monkeypatch):
        monkeypatch.setenv("PHPKIT_WORK_DIR", "/from/env")

        assert PhpkitConfig().work_dir() == Path("/from/env")

    def test_default(self, monkeypatch):
        monkeypatch.delenv("PHPKIT_WORK_DIR", raising=False)

        assert PhpkitConfig().work_dir() == Path.home() / ".cache" / "phpkit"

    def test_github_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        assert PhpkitConfig().github_token() == "secret"

        monkeypatch.setenv("GITHUB_TOKEN", "")
        assert PhpkitConfig().github_token() is None
