"""Unit tests for the directory-backed workspace."""

import os
from pathlib import Path

from phpkit.config import PhpkitConfig, RuntimeConfig
from phpkit.worktree import ProjectWorkspace
from tests.helpers.workspace_helpers import make_executable


class TestProjectWorkspace:
    """Test ProjectWorkspace."""

    def test_root_path_is_absolute(self, temp_project):
        workspace = ProjectWorkspace(temp_project)

        assert workspace.root_path() == str(temp_project)
        assert Path(workspace.root_path()).is_absolute()

    def test_which_searches_given_path(self, temp_project, bin_dir):
        php = make_executable(bin_dir / "php")
        workspace = ProjectWorkspace(temp_project, path_env=str(bin_dir))

        assert workspace.which("php") == php
        assert workspace.which("psalm") is None

    def test_which_with_empty_path(self, temp_project):
        workspace = ProjectWorkspace(temp_project, path_env="")

        assert workspace.which("definitely-not-installed") is None

    def test_settings_from_toml(self, temp_project):
        (temp_project / ".phpkit.toml").write_text(
            '[lsp.psalm.initialization_options]\ncommand = ["tools/psalm"]\n'
        )
        workspace = ProjectWorkspace(temp_project, path_env="")

        settings = workspace.lsp_settings("psalm")

        assert settings.initialization_options == {"command": ["tools/psalm"]}
        assert workspace.lsp_settings("phpactor").binary is None

    def test_runtime_settings_resolve_templates(self, temp_project):
        (temp_project / ".phpkit.toml").write_text(
            '[runtime]\nphp_path = "${PROJECT_ROOT}/bin/php"\n'
        )
        workspace = ProjectWorkspace(temp_project, path_env="")

        runtime = workspace.runtime_settings()

        assert runtime.php_path == os.path.join(str(temp_project), "bin", "php")
        assert runtime.node_path is None

    def test_preloaded_config_is_used(self, temp_project):
        config = PhpkitConfig(
            project_root=temp_project, runtime=RuntimeConfig(node_path="/opt/node")
        )
        workspace = ProjectWorkspace(temp_project, path_env="", config=config)

        assert workspace.runtime_settings().node_path == "/opt/node"
