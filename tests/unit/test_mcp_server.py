"""Unit tests for the MCP surface."""

import asyncio
import json

import pytest

from phpkit import PhpExtension, mcp_server
from phpkit.models import CommandSpec, TcpArguments
from phpkit.utils.path import Os
from tests.helpers.workspace_helpers import make_executable


@pytest.fixture
def server(temp_project, work_dir, monkeypatch):
    """Point the server at a temporary project with its own extension."""
    extension = PhpExtension(work_dir=work_dir, reporter=lambda *args: None, platform=Os.LINUX)
    monkeypatch.setattr(mcp_server, "_extension", extension)
    monkeypatch.setattr(mcp_server, "_project_path", None)
    mcp_server.set_project_path(str(temp_project))
    yield mcp_server
    monkeypatch.setattr(mcp_server, "_project_path", None)


class TestToDict:
    def test_dataclasses_become_dicts(self):
        spec = CommandSpec(command="/usr/bin/php", args=("psalm",), env={}, source="path")

        assert mcp_server._to_dict(spec) == {
            "command": "/usr/bin/php",
            "args": ("psalm",),
            "env": {},
            "source": "path",
        }

    def test_nested_containers(self):
        value = {"tcp": [TcpArguments(host="127.0.0.1", port=9003, timeout=2000)]}

        assert mcp_server._to_dict(value) == {
            "tcp": [{"host": "127.0.0.1", "port": 9003, "timeout": 2000}]
        }


class TestTools:
    def test_project_path(self, server, temp_project):
        assert server.get_project_path() == str(temp_project)

    def test_language_server_command_from_vendor(self, server, temp_project):
        make_executable(temp_project / "vendor" / "bin" / "phpactor")

        result = asyncio.run(server.language_server_command("phpactor"))

        assert result["source"] == "vendor"
        assert list(result["args"]) == ["language-server"]

    def test_workspace_configuration(self, server, temp_project):
        (temp_project / "psalm.xml").write_text("<psalm/>")

        result = asyncio.run(server.language_server_workspace_configuration("psalm"))

        assert result == {"psalm": {"configPaths": [str(temp_project / "psalm.xml")]}}

    def test_debug_scenario(self, server):
        result = asyncio.run(server.debug_scenario("index.php", stop_on_entry=True))

        assert result["adapter"] == "Xdebug"
        assert result["label"] == "index.php"
        assert json.loads(result["config"])["stopOnEntry"] is True

    def test_config_overview(self, server, work_dir):
        result = asyncio.run(server.get_phpkit_config())

        assert result["work_dir"] == str(work_dir)
        assert result["language_servers"] == ["intelephense", "phpactor", "psalm"]
        assert result["xdebug"] == {"current_version": None, "installed": {}}
