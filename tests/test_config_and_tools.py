"""Tests for config loading, the tool runner and tf pass-through."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from swetc import vcs
from swetc.config import load_config, save_config
from swetc.models import AnalysisConfig, ProjectFormat
from swetc.tools import run_tool


@pytest.fixture(autouse=True)
def clean_config(tmp_path):
    """Redirect config to a temp directory for test isolation."""
    config_file = tmp_path / "config.json"
    with patch("swetc.config._CONFIG_FILE", config_file), \
         patch("swetc.config._CONFIG_DIR", tmp_path):
        yield config_file


class TestConfig:
    def test_defaults_without_file(self):
        config = load_config()
        assert config.msbuild == "msbuild"
        assert config.workers == 1
        assert config.project_format is ProjectFormat.CMAKE

    def test_file_values(self):
        save_config({"msbuild": "C:/VS/MSBuild.exe", "workers": "4", "properties": {"Platform": "x64"}})
        config = load_config()
        assert config.msbuild == "C:/VS/MSBuild.exe"
        assert config.workers == 4
        assert config.properties == {"Platform": "x64"}

    def test_overrides_win_and_none_ignored(self):
        save_config({"workers": 2, "properties": {"Platform": "x64", "Configuration": "Debug"}})
        config = load_config(workers=None, properties={"Configuration": "Release"})
        assert config.workers == 2
        assert config.properties == {"Platform": "x64", "Configuration": "Release"}

    def test_unknown_keys_ignored(self):
        save_config({"colour": "blue"})
        assert load_config().msbuild == "msbuild"

    def test_broken_file_ignored(self, clean_config, caplog):
        clean_config.write_text("{not json")
        assert load_config().workers == 1
        assert "Ignoring" in caplog.text

    def test_skip_dirs_list(self):
        save_config({"skip_dirs": ["build", "out*"]})
        assert load_config().skip_dirs == ["build", "out*"]

    def test_skip_dirs_string_rejected(self, caplog):
        save_config({"skip_dirs": "build", "msbuild": "MSBuild.exe"})
        config = load_config()
        assert config.skip_dirs == AnalysisConfig().skip_dirs
        assert config.msbuild == "msbuild"
        assert "skip_dirs must be a list" in caplog.text

    def test_save_round_trip(self, clean_config):
        save_config({"tf": "tf.exe"})
        assert json.loads(clean_config.read_text()) == {"tf": "tf.exe"}


class TestRunTool:
    def test_success(self):
        proc = MagicMock(returncode=0, stdout="out", stderr="")
        with patch("swetc.tools.subprocess.run", return_value=proc) as run:
            result = run_tool(["msbuild", "x.vcxproj"])
        assert result.ok
        assert result.stdout == "out"
        assert run.call_args[0][0] == ("msbuild", "x.vcxproj")

    def test_missing_executable(self):
        with patch("swetc.tools.subprocess.run", side_effect=FileNotFoundError()):
            result = run_tool(["tf", "add", "x"])
        assert not result.ok
        assert result.error.tool == "tf"

    def test_nonzero_exit_is_not_ok(self):
        proc = MagicMock(returncode=3, stdout="", stderr="bad")
        with patch("swetc.tools.subprocess.run", return_value=proc):
            result = run_tool(["tf", "undo", "x"])
        assert not result.ok
        assert result.error is None
        assert result.returncode == 3


class TestVcs:
    @pytest.mark.parametrize("func,args,expected", [
        (vcs.tf_add, ("a.cs",), ["tf", "add", "a.cs"]),
        (vcs.tf_checkout, ("a.cs",), ["tf", "checkout", "a.cs"]),
        (vcs.tf_rename, ("a.cs", "b.cs"), ["tf", "rename", "a.cs", "b.cs"]),
        (vcs.tf_undo, ("a.cs",), ["tf", "undo", "/noprompt", "a.cs"]),
    ])
    def test_commands(self, func, args, expected):
        proc = subprocess.CompletedProcess(expected, 0, stdout="", stderr="")
        with patch("swetc.tools.subprocess.run", return_value=proc) as run:
            func(*args)
        assert list(run.call_args[0][0]) == expected

    def test_custom_tf(self):
        proc = subprocess.CompletedProcess([], 0, stdout="", stderr="")
        with patch("swetc.tools.subprocess.run", return_value=proc) as run:
            vcs.tf_add("a.cs", tf="/opt/tf")
        assert run.call_args[0][0][0] == "/opt/tf"
