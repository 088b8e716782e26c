"""Tests for the environment/config-file configuration provider."""

import json

import pytest
from pathlib import Path
from unittest.mock import patch

from md2adf.adapters.config import EnvironmentConfigProvider
from md2adf.core.exceptions import ConfigError


ENV_KEYS = ["JIRA_URL", "JIRA_EMAIL", "JIRA_API_TOKEN", "MD2ADF_BASE_BRANCH", "MD2ADF_VERBOSE"]


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep the real home directory, cwd and environment out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    with patch.object(Path, "home", return_value=home):
        yield home


def write_config(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


MULTI_INSTANCE = {
    "email": "dev@example.com",
    "baseBranch": "develop",
    "instances": [
        {
            "name": "acme",
            "baseUrl": "acme.atlassian.net",
            "apiToken": "t1",
            "pathPatterns": ["/Projects/Acme"],
        },
        {
            "name": "globex",
            "baseUrl": "https://globex.atlassian.net/",
            "apiToken": "t2",
            "email": "me@globex.com",
            "pathPatterns": ["globex"],
        },
    ],
}


class TestEnvironment:
    
    def test_env_vars_make_default_instance(self, monkeypatch):
        monkeypatch.setenv("JIRA_URL", "example.atlassian.net")
        monkeypatch.setenv("JIRA_EMAIL", "a@b.c")
        monkeypatch.setenv("JIRA_API_TOKEN", "secret")
        
        provider = EnvironmentConfigProvider()
        
        (instance,) = provider.instances
        assert instance.name == "default"
        assert instance.tracker.url == "https://example.atlassian.net"
        assert provider.validate() == []
    
    def test_missing_values(self):
        provider = EnvironmentConfigProvider()
        
        assert provider.instances == []
        assert provider.validate() == [
            "Missing JIRA_URL - set in environment or .env file",
            "Missing JIRA_EMAIL - set in environment or .env file",
            "Missing JIRA_API_TOKEN - set in environment or .env file",
        ]
    
    def test_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text(
            "# credentials\n"
            "JIRA_URL=https://env.atlassian.net\n"
            "JIRA_EMAIL='a@b.c'\n"
            'JIRA_API_TOKEN="tok"\n'
            "MD2ADF_VERBOSE=true\n"
            "not a pair\n"
        )
        
        provider = EnvironmentConfigProvider(env_file=env_file)
        
        assert provider.get("jira_email") == "a@b.c"
        assert provider.get("jira_api_token") == "tok"
        assert provider.get("verbose") is True
        assert provider.instances[0].tracker.url == "https://env.atlassian.net"
    
    def test_env_file_in_cwd(self):
        (Path.cwd() / ".env").write_text("JIRA_URL=cwd.atlassian.net\n")
        assert EnvironmentConfigProvider().get("jira_url") == "cwd.atlassian.net"
    
    def test_environment_overrides_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("MD2ADF_BASE_BRANCH=from-file\n")
        monkeypatch.setenv("MD2ADF_BASE_BRANCH", "from-env")
        
        provider = EnvironmentConfigProvider(env_file=env_file)
        
        assert provider.get("base_branch") == "from-env"


class TestConfigFile:
    
    def test_instances_from_default_location(self, isolated):
        write_config(isolated / ".config" / "md2adf" / "config.json", MULTI_INSTANCE)
        
        provider = EnvironmentConfigProvider()
        
        acme, globex = provider.instances
        assert acme.tracker.url == "https://acme.atlassian.net"
        assert acme.tracker.email == "dev@example.com"
        assert globex.tracker.url == "https://globex.atlassian.net"
        assert globex.tracker.email == "me@globex.com"
        assert provider.validate() == []
    
    def test_fallback_location(self, isolated):
        write_config(isolated / ".md2adf.json", MULTI_INSTANCE)
        assert len(EnvironmentConfigProvider().instances) == 2
    
    def test_explicit_config_file(self, tmp_path):
        path = write_config(tmp_path / "md2adf.json", MULTI_INSTANCE)
        assert EnvironmentConfigProvider(config_file=path).list_instances()[1] == {
            "name": "globex",
            "url": "https://globex.atlassian.net",
            "patterns": ["globex"],
        }
    
    def test_file_wins_over_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("JIRA_URL", "env.atlassian.net")
        monkeypatch.setenv("JIRA_EMAIL", "a@b.c")
        monkeypatch.setenv("JIRA_API_TOKEN", "secret")
        path = write_config(tmp_path / "c.json", MULTI_INSTANCE)
        
        names = [i.name for i in EnvironmentConfigProvider(config_file=path).instances]
        
        assert names == ["acme", "globex"]
    
    def test_invalid_json_is_skipped(self, isolated):
        bad = isolated / ".config" / "md2adf" / "config.json"
        bad.parent.mkdir(parents=True)
        bad.write_text("{not json")
        write_config(isolated / ".md2adf.json", MULTI_INSTANCE)
        
        assert len(EnvironmentConfigProvider().instances) == 2
    
    def test_validate_reports_missing_fields(self, tmp_path):
        path = write_config(tmp_path / "c.json", {
            "instances": [{"name": "broken", "pathPatterns": []}]
        })
        
        errors = EnvironmentConfigProvider(config_file=path).validate()
        
        assert "Missing 'email' in config file" in errors
        assert "Instance 'broken' has no baseUrl" in errors
        assert "Instance 'broken' has no apiToken" in errors


class TestResolveInstance:
    
    @pytest.fixture
    def provider(self, tmp_path):
        return EnvironmentConfigProvider(
            config_file=write_config(tmp_path / "c.json", MULTI_INSTANCE)
        )
    
    def test_path_pattern_match(self, provider):
        resolved = provider.resolve_instance("/home/dev/projects/acme/api")
        assert resolved.instance.name == "acme"
        assert resolved.base_branch == "develop"
    
    def test_first_match_wins(self, provider):
        resolved = provider.resolve_instance("/projects/acme/globex-bridge")
        assert resolved.instance.name == "acme"
    
    def test_fallback_to_first_instance(self, provider):
        assert provider.resolve_instance("/tmp/elsewhere").instance.name == "acme"
    
    def test_cli_base_branch_override(self, tmp_path):
        provider = EnvironmentConfigProvider(
            config_file=write_config(tmp_path / "c.json", MULTI_INSTANCE),
            cli_overrides={"base": "release", "execute": False},
        )
        assert provider.resolve_instance("/x").base_branch == "release"
        assert provider.load().dry_run is True
    
    def test_no_instances(self):
        with pytest.raises(ConfigError, match="No Jira instances configured"):
            EnvironmentConfigProvider().resolve_instance("/x")


class TestCliOverrides:
    
    def test_unset_flags_keep_environment_values(self, monkeypatch):
        monkeypatch.setenv("MD2ADF_VERBOSE", "true")
        provider = EnvironmentConfigProvider(cli_overrides={"verbose": None, "execute": None})
        
        config = provider.load()
        
        assert config.verbose is True
        assert config.dry_run is True
    
    def test_set_flags_win(self, monkeypatch):
        monkeypatch.setenv("MD2ADF_VERBOSE", "false")
        provider = EnvironmentConfigProvider(cli_overrides={"verbose": True, "execute": True})
        
        config = provider.load()
        
        assert config.verbose is True
        assert config.dry_run is False
