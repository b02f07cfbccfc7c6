"""Tests for installer settings loading."""

from pathlib import Path

import pytest
import yaml
from dotbase_installer.settings import InstallerSettings, load_settings
from pydantic import ValidationError


class TestInstallerSettings:
    """Tests for InstallerSettings defaults."""

    def test_defaults(self):
        settings = InstallerSettings()

        assert settings.flow == 'install'
        assert settings.artifacts.realm_secret == 'dotbase_realm'
        assert settings.artifacts.custom_ca_config == 'dotbase_custom_ca'
        assert settings.launch_command == ['docker', 'stack', 'deploy', '--compose-file', '{stack}', 'dotbase']
        assert (settings.template_dir / 'docker-stack.yml.j2').exists()
        assert (settings.flows_dir / 'install.yaml').exists()
        assert (settings.template_dir / 'parameters.yml.j2').exists()

    def test_output_paths_follow_output_dir(self):
        settings = InstallerSettings(output_dir=Path('/srv/dotbase'))

        assert settings.realm_path == Path('/srv/dotbase/realm.json')
        assert settings.proxy_path == Path('/srv/dotbase/proxy.conf')
        assert settings.parameters_path == Path('/srv/dotbase/parameters.yml')
        assert settings.stack_path == Path('/srv/dotbase/docker-stack.yml')

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValidationError):
            InstallerSettings(hostname='dotbase.org')


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_reads_yaml_file(self, tmp_path):
        config = tmp_path / 'installer-config.yaml'
        config.write_text(yaml.safe_dump({
            'output_dir': str(tmp_path / 'out'),
            'artifacts': {'realm_secret': 'acme_realm'},
            'recreate_artifacts': True,
        }))

        settings = load_settings(config)

        assert settings.output_dir == tmp_path / 'out'
        assert settings.artifacts.realm_secret == 'acme_realm'
        assert settings.artifacts.tls_cert_secret == 'dotbase_tls_cert'
        assert settings.recreate_artifacts is True

    def test_overrides_win_and_none_is_ignored(self, tmp_path):
        config = tmp_path / 'installer-config.yaml'
        config.write_text('log_level: INFO\nrecreate_artifacts: true\n')

        settings = load_settings(config, log_level='DEBUG', recreate_artifacts=None)

        assert settings.log_level == 'DEBUG'
        assert settings.recreate_artifacts is True

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / 'missing.yaml')

    def test_default_file_is_optional(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv('DOTBASE_INSTALLER_VERBOSE', raising=False)

        settings = load_settings()

        assert settings == InstallerSettings()

    def test_verbose_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('DOTBASE_INSTALLER_VERBOSE', '1')

        assert load_settings().verbose is True

    def test_empty_file(self, tmp_path):
        config = tmp_path / 'installer-config.yaml'
        config.write_text('')

        assert load_settings(config).flow == 'install'
