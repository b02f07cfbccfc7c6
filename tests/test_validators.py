"""Tests for answer validators."""

import os

import pytest
from dotbase_installer.validators import (
    VALIDATORS,
    validate_absolute_path,
    validate_hostname,
    validate_not_empty,
)


class TestValidateNotEmpty:
    """Tests for validate_not_empty function."""

    @pytest.mark.parametrize('value', ['', ' ', '\t\n  '])
    def test_rejects_empty_and_whitespace(self, value):
        with pytest.raises(ValueError, match='This field is required.'):
            validate_not_empty(value, {})

    @pytest.mark.parametrize('value', ['x', ' padded ', 'svc@hospital.example'])
    def test_accepts_non_empty(self, value):
        assert validate_not_empty(value, {}) == value


class TestValidateHostname:
    """Tests for validate_hostname function."""

    @pytest.mark.parametrize('value', [
        'dotbase.org',
        'demo.dotbase.org',
        'localhost',
        'a',
        'my-host.example.com',
        'host.example:8443',
    ])
    def test_accepts_hostnames(self, value):
        assert validate_hostname(value, {}) == value

    @pytest.mark.parametrize('value', [
        'bad host',
        '-leadinghyphen.org',
        'trailing-.org',
        'dotbase.org.',
        'dotbase..org',
        'under_score.org',
        'dotbase.org\n',
    ])
    def test_rejects_invalid_hostnames(self, value):
        with pytest.raises(ValueError, match='Please enter a valid hostname.'):
            validate_hostname(value, {})

    def test_empty_reports_required(self):
        with pytest.raises(ValueError, match='This field is required.'):
            validate_hostname('', {})

    def test_colon_only_allowed_in_last_label(self):
        with pytest.raises(ValueError):
            validate_hostname('a:b.example.org', {})


class TestValidateAbsolutePath:
    """Tests for validate_absolute_path function."""

    def test_accepts_existing_file(self, tmp_path):
        cert = tmp_path / 'cert.pem'
        cert.write_text('CERT')

        assert validate_absolute_path(str(cert), {}) == str(cert)

    def test_accepts_symlink_to_file(self, tmp_path):
        target = tmp_path / 'cert1.pem'
        target.write_text('CERT')
        link = tmp_path / 'cert.pem'
        link.symlink_to(target)

        assert validate_absolute_path(str(link), {}) == str(link)

    def test_rejects_relative_path(self, tmp_path, monkeypatch):
        (tmp_path / 'cert.pem').write_text('CERT')
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match='Please enter a valid absolute path.'):
            validate_absolute_path('cert.pem', {})

    def test_rejects_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match='Please enter a valid absolute path.'):
            validate_absolute_path(str(tmp_path / 'missing.pem'), {})

    def test_rejects_directory(self, tmp_path):
        with pytest.raises(ValueError, match='Please enter a valid absolute path.'):
            validate_absolute_path(str(tmp_path), {})

    def test_io_errors_are_reported_uniformly(self, monkeypatch):
        def broken_stat(path):
            raise PermissionError('denied')

        monkeypatch.setattr(os, 'stat', broken_stat)

        with pytest.raises(ValueError, match='Please enter a valid absolute path.'):
            validate_absolute_path('/etc/ssl/cert.pem', {})

    def test_empty_reports_required(self):
        with pytest.raises(ValueError, match='This field is required.'):
            validate_absolute_path('  ', {})


def test_registry_names():
    """Flows refer to validators by these names."""
    assert set(VALIDATORS) == {'not_empty', 'hostname', 'absolute_path'}
