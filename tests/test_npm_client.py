"""Tests for the npm registry client."""

import logging
from unittest.mock import patch

import pytest

from registry.npm.client import NpmRegistryClient, encode_package_name, peer_dependencies_of


@pytest.fixture
def client():
    return NpmRegistryClient("https://registry.example.test")


class TestEncodePackageName:
    """Test registry path encoding."""

    def test_plain_name_unchanged(self):
        assert encode_package_name("primeng") == "primeng"

    def test_scoped_name_encodes_slash(self):
        assert encode_package_name("@angular/core") == "@angular%2Fcore"


class TestFetchVersions:
    """Test packument listing."""

    @patch('registry.npm.get_json')
    def test_returns_versions_mapping(self, mock_get_json, client):
        versions = {
            "1.0.0": {"peerDependencies": {"@angular/core": "^16.0.0"}},
            "2.0.0": {"peerDependencies": {"@angular/core": "^17.0.0"}},
        }
        mock_get_json.return_value = ((200, {}, {"name": "primeng", "versions": versions}), None)

        result = client.fetch_versions("primeng")

        assert result.ok is True
        assert result.data == versions
        mock_get_json.assert_called_once_with("https://registry.example.test/primeng")

    @patch('registry.npm.get_json')
    def test_network_error_is_soft(self, mock_get_json, client, caplog):
        caplog.set_level(logging.WARNING)
        mock_get_json.return_value = ((0, {}, None), "connection error: boom")

        result = client.fetch_versions("primeng")

        assert result.ok is False
        assert result.data == {}
        assert "connection error" in result.error
        assert "Could not fetch versions for primeng" in caplog.text

    @patch('registry.npm.get_json')
    def test_not_found_is_soft(self, mock_get_json, client):
        mock_get_json.return_value = ((404, {}, {"error": "Not found"}), None)

        result = client.fetch_versions("does-not-exist")

        assert result.ok is False
        assert result.status_code == 404
        assert result.data == {}

    @patch('registry.npm.get_json')
    def test_unparsable_body_is_soft(self, mock_get_json, client):
        mock_get_json.return_value = ((200, {}, None), None)

        result = client.fetch_versions("primeng")

        assert result.ok is False
        assert result.data == {}

    @patch('registry.npm.get_json')
    def test_missing_versions_object_is_soft(self, mock_get_json, client):
        mock_get_json.return_value = ((200, {}, {"name": "primeng"}), None)

        result = client.fetch_versions("primeng")

        assert result.ok is False
        assert result.data == {}


class TestFetchPeerDependencies:
    """Test per-version peer dependency lookups."""

    @patch('registry.npm.get_json')
    def test_returns_peer_dependencies(self, mock_get_json, client):
        doc = {"version": "17.0.0", "peerDependencies": {"@angular/core": "^17.0.0", "rxjs": "~7.8.0"}}
        mock_get_json.return_value = ((200, {}, doc), None)

        result = client.fetch_peer_dependencies("primeng", "17.0.0")

        assert result.ok is True
        assert result.data == {"@angular/core": "^17.0.0", "rxjs": "~7.8.0"}
        mock_get_json.assert_called_once_with("https://registry.example.test/primeng/17.0.0")

    @patch('registry.npm.get_json')
    def test_no_peer_dependencies_is_empty_success(self, mock_get_json, client):
        mock_get_json.return_value = ((200, {}, {"version": "7.8.1"}), None)

        result = client.fetch_peer_dependencies("rxjs", "latest")

        assert result.ok is True
        assert result.data == {}

    @patch('registry.npm.get_json')
    def test_scoped_package_url(self, mock_get_json, client):
        mock_get_json.return_value = ((200, {}, {}), None)

        client.fetch_peer_dependencies("@angular/core", "17.0.0")

        mock_get_json.assert_called_once_with("https://registry.example.test/@angular%2Fcore/17.0.0")

    @patch('registry.npm.get_json')
    def test_failure_returns_empty_mapping(self, mock_get_json, client, caplog):
        caplog.set_level(logging.WARNING)
        mock_get_json.return_value = ((0, {}, None), "request timed out after 30 seconds")

        result = client.fetch_peer_dependencies("keycloak-js", "latest")

        assert result.ok is False
        assert result.data == {}
        assert "peer dependencies for keycloak-js@latest" in caplog.text


class TestPeerDependenciesOf:
    """Test tolerant extraction from version documents."""

    def test_non_dict_document(self):
        assert peer_dependencies_of("1.0.0") == {}

    def test_null_peers(self):
        assert peer_dependencies_of({"peerDependencies": None}) == {}

    def test_non_dict_peers(self):
        assert peer_dependencies_of({"peerDependencies": ["rxjs"]}) == {}


def test_default_base_url_has_trailing_slash():
    assert NpmRegistryClient().base_url == "https://registry.npmjs.org/"
