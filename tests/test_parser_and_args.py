"""Tests for token parsing and CLI argument parsing."""

import pytest

from args import parse_args
from versioning.models import PackageRequest
from versioning.parser import (
    is_valid_framework_version,
    parse_package_token,
    parse_package_tokens,
    tokenize_rightmost_at,
)


class TestTokenizeRightmostAt:
    """Tests for the rightmost-@ rule."""

    @pytest.mark.parametrize("token,expected", [
        ("rxjs", ("rxjs", None)),
        ("rxjs@7.8.1", ("rxjs", "7.8.1")),
        ("@angular/core", ("@angular/core", None)),
        ("@angular/core@^17.0.0", ("@angular/core", "^17.0.0")),
        ("primeng@", ("primeng", None)),
        ("  keycloak-js@24.0.0  ", ("keycloak-js", "24.0.0")),
    ])
    def test_split(self, token, expected):
        assert tokenize_rightmost_at(token) == expected


class TestParsePackageToken:
    """Tests for PackageRequest construction."""

    def test_missing_version_is_latest(self):
        assert parse_package_token("primeflex") == PackageRequest("primeflex", "latest")

    def test_latest_is_case_insensitive(self):
        assert parse_package_token("rxjs@LATEST").is_latest

    def test_pinned(self):
        req = parse_package_token("rxjs@7.8.1")
        assert req.requested_version == "7.8.1"
        assert not req.is_latest

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_package_token("@")

    def test_dedup_keeps_first(self):
        reqs = parse_package_tokens(["a@1", "", "b", "a@2"])
        assert [str(r) for r in reqs] == ["a@1", "b@latest"]


class TestFrameworkVersion:
    """Tests for --angular-version validation."""

    @pytest.mark.parametrize("value", ["latest", "next", "rc", "17.3.0", "^17.0.0", ">=16.0.0 <18.0.0", "17.x"])
    def test_valid(self, value):
        assert is_valid_framework_version(value)

    @pytest.mark.parametrize("value", ["", "   ", "not a version!", "^^17", "next;rm"])
    def test_invalid(self, value):
        assert not is_valid_framework_version(value)


class TestParseArgs:
    """Tests for CLI parsing."""

    def test_defaults(self):
        ns = parse_args([])
        assert ns.NAME == "my-angular-app"
        assert ns.ANGULAR_VERSION == "latest"
        assert ns.DIRECTORY == "."
        assert ns.CREATE_REMOTE is False
        assert ns.PACKAGES is None
        assert ns.LOG_LEVEL is None
        assert ns.DRY_RUN is False

    def test_full(self):
        ns = parse_args([
            "-n", "shop", "-v", "^17.0.0", "-d", "/work",
            "--create-remote", "--provider", "GitLab", "--owner", "12", "--public",
            "-p", "rxjs@7.8.1", "-p", "primeng",
            "--package-manager", "pnpm", "--style", "less", "--no-routing",
            "--loglevel", "debug",
        ])
        assert ns.NAME == "shop"
        assert ns.ANGULAR_VERSION == "^17.0.0"
        assert ns.PROVIDER == "gitlab"
        assert ns.PACKAGES == ["rxjs@7.8.1", "primeng"]
        assert ns.PACKAGE_MANAGER == "pnpm"
        assert ns.NO_ROUTING is True
        assert ns.LOG_LEVEL == "DEBUG"

    def test_dist_tag_and_branch(self):
        ns = parse_args(["-v", "next", "--branch", "trunk"])
        assert ns.ANGULAR_VERSION == "next"
        assert ns.BRANCH == "trunk"
        assert ns.CREATE_REMOTE is False

    def test_invalid_angular_version_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-v", "not a version!"])
        assert exc_info.value.code == 2

    def test_remote_requires_git(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--create-remote", "--skip-git"])
        assert exc_info.value.code == 2

    def test_unsupported_manager_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--package-manager", "bower"])
