"""
Tests for CLI commands — detect, distro, libssl, platforms and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from get_platform.adapters.mock import MockCommandAdapter
from get_platform.core.services.prober import CommandProber
from get_platform.main import cli

DEBIAN_HOST = {
    "uname -m": "x86_64",
    "ls /usr/lib/x86_64-linux-gnu | grep libssl.so": "libssl.so.3",
}


@pytest.fixture
def scripted_host(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Pin the OS/arch and route every probe through a mock adapter.

    Returns a function ``(os_release, platform, arch, outputs) -> config path``.
    """

    def _setup(
        os_release: str = "ID=debian\n",
        platform: str = "linux",
        arch: str = "x64",
        outputs: dict[str, str] | None = None,
    ) -> Path:
        mock = MockCommandAdapter(outputs if outputs is not None else DEBIAN_HOST)

        def _prober(adapter=None, max_workers=None):
            return CommandProber(adapter=mock, max_workers=max_workers)

        monkeypatch.setattr("get_platform.core.services.host.snapshot", lambda: (platform, arch))
        monkeypatch.setattr("get_platform.core.services.prober.CommandProber", _prober)
        monkeypatch.setattr("get_platform.core.use_cases.detect.CommandProber", _prober)

        release = tmp_path / "os-release"
        release.write_text(os_release)
        config = tmp_path / "getplatform.yml"
        config.write_text(f"os_release_path: {release}\n")
        return config

    return _setup


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "native binary target" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yml"), "detect"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestDetectCommand:
    def test_detect(self, scripted_host):
        config = scripted_host()
        result = CliRunner().invoke(cli, ["--config", str(config), "detect"])
        assert result.exit_code == 0
        assert "debian-openssl-3.0.x" in result.output
        assert "libssl:  3.0.x" in result.output

    def test_detect_json(self, scripted_host):
        config = scripted_host()
        result = CliRunner().invoke(cli, ["--config", str(config), "detect", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["platform"] == "debian-openssl-3.0.x"
        assert data["known"] is True
        assert data["host"]["target_distro"] == "debian"
        assert data["warnings"] == []

    def test_detect_quiet_prints_only_the_tag(self, scripted_host):
        config = scripted_host(os_release="ID=alpine\n", outputs={"ls /lib | grep libssl.so": "libssl.so.1.1"})
        result = CliRunner().invoke(cli, ["-q", "--config", str(config), "detect"])
        assert result.exit_code == 0
        assert result.output.strip() == "linux-musl"

    def test_detect_darwin(self, scripted_host):
        config = scripted_host(platform="darwin", arch="arm64", outputs={})
        result = CliRunner().invoke(cli, ["-q", "--config", str(config), "detect"])
        assert result.output.strip() == "darwin-arm64"

    def test_detect_unsupported_musl(self, scripted_host):
        config = scripted_host(os_release="ID=alpine\n", arch="arm64")
        result = CliRunner().invoke(cli, ["--config", str(config), "detect"])
        assert result.exit_code == 1
        assert "amd64" in result.output

    def test_detect_unpublished_tag(self, scripted_host):
        config = scripted_host(os_release="ID=raspbian\nID_LIKE=debian\n", outputs={
            "openssl version -v": "OpenSSL 1.1.1w  11 Sep 2023",
        })
        result = CliRunner().invoke(cli, ["--config", str(config), "detect"])
        assert result.exit_code == 0
        assert "arm-openssl-1.1.x" in result.output
        assert "No published binaries" in result.output


class TestDistroCommand:
    def test_distro_from_file(self, tmp_path: Path):
        release = tmp_path / "os-release"
        release.write_text("ID=manjaro\nID_LIKE=arch\n")
        result = CliRunner().invoke(cli, ["distro", "--file", str(release)])
        assert result.exit_code == 0
        assert "manjaro" in result.output
        assert "arch" in result.output
        assert "debian" in result.output

    def test_distro_json(self, tmp_path: Path):
        release = tmp_path / "os-release"
        release.write_text('ID="almalinux"\nID_LIKE="rhel centos fedora"\n')
        result = CliRunner().invoke(cli, ["distro", "--file", str(release), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "original_distro": "almalinux",
            "family_distro": "rhel",
            "target_distro": "rhel",
        }

    def test_distro_missing_file(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["distro", "--file", str(tmp_path / "missing")])
        assert result.exit_code == 0
        assert "No release metadata" in result.output


class TestLibsslCommand:
    def test_libssl(self, scripted_host):
        config = scripted_host()
        result = CliRunner().invoke(cli, ["--config", str(config), "libssl"])
        assert result.exit_code == 0
        assert result.output.strip() == "3.0.x"

    def test_libssl_json(self, scripted_host):
        config = scripted_host(os_release="ID=fedora\n", outputs={"ls /lib64 | grep libssl.so": "libssl.so.3"})
        result = CliRunner().invoke(cli, ["--config", str(config), "libssl", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"libssl": "3.0.x", "arch": "x64", "target_distro": "rhel"}

    def test_libssl_not_found(self, scripted_host):
        config = scripted_host(outputs={})
        result = CliRunner().invoke(cli, ["--config", str(config), "libssl"])
        assert result.exit_code == 1
        assert "Could not detect libssl" in result.output

    def test_libssl_unsupported_musl(self, scripted_host):
        config = scripted_host(os_release="ID=alpine\n", arch="arm64", outputs={"ls /lib | grep libssl.so": "libssl.so.3"})
        result = CliRunner().invoke(cli, ["--config", str(config), "libssl"])
        assert result.exit_code == 1
        assert "amd64" in result.output
        assert "3.0.x" not in result.output


class TestPlatformsCommand:
    def test_lists_catalog(self):
        result = CliRunner().invoke(cli, ["platforms"])
        assert result.exit_code == 0
        lines = result.output.split()
        assert "debian-openssl-3.0.x" in lines
        assert "linux-musl" in lines
        assert "windows" in lines
