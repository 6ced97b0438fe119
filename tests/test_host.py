"""
Tests for host resolution — snapshot normalisation, FreeBSD, the musl guard.
"""

from pathlib import Path

import pytest

from get_platform.adapters.mock import MockCommandAdapter
from get_platform.core.services import host as host_service
from get_platform.core.services.host import (
    UnsupportedPlatformError,
    check_supported,
    get_os,
    normalize_arch,
    normalize_platform,
    snapshot,
)
from get_platform.core.services.prober import CommandProber

# ── Snapshot ─────────────────────────────────────────────────────────


class TestNormalize:
    @pytest.mark.parametrize(
        "machine, arch",
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("aarch64", "arm64"),
            ("arm64", "arm64"),
            ("armv7l", "arm"),
            ("i686", "ia32"),
            ("ppc64le", "ppc64"),
            ("s390x", "s390x"),
            ("riscv64", "riscv64"),
        ],
    )
    def test_arch(self, machine: str, arch: str):
        assert normalize_arch(machine) == arch

    def test_unknown_arch_passes_through(self):
        assert normalize_arch("Sparc64") == "sparc64"

    @pytest.mark.parametrize(
        "name, platform",
        [
            ("linux", "linux"),
            ("darwin", "darwin"),
            ("win32", "win32"),
            ("freebsd13", "freebsd"),
            ("openbsd7", "openbsd"),
            ("netbsd10", "netbsd"),
            ("sunos5", "sunos"),
            ("solaris", "sunos"),
            ("emscripten", "emscripten"),
        ],
    )
    def test_platform(self, name: str, platform: str):
        assert normalize_platform(name) == platform

    def test_snapshot(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(host_service.sys, "platform", "linux")
        monkeypatch.setattr(host_service._platform, "machine", lambda: "aarch64")
        assert snapshot() == ("linux", "arm64")


# ── get_os ───────────────────────────────────────────────────────────


class TestGetOs:
    def test_darwin_skips_linux_probes(self, mock_adapter: MockCommandAdapter, prober: CommandProber):
        host = get_os("darwin", "arm64", prober=prober)
        assert host.platform == "darwin"
        assert host.arch == "arm64"
        assert host.libssl is None
        assert host.target_distro is None
        assert mock_adapter.call_count == 0

    def test_linux_debian(self, os_release):
        mock = MockCommandAdapter({
            "uname -m": "x86_64",
            "ls /usr/lib/x86_64-linux-gnu | grep libssl.so": "libssl.so.3",
        })
        host = get_os(
            "linux", "x64",
            prober=CommandProber(adapter=mock),
            os_release_path=os_release("ID=ubuntu\nID_LIKE=debian\n"),
        )
        assert host.platform == "linux"
        assert host.libssl == "3.0.x"
        assert host.target_distro == "debian"
        assert host.family_distro == "debian"
        assert host.original_distro == "ubuntu"

    def test_linux_without_release_file(self, tmp_path: Path, prober: CommandProber):
        host = get_os("linux", "x64", prober=prober, os_release_path=tmp_path / "missing")
        assert host.target_distro is None
        assert host.original_distro is None
        assert host.libssl is None

    def test_musl_on_arm64_is_fatal(self, os_release, prober: CommandProber):
        with pytest.raises(UnsupportedPlatformError, match="amd64"):
            get_os("linux", "arm64", prober=prober, os_release_path=os_release("ID=alpine\n"))

    def test_musl_guard_runs_before_libssl_probes(self, os_release, mock_adapter, prober):
        with pytest.raises(UnsupportedPlatformError):
            get_os("linux", "arm", prober=prober, os_release_path=os_release("ID=alpine\n"))
        assert mock_adapter.call_count == 0

    def test_musl_on_x64_is_fine(self, os_release):
        mock = MockCommandAdapter({"ls /lib | grep libssl.so": "libssl.so.3"})
        host = get_os(
            "linux", "x64",
            prober=CommandProber(adapter=mock),
            os_release_path=os_release("ID=alpine\n"),
        )
        assert host.target_distro == "musl"
        assert host.libssl == "3.0.x"

    @pytest.mark.parametrize("target, arch", [("musl", "x64"), ("debian", "arm64"), (None, "s390x")])
    def test_check_supported_accepts(self, target, arch):
        check_supported(target, arch)

    def test_check_supported_rejects_musl_off_x64(self):
        with pytest.raises(UnsupportedPlatformError, match="'arm64'"):
            check_supported("musl", "arm64")

    def test_freebsd_version(self):
        mock = MockCommandAdapter({"freebsd-version": "13.2-RELEASE"})
        host = get_os("freebsd", "x64", prober=CommandProber(adapter=mock))
        assert host.platform == "freebsd"
        assert host.target_distro == "freebsd13"

    def test_freebsd_probe_failure(self, prober: CommandProber):
        host = get_os("freebsd", "x64", prober=prober)
        assert host.platform == "freebsd"
        assert host.target_distro is None

    def test_freebsd_without_binaries(self):
        mock = MockCommandAdapter({"freebsd-version": "14.0-RELEASE"})
        host = get_os("freebsd", "x64", prober=CommandProber(adapter=mock))
        assert host.target_distro is None

    def test_host_is_frozen(self, prober: CommandProber):
        host = get_os("win32", "x64", prober=prober)
        with pytest.raises(Exception):
            host.arch = "arm64"  # type: ignore[misc]
