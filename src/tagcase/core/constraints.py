"""Build constraints that decide whether a file belongs to a package listing.

Covers the ``//go:build ignore`` convention and ``_GOOS``/``_GOARCH``
filename suffixes. Other constraint expressions are treated as satisfied;
``--resolver go`` applies the full rules.
"""

import os
import platform
import sys
from pathlib import Path

KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos", "ios", "js",
        "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris", "wasip1", "windows", "zos",
    }
)  # fmt: skip

KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be", "loong64", "mips",
        "mipsle", "mips64", "mips64le", "mips64p32", "mips64p32le", "ppc", "ppc64", "ppc64le",
        "riscv", "riscv64", "s390", "s390x", "sparc", "sparc64", "wasm",
    }
)  # fmt: skip

_MACHINE_TO_ARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

_HEADER_LIMIT = 64 * 1024


def host_os() -> str:
    if goos := os.getenv("GOOS"):
        return goos
    if sys.platform.startswith("win"):
        return "windows"
    for name in ("freebsd", "openbsd", "netbsd"):
        if sys.platform.startswith(name):
            return name
    return sys.platform


def host_arch() -> str:
    if goarch := os.getenv("GOARCH"):
        return goarch
    machine = platform.machine().lower()
    return _MACHINE_TO_ARCH.get(machine, machine)


def matches_filename(name: str, goos: str | None = None, goarch: str | None = None) -> bool:
    """Apply the ``name_GOOS_GOARCH.go`` convention; the first element never counts."""
    goos = goos or host_os()
    goarch = goarch or host_arch()
    stem = name.removesuffix(".go").removesuffix("_test")
    parts = stem.split("_")[1:]
    if len(parts) >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
        return parts[-2] == goos and parts[-1] == goarch
    if parts and parts[-1] in KNOWN_OS:
        return parts[-1] == goos
    if parts and parts[-1] in KNOWN_ARCH:
        return parts[-1] == goarch
    return True


def is_ignored(path: Path) -> bool:
    """Return True when the file header carries ``//go:build ignore`` or ``// +build ignore``."""
    with path.open("rb") as handle:
        header = handle.read(_HEADER_LIMIT).decode("utf-8", errors="replace")

    in_block_comment = False
    for raw_line in header.splitlines():
        line = raw_line.strip()
        if in_block_comment:
            in_block_comment = "*/" not in line
            continue
        if not line:
            continue
        if line.startswith("/*"):
            in_block_comment = "*/" not in line
            continue
        if not line.startswith("//"):
            return False
        if line.startswith("//go:build"):
            return line.removeprefix("//go:build").split() == ["ignore"]
        if line.startswith("// +build"):
            return line.removeprefix("// +build").split() == ["ignore"]
    return False
