from __future__ import annotations

"""
Known Debian architecture names.

DEFAULT_ARCHITECTURES is generated from ``dpkg-architecture -L`` by
scripts/generate_architectures.py, plus "all", which modern Release files
list alongside the real architectures. Callers with a different dpkg
release can supply their own set through load_architectures() or the
``architectures`` configuration section.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# GENERATED by scripts/generate_architectures.py, do not edit by hand
DEFAULT_ARCHITECTURES: frozenset[str] = frozenset(
    {
        "all",
        "alpha",
        "amd64",
        "arc",
        "arm",
        "arm64",
        "arm64ilp32",
        "armeb",
        "armel",
        "armhf",
        "avr32",
        "darwin-amd64",
        "darwin-arm",
        "darwin-arm64",
        "darwin-i386",
        "darwin-powerpc",
        "darwin-ppc64",
        "freebsd-amd64",
        "freebsd-arm",
        "freebsd-arm64",
        "freebsd-i386",
        "hppa",
        "hurd-amd64",
        "hurd-i386",
        "i386",
        "ia64",
        "kfreebsd-amd64",
        "kfreebsd-i386",
        "loong64",
        "m32r",
        "m68k",
        "mips",
        "mips64",
        "mips64el",
        "mips64r6",
        "mips64r6el",
        "mipsel",
        "mipsn32",
        "mipsn32el",
        "mipsn32r6",
        "mipsn32r6el",
        "mipsr6",
        "mipsr6el",
        "musl-linux-amd64",
        "musl-linux-arm64",
        "musl-linux-armhf",
        "musl-linux-i386",
        "nios2",
        "or1k",
        "powerpc",
        "powerpcel",
        "powerpcspe",
        "ppc64",
        "ppc64el",
        "riscv64",
        "s390",
        "s390x",
        "sh3",
        "sh3eb",
        "sh4",
        "sh4eb",
        "sparc",
        "sparc64",
        "uclibc-linux-amd64",
        "uclibc-linux-armel",
        "uclibc-linux-i386",
        "uclibc-linux-mips",
        "uclibc-linux-mipsel",
        "x32",
    }
)


def load_architectures(path: Path) -> frozenset[str]:
    """
    Read architecture names from a file, one per line.

    Blank lines and lines starting with "#" are ignored, so the output of
    ``dpkg-architecture -L`` can be used directly.

    Args:
        path: File to read

    Returns:
        Set of architecture names

    Raises:
        FileNotFoundError: If the file does not exist
    """
    names = set()
    with open(path, encoding="utf-8") as f:
        for line in f:
            name = line.strip()
            if not name or name.startswith("#"):
                continue
            names.add(name)

    logger.debug(f"Loaded {len(names)} architectures from {path}")
    return frozenset(names)
