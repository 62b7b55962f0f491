#!/usr/bin/env python3
"""
Regenerate the default architecture list from dpkg.

Runs ``dpkg-architecture -L`` and rewrites the DEFAULT_ARCHITECTURES literal
in src/debrelease/release/architectures.py. "all" is always added because
Release files list it next to the real architectures.
"""

import re
import subprocess
import sys
from pathlib import Path
from typing import List

MODULE_PATH = (
    Path(__file__).resolve().parent.parent / "src" / "debrelease" / "release" / "architectures.py"
)

LITERAL_RE = re.compile(
    r"(DEFAULT_ARCHITECTURES: frozenset\[str\] = frozenset\(\n    \{\n)(.*?)(    \}\n\))",
    re.DOTALL,
)


def list_architectures() -> List[str]:
    """
    Ask dpkg for all known architecture names.

    Returns:
        Sorted list of architecture names, including "all"
    """
    result = subprocess.run(
        ["dpkg-architecture", "-L"], capture_output=True, text=True, check=True
    )
    names = {line.strip() for line in result.stdout.splitlines() if line.strip()}
    names.add("all")
    return sorted(names)


def rewrite_module(module_path: Path, names: List[str]) -> bool:
    """
    Replace the architecture literal in the module.

    Args:
        module_path: Path to architectures.py
        names: Architecture names to write

    Returns:
        True if file was modified, False otherwise
    """
    content = module_path.read_text(encoding="utf-8")
    body = "".join(f'        "{name}",\n' for name in names)

    new_content, count = LITERAL_RE.subn(lambda m: m.group(1) + body + m.group(3), content)
    if count != 1:
        raise ValueError(f"DEFAULT_ARCHITECTURES literal not found in {module_path}")

    if new_content == content:
        return False
    module_path.write_text(new_content, encoding="utf-8")
    return True


def main() -> int:
    try:
        names = list_architectures()
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Failed to run dpkg-architecture: {e}", file=sys.stderr)
        return 1

    if rewrite_module(MODULE_PATH, names):
        print(f"✓ Updated {MODULE_PATH} ({len(names)} architectures)")
    else:
        print(f"  {MODULE_PATH} already up to date ({len(names)} architectures)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
