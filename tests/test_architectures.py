from __future__ import annotations

"""
Tests for the known architecture list and its generator script.
"""

import importlib.util
from pathlib import Path

import pytest

from debrelease.release.architectures import DEFAULT_ARCHITECTURES, load_architectures

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "generate_architectures.py"


def load_script():
    spec = importlib.util.spec_from_file_location("generate_architectures", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestDefaultArchitectures:
    """Tests for the packaged architecture set."""

    @pytest.mark.parametrize(
        "name", ["all", "amd64", "arm64", "armel", "armhf", "i386", "ppc64el", "s390x"]
    )
    def test_common_architectures(self, name):
        """Test that the usual Debian architectures are known."""
        assert name in DEFAULT_ARCHITECTURES

    def test_unknown_architecture(self):
        """Test that made up names are not known."""
        assert "z80" not in DEFAULT_ARCHITECTURES
        assert "" not in DEFAULT_ARCHITECTURES


class TestLoadArchitectures:
    """Tests for reading architecture files."""

    def test_load(self, tmp_path):
        """Test that comments and blank lines are skipped."""
        path = tmp_path / "arches"
        path.write_text("# dpkg-architecture -L\namd64\n\n  riscv64  \n#i386\namd64\n")

        assert load_architectures(path) == frozenset({"amd64", "riscv64"})

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_architectures(tmp_path / "missing")


class TestGenerateArchitectures:
    """Tests for scripts/generate_architectures.py."""

    MODULE = (
        '"""Doc."""\n'
        "\n"
        "DEFAULT_ARCHITECTURES: frozenset[str] = frozenset(\n"
        "    {\n"
        '        "amd64",\n'
        "    }\n"
        ")\n"
    )

    def test_rewrite_module(self, tmp_path):
        """Test that the literal is replaced with the given names."""
        script = load_script()
        module_path = tmp_path / "architectures.py"
        module_path.write_text(self.MODULE)

        assert script.rewrite_module(module_path, ["all", "amd64", "i386"]) is True

        content = module_path.read_text()
        assert '        "all",\n        "amd64",\n        "i386",\n    }\n)' in content
        assert content.startswith('"""Doc."""')

    def test_rewrite_unchanged(self, tmp_path):
        """Test that an up to date module is left alone."""
        script = load_script()
        module_path = tmp_path / "architectures.py"
        module_path.write_text(self.MODULE)

        assert script.rewrite_module(module_path, ["amd64"]) is False

    def test_rewrite_missing_literal(self, tmp_path):
        """Test that a module without the literal is rejected."""
        script = load_script()
        module_path = tmp_path / "architectures.py"
        module_path.write_text("ARCHES = set()\n")

        with pytest.raises(ValueError, match="literal not found"):
            script.rewrite_module(module_path, ["amd64"])

    def test_packaged_module_matches_pattern(self):
        """Test that the packaged module can be regenerated by the script."""
        script = load_script()

        assert script.LITERAL_RE.search(script.MODULE_PATH.read_text(encoding="utf-8"))
