"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from debrelease.cli.main import cli
from debrelease.core.config import CONFIG_ENV_VAR

DATA_DIR = Path(__file__).parent / "data"
RELEASE_FILE = DATA_DIR / "Release"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config files of the test machine out of the way."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")


@pytest.fixture
def unsorted_release(tmp_path):
    """Valid Release file that is not in canonical form."""
    path = tmp_path / "Release"
    path.write_bytes(
        b"Suite: stable\n"
        b"Origin: Debian\n"
        b"Components: main\n"
        b"Architectures: amd64\n"
        b"Date: Mon, 01 Jan 2018 00:00:00 UTC\n"
        b"MD5Sum:\n"
        b" " + b"ab" * 16 + b" 12 main/binary-amd64/Packages\n"
    )
    return path


@pytest.fixture
def invalid_release(tmp_path):
    """Release file with an unknown architecture."""
    path = tmp_path / "InRelease"
    content = RELEASE_FILE.read_bytes()
    path.write_bytes(content.replace(b"Architectures: amd64", b"Architectures: z80"))
    return path


def test_cli_version():
    """Test that --version works."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output.lower()


def test_cli_help():
    """Test that --help works."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "debrelease" in result.output
    for command in ["show", "validate", "format", "architectures", "init-config"]:
        assert command in result.output


def test_cli_missing_config(tmp_path, monkeypatch):
    """Test that a missing config named by the environment is an error."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
    runner = CliRunner()
    result = runner.invoke(cli, ["architectures"])
    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_validate():
    """Test validating a correct Release file."""
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(RELEASE_FILE)])
    assert result.exit_code == 0
    assert "valid (48 checksum entries)" in result.output


def test_validate_invalid(invalid_release):
    """Test that an invalid file makes validate fail."""
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(RELEASE_FILE), str(invalid_release)])
    assert result.exit_code == 1
    assert "unsupported architecture: 'z80'" in result.output
    assert "Invalid: 1" in result.output


def test_validate_with_config_extra(tmp_path, invalid_release):
    """Test that configured extra architectures are accepted."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("architectures:\n  extra: [z80]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "validate", str(invalid_release)])
    assert result.exit_code == 0


def test_show_json():
    """Test showing a Release file as JSON."""
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "--format", "json", str(RELEASE_FILE)])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["codename"] == "jessie"
    assert data["components"] == ["main", "contrib", "non-free"]
    assert data["md5sum"]["main/binary-amd64/Packages"] == {
        "length": 34016421,
        "digest": "0d3a31af2bf9ab78412cbc774364ed6c",
    }


def test_show_table():
    """Test showing a Release file as a table."""
    runner = CliRunner()
    result = runner.invoke(cli, ["show", str(RELEASE_FILE)])
    assert result.exit_code == 0
    assert "Codename: jessie" in result.output
    assert "Date: Sat, 25 Apr 2015 11:29:38 UTC" in result.output
    assert "Checksums" in result.output


def test_show_invalid(invalid_release):
    """Test that show refuses an invalid file."""
    runner = CliRunner()
    result = runner.invoke(cli, ["show", str(invalid_release)])
    assert result.exit_code == 1
    assert "Invalid Architectures" in result.output


def test_format_stdout(unsorted_release):
    """Test writing the canonical form to stdout."""
    runner = CliRunner()
    result = runner.invoke(cli, ["format", str(unsorted_release)])
    assert result.exit_code == 0
    assert result.stdout_bytes == (
        b"Origin: Debian\n"
        b"Suite: stable\n"
        b"Date: Mon, 01 Jan 2018 00:00:00 UTC\n"
        b"Architectures: amd64\n"
        b"Components: main\n"
        b"MD5Sum:\n"
        b" " + b"ab" * 16 + b"       12 main/binary-amd64/Packages\n"
    )


def test_format_fixture_unchanged():
    """Test that a canonical file is reproduced exactly."""
    runner = CliRunner()
    result = runner.invoke(cli, ["format", str(RELEASE_FILE)])
    assert result.exit_code == 0
    assert result.stdout_bytes == RELEASE_FILE.read_bytes()


def test_format_check(unsorted_release):
    """Test --check on canonical and non-canonical files."""
    runner = CliRunner()

    result = runner.invoke(cli, ["format", "--check", str(RELEASE_FILE)])
    assert result.exit_code == 0
    assert "is in canonical form" in result.output

    result = runner.invoke(cli, ["format", "--check", str(unsorted_release)])
    assert result.exit_code == 1
    assert "is not in canonical form" in result.output


def test_format_output_file(tmp_path, unsorted_release):
    """Test writing the canonical form to a file."""
    output_path = tmp_path / "Release.canonical"
    runner = CliRunner()
    result = runner.invoke(cli, ["format", str(unsorted_release), "-o", str(output_path)])
    assert result.exit_code == 0
    assert "Wrote" in result.output

    result = runner.invoke(cli, ["format", "--check", str(output_path)])
    assert result.exit_code == 0


def test_format_inrelease_warns(tmp_path):
    """Test that dropping the signature of an InRelease file is reported."""
    inrelease = tmp_path / "InRelease"
    inrelease.write_bytes(
        b"-----BEGIN PGP SIGNED MESSAGE-----\n"
        b"Hash: SHA256\n"
        b"\n"
        + RELEASE_FILE.read_bytes()
        + b"-----BEGIN PGP SIGNATURE-----\n"
        b"\n"
        b"iQIzBAEBCAAdFiEEEmwNJL2KKULMffisdjjQRCuQ0BAFAlpJ\n"
        b"-----END PGP SIGNATURE-----\n"
    )
    output_path = tmp_path / "Release.canonical"
    runner = CliRunner()

    result = runner.invoke(cli, ["format", str(inrelease), "-o", str(output_path)])
    assert result.exit_code == 0
    assert "PGP signature is not preserved" in result.output
    assert output_path.read_bytes() == RELEASE_FILE.read_bytes()

    result = runner.invoke(cli, ["format", "--check", str(inrelease)])
    assert result.exit_code == 1
    assert "PGP signature is not preserved" in result.output

    result = runner.invoke(cli, ["--quiet", "format", str(inrelease), "-o", str(output_path)])
    assert result.exit_code == 0
    assert "PGP signature" not in result.output


def test_format_release_does_not_warn(tmp_path):
    """Test that plain Release files are formatted without a warning."""
    output_path = tmp_path / "Release.canonical"
    runner = CliRunner()
    result = runner.invoke(cli, ["format", str(RELEASE_FILE), "-o", str(output_path)])
    assert result.exit_code == 0
    assert "PGP signature" not in result.output


def test_architectures():
    """Test listing known architectures."""
    runner = CliRunner()
    result = runner.invoke(cli, ["architectures"])
    assert result.exit_code == 0
    names = result.output.split()
    assert "amd64" in names
    assert names == sorted(names)


def test_architectures_with_config(tmp_path):
    """Test that the listing honours the configuration."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("architectures:\n  include_defaults: false\n  extra: [z80, amd64]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "architectures"])
    assert result.exit_code == 0
    assert result.output.split() == ["amd64", "z80"]


def test_init_config(tmp_path):
    """Test writing the example configuration."""
    config_file = tmp_path / "config.yaml"
    runner = CliRunner()

    result = runner.invoke(cli, ["init-config", str(config_file)])
    assert result.exit_code == 0
    assert config_file.exists()

    result = runner.invoke(cli, ["init-config", str(config_file)])
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = runner.invoke(cli, ["init-config", "--force", str(config_file)])
    assert result.exit_code == 0
