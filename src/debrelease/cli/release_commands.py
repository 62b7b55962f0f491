from __future__ import annotations

"""Release file commands."""

import json
from pathlib import Path

import click

from debrelease.core.config import GlobalConfig
from debrelease.core.output import Outputter
from debrelease.release import (
    ChecksumAlgorithm,
    ReleaseError,
    ReleaseMetadata,
    parse_release_file,
    serialize_release,
    write_release,
)
from debrelease.release.dates import format_release_date

# Click context settings to enable -h as alias for --help
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# First line of an InRelease file
PGP_SIGNED_MESSAGE = b"-----BEGIN PGP SIGNED MESSAGE-----"


def _load_release(ctx: click.Context, release_path: Path) -> ReleaseMetadata:
    """Parse and validate a Release file, exiting with status 1 on failure."""
    config: GlobalConfig = ctx.obj["config"]
    out: Outputter = ctx.obj["output"]

    try:
        return parse_release_file(release_path, architectures=config.known_architectures())
    except ReleaseError as e:
        out.error(f"Error: {release_path}: {e}")
        ctx.exit(1)
    except FileNotFoundError as e:
        # Configured architectures file is missing
        out.error(f"Error: {e}")
        ctx.exit(1)


def _show_table(out: Outputter, release: ReleaseMetadata) -> None:
    details = {
        "origin": release.origin,
        "label": release.label,
        "suite": release.suite,
        "codename": release.codename,
        "version": release.version,
        "description": release.description,
        "date": format_release_date(release.date),
        "valid_until": (
            format_release_date(release.valid_until) if release.valid_until else None
        ),
        "architectures": " ".join(release.architectures),
        "components": " ".join(release.components),
        "not_automatic": "yes" if release.not_automatic else "no",
        "but_automatic_upgrades": "yes" if release.but_automatic_upgrades else "no",
        "acquire_by_hash": "yes" if release.acquire_by_hash else "no",
    }
    out.header("Release:", **{key: value for key, value in details.items() if value})
    if release.no_support_for_architecture_all:
        out.info(f"No-Support-for-Architecture-all: {release.no_support_for_architecture_all}")
    for fingerprint in release.signed_by:
        out.info(f"Signed-By: {fingerprint.hex()}")

    rows = []
    for algorithm in ChecksumAlgorithm:
        entries = release.checksums(algorithm)
        total_size = sum(entry.length for entry in entries.values())
        rows.append([algorithm.value, str(len(entries)), str(total_size)])
    out.info("")
    out.table("Checksums", ["Section", "Files", "Total Bytes"], rows)

    for algorithm in ChecksumAlgorithm:
        for path, entry in sorted(release.checksums(algorithm).items()):
            out.verbose(f"  {algorithm.value} {entry.hexdigest} {entry.length:>10} {path}")


def create_release_commands(cli: click.Group) -> click.Group:
    """Attach the Release file commands to the CLI group.

    Args:
        cli: Parent CLI group to attach to

    Returns:
        The CLI group
    """

    @cli.command("show", context_settings=CONTEXT_SETTINGS)
    @click.argument("release_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option(
        "--format",
        "output_format",
        type=click.Choice(["table", "json"]),
        default=None,
        help="Output format (default: from config, table)",
    )
    @click.pass_context
    def show(ctx: click.Context, release_path: Path, output_format: str | None) -> None:
        """Show the contents of a Release or InRelease file."""
        config: GlobalConfig = ctx.obj["config"]
        out: Outputter = ctx.obj["output"]
        release = _load_release(ctx, release_path)

        output_format = output_format or config.output.format
        if output_format == "json":
            click.echo(json.dumps(release.model_dump(mode="json"), indent=2))
        else:
            _show_table(out, release)

    @cli.command("validate", context_settings=CONTEXT_SETTINGS)
    @click.argument(
        "release_paths",
        nargs=-1,
        required=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )
    @click.pass_context
    def validate(ctx: click.Context, release_paths: tuple[Path, ...]) -> None:
        """Validate one or more Release or InRelease files.

        Exits with status 1 if any file is malformed or invalid.
        """
        config: GlobalConfig = ctx.obj["config"]
        out: Outputter = ctx.obj["output"]
        try:
            architectures = config.known_architectures()
        except FileNotFoundError as e:
            out.error(f"Error: {e}")
            ctx.exit(1)

        failed = 0
        for release_path in release_paths:
            try:
                release = parse_release_file(release_path, architectures=architectures)
            except ReleaseError as e:
                out.error(f"{release_path}: {e}")
                failed += 1
                continue

            files = len(release.md5sum) + len(release.sha1) + len(release.sha256)
            out.success(f"{release_path}: valid ({files} checksum entries)")

        if len(release_paths) > 1:
            out.summary(
                checked=len(release_paths), valid=len(release_paths) - failed, invalid=failed
            )
        if failed:
            ctx.exit(1)

    @cli.command("format", context_settings=CONTEXT_SETTINGS)
    @click.argument("release_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option(
        "--output",
        "-o",
        "output_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write canonical Release file here instead of stdout",
    )
    @click.option(
        "--check",
        is_flag=True,
        help="Only check whether the file is already in canonical form",
    )
    @click.pass_context
    def format_release(
        ctx: click.Context, release_path: Path, output_path: Path | None, check: bool
    ) -> None:
        """Rewrite a Release file in canonical form.

        Fields are written in a fixed order and checksum entries sorted by
        path. The PGP armour of an InRelease file is not preserved.
        """
        out: Outputter = ctx.obj["output"]
        release = _load_release(ctx, release_path)

        try:
            content = release_path.read_bytes()
            if content.startswith(PGP_SIGNED_MESSAGE):
                out.warning(f"{release_path}: PGP signature is not preserved")

            if check:
                if content != serialize_release(release):
                    out.error(f"{release_path} is not in canonical form")
                    ctx.exit(1)
                out.success(f"{release_path} is in canonical form")
                return

            if output_path is None:
                click.get_binary_stream("stdout").write(serialize_release(release))
                return

            with open(output_path, "wb") as f:
                size = write_release(release, f)
        except ReleaseError as e:
            out.error(f"Error: {e}")
            ctx.exit(1)
        except OSError as e:
            out.error(f"Error: {e}")
            ctx.exit(1)

        out.success(f"Wrote {size} bytes to {output_path}")

    @cli.command("architectures", context_settings=CONTEXT_SETTINGS)
    @click.pass_context
    def architectures(ctx: click.Context) -> None:
        """List the architecture names accepted by the validator."""
        config: GlobalConfig = ctx.obj["config"]
        out: Outputter = ctx.obj["output"]

        try:
            names = config.known_architectures()
        except FileNotFoundError as e:
            out.error(f"Error: {e}")
            ctx.exit(1)

        for name in sorted(names):
            click.echo(name)
        out.verbose(f"{len(names)} architectures")

    return cli
