"""CLI command listing the built-in presets."""

import json
from typing import Any

import click

from mmtk.cli.options import get_operations, json_option
from mmtk.domain.enums import PresetKind
from mmtk.operations import MediaOperations


def _describe(kind: PresetKind, value: Any) -> str:
    if kind == PresetKind.QUALITY:
        return f"{value.description} ({value.bitrate}, {value.sample_rate} Hz)"
    if kind == PresetKind.VIDEO:
        return f"{value.label} [{value.container.value}]"
    if kind == PresetKind.IMAGE:
        return f"{value.description} [{value.format.value}]"
    width, height = value
    return f"{width}x{height}"


def _collect(
    operations: MediaOperations, kinds: list[PresetKind]
) -> dict[str, list[dict[str, str]]]:
    catalog = operations.context.catalog
    listing: dict[str, list[dict[str, str]]] = {}
    for kind in kinds:
        listing[kind.value] = [
            {"key": key, "description": _describe(kind, catalog.lookup(kind, key))}
            for key in catalog.keys(kind)
        ]
    return listing


@click.command("presets")
@click.argument(
    "kind",
    type=click.Choice([k.value for k in PresetKind]),
    required=False,
)
@json_option
@click.pass_context
def presets_command(ctx: click.Context, kind: str | None, json_output: bool) -> None:
    """List presets, optionally only those of KIND.

    Examples:

        # Everything
        mmtk presets

        # Video transcode presets as JSON
        mmtk presets video --json
    """
    kinds = [PresetKind(kind)] if kind else list(PresetKind)
    listing = _collect(get_operations(ctx), kinds)

    if json_output:
        click.echo(json.dumps(listing, indent=2))
        return

    for index, (name, entries) in enumerate(listing.items()):
        if index:
            click.echo("")
        click.echo(name.upper())
        click.echo("-" * 60)
        for entry in entries:
            click.echo(f"  {entry['key']:<20} {entry['description']}")
