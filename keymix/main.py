"""
Command-line entry point for keymix
"""

import json
from pathlib import Path

import click

from keymix import __version__
from keymix.config import settings
from keymix.sharing.codec import encode_share_token
from keymix.storage.library import MixLibrary
from keymix.theory.key_colors import key_color
from keymix.theory.open_key import all_keys, format_key, parse_key
from keymix.theory.rules import CUSTOM_RULE, match_rule, suggest
from keymix.timeline.transitions import anchor_key, describe_timeline
from keymix.utils.logging import setup_logging


def _key_argument(ctx, param, value):
    """Click callback turning key text into an OpenKey."""
    key = parse_key(value)
    if key is None:
        raise click.BadParameter(f"'{value}' is not an Open Key such as 8m or 12d")
    return key


def _get_mix(library: MixLibrary, mix_id: str):
    mix = library.get(mix_id)
    if mix is None:
        raise click.ClickException(f"No mix with id {mix_id}")
    return mix


@click.group()
@click.version_option(version=__version__, prog_name="keymix")
@click.pass_context
def cli(ctx):
    """keymix - plan DJ mixes around the Open Key wheel."""
    setup_logging(settings.log_level, settings.log_file)
    ctx.ensure_object(dict)


def _library(ctx) -> MixLibrary:
    if "library" not in ctx.obj:
        ctx.obj["library"] = MixLibrary.from_settings(settings)
    return ctx.obj["library"]


@cli.command("keys")
def keys_cmd():
    """List all 24 keys with their display colours."""
    for key in all_keys():
        text = format_key(key)
        click.echo(f"{text:>4}  {key_color(text)}")


@cli.command("suggest")
@click.argument("key", callback=_key_argument)
@click.option("--json", "as_json", is_flag=True, help="Print suggestions as JSON")
def suggest_cmd(key, as_json: bool):
    """Suggest next keys after KEY.

    Example:
        keymix suggest 8m
    """
    suggestions = suggest(key)
    if as_json:
        click.echo(json.dumps([s.to_dict() for s in suggestions], indent=2))
        return

    for s in suggestions:
        click.echo(f"{s.to_key_text:>4}  {s.label:<9} {s.name} ({s.category.value}, {s.mood.value})")


@cli.command("match")
@click.argument("from_key", callback=_key_argument)
@click.argument("to_key", callback=_key_argument)
def match_cmd(from_key, to_key):
    """Name the rule that moves FROM_KEY to TO_KEY."""
    rule = match_rule(from_key, to_key)
    if rule is None:
        click.echo(CUSTOM_RULE.id)
    else:
        click.echo(f"{rule.id} ({rule.label})")


@cli.command("list")
@click.pass_context
def list_cmd(ctx):
    """List saved mixes."""
    mixes = _library(ctx).mixes
    if not mixes:
        click.echo("No saved mixes.")
        return
    for mix in mixes:
        click.echo(f"{mix.id}  {mix.name}  ({len(mix.tracks)} tracks, starts {format_key(mix.start_key)})")


@cli.command("show")
@click.argument("mix_id")
@click.pass_context
def show_cmd(ctx, mix_id: str):
    """Show a mix timeline with its transitions."""
    mix = _get_mix(_library(ctx), mix_id)
    click.echo(mix.name)
    for index, (track, transition) in enumerate(describe_timeline(mix), 1):
        title = track.title or "(untitled)"
        details = f"  [{track.details}]" if track.details else ""
        click.echo(
            f"{index:>3}. {format_key(track.key):>4}  {title}{details}"
            f"  <- {transition.relationship_label} ({transition.energy_class.value})"
        )
    click.echo(f"Next from {format_key(anchor_key(mix))}: "
               + ", ".join(s.to_key_text for s in suggest(anchor_key(mix))))


@cli.command("import-nml")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_nml_cmd(ctx, path: str):
    """Import a Traktor NML playlist as a new mix."""
    mix = _library(ctx).import_nml(Path(path).read_text(encoding="utf-8"))
    if mix is None:
        raise click.ClickException(f"Could not read playlist from {path}")
    click.echo(f"Imported {mix.name} ({len(mix.tracks)} tracks) as {mix.id}")


@cli.command("share")
@click.argument("mix_id")
@click.pass_context
def share_cmd(ctx, mix_id: str):
    """Print a share token for a mix."""
    token = encode_share_token(_get_mix(_library(ctx), mix_id))
    click.echo(f"{settings.share_base_url}{token}")


@cli.command("open")
@click.argument("token")
@click.pass_context
def open_cmd(ctx, token: str):
    """Save the mix carried by a share TOKEN."""
    if settings.share_base_url and token.startswith(settings.share_base_url):
        token = token[len(settings.share_base_url):]
    mix = _library(ctx).import_share_token(token)
    if mix is None:
        raise click.ClickException("Share token could not be decoded")
    click.echo(f"Saved {mix.name} ({len(mix.tracks)} tracks) as {mix.id}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
