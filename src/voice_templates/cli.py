"""Click CLI entry point for voice-templates."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from voice_templates import __version__
from voice_templates.compiler import TemplateError, compile_template
from voice_templates.config import ConfigError, is_configured, load_config, resolve_vocabulary_path
from voice_templates.vocabulary import (
    EntityVocabulary,
    VocabularyError,
    default_vocabulary,
    load_vocabulary,
)

vocab_option = click.option(
    "--vocab",
    "vocab_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Entity vocabulary YAML file (defaults to the bundled vocabulary)",
)


@click.group()
@click.version_option(version=__version__, prog_name="voice-templates")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Compile voice command templates into utterance matchers."""
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load_vocabulary(ctx: click.Context, vocab_path: str | None) -> EntityVocabulary:
    try:
        path = resolve_vocabulary_path(Path.cwd(), vocab_path)
        if path is None:
            return default_vocabulary()
        if not path.exists():
            raise VocabularyError(f"Vocabulary file not found: {path}")
        return load_vocabulary(path)
    except (ConfigError, VocabularyError) as exc:
        click.echo(f"Error: {exc}")
        ctx.exit(1)


@cli.command("compile")
@click.argument("template")
@vocab_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the matcher as JSON")
@click.pass_context
def compile_cmd(ctx: click.Context, template: str, vocab_path: str | None, as_json: bool) -> None:
    """Compile TEMPLATE and print its pattern and slots."""
    vocabulary = _load_vocabulary(ctx, vocab_path)
    try:
        matcher = compile_template(template, vocabulary)
    except TemplateError as exc:
        click.echo(f"Error: {exc}")
        ctx.exit(1)
        return

    if as_json:
        click.echo(json.dumps(matcher.to_dict(), indent=2))
        return

    click.echo(f"Template: {matcher.template}")
    click.echo(f"Pattern: {matcher.pattern}")
    click.echo(f"Slots: {', '.join(matcher.slots) or '(none)'}")
    for slot, entity_type in matcher.slot_types.items():
        click.echo(f"  {slot}: {entity_type}")
    if matcher.parameters:
        click.echo("Parameters:")
        for name, value in matcher.parameters.items():
            click.echo(f"  {name} = {value}")


@cli.command("match")
@click.argument("template")
@click.argument("utterance")
@vocab_option
@click.option("--case-sensitive", is_flag=True, default=False, help="Match letter case exactly")
@click.pass_context
def match_cmd(
    ctx: click.Context,
    template: str,
    utterance: str,
    vocab_path: str | None,
    case_sensitive: bool,
) -> None:
    """Match UTTERANCE against TEMPLATE and print the captured slots."""
    vocabulary = _load_vocabulary(ctx, vocab_path)
    ignore_case = not case_sensitive
    project_root = Path.cwd()
    if not case_sensitive and is_configured(project_root):
        try:
            ignore_case = load_config(project_root).ignore_case
        except ConfigError as exc:
            click.echo(f"Error: {exc}")
            ctx.exit(1)
            return

    try:
        matcher = compile_template(template, vocabulary)
    except TemplateError as exc:
        click.echo(f"Error: {exc}")
        ctx.exit(1)
        return

    result = matcher.match(utterance, ignore_case=ignore_case)
    if result is None:
        click.echo("No match.")
        ctx.exit(1)
        return

    click.echo("Matched.")
    for slot, value in result.slots.items():
        click.echo(f"  {slot} = {value if value is not None else '(empty)'}")
    for name, value in result.parameters.items():
        click.echo(f"  [{name}={value}]")


@cli.command("entity-types")
@vocab_option
@click.pass_context
def entity_types_cmd(ctx: click.Context, vocab_path: str | None) -> None:
    """List the entity types available to typed slots."""
    vocabulary = _load_vocabulary(ctx, vocab_path)
    if not len(vocabulary):
        click.echo("No entity types defined.")
        return
    for name in vocabulary.entity_types:
        phrases = vocabulary.lookup(name) or ()
        click.echo(f"{name}: {len(phrases)} phrase(s)")
