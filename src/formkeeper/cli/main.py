"""FormKeeper CLI entry point."""

import json
import logging
from pathlib import Path

import click

from formkeeper.config import Settings
from formkeeper.loader import load_messages, load_params, load_rule
from formkeeper.registry import Registries
from formkeeper.types import FormKeeperError
from formkeeper.validator import Validator


@click.group()
@click.pass_context
def cli(ctx):
    """FormKeeper — declarative form input validation."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@cli.command()
@click.argument("rule_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--messages",
    "messages_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Message catalog YAML file (default: $FORMKEEPER_MESSAGES).",
)
@click.option("--action", default=None, help="Action name used for message lookup.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_obj
def check(
    settings: Settings,
    rule_path: Path,
    input_path: Path,
    messages_path: Path | None,
    action: str | None,
    as_json: bool,
):
    """Validate an INPUT_PATH document (JSON or YAML) against RULE_PATH."""
    messages_path = messages_path or settings.messages_path
    action = action or settings.action

    try:
        rule = load_rule(rule_path)
        params = load_params(input_path)
        messages = load_messages(messages_path) if messages_path else None
        report = Validator().validate(params, rule, messages)
    except FormKeeperError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if as_json:
        result = report.to_dict()
        result["messages"] = report.failed_messages(action)
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        raise SystemExit(1 if report.failed() else 0)

    for name, value in report.valid_params.items():
        click.echo(f"  ✓ {name}: {value!r}")
    for name, texts in report.failed_messages(action).items():
        reasons = report.failed_records[name].failed_constraints
        for reason, text in zip(reasons, texts):
            click.echo(click.style(f"  ✗ {name} [{reason}]: {text}", fg="red"))

    if report.failed():
        click.echo(
            click.style(f"\n{len(report.failed_records)} entry(ies) failed", fg="red", bold=True)
        )
        raise SystemExit(1)
    click.echo(click.style("\nInput is valid.", fg="green", bold=True))


@cli.command()
def kinds():
    """List registered filters, constraints and combination constraints."""
    registries = Registries()
    for title, registry in (
        ("Filters", registries.filters),
        ("Constraints", registries.constraints),
        ("Combination constraints", registries.combinations),
    ):
        click.echo(f"{title}:")
        for name in registry.list_registered():
            click.echo(f"  {name}")
