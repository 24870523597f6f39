"""CLI commands for the SendGrid REST client."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from .client import SendGridRestClient
from .config import Settings, load_settings
from .exceptions import SendGridError
from .logging import setup_logging
from .validators import parse_addresses


def _parse_placeholders(items: Tuple[str, ...]) -> Optional[Dict[str, str]]:
    """Turn KEY=VALUE pairs into a placeholder mapping."""
    if not items:
        return None
    placeholders = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--data")
        placeholders[key] = value
    return placeholders


def _run(ctx: click.Context, operation):
    """Run one client operation and exit 1 on failure."""
    settings: Settings = ctx.obj["settings"]
    if ctx.obj["api_key"]:
        sendgrid = settings.sendgrid.model_copy(update={"api_key": ctx.obj["api_key"]})
        settings = settings.model_copy(update={"sendgrid": sendgrid})

    async def runner():
        async with SendGridRestClient.from_settings(settings) as client:
            return await operation(client)

    try:
        return asyncio.run(runner())
    except (SendGridError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--config", type=click.Path(exists=True), help="Config file path (YAML/JSON)")
@click.option("--env-file", type=click.Path(exists=True), help=".env file path")
@click.option("--api-key", envvar="SENDGRID_API_KEY", help="SendGrid API key")
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(
    ctx: click.Context,
    config: Optional[str],
    env_file: Optional[str],
    api_key: Optional[str],
    log_level: Optional[str],
):
    """SendGrid REST client CLI."""
    try:
        settings = load_settings(env_file=env_file, config_file=config)
    except SendGridError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging_config = settings.logging
    if log_level:
        logging_config = logging_config.model_copy(update={"level": log_level})
    setup_logging(logging_config)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["api_key"] = api_key


@main.command("send-template")
@click.option("--from", "email_from", required=True, help="Sender email address")
@click.option("--from-name", help="Sender display name")
@click.option("--to", "email_to", multiple=True, required=True, help="Recipient (repeatable)")
@click.option("--cc", multiple=True, help="CC recipient (repeatable)")
@click.option("--bcc", multiple=True, help="BCC recipient (repeatable)")
@click.option("--subject", default="", help="Subject line")
@click.option("--template-id", required=True, help="Dynamic template ID")
@click.option("--data", multiple=True, help="Placeholder value as KEY=VALUE (repeatable)")
@click.pass_context
def send_template(
    ctx: click.Context,
    email_from: str,
    from_name: Optional[str],
    email_to: Tuple[str, ...],
    cc: Tuple[str, ...],
    bcc: Tuple[str, ...],
    subject: str,
    template_id: str,
    data: Tuple[str, ...],
):
    """Send a dynamic-template email."""
    placeholders = _parse_placeholders(data)

    async def operation(client: SendGridRestClient):
        return await client.send_email_by_template(
            email_from,
            from_name,
            parse_addresses(list(email_to)),
            email_cc=parse_addresses(list(cc)) or None,
            email_bcc=parse_addresses(list(bcc)) or None,
            subject=subject,
            template_id=template_id,
            placeholders=placeholders,
        )

    result = _run(ctx, operation)
    click.echo(f"✓ Email accepted (message id: {result.message_id or 'n/a'})")


@main.command("create-template")
@click.argument("name")
@click.pass_context
def create_template(ctx: click.Context, name: str):
    """Create a dynamic template."""

    async def operation(client: SendGridRestClient):
        return await client.create_template(name)

    result = _run(ctx, operation)
    click.echo(result.template_id or "")


@main.command("get-template")
@click.argument("template_id")
@click.pass_context
def get_template(ctx: click.Context, template_id: str):
    """Print a template and its versions as JSON."""

    async def operation(client: SendGridRestClient):
        return await client.get_template(template_id)

    template = _run(ctx, operation)
    if template is None:
        click.echo("No content returned")
        return
    click.echo(json.dumps(template.to_dict(), indent=2))


@main.command("update-template")
@click.argument("template_id")
@click.option("--name", required=True, help="Version name")
@click.option("--subject", required=True, help="Subject line")
@click.option("--html-file", type=click.Path(exists=True), required=True, help="HTML body file")
@click.option("--plain-file", type=click.Path(exists=True), help="Plain text body file")
@click.pass_context
def update_template(
    ctx: click.Context,
    template_id: str,
    name: str,
    subject: str,
    html_file: str,
    plain_file: Optional[str],
):
    """Add a new active version to a template."""
    html_content = Path(html_file).read_text(encoding="utf-8")
    plain_content = Path(plain_file).read_text(encoding="utf-8") if plain_file else ""

    async def operation(client: SendGridRestClient):
        return await client.update_template(
            name, template_id, html_content, plain_content, subject
        )

    version = _run(ctx, operation)
    if version is None:
        click.echo("No content returned")
        return
    click.echo(version.id or "")


if __name__ == "__main__":
    main()
