"""Command-line interface for the Prattle message model."""

from __future__ import annotations

import logging

import click

from prattle.config.loader import load_config, merge_configs, wire_overrides
from prattle.config.schema import PrattleConfig

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to config YAML.",
)
@click.option("--log-level", default=None, help="Logging level (default from config).")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Prattle -- IM protocol message tool."""
    logging.basicConfig(
        level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config(config_path)
    if log_level is None:
        logging.getLogger("prattle").setLevel(config.log_level)
    ctx.obj = config


# ------------------------------------------------------------------
# prattle encode
# ------------------------------------------------------------------


@cli.command()
@click.argument("tag")
@click.option("--sender", default=None, help="Sender name.")
@click.option("--receiver", default=None, help="Recipient user or group name.")
@click.option("--text", default=None, help="Message text.")
@click.option("--framed", is_flag=True, help="Write the encoded, terminated line.")
@click.option("--encoding", default=None, help="Override wire encoding for --framed.")
@click.option(
    "--line-terminator",
    default=None,
    help="Override line terminator for --framed (\\r and \\n escapes allowed).",
)
@click.pass_obj
def encode(
    config: PrattleConfig,
    tag: str,
    sender: str | None,
    receiver: str | None,
    text: str | None,
    framed: bool,
    encoding: str | None,
    line_terminator: str | None,
) -> None:
    """Print the wire form of a TAG message."""
    from prattle.protocol.framing import frame
    from prattle.protocol.message import make_addressed_message, make_message

    overrides = wire_overrides(encoding=encoding, line_terminator=line_terminator)
    if overrides:
        merged = merge_configs(config, overrides)
        if merged is config:
            raise click.UsageError(f"Invalid wire settings: {overrides['wire']}")
        config = merged

    if receiver is not None:
        message = make_addressed_message(tag, sender, receiver, text)
    else:
        message = make_message(tag, sender, text)

    if message is None:
        kind = "addressed" if receiver is not None else "unaddressed"
        raise click.UsageError(f"Unknown {kind} message tag: {tag!r}")

    logger.debug("Encoding %s message from %r", message.kind.name, message.name)

    if framed:
        click.get_binary_stream("stdout").write(frame(message, config.wire))
    else:
        click.echo(message.to_wire())


# ------------------------------------------------------------------
# prattle kinds
# ------------------------------------------------------------------


@cli.command()
def kinds() -> None:
    """List every message kind with the fields it carries."""
    from prattle.protocol.kind import MessageKind

    click.echo(click.style("=== Message Kinds ===", fg="cyan", bold=True))
    click.echo(f"  {'Kind':<20} {'Tag':<5} {'Sender':<9} {'Receiver':<9} {'Text':<9}")
    click.echo(f"  {'─'*54}")
    for kind in MessageKind:
        shape = kind.shape
        click.echo(
            f"  {kind.name:<20} {kind.tag:<5}"
            f" {shape.sender.value:<9} {shape.receiver.value:<9} {shape.text.value:<9}"
        )