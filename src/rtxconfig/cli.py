"""rtxconfig CLI — Click-based command-line interface.

Commands:
  parse       Parse a config dump and summarise or export it
  contexts    List the tunnel / pp / ipsec contexts of a dump
  commands    Print context-tagged commands, optionally filtered
  reassemble  Print a dump with terminal line wraps repaired
  scan        Parse every dump in a directory
  serve       Launch the REST API
  demo        Run a demo with a sample dump
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from rtxconfig import __version__

SAMPLE_CONFIG = """#
# Admin
#
login password demo-login-password
administrator password demo-admin-password
timezone +09:00

ip lan1 address 192.168.100.1/24
ip lan2 secure filter in 200020 200021 200022 200023 200024 200025 20002
6 200027
 200028 200099
dns server select 1 192.168.100.10 edns
=on any example.local

pp select anonymous
 pp bind tunnel1
 pp auth request mschap-v2
 pp auth username vpnuser demo-vpn-password
 ppp ipcp ipaddress on
 pp enable anonymous

tunnel select 1
 tunnel encapsulation l2tpv3
 tunnel endpoint name vpn.example.com fqdn
 ipsec tunnel 101
  ipsec sa policy 101 1 esp aes-cbc sha-hmac
  ipsec ike pre-shared-key 1 text demo-psk
 l2tp tunnel auth on demo-l2tp-secret
 tunnel enable 1

ip route default gateway 198.51.100.254
nat descriptor type 1000 masquerade
"""


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _make_parser(rules_file: str | None):
    from rtxconfig.ingest.parser import ConfigFileParser
    from rtxconfig.rules.loader import ContextRuleLoader

    if not rules_file:
        return ConfigFileParser()
    try:
        rules = ContextRuleLoader().load_file(rules_file)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--rules") from e
    return ConfigFileParser(rules)


rules_option = click.option("-r", "--rules", "rules_file", type=click.Path(exists=True),
                            help="YAML file with context prefix rules")


@click.group()
@click.version_option(version=__version__, prog_name="rtxconfig")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """rtxconfig — context-aware parser for RTX router config dumps.

    Repairs terminal line wraps and tags every command with the tunnel,
    pp or ipsec tunnel context it belongs to.
    """
    _setup_logging(verbose)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Output report file")
@click.option("--format", "fmt", type=click.Choice(["text", "json", "csv"]),
              default="text", help="Report format")
@click.option("--redact", is_flag=True, help="Hide passwords and pre-shared keys")
@rules_option
def parse(filepath: str, output: str | None, fmt: str, redact: bool,
          rules_file: str | None) -> None:
    """Parse a config dump and show a summary."""
    from rtxconfig.report.generator import ReportGenerator

    parser = _make_parser(rules_file)
    reporter = ReportGenerator()
    config = parser.parse_file(filepath)

    # stdout carries only the JSON document here.
    if output or fmt != "json":
        _display_summary(config)

    if output:
        if fmt == "json":
            reporter.generate_json(config, output, redact=redact)
        elif fmt == "csv":
            reporter.generate_csv(config, output, redact=redact)
        else:
            reporter.generate_text(config, output, redact=redact)
        click.echo(f"\nReport saved: {output}")
    elif fmt == "json":
        click.echo(reporter.generate_json(config, redact=redact))


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@rules_option
def contexts(filepath: str, rules_file: str | None) -> None:
    """List the contexts found in a config dump."""
    config = _make_parser(rules_file).parse_file(filepath)

    if not config.contexts:
        click.echo("No contexts found.")
        return

    click.echo(f"Contexts: {len(config.contexts)}\n")
    for ctx in config.contexts:
        count = len(config.commands_in_context(ctx))
        click.echo(f"  {ctx.ref:24s} {count:4d} commands")


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("-c", "--context", "context_ref",
              help="Only commands of this context, e.g. tunnel:1 or pp:anonymous")
@click.option("-g", "--global", "global_only", is_flag=True,
              help="Only commands outside any context")
@click.option("-p", "--prefix", "prefixes", multiple=True,
              help="Only commands starting with this text (repeatable)")
@click.option("--redact", is_flag=True, help="Hide passwords and pre-shared keys")
@rules_option
def commands(filepath: str, context_ref: str | None, global_only: bool,
             prefixes: tuple[str, ...], redact: bool, rules_file: str | None) -> None:
    """Print context-tagged commands."""
    from rtxconfig.report.sanitizer import sanitize_line

    if context_ref and global_only:
        raise click.UsageError("--context and --global are mutually exclusive")

    config = _make_parser(rules_file).parse_file(filepath)

    if context_ref:
        try:
            ctx = config.get_context(context_ref)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--context") from e
        if ctx is None:
            raise click.ClickException(f"Context not found: {context_ref}")
        selected = config.commands_in_context(ctx)
    elif global_only:
        selected = config.global_commands()
    else:
        selected = config.commands

    if prefixes:
        selected = [c for c in selected if c.text.startswith(prefixes)]

    for cmd in selected:
        ref = cmd.context.ref if cmd.context else "global"
        text = sanitize_line(cmd.text) if redact else cmd.text
        click.echo(f"{cmd.line_number:6d}  {ref:20s} {text}")


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Write repaired text here")
def reassemble(filepath: str, output: str | None) -> None:
    """Print a config dump with terminal line wraps repaired."""
    from rtxconfig.ingest.reassembler import reassemble as repair

    raw = Path(filepath).read_text(encoding="utf-8", errors="replace")
    text = repair(raw)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"Reassembled config saved: {output}")
    else:
        click.echo(text)


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--no-recursive", is_flag=True, help="Do not descend into subdirectories")
@rules_option
def scan(directory: str, no_recursive: bool, rules_file: str | None) -> None:
    """Parse every config dump in a directory."""
    from rtxconfig.ingest.scanner import DirectoryScanner

    scanner = DirectoryScanner(_make_parser(rules_file))
    configs = scanner.scan(directory, recursive=not no_recursive)

    click.echo(f"Scanning directory: {directory}")
    click.echo(f"Config files: {len(configs)}\n")
    for config in configs:
        click.echo(f"  {config.device_name:30s} {config.command_count:5d} commands"
                   f"  {len(config.contexts):3d} contexts")


@cli.command()
@click.option("-p", "--port", default=5000, help="API port")
@click.option("-h", "--host", default="127.0.0.1", help="API host")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@rules_option
def serve(port: int, host: str, debug: bool, rules_file: str | None) -> None:
    """Launch the rtxconfig REST API."""
    from rtxconfig.api.app import create_app

    app = create_app(_make_parser(rules_file))
    click.echo(f"rtxconfig API: http://{host}:{port}/api/v1/status")
    app.run(host=host, port=port, debug=debug)


@cli.command()
def demo() -> None:
    """Run a demo on a sample config dump."""
    from rtxconfig.ingest.parser import ConfigFileParser
    from rtxconfig.report.sanitizer import sanitize_line

    click.echo(click.style("=" * 70, fg="blue"))
    click.echo(click.style("  rtxconfig Demo — Context-Aware Config Parsing", fg="blue", bold=True))
    click.echo(click.style("=" * 70, fg="blue"))

    config = ConfigFileParser().parse_text(SAMPLE_CONFIG, device_name="DEMO-RTX")
    _display_summary(config)

    click.echo("\nTagged commands:")
    for cmd in config.commands:
        if cmd.context is None:
            ref = click.style(f"{'global':20s}", fg="white")
        else:
            ref = click.style(f"{cmd.context.ref:20s}", fg="green")
        click.echo(f"  {cmd.line_number:4d}  {ref} {sanitize_line(cmd.text)}")

    click.echo("\n" + click.style("Demo complete. Run 'rtxconfig parse <config-file>' on your own dumps.", fg="blue"))


def _display_summary(config) -> None:
    click.echo(click.style(f"\nDevice: {config.device_name}", bold=True))
    click.echo(f"Lines:    {config.line_count}")
    click.echo(f"Commands: {config.command_count}")
    click.echo(f"  Global: {len(config.global_commands())}")
    click.echo(f"Contexts: {len(config.contexts)}")
    for ctx in config.contexts:
        click.echo(f"  {ctx.ref}")


if __name__ == "__main__":
    cli()
