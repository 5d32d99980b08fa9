"""
premiere-mcp CLI — Command-line interface for the Premiere Pro MCP server

Commands:
    premiere-mcp init        Create ~/.premiere-mcp/ and generate config
    premiere-mcp server      Start the MCP server (stdio mode)
    premiere-mcp catalog     List registered tools, resources and prompts
    premiere-mcp mcp-config  Print Claude Desktop/Code JSON config
"""

import asyncio
import json
import shutil
import sys

import click

from premiere_mcp import __version__
from premiere_mcp.config import Config

KINDS = ("tools", "resources", "prompts")


def build_router(bridge):
    """Assemble the three registries around one bridge."""
    from premiere_mcp.prompts import build_prompt_registry
    from premiere_mcp.resources import build_resource_registry
    from premiere_mcp.server.router import Router
    from premiere_mcp.tools import build_dispatcher

    return Router(
        build_dispatcher(bridge),
        build_resource_registry(bridge),
        build_prompt_registry(),
    )


@click.group()
@click.version_option(version=__version__, prog_name="premiere-mcp")
def main():
    """Adobe Premiere Pro automation over MCP."""
    pass


@main.command()
def init():
    """Create ~/.premiere-mcp/, generate config, print setup instructions."""
    Config.ensure_dirs()

    config_env = Config.DATA_DIR / "config.env"
    if not config_env.exists():
        config_env.write_text(
            "# premiere-mcp configuration\n"
            "# Uncomment and edit as needed.\n"
            "\n"
            "# PREMIERE_MCP_DATA_DIR=~/.premiere-mcp\n"
            "# PREMIERE_MCP_LOG_LEVEL=DEBUG\n"
            f"# PREMIERE_MCP_BRIDGE_DIR={Config.BRIDGE_DIR}\n"
            "# PREMIERE_MCP_BRIDGE_TIMEOUT=30\n"
            "# PREMIERE_MCP_BRIDGE_POLL=0.1\n"
        )

    click.echo(f"premiere-mcp initialized at {Config.DATA_DIR}")
    click.echo(f"  Config: {config_env}")
    click.echo(f"  Logs:   {Config.LOG_DIR}")
    click.echo(f"  Bridge: {Config.BRIDGE_DIR}")
    click.echo()
    click.echo("Next: install the Premiere Pro panel and point it at the bridge folder,")
    click.echo("then run `premiere-mcp mcp-config` to get the JSON snippet.")


@main.command()
def server():
    """Start the MCP server (stdio mode)."""
    from premiere_mcp.bridge import PremiereBridge
    from premiere_mcp.server.server import RawMCPServer

    async def _run():
        bridge = PremiereBridge()
        srv = RawMCPServer(build_router(bridge), bridge=bridge)
        await srv.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@main.command()
@click.option("--kind", type=click.Choice(KINDS), default=None,
              help="Only list one kind of entry.")
@click.option("--json", "as_json", is_flag=True, help="Print the wire-format listing.")
def catalog(kind, as_json):
    """List registered tools, resources and prompts (Premiere is not contacted)."""
    from premiere_mcp.bridge import PremiereBridge

    router = build_router(PremiereBridge())
    listings = {
        "tools": router.dispatcher.list_operations(),
        "resources": router.resources.list_resources(),
        "prompts": router.prompts.list_prompts(),
    }
    if kind:
        listings = {kind: listings[kind]}

    if as_json:
        click.echo(json.dumps(listings, indent=2))
        return

    for section, entries in listings.items():
        click.echo(f"{section.capitalize()} ({len(entries)})")
        click.echo("=" * 40)
        for entry in entries:
            key = entry.get("uri") or entry["name"]
            click.echo(f"  {key}: {entry.get('description', '')}")
        click.echo()


@main.command("mcp-config")
def mcp_config():
    """Print MCP config JSON for Claude Desktop or Claude Code."""
    command, args = _find_executable()

    config = {
        "mcpServers": {
            "premiere-pro": {
                "command": command,
                "args": args,
            }
        }
    }

    click.echo("Add this to your Claude settings:\n")
    click.echo(json.dumps(config, indent=2))
    click.echo()
    click.echo("Claude Desktop: Settings > Developer > Edit Config")
    click.echo("Claude Code:    .claude/settings.json or ~/.claude/settings.json")


def _find_executable():
    """Find the premiere-mcp command, or fall back to python -m premiere_mcp."""
    path = shutil.which("premiere-mcp")
    if path:
        return path, ["server"]
    return sys.executable, ["-m", "premiere_mcp", "server"]


if __name__ == "__main__":
    main()
