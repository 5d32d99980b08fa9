"""
Premiere Pro MCP Tools

Modules:
  project_tools   — 11 discovery / project / media tools
  sequence_tools  — 16 sequence, marker and track tools
  clip_tools      — 14 timeline clip tools
  effect_tools    — 10 effect, transition, audio, title and colour tools
  export_tools    — 4 export / render queue tools
"""

from functools import partial

from premiere_mcp.registry.dispatcher import Dispatcher, HandlerTable, build_tool_catalog
from premiere_mcp.tools import clip_tools, effect_tools, export_tools, project_tools, sequence_tools

MODULES = (project_tools, sequence_tools, clip_tools, effect_tools, export_tools)

ALL_TOOLS = [definition for module in MODULES for definition in module.TOOLS]


def build_handler_table(bridge) -> HandlerTable:
    """Bind every tool module's handlers to one bridge instance."""
    table = HandlerTable()
    for module in MODULES:
        for name, handler in module.HANDLERS.items():
            table.bind(name, partial(handler, bridge))
    return table


def build_dispatcher(bridge) -> Dispatcher:
    return Dispatcher(build_tool_catalog(ALL_TOOLS), build_handler_table(bridge))
