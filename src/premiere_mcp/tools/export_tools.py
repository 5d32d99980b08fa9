"""
Export Tools — rendering sequences and frames

Tools:
  export_sequence          — Encode a sequence to a video file
  export_frame             — Write a single frame as an image
  add_to_render_queue      — Queue a sequence for encoding
  get_render_queue_status  — Not available without Media Encoder integration
"""

from typing import Any, Dict, List

from premiere_mcp.bridge import js
from premiere_mcp.registry.dispatcher import ToolDefinition
from premiere_mcp.registry.schema import boolean, number, obj, string
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import run, sequence_or_active, unsupported

log = get_logger("tools.export")

EXPORT_FORMATS = ("mp4", "mov", "avi", "h264", "prores")
FRAME_FORMATS = ("png", "jpg", "tiff")

TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="export_sequence",
        description="Renders and exports a sequence to a video file. This is for creating the final video.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to export"),
            "outputPath": string("The absolute path where the final video file will be saved"),
            "presetPath": string(
                "Optional path to an export preset file (.epr) for specific settings", required=False,
            ),
            "format": string("The export format or codec", enum=EXPORT_FORMATS, required=False),
            "quality": string("Export quality setting", enum=("low", "medium", "high", "maximum"), required=False),
            "resolution": string('Export resolution (e.g., "1920x1080", "3840x2160")', required=False),
        }),
    ),
    ToolDefinition(
        name="export_frame",
        description="Exports a single frame from a sequence as an image file.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "time": number("The time in seconds to export the frame from"),
            "outputPath": string("The absolute path where the image file will be saved"),
            "format": string("The image format", enum=FRAME_FORMATS, default="png"),
        }),
    ),
    ToolDefinition(
        name="add_to_render_queue",
        description="Adds a sequence to the Adobe Media Encoder render queue.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to render"),
            "outputPath": string("Output file path"),
            "presetPath": string("Export preset file path", required=False),
            "startImmediately": boolean("Whether to start rendering immediately (default: false)", default=False),
        }),
    ),
    ToolDefinition(
        name="get_render_queue_status",
        description="Gets the status of items in the render queue.",
        input_schema=obj(),
    ),
]


def default_preset(format_name) -> str:
    return "H.264" if format_name == "mp4" else "ProRes"


async def _export_sequence(bridge, args: Dict[str, Any]) -> Any:
    preset = args.get("presetPath") or default_preset(args.get("format"))
    log.info(f"Exporting sequence {args['sequenceId']} -> {args['outputPath']} ({preset})")
    await bridge.render_sequence(args["sequenceId"], args["outputPath"], preset)
    return {
        "success": True,
        "message": "Sequence exported successfully",
        "outputPath": args["outputPath"],
        "format": preset,
        "quality": args.get("quality"),
        "resolution": args.get("resolution"),
    }


async def _export_frame(bridge, args: Dict[str, Any]) -> Any:
    sequence_id, time, output = args["sequenceId"], args["time"], args["outputPath"]
    return await run(bridge, f"""
        {sequence_or_active(sequence_id)}
        sequence.exportFramePNG({js(time)}, {js(output)});
        return JSON.stringify({{
          success: true,
          message: "Frame exported successfully",
          sequenceId: {js(sequence_id)},
          time: {js(time)},
          outputPath: {js(output)},
          format: {js(args["format"])}
        }});
    """)


async def _add_to_render_queue(bridge, args: Dict[str, Any]) -> Any:
    return await _export_sequence(bridge, {
        "sequenceId": args["sequenceId"],
        "outputPath": args["outputPath"],
        "presetPath": args.get("presetPath"),
    })


def _get_render_queue_status(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "get_render_queue_status",
        "Render queue monitoring requires Adobe Media Encoder integration",
        "Check Adobe Media Encoder application for render status",
    )


HANDLERS = {
    "export_sequence": _export_sequence,
    "export_frame": _export_frame,
    "add_to_render_queue": _add_to_render_queue,
    "get_render_queue_status": _get_render_queue_status,
}
