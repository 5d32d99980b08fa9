"""
Sequence Tools — sequences, markers and tracks

Tools:
  create_sequence, duplicate_sequence, delete_sequence
  get_sequence_settings, set_sequence_settings
  create_nested_sequence, unnest_sequence
  add_marker, delete_marker, update_marker, list_markers
  add_track, delete_track, lock_track, toggle_track_visibility, mute_track
"""

from typing import Any, Dict, List

from premiere_mcp.bridge import js
from premiere_mcp.registry.dispatcher import ToolDefinition
from premiere_mcp.registry.schema import array, boolean, number, obj, string
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import merged, run, sequence_or_active, unsupported

log = get_logger("tools.sequence")

TRACK_TYPES = ("video", "audio")

# Premiere marker colour indices
_MARKER_COLORS = {"red": 5, "green": 3, "blue": 1}

TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="create_sequence",
        description="Creates a new sequence in the project. A sequence is a timeline where you edit clips.",
        input_schema=obj({
            "name": string("The name for the new sequence"),
            "presetPath": string("Optional path to a sequence preset file for custom settings", required=False),
            "width": number("Sequence width in pixels", required=False),
            "height": number("Sequence height in pixels", required=False),
            "frameRate": number("Frame rate (e.g., 24, 25, 30, 60)", required=False),
            "sampleRate": number("Audio sample rate (e.g., 48000)", required=False),
        }),
    ),
    ToolDefinition(
        name="duplicate_sequence",
        description="Creates a copy of an existing sequence with a new name.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to duplicate"),
            "newName": string("The name for the new sequence copy"),
        }),
    ),
    ToolDefinition(
        name="delete_sequence",
        description="Deletes a sequence from the project.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to delete"),
        }),
    ),
    ToolDefinition(
        name="get_sequence_settings",
        description="Gets the settings for a sequence (resolution, framerate, etc.).",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
        }),
    ),
    ToolDefinition(
        name="set_sequence_settings",
        description="Updates sequence settings.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "settings": obj({
                "width": number("Frame width", required=False),
                "height": number("Frame height", required=False),
                "frameRate": number("Frame rate", required=False),
                "pixelAspectRatio": number("Pixel aspect ratio", required=False),
            }, "Settings to update"),
        }),
    ),
    ToolDefinition(
        name="create_nested_sequence",
        description="Creates a nested sequence from selected clips.",
        input_schema=obj({
            "clipIds": array(string(), "Array of clip IDs to nest"),
            "name": string("Name for the nested sequence"),
        }),
    ),
    ToolDefinition(
        name="unnest_sequence",
        description="Breaks apart a nested sequence into individual clips.",
        input_schema=obj({
            "nestedSequenceClipId": string("The ID of the nested sequence clip"),
        }),
    ),
    ToolDefinition(
        name="add_marker",
        description="Adds a marker to the timeline for navigation or notes.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to add the marker to"),
            "time": number("The time in seconds where the marker should be placed"),
            "name": string("The name/label for the marker"),
            "comment": string("Optional comment or description for the marker", required=False),
            "color": string('Marker color (e.g., "red", "green", "blue")', required=False),
            "duration": number("Duration in seconds for a span marker (0 for point marker)", required=False),
        }),
    ),
    ToolDefinition(
        name="delete_marker",
        description="Deletes a marker from the timeline.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "markerId": string("The ID of the marker to delete"),
        }),
    ),
    ToolDefinition(
        name="update_marker",
        description="Updates an existing marker's properties.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "markerId": string("The ID of the marker to update"),
            "name": string("New name for the marker", required=False),
            "comment": string("New comment", required=False),
            "color": string("New color", required=False),
        }),
    ),
    ToolDefinition(
        name="list_markers",
        description="Lists all markers in a sequence.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
        }),
    ),
    ToolDefinition(
        name="add_track",
        description="Adds a new video or audio track to the sequence.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "trackType": string("Type of track to add", enum=TRACK_TYPES),
            "position": string(
                "Where to add the track relative to existing tracks",
                enum=("above", "below"), required=False,
            ),
        }),
    ),
    ToolDefinition(
        name="delete_track",
        description="Deletes a track from the sequence.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "trackType": string("Type of track", enum=TRACK_TYPES),
            "trackIndex": number("The index of the track to delete"),
        }),
    ),
    ToolDefinition(
        name="lock_track",
        description="Locks or unlocks a track to prevent/allow editing.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "trackType": string("Type of track", enum=TRACK_TYPES),
            "trackIndex": number("The index of the track"),
            "locked": boolean("Whether to lock (true) or unlock (false)"),
        }),
    ),
    ToolDefinition(
        name="toggle_track_visibility",
        description="Shows or hides a video track.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "trackIndex": number("The index of the video track"),
            "visible": boolean("Whether to show (true) or hide (false)"),
        }),
    ),
    ToolDefinition(
        name="mute_track",
        description="Mutes or unmutes an entire audio track.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence"),
            "trackIndex": number("The index of the audio track"),
            "muted": boolean("Whether to mute (true) or unmute (false) the track"),
        }),
    ),
]


def _marker_color(color) -> int:
    return _MARKER_COLORS.get(color, 0)


def _tracks_expr(track_type: str) -> str:
    return "sequence.videoTracks" if track_type == "video" else "sequence.audioTracks"


# -- sequences --

async def _create_sequence(bridge, args: Dict[str, Any]) -> Any:
    name = args["name"]
    result = await bridge.create_sequence(name, args.get("presetPath"))
    return merged({
        "success": True,
        "message": f'Sequence "{name}" created successfully',
        "sequenceName": name,
    }, result)


async def _duplicate_sequence(bridge, args: Dict[str, Any]) -> Any:
    sequence_id, new_name = args["sequenceId"], args["newName"]
    return await run(bridge, f"""
        var original = __findSequence({js(sequence_id)});
        if (!original) return JSON.stringify({{ success: false, error: "Sequence not found" }});
        var copy = original.clone();
        copy.name = {js(new_name)};
        return JSON.stringify({{
          success: true,
          originalSequenceId: {js(sequence_id)},
          newSequenceId: copy.sequenceID,
          newName: {js(new_name)}
        }});
    """)


async def _delete_sequence(bridge, args: Dict[str, Any]) -> Any:
    sequence_id = args["sequenceId"]
    log.info(f"Deleting sequence {sequence_id}")
    return await run(bridge, f"""
        var sequence = __findSequence({js(sequence_id)});
        if (!sequence) return JSON.stringify({{ success: false, error: "Sequence not found" }});
        var sequenceName = sequence.name;
        app.project.deleteSequence(sequence);
        return JSON.stringify({{
          success: true,
          message: "Sequence deleted successfully",
          deletedSequenceId: {js(sequence_id)},
          deletedSequenceName: sequenceName
        }});
    """)


async def _get_sequence_settings(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var settings = sequence.getSettings();
        return JSON.stringify({{
          success: true,
          settings: {{
            name: sequence.name,
            sequenceID: sequence.sequenceID,
            width: settings.videoFrameWidth,
            height: settings.videoFrameHeight,
            timebase: sequence.timebase,
            videoDisplayFormat: settings.videoDisplayFormat,
            audioChannelType: settings.audioChannelType,
            audioSampleRate: settings.audioSampleRate
          }}
        }});
    """)


def _set_sequence_settings(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "set_sequence_settings",
        "Sequence settings cannot be changed after creation in Premiere Pro",
        "Create a new sequence with desired settings instead",
    )


def _create_nested_sequence(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "create_nested_sequence",
        "This feature requires selection and nesting APIs. Implementation pending.",
        "You can manually nest clips via right-click > Nest",
    )


def _unnest_sequence(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "unnest_sequence",
        "This feature is not available in Premiere Pro scripting API",
        "You can manually unnest via Edit > Paste Attributes",
    )


# -- markers --

async def _add_marker(bridge, args: Dict[str, Any]) -> Any:
    time = args["time"]
    duration = args.get("duration") or 0
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var marker = sequence.markers.createMarker({js(time)});
        marker.name = {js(args["name"])};
        var comment = {js(args.get("comment"))};
        if (comment) marker.comments = comment;
        if ({js("color" in args)}) marker.setColorByIndex({_marker_color(args.get("color"))});
        if ({js(duration > 0)}) marker.end = {js(time + duration)};
        return JSON.stringify({{ success: true, markerId: marker.guid, message: "Marker added successfully" }});
    """)


async def _delete_marker(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var deleted = false;
        var marker = sequence.markers.getFirstMarker();
        while (marker) {{
          if (marker.guid === {js(args["markerId"])}) {{
            sequence.markers.deleteMarker(marker);
            deleted = true;
            break;
          }}
          marker = sequence.markers.getNextMarker(marker);
        }}
        return JSON.stringify({{
          success: deleted,
          message: deleted ? "Marker deleted successfully" : "Marker not found"
        }});
    """)


async def _update_marker(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var found = false;
        var name = {js(args.get("name"))};
        var comment = {js(args.get("comment"))};
        var marker = sequence.markers.getFirstMarker();
        while (marker) {{
          if (marker.guid === {js(args["markerId"])}) {{
            if (name) marker.name = name;
            if (comment) marker.comments = comment;
            if ({js("color" in args)}) marker.setColorByIndex({_marker_color(args.get("color"))});
            found = true;
            break;
          }}
          marker = sequence.markers.getNextMarker(marker);
        }}
        return JSON.stringify({{
          success: found,
          message: found ? "Marker updated successfully" : "Marker not found"
        }});
    """)


async def _list_markers(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var markers = [];
        var marker = sequence.markers.getFirstMarker();
        while (marker) {{
          markers.push({{
            id: marker.guid,
            name: marker.name,
            comment: marker.comments,
            start: marker.start.seconds,
            end: marker.end.seconds,
            duration: marker.end.seconds - marker.start.seconds,
            type: marker.type
          }});
          marker = sequence.markers.getNextMarker(marker);
        }}
        return JSON.stringify({{ success: true, markers: markers, count: markers.length }});
    """)


# -- tracks --

async def _add_track(bridge, args: Dict[str, Any]) -> Any:
    track_type = args["trackType"]
    video, audio = (1, 0) if track_type == "video" else (0, 1)
    return await run(bridge, f"""
        app.enableQE();
        var qeSeq = qe.project.getActiveSequence();
        if (!qeSeq) return JSON.stringify({{ success: false, error: "No active sequence" }});
        qeSeq.addTracks({video}, {audio}, 0);
        return JSON.stringify({{ success: true, message: {js(track_type + " track added")} }});
    """, error_prefix="QE DOM error: ")


async def _delete_track(bridge, args: Dict[str, Any]) -> Any:
    index = int(args["trackIndex"])
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var tracks = {_tracks_expr(args["trackType"])};
        if ({index} < 0 || {index} >= tracks.numTracks) {{
          return JSON.stringify({{ success: false, error: "Track index out of range" }});
        }}
        app.enableQE();
        var qeSeq = qe.project.getActiveSequence();
        if ({js(args["trackType"] == "video")}) qeSeq.removeVideoTrack({index});
        else qeSeq.removeAudioTrack({index});
        return JSON.stringify({{ success: true, message: "Track deleted successfully" }});
    """)


async def _lock_track(bridge, args: Dict[str, Any]) -> Any:
    index = int(args["trackIndex"])
    locked = args["locked"]
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        var tracks = {_tracks_expr(args["trackType"])};
        if ({index} < 0 || {index} >= tracks.numTracks) {{
          return JSON.stringify({{ success: false, error: "Track index out of range" }});
        }}
        tracks[{index}].setLocked({js(locked)});
        return JSON.stringify({{ success: true, message: {js("Track locked" if locked else "Track unlocked")} }});
    """)


async def _toggle_track_visibility(bridge, args: Dict[str, Any]) -> Any:
    index = int(args["trackIndex"])
    return await run(bridge, f"""
        {sequence_or_active(args["sequenceId"])}
        if ({index} < 0 || {index} >= sequence.videoTracks.numTracks) {{
          return JSON.stringify({{ success: false, error: "Track index out of range" }});
        }}
        sequence.videoTracks[{index}].setMute({js(0 if args["visible"] else 1)});
        return JSON.stringify({{ success: true, message: "Track visibility toggled", visible: {js(args["visible"])} }});
    """)


async def _mute_track(bridge, args: Dict[str, Any]) -> Any:
    sequence_id = args["sequenceId"]
    index = int(args["trackIndex"])
    muted = args["muted"]
    return await run(bridge, f"""
        {sequence_or_active(sequence_id)}
        var track = sequence.audioTracks[{index}];
        if (!track) return JSON.stringify({{ success: false, error: "Audio track not found" }});
        track.setMute({1 if muted else 0});
        return JSON.stringify({{
          success: true,
          message: "Track mute status changed",
          sequenceId: {js(sequence_id)},
          trackIndex: {index},
          muted: {js(muted)}
        }});
    """)


HANDLERS = {
    "create_sequence": _create_sequence,
    "duplicate_sequence": _duplicate_sequence,
    "delete_sequence": _delete_sequence,
    "get_sequence_settings": _get_sequence_settings,
    "set_sequence_settings": _set_sequence_settings,
    "create_nested_sequence": _create_nested_sequence,
    "unnest_sequence": _unnest_sequence,
    "add_marker": _add_marker,
    "delete_marker": _delete_marker,
    "update_marker": _update_marker,
    "list_markers": _list_markers,
    "add_track": _add_track,
    "delete_track": _delete_track,
    "lock_track": _lock_track,
    "toggle_track_visibility": _toggle_track_visibility,
    "mute_track": _mute_track,
}
