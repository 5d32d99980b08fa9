"""
Clip Tools — timeline clip placement and manipulation

Tools:
  add_to_timeline, remove_from_timeline, move_clip, trim_clip, split_clip
  duplicate_clip, reverse_clip, enable_disable_clip, replace_clip
  get_clip_properties, set_clip_properties, link_audio_video
  speed_change, stabilize_clip
"""

from typing import Any, Dict, List

from premiere_mcp.bridge import js
from premiere_mcp.registry.dispatcher import ToolDefinition
from premiere_mcp.registry.schema import boolean, number, obj, string
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import merged, require_clip, run, unsupported

log = get_logger("tools.clip")

TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="add_to_timeline",
        description="Adds a media clip from the project panel to a sequence timeline at a specific track and time.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence (timeline) to add the clip to"),
            "projectItemId": string("The ID of the project item (clip) to add"),
            "trackIndex": number("The index of the video or audio track (0-based)"),
            "time": number("The time in seconds where the clip should be placed on the timeline"),
            "insertMode": string(
                "Whether to overwrite existing content or insert and shift",
                enum=("overwrite", "insert"), default="overwrite",
            ),
        }),
    ),
    ToolDefinition(
        name="remove_from_timeline",
        description="Removes a clip from the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the clip on the timeline to remove"),
            "deleteMode": string(
                "Whether to ripple delete (close gap) or lift (leave gap)",
                enum=("ripple", "lift"), default="ripple",
            ),
        }),
    ),
    ToolDefinition(
        name="move_clip",
        description="Moves a clip to a different position on the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the clip to move"),
            "newTime": number("The new time position in seconds"),
            "newTrackIndex": number("The new track index (if moving to different track)", required=False),
        }),
    ),
    ToolDefinition(
        name="trim_clip",
        description="Adjusts the in and out points of a clip on the timeline, effectively shortening it.",
        input_schema=obj({
            "clipId": string("The ID of the clip on the timeline to trim"),
            "inPoint": number("The new in point in seconds from the start of the clip", required=False),
            "outPoint": number("The new out point in seconds from the start of the clip", required=False),
            "duration": number("Alternative: set the desired duration in seconds", required=False),
        }),
    ),
    ToolDefinition(
        name="split_clip",
        description="Splits a clip at a specific time point, creating two separate clips.",
        input_schema=obj({
            "clipId": string("The ID of the clip to split"),
            "splitTime": number("The time in seconds where to split the clip"),
        }),
    ),
    ToolDefinition(
        name="duplicate_clip",
        description="Duplicates a clip on the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the clip to duplicate"),
            "offset": number(
                "Time offset in seconds for the duplicate (default: places immediately after original)",
                required=False,
            ),
        }),
    ),
    ToolDefinition(
        name="reverse_clip",
        description="Reverses the playback of a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip to reverse"),
            "maintainAudioPitch": boolean("Whether to maintain audio pitch (default: true)", default=True),
        }),
    ),
    ToolDefinition(
        name="enable_disable_clip",
        description="Enables or disables a clip on the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "enabled": boolean("Whether to enable (true) or disable (false)"),
        }),
    ),
    ToolDefinition(
        name="replace_clip",
        description="Replaces a clip on the timeline with another media item.",
        input_schema=obj({
            "clipId": string("The ID of the clip to replace"),
            "newProjectItemId": string("The ID of the new project item to use"),
            "preserveEffects": boolean("Whether to keep effects and settings (default: true)", required=False),
        }),
    ),
    ToolDefinition(
        name="get_clip_properties",
        description="Gets detailed properties of a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
        }),
    ),
    ToolDefinition(
        name="set_clip_properties",
        description="Sets properties of a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "properties": obj({
                "opacity": number("Opacity 0-100", required=False),
                "scale": number("Scale percentage", required=False),
                "rotation": number("Rotation in degrees", required=False),
                "position": obj({
                    "x": number(required=False),
                    "y": number(required=False),
                }, "Position coordinates", required=False),
            }, "Properties to set"),
        }),
    ),
    ToolDefinition(
        name="link_audio_video",
        description="Links or unlinks audio and video components of a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "linked": boolean("Whether to link (true) or unlink (false)"),
        }),
    ),
    ToolDefinition(
        name="speed_change",
        description="Changes the playback speed of a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "speed": number("Speed multiplier (0.1 = 10% speed, 2.0 = 200% speed)"),
            "maintainAudio": boolean("Whether to maintain audio pitch when changing speed", default=True),
        }),
    ),
    ToolDefinition(
        name="stabilize_clip",
        description="Applies video stabilization to reduce camera shake.",
        input_schema=obj({
            "clipId": string("The ID of the clip to stabilize"),
            "method": string("Stabilization method", enum=("warp", "subspace"), default="warp"),
            "smoothness": number("Stabilization smoothness (0-100)", default=50),
        }),
    ),
]


def _qe_clip(var: str = "qeClip") -> str:
    """Locate the QE DOM counterpart of the clip resolved into `info`."""
    return (
        "app.enableQE();\n"
        "var qeSeq = qe.project.getActiveSequence();\n"
        "var qeTrack = info.trackType === 'video' ? qeSeq.getVideoTrackAt(info.trackIndex) "
        ": qeSeq.getAudioTrackAt(info.trackIndex);\n"
        f"var {var} = qeTrack.getItemAt(info.clipIndex);"
    )


# -- placement --

async def _add_to_timeline(bridge, args: Dict[str, Any]) -> Any:
    result = await bridge.add_to_timeline(
        args["sequenceId"], args["projectItemId"], args["trackIndex"], args["time"],
    )
    return merged({
        "success": True,
        "message": "Clip added to timeline successfully",
        "sequenceId": args["sequenceId"],
        "projectItemId": args["projectItemId"],
        "trackIndex": args["trackIndex"],
        "time": args["time"],
        "insertMode": args["insertMode"],
    }, result)


async def _remove_from_timeline(bridge, args: Dict[str, Any]) -> Any:
    clip_id, mode = args["clipId"], args["deleteMode"]
    return await run(bridge, f"""
        {require_clip(clip_id)}
        var clipName = info.clip.name;
        info.clip.remove({js(mode == "ripple")}, true);
        return JSON.stringify({{
          success: true,
          message: "Clip removed from timeline",
          clipId: {js(clip_id)},
          clipName: clipName,
          deleteMode: {js(mode)}
        }});
    """)


async def _move_clip(bridge, args: Dict[str, Any]) -> Any:
    clip_id, new_time = args["clipId"], args["newTime"]
    return await run(bridge, f"""
        {require_clip(clip_id)}
        var oldTime = info.clip.start.seconds;
        info.clip.move(__time({js(new_time)} - oldTime));
        return JSON.stringify({{
          success: true,
          message: "Clip moved successfully",
          clipId: {js(clip_id)},
          oldTime: oldTime,
          newTime: {js(new_time)},
          trackIndex: info.trackIndex
        }});
    """)


async def _trim_clip(bridge, args: Dict[str, Any]) -> Any:
    clip_id = args["clipId"]
    edits = []
    if "inPoint" in args:
        edits.append(f"clip.inPoint = __time({js(args['inPoint'])});")
    if "outPoint" in args:
        edits.append(f"clip.outPoint = __time({js(args['outPoint'])});")
    if "duration" in args:
        edits.append(f"clip.outPoint = __time(clip.inPoint.seconds + {js(args['duration'])});")
    return await run(bridge, f"""
        {require_clip(clip_id)}
        var clip = info.clip;
        var oldInPoint = clip.inPoint.seconds;
        var oldOutPoint = clip.outPoint.seconds;
        var oldDuration = clip.duration.seconds;
        {chr(10).join(edits)}
        return JSON.stringify({{
          success: true,
          message: "Clip trimmed successfully",
          clipId: {js(clip_id)},
          oldInPoint: oldInPoint,
          oldOutPoint: oldOutPoint,
          oldDuration: oldDuration,
          newInPoint: clip.inPoint.seconds,
          newOutPoint: clip.outPoint.seconds,
          newDuration: clip.duration.seconds
        }});
    """)


async def _split_clip(bridge, args: Dict[str, Any]) -> Any:
    split_time = args["splitTime"]
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        var fps = __fps(info.sequence);
        var totalFrames = Math.round((info.clip.start.seconds + {js(split_time)}) * fps);
        function pad(n) {{ return n < 10 ? "0" + n : "" + n; }}
        var tc = pad(Math.floor(totalFrames / (fps * 3600))) + ":" +
                 pad(Math.floor((totalFrames % (fps * 3600)) / (fps * 60))) + ":" +
                 pad(Math.floor((totalFrames % (fps * 60)) / fps)) + ":" +
                 pad(Math.round(totalFrames % fps));
        {_qe_clip()}
        qeTrack.razor(tc);
        return JSON.stringify({{ success: true, message: "Clip split at " + tc, splitTime: {js(split_time)}, timecode: tc }});
    """, error_prefix="QE DOM error: ")


async def _duplicate_clip(bridge, args: Dict[str, Any]) -> Any:
    offset = args.get("offset")
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        var clip = info.clip;
        var offset = {js(offset)};
        var at = offset === null ? clip.end.seconds : clip.start.seconds + offset;
        var tracks = info.trackType === 'video' ? info.sequence.videoTracks : info.sequence.audioTracks;
        tracks[info.trackIndex].overwriteClip(clip.projectItem, at);
        return JSON.stringify({{ success: true, message: "Clip duplicated successfully", placedAt: at }});
    """)


async def _enable_disable_clip(bridge, args: Dict[str, Any]) -> Any:
    enabled = args["enabled"]
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        info.clip.disabled = {js(not enabled)};
        return JSON.stringify({{ success: true, message: {js("Clip enabled" if enabled else "Clip disabled")} }});
    """)


def _replace_clip(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "replace_clip",
        "This feature requires complex clip replacement logic. Implementation pending.",
        "You can manually replace clips via right-click > Replace With Clip",
    )


async def _get_clip_properties(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        var clip = info.clip;
        return JSON.stringify({{
          success: true,
          properties: {{
            name: clip.name,
            start: clip.start.seconds,
            end: clip.end.seconds,
            duration: clip.duration.seconds,
            inPoint: clip.inPoint.seconds,
            outPoint: clip.outPoint.seconds,
            enabled: !clip.disabled,
            trackIndex: info.trackIndex,
            trackType: info.trackType,
            speed: clip.getSpeed()
          }}
        }});
    """)


def _set_clip_properties(bridge, args: Dict[str, Any]) -> Any:
    return unsupported(
        "set_clip_properties",
        "Use specific tools like apply_effect for motion/opacity changes",
        "Motion graphics require Effects panel adjustments",
    )


async def _link_audio_video(bridge, args: Dict[str, Any]) -> Any:
    linked = args["linked"]
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        info.clip.setSelected(true, true);
        if ({js(linked)}) info.sequence.linkSelection(); else info.sequence.unlinkSelection();
        info.clip.setSelected(false, true);
        return JSON.stringify({{ success: true, message: {js("Audio-video linked" if linked else "Audio-video unlinked")} }});
    """)


# -- speed and stabilization --

async def _change_speed(bridge, clip_id: str, speed: float, maintain_audio: bool) -> Any:
    return await run(bridge, f"""
        {require_clip(clip_id)}
        var oldSpeed = info.clip.getSpeed();
        {_qe_clip()}
        try {{
          qeClip.setSpeed({js(speed)}, {js(maintain_audio)});
        }} catch (e2) {{
          return JSON.stringify({{ success: false, error: "Speed change via QE DOM not available: " + e2.toString() }});
        }}
        return JSON.stringify({{ success: true, oldSpeed: oldSpeed, newSpeed: {js(speed)} }});
    """)


async def _speed_change(bridge, args: Dict[str, Any]) -> Any:
    return await _change_speed(bridge, args["clipId"], args["speed"], args["maintainAudio"])


async def _reverse_clip(bridge, args: Dict[str, Any]) -> Any:
    return await _change_speed(bridge, args["clipId"], -1.0, args["maintainAudioPitch"])


async def _stabilize_clip(bridge, args: Dict[str, Any]) -> Any:
    clip_id, smoothness = args["clipId"], args["smoothness"]
    log.info(f"Stabilizing clip {clip_id} ({args['method']}, smoothness={smoothness})")
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_qe_clip()}
        var effect = qe.project.getVideoEffectByName("Warp Stabilizer");
        if (!effect) return JSON.stringify({{ success: false, error: "Warp Stabilizer effect not found" }});
        qeClip.addVideoEffect(effect);
        var clip = info.clip;
        var lastComp = clip.components[clip.components.numItems - 1];
        for (var j = 0; j < lastComp.properties.numItems; j++) {{
          try {{
            if (lastComp.properties[j].displayName === "Smoothness") lastComp.properties[j].setValue({js(smoothness)}, true);
          }} catch (e2) {{}}
        }}
        return JSON.stringify({{ success: true, message: "Warp Stabilizer applied", clipId: {js(clip_id)}, smoothness: {js(smoothness)} }});
    """, error_prefix="QE DOM error: ")


HANDLERS = {
    "add_to_timeline": _add_to_timeline,
    "remove_from_timeline": _remove_from_timeline,
    "move_clip": _move_clip,
    "trim_clip": _trim_clip,
    "split_clip": _split_clip,
    "duplicate_clip": _duplicate_clip,
    "reverse_clip": _reverse_clip,
    "enable_disable_clip": _enable_disable_clip,
    "replace_clip": _replace_clip,
    "get_clip_properties": _get_clip_properties,
    "set_clip_properties": _set_clip_properties,
    "link_audio_video": _link_audio_video,
    "speed_change": _speed_change,
    "stabilize_clip": _stabilize_clip,
}
