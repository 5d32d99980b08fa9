"""
Effect Tools — video/audio effects, transitions, audio levels, titles and colour
"""

from typing import Any, Dict, List

from premiere_mcp.bridge import js
from premiere_mcp.registry.dispatcher import ToolDefinition
from premiere_mcp.registry.schema import array, number, obj, record, string
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import require_clip, run

log = get_logger("tools.effect")

# color_correct argument -> Lumetri Color property display name
LUMETRI_PROPERTIES = {
    "brightness": "Brightness",
    "contrast": "Contrast",
    "saturation": "Saturation",
    "hue": "Hue",
    "highlights": "Highlights",
    "shadows": "Shadows",
    "temperature": "Temperature",
    "tint": "Tint",
}

TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="apply_effect",
        description="Applies a visual or audio effect to a specific clip on the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the clip to apply the effect to"),
            "effectName": string('The name of the effect to apply (e.g., "Gaussian Blur", "Lumetri Color")'),
            "parameters": record("Key-value pairs for the effect's parameters", required=False),
        }),
    ),
    ToolDefinition(
        name="remove_effect",
        description="Removes an effect from a clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "effectName": string("The name of the effect to remove"),
        }),
    ),
    ToolDefinition(
        name="add_transition",
        description="Adds a transition (e.g., cross dissolve) between two adjacent clips on the timeline.",
        input_schema=obj({
            "clipId1": string("The ID of the first clip (outgoing)"),
            "clipId2": string("The ID of the second clip (incoming)"),
            "transitionName": string('The name of the transition to add (e.g., "Cross Dissolve")'),
            "duration": number("The duration of the transition in seconds"),
        }),
    ),
    ToolDefinition(
        name="add_transition_to_clip",
        description="Adds a transition to the beginning or end of a single clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "transitionName": string("The name of the transition"),
            "position": string(
                "Whether to add the transition at the start or end of the clip",
                enum=("start", "end"),
            ),
            "duration": number("The duration of the transition in seconds"),
        }),
    ),
    ToolDefinition(
        name="adjust_audio_levels",
        description="Adjusts the volume (gain) of an audio clip on the timeline.",
        input_schema=obj({
            "clipId": string("The ID of the audio clip to adjust"),
            "level": number("The new audio level in decibels (dB). Can be positive or negative."),
        }),
    ),
    ToolDefinition(
        name="add_audio_keyframes",
        description="Adds keyframes to audio levels for dynamic volume changes.",
        input_schema=obj({
            "clipId": string("The ID of the audio clip"),
            "keyframes": array(obj({
                "time": number("Time in seconds"),
                "level": number("Audio level in dB"),
            }), "Array of keyframe data"),
        }),
    ),
    ToolDefinition(
        name="apply_audio_effect",
        description="Applies an audio effect to a clip.",
        input_schema=obj({
            "clipId": string("The ID of the audio clip"),
            "effectName": string('Name of the audio effect (e.g., "Compressor", "EQ", "Reverb")'),
            "parameters": record("Effect parameters", required=False),
        }),
    ),
    ToolDefinition(
        name="add_text_overlay",
        description="Adds a text layer (title) over the video timeline.",
        input_schema=obj({
            "text": string("The text content to display"),
            "sequenceId": string("The sequence to add the text to"),
            "trackIndex": number("The video track to place the text on"),
            "startTime": number("The time in seconds when the text should appear"),
            "duration": number("How long the text should remain on screen in seconds"),
            "fontFamily": string('e.g., "Arial", "Times New Roman"', required=False),
            "fontSize": number("e.g., 48", required=False),
            "color": string('The hex color code for the text, e.g., "#FFFFFF"', required=False),
            "position": obj({
                "x": number("Horizontal position (0-100)", required=False),
                "y": number("Vertical position (0-100)", required=False),
            }, "Text position on screen", required=False),
            "alignment": string("Text alignment", enum=("left", "center", "right"), required=False),
        }),
    ),
    ToolDefinition(
        name="color_correct",
        description="Applies basic color correction adjustments to a video clip.",
        input_schema=obj({
            "clipId": string("The ID of the clip to color correct"),
            "brightness": number("Brightness adjustment (-100 to 100)", required=False),
            "contrast": number("Contrast adjustment (-100 to 100)", required=False),
            "saturation": number("Saturation adjustment (-100 to 100)", required=False),
            "hue": number("Hue adjustment in degrees (-180 to 180)", required=False),
            "highlights": number("Adjustment for the brightest parts of the image (-100 to 100)", required=False),
            "shadows": number("Adjustment for the darkest parts of the image (-100 to 100)", required=False),
            "temperature": number("Color temperature adjustment (-100 to 100)", required=False),
            "tint": number("Tint adjustment (-100 to 100)", required=False),
        }),
    ),
    ToolDefinition(
        name="apply_lut",
        description="Applies a Look-Up Table (LUT) to a clip for color grading.",
        input_schema=obj({
            "clipId": string("The ID of the clip"),
            "lutPath": string("The absolute path to the .cube or .3dl LUT file"),
            "intensity": number("LUT intensity (0-100)", default=100),
        }),
    ),
]


_QE_CLIP = """
        app.enableQE();
        var qeSeq = qe.project.getActiveSequence();
        var isVideo = info.trackType === 'video';
        var qeTrack = isVideo ? qeSeq.getVideoTrackAt(info.trackIndex) : qeSeq.getAudioTrackAt(info.trackIndex);
        var qeClip = qeTrack.getItemAt(info.clipIndex);
"""

# Sets values on the most recently added component by property display name.
_SET_LAST_COMPONENT = """
        var lastComp = info.clip.components[info.clip.components.numItems - 1];
        var applied = [];
        for (var j = 0; j < lastComp.properties.numItems; j++) {
          var p = lastComp.properties[j];
          if (values.hasOwnProperty(p.displayName)) {
            try {
              p.setValue(values[p.displayName], true);
              applied.push(p.displayName);
            } catch (e2) {}
          }
        }
"""


def _property_values(values: Dict[str, Any]) -> str:
    return f"var values = {js(values)};"


# -- effects --

async def _apply_effect(bridge, args: Dict[str, Any]) -> Any:
    clip_id, effect_name = args["clipId"], args["effectName"]
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_QE_CLIP}
        var effect = isVideo
          ? qe.project.getVideoEffectByName({js(effect_name)})
          : qe.project.getAudioEffectByName({js(effect_name)});
        if (!effect) return JSON.stringify({{ success: false, error: {js("Effect not found: " + effect_name)} }});
        if (isVideo) qeClip.addVideoEffect(effect); else qeClip.addAudioEffect(effect);
        {_property_values(args.get("parameters") or {})}
        {_SET_LAST_COMPONENT}
        return JSON.stringify({{
          success: true,
          message: "Effect applied",
          clipId: {js(clip_id)},
          effectName: {js(effect_name)},
          appliedParameters: applied
        }});
    """, error_prefix="QE DOM error: ")


async def _remove_effect(bridge, args: Dict[str, Any]) -> Any:
    effect_name = args["effectName"]
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        var found = false;
        for (var i = 0; i < info.clip.components.numItems; i++) {{
          var comp = info.clip.components[i];
          if (comp.displayName === {js(effect_name)} || comp.matchName === {js(effect_name)}) {{
            found = true;
            break;
          }}
        }}
        return JSON.stringify({{
          success: false,
          error: "Effect removal is not supported by the ExtendScript API. The effect " +
                 {js(effect_name)} + " was " + (found ? "found" : "not found") + " on this clip.",
          note: "Remove effects manually in Premiere Pro"
        }});
    """)


# -- transitions --

async def _add_transition(bridge, args: Dict[str, Any]) -> Any:
    name, duration = args["transitionName"], args["duration"]
    return await run(bridge, f"""
        {require_clip(args["clipId1"], label="First clip")}
        {require_clip(args["clipId2"], var="incoming", label="Second clip")}
        {_QE_CLIP}
        var transition = qe.project.getVideoTransitionByName({js(name)});
        if (!transition) return JSON.stringify({{ success: false, error: {js("Transition not found: " + name)} }});
        var frames = Math.round({js(duration)} * __fps(info.sequence));
        qeClip.addTransition(transition, true, frames + ":00", "0:00", 0.5, false, true);
        return JSON.stringify({{ success: true, message: "Transition added", transitionName: {js(name)}, duration: {js(duration)} }});
    """, error_prefix="QE DOM error: ")


async def _add_transition_to_clip(bridge, args: Dict[str, Any]) -> Any:
    name, duration, position = args["transitionName"], args["duration"], args["position"]
    return await run(bridge, f"""
        {require_clip(args["clipId"])}
        {_QE_CLIP}
        var transition = isVideo
          ? qe.project.getVideoTransitionByName({js(name)})
          : qe.project.getAudioTransitionByName({js(name)});
        if (!transition) return JSON.stringify({{ success: false, error: {js("Transition not found: " + name)} }});
        var frames = Math.round({js(duration)} * __fps(info.sequence));
        qeClip.addTransition(transition, {js(position == "end")}, frames + ":00", "0:00", 0.5, true, true);
        return JSON.stringify({{
          success: true,
          message: {js("Transition added at " + position)},
          transitionName: {js(name)},
          duration: {js(duration)}
        }});
    """, error_prefix="QE DOM error: ")


# -- audio --

_FIND_VOLUME = """
        var volume = null;
        for (var i = 0; i < info.clip.components.numItems && !volume; i++) {
          var comp = info.clip.components[i];
          for (var j = 0; j < comp.properties.numItems; j++) {
            if (comp.properties[j].displayName === "Volume" || comp.properties[j].displayName === "Level") {
              volume = comp.properties[j];
              break;
            }
          }
        }
        if (!volume) return JSON.stringify({ success: false, error: "Volume property not found on clip" });
"""


async def _adjust_audio_levels(bridge, args: Dict[str, Any]) -> Any:
    clip_id, level = args["clipId"], args["level"]
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_FIND_VOLUME}
        var oldLevel = volume.getValue();
        volume.setValue({js(level)}, true);
        return JSON.stringify({{
          success: true,
          message: "Audio level adjusted successfully",
          clipId: {js(clip_id)},
          oldLevel: oldLevel,
          newLevel: {js(level)}
        }});
    """)


async def _add_audio_keyframes(bridge, args: Dict[str, Any]) -> Any:
    clip_id = args["clipId"]
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_FIND_VOLUME}
        var keyframes = {js(args["keyframes"])};
        var added = [];
        volume.setTimeVarying(true);
        for (var k = 0; k < keyframes.length; k++) {{
          try {{
            var at = __time(keyframes[k].time);
            volume.addKey(at);
            volume.setValueAtKey(at, keyframes[k].level, true);
            added.push(keyframes[k]);
          }} catch (e2) {{}}
        }}
        return JSON.stringify({{
          success: true,
          message: "Audio keyframes added",
          clipId: {js(clip_id)},
          addedKeyframes: added,
          totalKeyframes: added.length
        }});
    """)


async def _apply_audio_effect(bridge, args: Dict[str, Any]) -> Any:
    return await _apply_effect(bridge, args)


# -- titles and colour --

async def _add_text_overlay(bridge, args: Dict[str, Any]) -> Any:
    style = {key: args[key] for key in ("fontFamily", "fontSize", "color") if key in args}
    if "position" in args:
        style["alignment"] = args.get("alignment", "center")
    return await run(bridge, f"""
        var sequence = __findSequence({js(args["sequenceId"])});
        if (!sequence) return JSON.stringify({{ success: false, error: "Sequence not found" }});
        var track = sequence.videoTracks[{int(args["trackIndex"])}];
        if (!track) return JSON.stringify({{ success: false, error: "Video track not found" }});
        var titleItem = app.project.createNewTitle({js(args["text"])});
        if (!titleItem) return JSON.stringify({{ success: false, error: "Failed to create title" }});
        var style = {js(style)};
        var title = titleItem.getText ? titleItem.getText() : null;
        if (title) {{
          title.text = {js(args["text"])};
          if (style.fontFamily) title.fontFamily = style.fontFamily;
          if (style.fontSize) title.fontSize = style.fontSize;
          if (style.color) title.fillColor = style.color;
          if (style.alignment) {{
            title.horizontalJustification = style.alignment;
            title.verticalJustification = "center";
          }}
        }}
        track.overwriteClip(titleItem, {js(args["startTime"])});
        var titleClip = track.clips[track.clips.numItems - 1];
        titleClip.end = __time(titleClip.start.seconds + {js(args["duration"])});
        return JSON.stringify({{
          success: true,
          message: "Text overlay added successfully",
          text: {js(args["text"])},
          clipId: titleClip.nodeId,
          startTime: {js(args["startTime"])},
          duration: {js(args["duration"])},
          trackIndex: {js(args["trackIndex"])}
        }});
    """)


async def _color_correct(bridge, args: Dict[str, Any]) -> Any:
    clip_id = args["clipId"]
    values = {LUMETRI_PROPERTIES[key]: args[key] for key in LUMETRI_PROPERTIES if key in args}
    log.info(f"Color correcting clip {clip_id}: {sorted(values)}")
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_QE_CLIP}
        var effect = qe.project.getVideoEffectByName("Lumetri Color");
        if (!effect) return JSON.stringify({{ success: false, error: "Lumetri Color effect not found" }});
        qeClip.addVideoEffect(effect);
        {_property_values(values)}
        {_SET_LAST_COMPONENT}
        return JSON.stringify({{ success: true, message: "Color correction applied", clipId: {js(clip_id)}, adjusted: applied }});
    """, error_prefix="QE DOM error: ")


async def _apply_lut(bridge, args: Dict[str, Any]) -> Any:
    clip_id, lut_path = args["clipId"], args["lutPath"]
    values = {"Input LUT": lut_path, "Input LUT Intensity": args["intensity"]}
    return await run(bridge, f"""
        {require_clip(clip_id)}
        {_QE_CLIP}
        var effect = qe.project.getVideoEffectByName("Lumetri Color");
        if (!effect) return JSON.stringify({{ success: false, error: "Lumetri Color not found" }});
        qeClip.addVideoEffect(effect);
        {_property_values(values)}
        {_SET_LAST_COMPONENT}
        return JSON.stringify({{ success: true, message: "LUT applied", clipId: {js(clip_id)}, lutPath: {js(lut_path)} }});
    """, error_prefix="QE DOM error: ")


HANDLERS = {
    "apply_effect": _apply_effect,
    "remove_effect": _remove_effect,
    "add_transition": _add_transition,
    "add_transition_to_clip": _add_transition_to_clip,
    "adjust_audio_levels": _adjust_audio_levels,
    "add_audio_keyframes": _add_audio_keyframes,
    "apply_audio_effect": _apply_audio_effect,
    "add_text_overlay": _add_text_overlay,
    "color_correct": _color_correct,
    "apply_lut": _apply_lut,
}
