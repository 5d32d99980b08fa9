"""
ExtendScript assembly shared by the tool and resource handlers

Every script is sent as one named, immediately-invoked function so bodies can
`return` early. The lookup helpers below are prepended to each call because
the panel evaluates scripts in a fresh scope.

The panel refuses scripts containing eval(, Function(, require(, `import `
or `process.`; nothing generated here may contain those tokens.
"""

from typing import Any

from premiere_mcp.bridge import js

TICKS_PER_SECOND = 254016000000

PRELUDE = """
function __ticksToSeconds(ticks) {
  return Number(ticks) / %(ticks)d;
}
function __time(seconds) {
  var t = new Time();
  t.seconds = seconds;
  return t;
}
function __findSequence(id) {
  for (var i = 0; i < app.project.sequences.numSequences; i++) {
    var seq = app.project.sequences[i];
    if (seq.sequenceID === id) return seq;
  }
  return null;
}
function __findClipIn(seq, id) {
  var kinds = [["video", seq.videoTracks], ["audio", seq.audioTracks]];
  for (var k = 0; k < kinds.length; k++) {
    var tracks = kinds[k][1];
    for (var t = 0; t < tracks.numTracks; t++) {
      var clips = tracks[t].clips;
      for (var c = 0; c < clips.numItems; c++) {
        if (clips[c].nodeId === id) {
          return { clip: clips[c], sequence: seq, trackType: kinds[k][0], trackIndex: t, clipIndex: c };
        }
      }
    }
  }
  return null;
}
function __findClip(id) {
  var active = app.project.activeSequence;
  if (active) {
    var hit = __findClipIn(active, id);
    if (hit) return hit;
  }
  for (var i = 0; i < app.project.sequences.numSequences; i++) {
    var found = __findClipIn(app.project.sequences[i], id);
    if (found) return found;
  }
  return null;
}
function __findBin(name) {
  var root = app.project.rootItem;
  for (var i = 0; i < root.children.numItems; i++) {
    var child = root.children[i];
    if (child.type === ProjectItemType.BIN && child.name === name) return child;
  }
  return null;
}
function __fps(seq) {
  return seq && seq.timebase ? (%(ticks)d / parseInt(seq.timebase, 10)) : 30;
}
""" % {"ticks": TICKS_PER_SECOND}


def wrap(body: str, error_prefix: str = "") -> str:
    """Wrap a script body in the helper prelude and a try/catch that reports failures as JSON."""
    return (
        "(function __mcpCommand() {\n"
        f"{PRELUDE}\n"
        "  try {\n"
        f"{body}\n"
        "  } catch (e) {\n"
        f"    return JSON.stringify({{ success: false, error: {js(error_prefix)} + e.toString() }});\n"
        "  }\n"
        "})();"
    )


async def run(bridge, body: str, error_prefix: str = "") -> Any:
    return await bridge.execute_script(wrap(body, error_prefix))


def sequence_or_active(sequence_id: str, var: str = "sequence") -> str:
    """Resolve a sequence by id, falling back to the active one."""
    return (
        f"var {var} = __findSequence({js(sequence_id)});\n"
        f"if (!{var}) {var} = app.project.activeSequence;\n"
        f"if (!{var}) return JSON.stringify({{ success: false, error: \"Sequence not found\" }});"
    )


def require_active_sequence(var: str = "sequence") -> str:
    return (
        f"var {var} = app.project.activeSequence;\n"
        f"if (!{var}) return JSON.stringify({{ success: false, error: \"No active sequence\" }});"
    )


def require_clip(clip_id: str, var: str = "info", label: str = "Clip") -> str:
    return (
        f"var {var} = __findClip({js(clip_id)});\n"
        f"if (!{var}) return JSON.stringify({{ success: false, error: {js(label + ' not found')} }});"
    )


def merged(payload: dict, result: Any) -> dict:
    """Overlay a bridge result onto a handler's summary payload."""
    if isinstance(result, dict):
        return {**payload, **result}
    if result is not None:
        return {**payload, "result": result}
    return payload


def unsupported(tool: str, reason: str, note: str) -> dict:
    """Payload for operations the Premiere scripting API cannot perform."""
    return {"success": False, "error": f"{tool}: {reason}", "note": note}
