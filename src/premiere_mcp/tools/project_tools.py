"""
Project Tools — discovery, project lifecycle and media import

Tools:
  list_project_items   — Media items and bins in the open project
  list_sequences       — Sequences with ids and basic properties
  list_sequence_tracks — Video/audio tracks of one sequence with their clips
  get_project_info     — Name, path, active sequence, counts
  create_project       — New .prproj at a location
  open_project         — Open an existing .prproj
  save_project         — Save the open project
  save_project_as      — Save under a new name/location
  import_media         — Import one file (optionally into a bin)
  import_folder        — Import every file in a folder
  create_bin           — New bin in the project panel
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from premiere_mcp.bridge import js
from premiere_mcp.registry.dispatcher import ToolDefinition
from premiere_mcp.registry.schema import boolean, obj, string
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import merged, run, sequence_or_active

log = get_logger("tools.project")

TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="list_project_items",
        description=(
            "Lists all media items, bins, and assets in the current Premiere Pro project. "
            "Use this to discover available media before performing operations."
        ),
        input_schema=obj({
            "includeBins": boolean("Whether to include bin information in the results", required=False),
            "includeMetadata": boolean("Whether to include detailed metadata for each item", required=False),
        }),
    ),
    ToolDefinition(
        name="list_sequences",
        description="Lists all sequences in the current Premiere Pro project with their IDs, names, and basic properties.",
        input_schema=obj(),
    ),
    ToolDefinition(
        name="list_sequence_tracks",
        description="Lists all video and audio tracks in a specific sequence with their properties and clips.",
        input_schema=obj({
            "sequenceId": string("The ID of the sequence to list tracks for"),
        }),
    ),
    ToolDefinition(
        name="get_project_info",
        description=(
            "Gets comprehensive information about the current project including "
            "name, path, settings, and status."
        ),
        input_schema=obj(),
    ),
    ToolDefinition(
        name="create_project",
        description=(
            "Creates a new Adobe Premiere Pro project. Use this when the user wants "
            "to start a new video editing project from scratch."
        ),
        input_schema=obj({
            "name": string('The name for the new project, e.g., "My Summer Vacation"'),
            "location": string(
                "The absolute directory path where the project file should be saved, "
                'e.g., "/Users/user/Documents/Videos"'
            ),
        }),
    ),
    ToolDefinition(
        name="open_project",
        description="Opens an existing Adobe Premiere Pro project from a specified file path.",
        input_schema=obj({
            "path": string("The absolute path to the .prproj file to open"),
        }),
    ),
    ToolDefinition(
        name="save_project",
        description="Saves the currently active Adobe Premiere Pro project.",
        input_schema=obj(),
    ),
    ToolDefinition(
        name="save_project_as",
        description="Saves the current project with a new name and location.",
        input_schema=obj({
            "name": string("The new name for the project"),
            "location": string("The absolute directory path where the project should be saved"),
        }),
    ),
    ToolDefinition(
        name="import_media",
        description="Imports a media file (video, audio, image) into the current Premiere Pro project.",
        input_schema=obj({
            "filePath": string("The absolute path to the media file to import"),
            "binName": string(
                "The name of the bin to import the media into. "
                "If not provided, it will be imported into the root.",
                required=False,
            ),
        }),
    ),
    ToolDefinition(
        name="import_folder",
        description="Imports all media files from a folder into the current Premiere Pro project.",
        input_schema=obj({
            "folderPath": string("The absolute path to the folder containing media files"),
            "binName": string("The name of the bin to import the media into", required=False),
            "recursive": boolean("Whether to import from subfolders recursively", default=False),
        }),
    ),
    ToolDefinition(
        name="create_bin",
        description="Creates a new bin (folder) in the project panel to organize media.",
        input_schema=obj({
            "name": string("The name for the new bin"),
            "parentBinName": string("The name of the parent bin to create this bin inside", required=False),
        }),
    ),
]


# -- discovery --

async def _list_project_items(bridge, args: Dict[str, Any]) -> Any:
    include_bins = args.get("includeBins", True)
    return await run(bridge, f"""
        var items = [];
        var bins = [];
        function walkItems(parent) {{
          for (var i = 0; i < parent.children.numItems; i++) {{
            var item = parent.children[i];
            var isBin = item.type === ProjectItemType.BIN;
            var info = {{
              id: item.nodeId,
              name: item.name,
              type: isBin ? 'bin' : (item.isSequence() ? 'sequence' : 'footage'),
              treePath: item.treePath
            }};
            try {{ info.mediaPath = item.getMediaPath(); }} catch (e2) {{}}
            if (isBin) {{
              bins.push(info);
              walkItems(item);
            }} else {{
              items.push(info);
            }}
          }}
        }}
        walkItems(app.project.rootItem);
        return JSON.stringify({{
          success: true,
          items: items,
          bins: {js(include_bins)} ? bins : [],
          totalItems: items.length,
          totalBins: bins.length
        }});
    """)


async def _list_sequences(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, """
        var sequences = [];
        for (var i = 0; i < app.project.sequences.numSequences; i++) {
          var seq = app.project.sequences[i];
          sequences.push({
            id: seq.sequenceID,
            name: seq.name,
            duration: __ticksToSeconds(seq.end),
            width: seq.frameSizeHorizontal,
            height: seq.frameSizeVertical,
            timebase: seq.timebase,
            videoTrackCount: seq.videoTracks.numTracks,
            audioTrackCount: seq.audioTracks.numTracks
          });
        }
        return JSON.stringify({ success: true, sequences: sequences, count: sequences.length });
    """)


async def _list_sequence_tracks(bridge, args: Dict[str, Any]) -> Any:
    sequence_id = args["sequenceId"]
    return await run(bridge, f"""
        {sequence_or_active(sequence_id)}
        function describeTracks(tracks, label) {{
          var out = [];
          for (var i = 0; i < tracks.numTracks; i++) {{
            var track = tracks[i];
            var clips = [];
            for (var j = 0; j < track.clips.numItems; j++) {{
              var clip = track.clips[j];
              clips.push({{
                id: clip.nodeId,
                name: clip.name,
                startTime: clip.start.seconds,
                endTime: clip.end.seconds,
                duration: clip.duration.seconds
              }});
            }}
            out.push({{ index: i, name: track.name || label + " " + (i + 1), clips: clips, clipCount: clips.length }});
          }}
          return out;
        }}
        var videoTracks = describeTracks(sequence.videoTracks, "Video");
        var audioTracks = describeTracks(sequence.audioTracks, "Audio");
        return JSON.stringify({{
          success: true,
          sequenceId: {js(sequence_id)},
          sequenceName: sequence.name,
          videoTracks: videoTracks,
          audioTracks: audioTracks,
          totalVideoTracks: videoTracks.length,
          totalAudioTracks: audioTracks.length
        }});
    """)


async def _get_project_info(bridge, args: Dict[str, Any]) -> Any:
    return await run(bridge, """
        var project = app.project;
        var active = project.activeSequence;
        return JSON.stringify({
          success: true,
          name: project.name,
          path: project.path,
          activeSequence: active ? { id: active.sequenceID, name: active.name } : null,
          itemCount: project.rootItem.children.numItems,
          sequenceCount: project.sequences.numSequences,
          hasActiveSequence: active ? true : false
        });
    """)


# -- project lifecycle --

async def _create_project(bridge, args: Dict[str, Any]) -> Any:
    name, location = args["name"], args["location"]
    log.info(f"Creating project {name} in {location}")
    result = await bridge.create_project(name, location)
    return merged({
        "success": True,
        "message": f'Project "{name}" created successfully',
        "projectPath": f"{location.rstrip('/')}/{name}.prproj",
    }, result)


async def _open_project(bridge, args: Dict[str, Any]) -> Any:
    result = await bridge.open_project(args["path"])
    return merged({
        "success": True,
        "message": "Project opened successfully",
        "projectPath": args["path"],
    }, result)


async def _save_project(bridge, args: Dict[str, Any]) -> Any:
    await bridge.save_project()
    return {
        "success": True,
        "message": "Project saved successfully",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def _save_project_as(bridge, args: Dict[str, Any]) -> Any:
    new_path = f"{args['location'].rstrip('/')}/{args['name']}.prproj"
    return await run(bridge, f"""
        var newPath = {js(new_path)};
        app.project.saveAs(newPath);
        return JSON.stringify({{ success: true, message: "Project saved as: " + newPath, newPath: newPath }});
    """)


# -- media --

async def _import_media(bridge, args: Dict[str, Any]) -> Any:
    file_path = args["filePath"]
    result = await bridge.import_media(file_path)
    return merged({
        "success": True,
        "message": "Media imported successfully",
        "filePath": file_path,
        "binName": args.get("binName") or "Root",
    }, result)


async def _import_folder(bridge, args: Dict[str, Any]) -> Any:
    bin_name = args.get("binName")
    return await run(bridge, f"""
        var folder = new Folder({js(args["folderPath"])});
        if (!folder.exists) return JSON.stringify({{ success: false, error: "Folder not found" }});
        var recursive = {js(args["recursive"])};
        var importedItems = [];
        var errors = [];
        function importFrom(dir, targetBin) {{
          var files = dir.getFiles();
          for (var i = 0; i < files.length; i++) {{
            var file = files[i];
            if (file instanceof File) {{
              try {{
                app.project.importFiles([file.fsName], true, targetBin, false);
                importedItems.push({{ name: file.name, path: file.fsName }});
              }} catch (e2) {{
                errors.push({{ file: file.name, error: e2.toString() }});
              }}
            }} else if (file instanceof Folder && recursive) {{
              importFrom(file, targetBin);
            }}
          }}
        }}
        var targetBin = app.project.rootItem;
        var binName = {js(bin_name)};
        if (binName) targetBin = __findBin(binName) || app.project.rootItem;
        importFrom(folder, targetBin);
        return JSON.stringify({{
          success: true,
          importedItems: importedItems,
          errors: errors,
          totalImported: importedItems.length,
          totalErrors: errors.length
        }});
    """)


async def _create_bin(bridge, args: Dict[str, Any]) -> Any:
    name = args["name"]
    parent = args.get("parentBinName")
    return await run(bridge, f"""
        var parentBin = app.project.rootItem;
        var parentName = {js(parent)};
        if (parentName) parentBin = __findBin(parentName) || app.project.rootItem;
        var newBin = parentBin.createBin({js(name)});
        return JSON.stringify({{
          success: true,
          binName: {js(name)},
          binId: newBin ? newBin.nodeId : null,
          parentBin: parentName || "Root"
        }});
    """)


HANDLERS = {
    "list_project_items": _list_project_items,
    "list_sequences": _list_sequences,
    "list_sequence_tracks": _list_sequence_tracks,
    "get_project_info": _get_project_info,
    "create_project": _create_project,
    "open_project": _open_project,
    "save_project": _save_project,
    "save_project_as": _save_project_as,
    "import_media": _import_media,
    "import_folder": _import_folder,
    "create_bin": _create_bin,
}
