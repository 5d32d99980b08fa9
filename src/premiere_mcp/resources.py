"""
Premiere Pro MCP Resources

Read-only JSON views of the open project, each produced by one script run
through the bridge:

  premiere://project/{info,sequences,media,bins,metadata}
  premiere://timeline/{clips,tracks,markers}
  premiere://effects/{available,applied}
  premiere://transitions/available
  premiere://export/presets
"""

from functools import partial
from typing import Any, List, Tuple

from premiere_mcp.bridge import BridgeError
from premiere_mcp.registry.resources import ResourceDescriptor, ResourceRegistry
from premiere_mcp.server.logger import get_logger
from premiere_mcp.tools.scripting import run

log = get_logger("resources.premiere")

_CLIPS_OF_ACTIVE_SEQUENCE = """
        function eachClip(visit) {
          var sequence = app.project.activeSequence;
          if (!sequence) return;
          var kinds = [["video", sequence.videoTracks], ["audio", sequence.audioTracks]];
          for (var k = 0; k < kinds.length; k++) {
            for (var t = 0; t < kinds[k][1].numTracks; t++) {
              var clips = kinds[k][1][t].clips;
              for (var c = 0; c < clips.numItems; c++) visit(clips[c], kinds[k][0], t);
            }
          }
        }
"""

_PROJECT_INFO = """
        var project = app.project;
        return JSON.stringify({
          id: project.documentID,
          name: project.name,
          path: project.path,
          isModified: project.dirty,
          statistics: {
            sequenceCount: project.sequences.numSequences,
            projectItemCount: project.rootItem.children.numItems
          }
        });
"""

_PROJECT_SEQUENCES = """
        var sequences = [];
        for (var i = 0; i < app.project.sequences.numSequences; i++) {
          var sequence = app.project.sequences[i];
          sequences.push({
            id: sequence.sequenceID,
            name: sequence.name,
            timebase: sequence.timebase,
            duration: __ticksToSeconds(sequence.end),
            videoTracks: sequence.videoTracks.numTracks,
            audioTracks: sequence.audioTracks.numTracks,
            settings: {
              frameSize: { width: sequence.frameSizeHorizontal, height: sequence.frameSizeVertical }
            }
          });
        }
        return JSON.stringify({ sequences: sequences, totalCount: sequences.length });
"""

_PROJECT_MEDIA = """
        var mediaItems = [];
        function traverse(item) {
          for (var i = 0; i < item.children.numItems; i++) {
            var child = item.children[i];
            if (child.type === ProjectItemType.BIN) {
              traverse(child);
            } else if (child.type === ProjectItemType.CLIP || child.type === ProjectItemType.FILE) {
              var entry = { id: child.nodeId, name: child.name, type: child.type, treePath: child.treePath };
              try { entry.mediaPath = child.getMediaPath(); } catch (e2) {}
              try { entry.duration = child.getOutPoint().seconds - child.getInPoint().seconds; } catch (e3) {}
              mediaItems.push(entry);
            }
          }
        }
        traverse(app.project.rootItem);
        return JSON.stringify({ mediaItems: mediaItems, totalCount: mediaItems.length });
"""

_PROJECT_BINS = """
        var bins = [];
        function traverseBins(item, depth) {
          for (var i = 0; i < item.children.numItems; i++) {
            var child = item.children[i];
            if (child.type === ProjectItemType.BIN) {
              bins.push({
                id: child.nodeId,
                name: child.name,
                depth: depth,
                itemCount: child.children.numItems,
                path: child.treePath
              });
              traverseBins(child, depth + 1);
            }
          }
        }
        traverseBins(app.project.rootItem, 0);
        return JSON.stringify({ bins: bins, totalCount: bins.length });
"""

_TIMELINE_CLIPS = _CLIPS_OF_ACTIVE_SEQUENCE + """
        var clips = [];
        eachClip(function visitClip(clip, trackType, trackIndex) {
          clips.push({
            id: clip.nodeId,
            name: clip.name,
            trackType: trackType,
            trackIndex: trackIndex,
            startTime: clip.start.seconds,
            endTime: clip.end.seconds,
            duration: clip.duration.seconds,
            inPoint: clip.inPoint.seconds,
            outPoint: clip.outPoint.seconds,
            mediaPath: clip.projectItem ? clip.projectItem.getMediaPath() : null,
            effects: clip.components.numItems
          });
        });
        var active = app.project.activeSequence;
        return JSON.stringify({ clips: clips, totalCount: clips.length, activeSequence: active ? active.name : null });
"""

_TIMELINE_TRACKS = """
        var tracks = [];
        var sequence = app.project.activeSequence;
        if (sequence) {
          var kinds = [["video", sequence.videoTracks], ["audio", sequence.audioTracks]];
          for (var k = 0; k < kinds.length; k++) {
            for (var t = 0; t < kinds[k][1].numTracks; t++) {
              var track = kinds[k][1][t];
              tracks.push({
                id: track.id,
                name: track.name,
                type: kinds[k][0],
                index: t,
                locked: track.isLocked(),
                muted: track.isMuted(),
                clipCount: track.clips.numItems,
                transitionCount: track.transitions.numItems
              });
            }
          }
        }
        return JSON.stringify({ tracks: tracks, totalCount: tracks.length, activeSequence: sequence ? sequence.name : null });
"""

_TIMELINE_MARKERS = """
        var markers = [];
        var sequence = app.project.activeSequence;
        if (sequence) {
          var marker = sequence.markers.getFirstMarker();
          while (marker) {
            markers.push({
              id: marker.guid,
              name: marker.name,
              comment: marker.comments,
              startTime: marker.start.seconds,
              endTime: marker.end.seconds,
              duration: marker.end.seconds - marker.start.seconds,
              type: marker.type,
              color: marker.getColorByIndex()
            });
            marker = sequence.markers.getNextMarker(marker);
          }
        }
        return JSON.stringify({ markers: markers, totalCount: markers.length, activeSequence: sequence ? sequence.name : null });
"""

_AVAILABLE_EFFECTS = """
        app.enableQE();
        var effects = [];
        var video = qe.project.getVideoEffectList();
        for (var i = 0; i < video.length; i++) effects.push({ name: video[i], type: 'video' });
        var audio = qe.project.getAudioEffectList();
        for (var j = 0; j < audio.length; j++) effects.push({ name: audio[j], type: 'audio' });
        return JSON.stringify({ effects: effects, totalCount: effects.length });
"""

_APPLIED_EFFECTS = _CLIPS_OF_ACTIVE_SEQUENCE + """
        var appliedEffects = [];
        eachClip(function visitClip(clip, trackType, trackIndex) {
          for (var e = 0; e < clip.components.numItems; e++) {
            var effect = clip.components[e];
            appliedEffects.push({
              clipId: clip.nodeId,
              clipName: clip.name,
              effectName: effect.displayName,
              effectMatchName: effect.matchName,
              trackType: trackType,
              trackIndex: trackIndex
            });
          }
        });
        return JSON.stringify({ appliedEffects: appliedEffects, totalCount: appliedEffects.length });
"""

_AVAILABLE_TRANSITIONS = """
        app.enableQE();
        var transitions = [];
        var video = qe.project.getVideoTransitionList();
        for (var i = 0; i < video.length; i++) transitions.push({ name: video[i], type: 'video' });
        var audio = qe.project.getAudioTransitionList();
        for (var j = 0; j < audio.length; j++) transitions.push({ name: audio[j], type: 'audio' });
        return JSON.stringify({ transitions: transitions, totalCount: transitions.length });
"""

_EXPORT_PRESETS = """
        var presets = [];
        var exportPresets = app.encoder.getExporters();
        for (var i = 0; i < exportPresets.length; i++) {
          var exporter = exportPresets[i];
          var entries = exporter.getPresets();
          for (var p = 0; p < entries.length; p++) {
            presets.push({
              name: entries[p].name,
              matchName: entries[p].matchName,
              exporter: exporter.name,
              fileExtension: exporter.fileType
            });
          }
        }
        return JSON.stringify({ presets: presets, totalCount: presets.length });
"""

_PROJECT_METADATA = _CLIPS_OF_ACTIVE_SEQUENCE + """
        var project = app.project;
        var sequence = project.activeSequence;
        if (!sequence) return JSON.stringify({});
        var metadata = {
          project: { name: project.name, path: project.path },
          sequence: {
            name: sequence.name,
            duration: __ticksToSeconds(sequence.end),
            timebase: sequence.timebase,
            settings: {
              frameSize: { width: sequence.frameSizeHorizontal, height: sequence.frameSizeVertical }
            }
          },
          statistics: { totalClips: 0, totalEffects: 0, totalTransitions: 0 }
        };
        eachClip(function visitClip(clip) {
          metadata.statistics.totalClips += 1;
          metadata.statistics.totalEffects += clip.components.numItems;
        });
        for (var v = 0; v < sequence.videoTracks.numTracks; v++) {
          metadata.statistics.totalTransitions += sequence.videoTracks[v].transitions.numItems;
        }
        for (var a = 0; a < sequence.audioTracks.numTracks; a++) {
          metadata.statistics.totalTransitions += sequence.audioTracks[a].transitions.numItems;
        }
        return JSON.stringify(metadata);
"""

RESOURCES: List[Tuple[ResourceDescriptor, str]] = [
    (ResourceDescriptor("premiere://project/info", "Current Project Information",
                        "Information about the currently open Premiere Pro project"), _PROJECT_INFO),
    (ResourceDescriptor("premiere://project/sequences", "Project Sequences",
                        "List of all sequences in the current project"), _PROJECT_SEQUENCES),
    (ResourceDescriptor("premiere://project/media", "Project Media",
                        "List of all media items in the current project"), _PROJECT_MEDIA),
    (ResourceDescriptor("premiere://project/bins", "Project Bins",
                        "Organizational structure of bins in the current project"), _PROJECT_BINS),
    (ResourceDescriptor("premiere://timeline/clips", "Timeline Clips",
                        "All clips currently on the timeline"), _TIMELINE_CLIPS),
    (ResourceDescriptor("premiere://timeline/tracks", "Timeline Tracks",
                        "Information about video and audio tracks"), _TIMELINE_TRACKS),
    (ResourceDescriptor("premiere://timeline/markers", "Timeline Markers",
                        "Markers and their positions on the timeline"), _TIMELINE_MARKERS),
    (ResourceDescriptor("premiere://effects/available", "Available Effects",
                        "List of all available effects in Premiere Pro"), _AVAILABLE_EFFECTS),
    (ResourceDescriptor("premiere://effects/applied", "Applied Effects",
                        "Effects currently applied to clips"), _APPLIED_EFFECTS),
    (ResourceDescriptor("premiere://transitions/available", "Available Transitions",
                        "List of all available transitions in Premiere Pro"), _AVAILABLE_TRANSITIONS),
    (ResourceDescriptor("premiere://export/presets", "Export Presets",
                        "Available export presets and their settings"), _EXPORT_PRESETS),
    (ResourceDescriptor("premiere://project/metadata", "Project Metadata",
                        "Metadata information for the current project"), _PROJECT_METADATA),
]


async def read_script(bridge, body: str) -> Any:
    """Run a resource script; a script-reported failure is raised, not returned as content."""
    result = await run(bridge, body)
    if isinstance(result, dict) and result.get("success") is False and "error" in result:
        raise BridgeError(str(result["error"]))
    return result


def build_resource_registry(bridge) -> ResourceRegistry:
    log.debug(f"Registering {len(RESOURCES)} resources")
    return ResourceRegistry(
        (descriptor, partial(read_script, bridge, body))
        for descriptor, body in RESOURCES
    )
