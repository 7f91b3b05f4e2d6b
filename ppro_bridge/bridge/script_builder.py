"""
Builds ExtendScript source for the host.

Everything generated here must stay ES3-compatible: ``var`` only, no arrow
functions, no ``let``/``const``, no template literals.
"""

HELPERS = r'''
// === MCP Bridge Helpers (auto-prepended) ===

var TICKS_PER_SECOND = 254016000000;

function __ticksToSeconds(ticks) {
  return parseFloat(ticks) / TICKS_PER_SECOND;
}

function __secondsToTicks(seconds) {
  return Math.round(parseFloat(seconds) * TICKS_PER_SECOND);
}

function __ticksToTimecode(ticks, fps) {
  var totalSeconds = __ticksToSeconds(ticks);
  var hours = Math.floor(totalSeconds / 3600);
  var minutes = Math.floor((totalSeconds % 3600) / 60);
  var secs = Math.floor(totalSeconds % 60);
  var frames = Math.floor((totalSeconds % 1) * fps);
  return __pad(hours) + ":" + __pad(minutes) + ":" + __pad(secs) + ":" + __pad(frames);
}

function __pad(n) {
  return n < 10 ? "0" + n : "" + n;
}

function __findSequence(idOrName) {
  var project = app.project;
  for (var i = 0; i < project.sequences.numSequences; i++) {
    var seq = project.sequences[i];
    if (seq.sequenceID === idOrName || seq.name === idOrName) {
      return seq;
    }
  }
  return null;
}

function __findProjectItem(nodeIdOrName, rootItem) {
  if (!rootItem) rootItem = app.project.rootItem;
  for (var i = 0; i < rootItem.children.numItems; i++) {
    var item = rootItem.children[i];
    if (item.nodeId === nodeIdOrName || item.name === nodeIdOrName) {
      return item;
    }
    if (item.type === 2) { // Bin
      var found = __findProjectItem(nodeIdOrName, item);
      if (found) return found;
    }
  }
  return null;
}

function __clipsOf(tracks, trackType, visit) {
  for (var t = 0; t < tracks.numTracks; t++) {
    var track = tracks[t];
    for (var c = 0; c < track.clips.numItems; c++) {
      var hit = visit(track.clips[c], t, c, trackType);
      if (hit) return hit;
    }
  }
  return null;
}

function __findClip(nodeId) {
  var seq = app.project.activeSequence;
  if (!seq) return null;
  var match = function(clip, t, c, trackType) {
    if (clip.nodeId === nodeId) {
      return { clip: clip, trackIndex: t, clipIndex: c, trackType: trackType };
    }
    return null;
  };
  return __clipsOf(seq.videoTracks, "video", match) || __clipsOf(seq.audioTracks, "audio", match);
}

function __getAllClips(seq) {
  if (!seq) seq = app.project.activeSequence;
  if (!seq) return [];
  var clips = [];
  var collect = function(clip, t, c, trackType) {
    clips.push({
      nodeId: clip.nodeId,
      name: clip.name,
      trackIndex: t,
      trackType: trackType,
      inPoint: __ticksToSeconds(clip.inPoint.ticks),
      outPoint: __ticksToSeconds(clip.outPoint.ticks),
      start: __ticksToSeconds(clip.start.ticks),
      end: __ticksToSeconds(clip.end.ticks),
      duration: __ticksToSeconds(clip.duration.ticks),
      mediaType: clip.mediaType
    });
    return null;
  };
  __clipsOf(seq.videoTracks, "video", collect);
  __clipsOf(seq.audioTracks, "audio", collect);
  return clips;
}

function __jsonStringify(obj) {
  if (typeof JSON !== "undefined" && JSON.stringify) {
    return JSON.stringify(obj);
  }
  // Older ExtendScript builds ship without JSON
  if (obj === null) return "null";
  if (obj === undefined) return "undefined";
  if (typeof obj === "string") return '"' + obj.replace(/\\/g, "\\\\").replace(/"/g, '\\"').replace(/\n/g, "\\n") + '"';
  if (typeof obj === "number" || typeof obj === "boolean") return String(obj);
  if (obj instanceof Array) {
    var arr = [];
    for (var i = 0; i < obj.length; i++) {
      arr.push(__jsonStringify(obj[i]));
    }
    return "[" + arr.join(",") + "]";
  }
  if (typeof obj === "object") {
    var parts = [];
    for (var k in obj) {
      if (obj.hasOwnProperty(k)) {
        parts.push(__jsonStringify(k) + ":" + __jsonStringify(obj[k]));
      }
    }
    return "{" + parts.join(",") + "}";
  }
  return String(obj);
}

function __result(data) {
  return __jsonStringify({ success: true, data: data });
}

function __error(msg) {
  return __jsonStringify({ success: false, error: String(msg) });
}

// === End MCP Bridge Helpers ===
'''

_ESCAPES = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("'", "\\'"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    # ES3 line terminators; a raw one ends the literal
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
]


def escape(value: str) -> str:
    """Escape a string for embedding inside a quoted ExtendScript literal."""
    # Backslash must go first so later escapes are not doubled.
    for char, replacement in _ESCAPES:
        value = value.replace(char, replacement)
    return value


def build_script(code: str) -> str:
    """
    Wrap a tool body in the helper preamble and a self-invoking function.

    The body is expected to ``return __result(...)`` or ``return __error(...)``
    on every path; any uncaught exception is turned into ``__error``.
    """
    return f"""{HELPERS}
(function() {{
  try {{
    {code}
  }} catch(e) {{
    return __error(e.toString());
  }}
}})();"""


# Older name used by tool modules.
build_tool_script = build_script
