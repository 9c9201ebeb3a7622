"""Line-level diff segmentation for progressive diff playback.

Segments are computed once from the two texts. ``progress`` only changes how
prominent added and removed lines are when rendered; it never changes which
segments exist.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from difflib import SequenceMatcher

from git_explorer.models import DiffSegment, SegmentKind

COLLAPSE_THRESHOLD = 6
CONTEXT_LINES = 3
NO_CONTENT_PLACEHOLDER = "No file content available for comparison"

_SIGNS: dict[SegmentKind, str] = {"added": "+", "removed": "-", "unchanged": " "}


@dataclass(frozen=True)
class RenderedLine:
    kind: SegmentKind
    text: str
    line_number: int
    opacity: float

    @property
    def sign(self) -> str:
        return _SIGNS[self.kind]


@dataclass(frozen=True)
class CollapsedSection:
    segment_index: int
    hidden_lines: int
    start_line: int
    end_line: int


@dataclass
class DiffView:
    segments: list[DiffSegment] = field(default_factory=list)
    items: list[RenderedLine | CollapsedSection] = field(default_factory=list)
    placeholder: str | None = None

    @property
    def has_changes(self) -> bool:
        return any(s.kind != "unchanged" for s in self.segments)


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def _raw_runs(before_lines: list[str], after_lines: list[str]) -> list[tuple[SegmentKind, list[str]]]:
    matcher = SequenceMatcher(a=before_lines, b=after_lines, autojunk=False)
    runs: list[tuple[SegmentKind, list[str]]] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            runs.append(("unchanged", before_lines[i1:i2]))
            continue
        if tag in ("delete", "replace"):
            runs.append(("removed", before_lines[i1:i2]))
        if tag in ("insert", "replace"):
            runs.append(("added", after_lines[j1:j2]))
    return runs


def _merge_runs(runs: list[tuple[SegmentKind, list[str]]]) -> list[tuple[SegmentKind, list[str]]]:
    merged: list[tuple[SegmentKind, list[str]]] = []
    for kind, lines in runs:
        if not lines:
            continue
        if merged and merged[-1][0] == kind:
            merged[-1][1].extend(lines)
        else:
            merged.append((kind, list(lines)))
    return merged


def _split_unchanged(lines: list[str]) -> list[tuple[list[str], bool]]:
    if len(lines) <= COLLAPSE_THRESHOLD:
        return [(lines, False)]
    return [
        (lines[:CONTEXT_LINES], False),
        (lines[CONTEXT_LINES:-CONTEXT_LINES], True),
        (lines[-CONTEXT_LINES:], False),
    ]


def compute_segments(before: str, after: str) -> list[DiffSegment]:
    """Diff *before* against *after* line by line.

    Returns no segments when either text is empty. Unchanged runs longer than
    ``COLLAPSE_THRESHOLD`` lines are split into leading context, a collapsible
    middle and trailing context. Line numbers count positions in the merged
    stream of all segments, starting at 1.
    """
    if not before or not after:
        return []

    segments: list[DiffSegment] = []
    line = 1
    for kind, lines in _merge_runs(_raw_runs(split_lines(before), split_lines(after))):
        pieces = _split_unchanged(lines) if kind == "unchanged" else [(lines, False)]
        for piece, collapsible in pieces:
            segments.append(
                DiffSegment(
                    kind=kind,
                    lines=piece,
                    start_line=line,
                    end_line=line + len(piece) - 1,
                    collapsible=collapsible,
                )
            )
            line += len(piece)
    return segments


def reconstruct(segments: list[DiffSegment], side: str) -> str:
    """Rebuild the ``"before"`` or ``"after"`` text from *segments*."""
    skip: SegmentKind = "added" if side == "before" else "removed"
    return "\n".join(line for s in segments if s.kind != skip for line in s.lines)


def clamp_progress(progress: float) -> float:
    return min(1.0, max(0.0, progress))


def line_opacity(kind: SegmentKind, progress: float) -> float:
    p = clamp_progress(progress)
    if kind == "added":
        return p
    if kind == "removed":
        return 1.0 - p
    return 1.0


def animation_progress(index: int, count: int) -> float:
    """Playback position of commit *index* within a range of *count* commits."""
    if count > 1:
        return clamp_progress(index / (count - 1))
    return 1.0 if count == 1 else 0.0


def render_diff(
    before: str,
    after: str,
    progress: float = 1.0,
    expanded: Collection[int] = (),
) -> DiffView:
    """Lay out the diff of *before* and *after* at *progress*.

    Collapsible segments render as a single ``CollapsedSection`` unless their
    index is listed in *expanded*.
    """
    if not before or not after:
        return DiffView(placeholder=NO_CONTENT_PLACEHOLDER)

    segments = compute_segments(before, after)
    items: list[RenderedLine | CollapsedSection] = []
    for index, segment in enumerate(segments):
        if segment.collapsible and index not in expanded:
            items.append(
                CollapsedSection(
                    segment_index=index,
                    hidden_lines=len(segment.lines),
                    start_line=segment.start_line,
                    end_line=segment.end_line,
                )
            )
            continue
        opacity = line_opacity(segment.kind, progress)
        for offset, text in enumerate(segment.lines):
            items.append(RenderedLine(segment.kind, text, segment.start_line + offset, opacity))
    return DiffView(segments=segments, items=items)
