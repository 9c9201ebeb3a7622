from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FileStatus = Literal["added", "modified", "deleted", "unchanged"]
NodeType = Literal["file", "folder"]
SegmentKind = Literal["added", "removed", "unchanged"]

ROOT_NAME = "root"
ROOT_PATH = "/"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys; accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Commit(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    message: str
    author: str
    timestamp: str
    files_changed_count: int = 0


class ChangeStats(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    path: str
    insertions: int = 0
    deletions: int = 0


class FileTreeNode(CamelModel):
    name: str
    type: NodeType
    path: str
    status: FileStatus | None = None
    children: list["FileTreeNode"] | None = None
    additions: int | None = None
    deletions: int | None = None


FileTreeNode.model_rebuild()  # necessary for recursive types


class DiffSegment(CamelModel):
    kind: SegmentKind
    lines: list[str]
    start_line: int
    end_line: int
    collapsible: bool = False


class FileContents(CamelModel):
    before: str = ""
    after: str = ""


class FileDiff(CamelModel):
    before: str = ""
    after: str = ""
    additions: int = 0
    deletions: int = 0
    diff: str = ""


class AnalysisStats(CamelModel):
    total_additions: int = 0
    total_deletions: int = 0
    files_changed: int = 0
    commits_count: int = 0


class DiagramNode(CamelModel):
    id: str
    label: str
    x: int
    y: int


class DiagramLink(CamelModel):
    source: str
    target: str


class ArchitectureDiagram(CamelModel):
    nodes: list[DiagramNode] = Field(default_factory=list)
    links: list[DiagramLink] = Field(default_factory=list)


class CommitRange(CamelModel):
    from_commit: str | None = None
    to_commit: str | None = None
    from_index: int = -1
    to_index: int = -1
    truncated: bool = False
    total_commits: int = 0


class RepositoryRecord(CamelModel):
    id: int
    url: str
    name: str
    last_analyzed: datetime | None = None


class AnalysisResult(CamelModel):
    commits: list[Commit] = Field(default_factory=list)
    selectable_commits: list[Commit] = Field(default_factory=list)
    range: CommitRange = Field(default_factory=CommitRange)
    file_tree: FileTreeNode
    changed_file_tree: FileTreeNode
    file_tree_history: list[FileTreeNode] = Field(default_factory=list)
    architecture_notes: list[str] = Field(default_factory=list)
    architecture_diagrams: list[ArchitectureDiagram] = Field(default_factory=list)
    file_contents: FileContents = Field(default_factory=FileContents)
    stats: AnalysisStats = Field(default_factory=AnalysisStats)
    file_diffs: dict[str, FileDiff] = Field(default_factory=dict)
