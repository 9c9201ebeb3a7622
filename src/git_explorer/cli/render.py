"""Rich renderables for trees, commits and diffs."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from git_explorer.core.line_diff import CollapsedSection, DiffView
from git_explorer.models import Commit, FileTreeNode

_STATUS_STYLES = {
    "added": ("+", "green"),
    "modified": ("M", "yellow"),
    "deleted": ("-", "red"),
    "unchanged": (" ", "dim"),
}
_KIND_STYLES = {"added": "green", "removed": "red", "unchanged": "dim"}


def _node_label(node: FileTreeNode) -> Text:
    if node.type == "folder":
        return Text(f"{node.name}/", style="bold")
    sign, style = _STATUS_STYLES[node.status or "unchanged"]
    label = Text(f"{sign} {node.name}", style=style)
    if node.additions or node.deletions:
        label.append(f"  +{node.additions or 0} -{node.deletions or 0}", style="dim")
    if node.status == "deleted":
        label.stylize("strike", 2, 2 + len(node.name))
    return label


def _add_children(branch: Tree, node: FileTreeNode) -> None:
    for child in node.children or []:
        sub = branch.add(_node_label(child))
        if child.type == "folder":
            _add_children(sub, child)


def file_tree(node: FileTreeNode, title: str = "root") -> Tree:
    tree = Tree(Text(title, style="bold blue"))
    _add_children(tree, node)
    return tree


def commit_table(commits: Sequence[Commit], title: str | None = None) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("commit")
    table.add_column("author")
    table.add_column("date")
    table.add_column("files", justify="right")
    table.add_column("message")
    for i, commit in enumerate(commits):
        table.add_row(
            str(i),
            commit.id[:7],
            commit.author,
            commit.timestamp,
            str(commit.files_changed_count),
            commit.message,
        )
    return table


def diff_view(view: DiffView) -> Group | Text:
    if view.placeholder is not None:
        return Text(view.placeholder, style="dim italic")
    lines: list[Text] = []
    for item in view.items:
        if isinstance(item, CollapsedSection):
            lines.append(
                Text(
                    f"     ⋯ {item.hidden_lines} unchanged lines ({item.start_line}-{item.end_line}) "
                    f"[segment {item.segment_index}]",
                    style="dim cyan",
                )
            )
            continue
        style = _KIND_STYLES[item.kind]
        if item.kind != "unchanged" and item.opacity < 0.5:
            style = f"{style} dim"
        lines.append(Text(f"{item.line_number:>4} {item.sign} {item.text}", style=style))
    return Group(*lines)
