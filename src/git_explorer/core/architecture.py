"""Heuristic architecture notes and diagrams derived from commit messages."""

from __future__ import annotations

from collections.abc import Sequence

from git_explorer.models import ArchitectureDiagram, Commit, DiagramLink, DiagramNode

MAX_SUMMARIZED_COMMITS = 10

_NOTE_RULES: list[tuple[tuple[str, ...], str, str]] = [
    (("refactor",), "Code Refactoring", "This commit improves code organization and maintainability."),
    (("add", "new"), "Feature Addition", "New functionality has been introduced to enhance the application."),
    (("fix", "bug"), "Bug Fix", "This commit resolves issues and improves stability."),
    (("update", "upgrade"), "Update", "Dependencies or configurations have been updated."),
]

# (minimum commit index, node linked from main)
_DIAGRAM_STAGES: list[tuple[int, DiagramNode]] = [
    (1, DiagramNode(id="feature", label="Feature", x=300, y=150)),
    (3, DiagramNode(id="utils", label="Utils", x=100, y=150)),
    (5, DiagramNode(id="api", label="API", x=200, y=200)),
]
_MAIN_NODE = DiagramNode(id="main", label="Main", x=200, y=100)


def architecture_note(commit: Commit, index: int) -> str:
    message = commit.message.lower()
    if index == 0 or "initial" in message or "setup" in message:
        return (
            f"**Initial Setup:** {commit.message} - "
            "This commit establishes the foundational structure of the repository."
        )
    for keywords, title, explanation in _NOTE_RULES:
        if any(keyword in message for keyword in keywords):
            return f"**{title}:** {commit.message} - {explanation}"
    return f"**Development:** {commit.message} - Ongoing development and improvements to the codebase."


def generate_architecture_notes(commits: Sequence[Commit]) -> list[str]:
    return [architecture_note(commit, i) for i, commit in enumerate(commits[:MAX_SUMMARIZED_COMMITS])]


def architecture_diagram(index: int) -> ArchitectureDiagram:
    nodes = [_MAIN_NODE]
    links: list[DiagramLink] = []
    for min_index, node in _DIAGRAM_STAGES:
        if index >= min_index:
            nodes.append(node)
            links.append(DiagramLink(source=_MAIN_NODE.id, target=node.id))
    return ArchitectureDiagram(nodes=nodes, links=links)


def generate_architecture_diagrams(commits: Sequence[Commit]) -> list[ArchitectureDiagram]:
    return [architecture_diagram(i) for i in range(min(len(commits), MAX_SUMMARIZED_COMMITS))]
