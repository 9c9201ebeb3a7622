"""Error taxonomy for repository analysis.

Only ``CloneFailure`` and ``RangeResolutionError`` are meant to reach a caller
as raised exceptions. The others travel inside ``GitResult`` values and are
logged where a component replaces them with an empty or sentinel value.
"""

from __future__ import annotations

from typing import Literal

CloneFailureKind = Literal["auth", "not_found", "timeout", "network", "unknown"]

_CLONE_STATUS: dict[CloneFailureKind, int] = {
    "auth": 401,
    "not_found": 404,
    "timeout": 408,
    "network": 503,
    "unknown": 500,
}

_CLONE_MESSAGES: dict[CloneFailureKind, str] = {
    "auth": (
        "Authentication failed. Please check the URL and ensure it is a public repository or you have access."
    ),
    "not_found": "Repository not found. Please verify the URL is correct.",
    "timeout": "Repository clone timed out. The repository may be too large or the server is busy.",
    "network": "Network error occurred. Please check your internet connection and try again.",
    "unknown": "Failed to analyze repository. Please try again.",
}


class GitExplorerError(Exception):
    """Base class for all analysis errors."""


class GitCommandError(GitExplorerError):
    """A ``git`` subprocess exited non-zero or hit its timeout."""

    def __init__(self, args: list[str], stderr: str = "", returncode: int | None = None, timed_out: bool = False):
        self.command = args
        self.stderr = stderr.strip()
        self.returncode = returncode
        self.timed_out = timed_out
        if timed_out:
            reason = "timed out"
        else:
            reason = f"exited with {returncode}"
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"git {' '.join(args)} {reason}{detail}")


class CloneFailure(GitExplorerError):
    """The repository could not be cloned. Fatal for the request."""

    def __init__(self, kind: CloneFailureKind, details: str = ""):
        self.kind: CloneFailureKind = kind
        self.details = details
        super().__init__(_CLONE_MESSAGES[kind])

    @property
    def status_code(self) -> int:
        return _CLONE_STATUS[self.kind]

    @property
    def message(self) -> str:
        return _CLONE_MESSAGES[self.kind]


class RangeResolutionError(GitExplorerError):
    """The requested commit range cannot be resolved. Never auto-corrected."""

    def __init__(self, reason: str, from_commit: str | None = None, to_commit: str | None = None):
        self.reason = reason
        self.from_commit = from_commit
        self.to_commit = to_commit
        super().__init__(reason)


class DiffComputationFailure(GitExplorerError):
    def __init__(self, from_revision: str, to_revision: str, cause: Exception | None = None):
        self.from_revision = from_revision
        self.to_revision = to_revision
        self.cause = cause
        super().__init__(f"could not diff {from_revision[:7]}..{to_revision[:7]}: {cause}")


class TreeBuildFailure(GitExplorerError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot place {path!r} in tree: {reason}")


class FileNotAtRevision(GitExplorerError):
    def __init__(self, path: str, revision: str, cause: Exception | None = None):
        self.path = path
        self.revision = revision
        self.cause = cause
        super().__init__(f"{path} does not exist at {revision}")


def classify_clone_error(message: str) -> CloneFailureKind:
    """Map git's clone stderr onto a failure kind by message inspection."""
    lowered = message.lower()
    if (
        "authentication failed" in lowered
        or "could not read username" in lowered
        or "repository access denied" in lowered
    ):
        return "auth"
    if "not found" in lowered or "does not exist" in lowered:
        return "not_found"
    if "timed out" in lowered or "timeout" in lowered:
        return "timeout"
    if "network" in lowered or "could not resolve host" in lowered or "unable to access" in lowered:
        return "network"
    return "unknown"
