from urllib.parse import urlparse

from git_explorer.models import ChangeStats, Commit

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
NUL = "\x00"
LOG_FORMAT = "%H%x1f%an%x1f%aI%x1f%s%x1e"


def parse_log(output: str) -> list[Commit]:
    commits: list[Commit] = []
    for record in output.split(RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        parts = record.split(FIELD_SEP)
        if len(parts) != 4:
            continue
        commit_id, author, timestamp, message = parts
        commits.append(Commit(id=commit_id, author=author, timestamp=timestamp, message=message))
    return commits


def _parse_count(value: str) -> int:
    # binary files report "-"
    return int(value) if value.isdigit() else 0


def parse_numstat(output: str) -> list[ChangeStats]:
    """Parse ``diff --numstat -z --no-renames``: one ``ins<TAB>del<TAB>path<NUL>`` record per file."""
    stats: list[ChangeStats] = []
    for record in output.split(NUL):
        parts = record.split("\t", 2)
        if len(parts) != 3 or not parts[2]:
            continue
        insertions, deletions, path = parts
        stats.append(ChangeStats(path=path, insertions=_parse_count(insertions), deletions=_parse_count(deletions)))
    return stats


def parse_name_list(output: str) -> list[str]:
    return [name for name in output.split(NUL) if name]


def parse_porcelain_status(output: str) -> list[str]:
    """Parse ``status --porcelain -z``; a rename or copy entry is followed by its source path."""
    paths: list[str] = []
    records = iter(output.split(NUL))
    for record in records:
        if len(record) < 4:
            continue
        paths.append(record[3:])
        if record[0] in "RC":
            next(records, None)
    return paths


def repository_name(url: str) -> str:
    """``owner/repo`` from a clone URL."""
    path = urlparse(url).path if "://" in url else url.rsplit(":", 1)[-1]
    parts = [p for p in path.rstrip("/").split("/") if p]
    if parts and parts[-1].endswith(".git"):
        parts[-1] = parts[-1][: -len(".git")]
    return "/".join(parts[-2:])
