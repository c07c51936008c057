from datetime import datetime, timedelta, timezone  # datetime parsing and UTC dates
import numpy as np                                  # NumPy for language share math

from models import CommitActivityPoint, FileTreeNode, ENTRY_DIRECTORY


ACTIVITY_WEEKS = 12


def _parse_github_datetime(dt_str):
    """
    GitHub timestamps look like: '2024-01-01T12:34:56Z'
    Convert that string into a Python datetime object.
    Return None if dt_str is missing or invalid.
    """
    if not dt_str:
        return None
    try:
        # fromisoformat doesn't understand "Z" on older Pythons, so we replace it with "+00:00"
        dt = datetime.fromisoformat(dt_str.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None

    # Naive timestamps are treated as UTC.
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def week_start(dt):
    """
    Return the Sunday that opens the week containing dt (UTC calendar date).

    date.weekday() is Monday=0 ... Sunday=6, so (weekday + 1) % 7 is the
    number of days since the last Sunday.
    """
    day = dt.astimezone(timezone.utc).date()
    return day - timedelta(days=(day.weekday() + 1) % 7)


def commit_activity(commits, weeks=ACTIVITY_WEEKS):
    """
    Bucket commits into weeks and return the most recent `weeks` buckets.

    Output is a tuple of CommitActivityPoint sorted oldest -> newest.
    Only weeks that have at least one commit appear; empty weeks are not
    filled in. Commits with a missing or unreadable timestamp are skipped.
    """
    counts = {}

    for c in commits:
        dt = _parse_github_datetime(c.authored_at)
        if dt is None:
            continue

        key = week_start(dt).isoformat()
        if key not in counts:
            counts[key] = 0
        counts[key] += 1

    # ISO dates sort chronologically as plain strings.
    ordered = sorted(counts.items())[-weeks:] if weeks > 0 else []
    return tuple(CommitActivityPoint(week_start=k, commit_count=v) for k, v in ordered)


def file_structure(entries):
    """
    Root listing as FileTreeNodes: directories first, then files, each group
    sorted by name ignoring case.
    """
    nodes = [FileTreeNode(name=e.name, type=e.type, path=e.path) for e in entries]
    return tuple(sorted(nodes, key=lambda n: (0 if n.type == ENTRY_DIRECTORY else 1, n.name.lower(), n.name)))


def language_shares(language_bytes):
    """
    Convert {language: bytes} into rows with a percentage share, largest first.

    Returns [] for an empty mapping or when every count is zero.
    """
    if not language_bytes:
        return []

    names = list(language_bytes.keys())
    counts = np.array([language_bytes[n] for n in names], dtype=float)
    total = float(counts.sum())
    if total <= 0:
        return []

    shares = counts / total * 100

    rows = [
        {"language": n, "bytes": int(language_bytes[n]), "percent": round(float(s), 1)}
        for n, s in zip(names, shares)
    ]
    return sorted(rows, key=lambda r: r["bytes"], reverse=True)


def build_repo_info(repo, language_bytes):
    """
    Flatten a RepoRecord into the plain dict stored on RepositoryAnalysis.
    This is a classic "transform" step (record -> display row).
    """
    return {
        "name": repo.name,
        "full_name": repo.full_name,
        "description": repo.description,
        "url": repo.url,
        "stars": int(repo.stars or 0),
        "forks": int(repo.forks or 0),
        "watchers": int(repo.watchers or 0),
        "language": repo.language,
        "languages": dict(language_bytes or {}),
        "created_at": repo.created_at,
        "updated_at": repo.updated_at,
        "default_branch": repo.default_branch,
        "open_issues": int(repo.open_issues or 0),
        "license": repo.license,
        "topics": list(repo.topics or ()),
    }
