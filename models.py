# models.py
#
# Purpose:
# The records that flow through GitGrade. Raw inputs come from the GitHub
# data provider (github_api.py), outputs are produced by the scoring engine
# (scoring.py, insights.py, analytics.py) and read by the front ends.
#
# Every record is a frozen dataclass and sequences are stored as tuples.
# The dict fields (repo_info, metrics, findings) are plain dicts, so treat a
# finished analysis as read-only.
# to_dict() gives a JSON-ready dict for exports and the web UI.

from dataclasses import dataclass, field, asdict


# Metric keys in their fixed display/aggregation order, with their max scores.
# The max scores add up to 100.
METRIC_MAX_SCORES = {
    "code_quality": 20,
    "project_structure": 20,
    "documentation": 20,
    "test_coverage": 15,
    "version_control": 15,
    "real_world_relevance": 10,
}

METRIC_LABELS = {
    "code_quality": "Code Quality",
    "project_structure": "Project Structure",
    "documentation": "Documentation",
    "test_coverage": "Test Coverage",
    "version_control": "Version Control",
    "real_world_relevance": "Real-World Relevance",
}

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

ENTRY_FILE = "file"
ENTRY_DIRECTORY = "directory"


# ----------------------------
# Raw inputs
# ----------------------------
@dataclass(frozen=True)
class RepoRecord:
    name: str
    full_name: str
    description: str = None
    url: str = ""
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    language: str = None
    created_at: str = None
    updated_at: str = None
    default_branch: str = "main"
    open_issues: int = 0
    license: str = None
    topics: tuple = ()


@dataclass(frozen=True)
class DirEntry:
    name: str
    type: str  # ENTRY_FILE or ENTRY_DIRECTORY
    path: str

    @property
    def is_dir(self):
        return self.type == ENTRY_DIRECTORY


@dataclass(frozen=True)
class CommitEntry:
    message: str
    authored_at: str  # ISO-8601 timestamp as GitHub returns it


@dataclass(frozen=True)
class RawRepositoryData:
    """
    Everything the scoring engine needs for one repository.

    commits are newest first (GitHub order) and capped at 100 by the provider.
    readme_text is None when the repository has no README.
    """
    repo: RepoRecord
    language_bytes: dict = field(default_factory=dict)
    commits: tuple = ()
    entries: tuple = ()
    branches: tuple = ()
    readme_text: str = None


# ----------------------------
# Outputs
# ----------------------------
@dataclass(frozen=True)
class MetricScore:
    """
    Result of one metric analyzer.

    details are human-readable evidence strings in check order.
    findings maps a named check (e.g. "has_gitignore") to whether it passed;
    the roadmap generator reads findings, never the evidence wording.
    """
    score: int
    max_score: int
    details: tuple = ()
    findings: dict = field(default_factory=dict)

    @property
    def ratio(self):
        return self.score / self.max_score if self.max_score else 0


@dataclass(frozen=True)
class RoadmapItem:
    priority: str  # "high" | "medium" | "low"
    category: str
    action: str
    description: str


@dataclass(frozen=True)
class CommitActivityPoint:
    week_start: str  # YYYY-MM-DD of the Sunday that opens the week
    commit_count: int


@dataclass(frozen=True)
class FileTreeNode:
    name: str
    type: str
    path: str


@dataclass(frozen=True)
class RepositoryAnalysis:
    repo_info: dict
    metrics: dict  # metric key -> MetricScore, in METRIC_MAX_SCORES order
    score: int
    level: str
    badge: str
    summary: str
    roadmap: tuple = ()
    commit_activity: tuple = ()
    file_structure: tuple = ()

    def to_dict(self):
        return asdict(self)
