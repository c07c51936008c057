# scoring.py
#
# What this file is:
# The scoring logic for GitGrade. Six metric analyzers turn raw repository
# signals (root file listing, languages, commits, branches, README, metadata)
# into bounded scores with evidence strings, and the aggregator combines them
# into a 0–100 score with a level and a badge.
#
# How the analyzers are laid out:
# - Each analyzer is an ordered table of rules. A rule looks at a small
#   "context" dict built from the inputs and reports one finding.
# - _check() rules are independent yes/no checks that add points.
# - _tiers() rules pick exactly ONE row from a threshold table (first match
#   wins), so tiers like "50+ commits" and "20+ commits" never add up.
# - _run_rules() walks the table in order, sums the points and collects the
#   evidence strings and the named findings. _finish() clamps to the max score.
#
# How to adjust weights later:
# Point values live in the rule tables and max scores live in
# models.METRIC_MAX_SCORES. normalized_score() divides by the sum of the max
# scores, so changing a max score does not need any other edits.

import math
import re

from models import METRIC_MAX_SCORES, MetricScore


MODERN_LANGUAGES = {"TypeScript", "Rust", "Go", "Kotlin"}

SOURCE_DIRS = {"src", "app", "lib", "source"}
COMPONENT_DIRS = {"components", "ui", "views"}
CONFIG_DIRS = {"config", "configs", "settings"}
UTILITY_DIRS = {"utils", "helpers", "lib", "shared"}
PACKAGE_MANIFESTS = {"package.json", "pyproject.toml", "requirements.txt", "cargo.toml", "go.mod"}

DOCS_DIRS = {"docs", "documentation"}
TEST_DIRS = {"test", "tests", "__tests__", "spec", "specs"}
E2E_DIRS = {"e2e", "cypress", "playwright"}
TEST_FRAMEWORK_MARKERS = ("jest", "vitest", "pytest", "conftest")
E2E_FRAMEWORK_MARKERS = ("cypress", "playwright")

DOCKER_FILES = {"dockerfile", "docker-compose.yml"}
DEPLOY_FILES = {"vercel.json", "netlify.toml"}

INSTALL_PATTERN = re.compile(r"install|setup|getting started", re.IGNORECASE)
USAGE_PATTERN = re.compile(r"usage|how to use|example", re.IGNORECASE)
CONTRIBUTING_PATTERN = re.compile(r"contribut", re.IGNORECASE)
LICENSE_PATTERN = re.compile(r"license", re.IGNORECASE)

CONVENTIONAL_COMMIT_PATTERN = re.compile(
    r"^(feat|fix|docs|style|refactor|test|chore|build|ci|perf|revert)(\([^)]+\))?:\s",
    re.IGNORECASE,
)


def clamp(x, lo=0, hi=100):
    """
    Clamp a number into a bounded range.

    Every analyzer ends with clamp(score, 0, max_score), so stacked bonuses
    can never push a metric past its maximum.
    """
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


# ----------------------------
# Rule table helpers
# ----------------------------
def _text(text, ctx):
    """Evidence text can be a plain string or a function of the context."""
    if text is None:
        return None
    if callable(text):
        return text(ctx)
    return text


def _check(finding, test, points, found=None, missing=None, requires=None):
    """
    Build an independent yes/no rule.

    Inputs:
      finding  - name recorded in MetricScore.findings
      test     - function(ctx) -> bool
      points   - points added when test passes
      found    - evidence when the check passes (None = silent credit)
      missing  - evidence when the check fails (None = say nothing)
      requires - name of an earlier finding that must be True for this rule
                 to run at all (e.g. README sub-checks need a README)
    """
    def rule(ctx, findings):
        if requires and not findings.get(requires):
            return finding, False, 0, None

        if test(ctx):
            return finding, True, points, _text(found, ctx)
        return finding, False, 0, _text(missing, ctx)

    return rule


def _tiers(finding, measure, tiers, fallback=None, strict=False, requires=None):
    """
    Build a mutually exclusive threshold rule.

    tiers is a list of (threshold, points, evidence) ordered from the highest
    threshold down. The first row whose threshold is met wins and no other
    row is looked at. strict=True compares with ">" instead of ">=".

    The finding is True when any tier matched.
    """
    def rule(ctx, findings):
        if requires and not findings.get(requires):
            return finding, False, 0, None

        value = measure(ctx)
        for threshold, points, evidence in tiers:
            met = value > threshold if strict else value >= threshold
            if met:
                return finding, True, points, _text(evidence, ctx)
        return finding, False, 0, _text(fallback, ctx)

    return rule


def _run_rules(rules, ctx):
    """
    Evaluate a rule table in order.

    Returns (raw_score, details, findings). The raw score is not clamped yet.
    """
    score = 0
    details = []
    findings = {}

    for rule in rules:
        finding, passed, points, evidence = rule(ctx, findings)
        findings[finding] = passed
        score += points
        if evidence:
            details.append(evidence)

    return score, details, findings


def _finish(score, details, findings, max_score):
    return MetricScore(
        score=clamp(score, 0, max_score),
        max_score=max_score,
        details=tuple(details),
        findings=findings,
    )


def _entry_context(entries):
    """
    Lowercased views of the root listing that most rules need.
    """
    return {
        "names": [e.name.lower() for e in entries],
        "dirs": [e.name.lower() for e in entries if e.is_dir],
    }


def _has_dir(ctx, options):
    return any(d in options for d in ctx["dirs"])


def _has_name(ctx, options):
    return any(n in options for n in ctx["names"])


def _name_contains(ctx, *fragments):
    return any(f in n for n in ctx["names"] for f in fragments)


# ----------------------------
# Code Quality (max 20)
# ----------------------------
CODE_QUALITY_RULES = [
    _check("has_eslint", lambda c: _name_contains(c, "eslint"), 4,
           "ESLint configuration found", "Missing ESLint configuration"),
    _check("has_prettier", lambda c: _name_contains(c, "prettier"), 3,
           "Prettier configuration found"),
    _check("has_editorconfig", lambda c: ".editorconfig" in c["names"], 2,
           "EditorConfig found"),
    _check("has_tsconfig", lambda c: "tsconfig.json" in c["names"], 3,
           "TypeScript configuration found"),
    _tiers("multi_language", lambda c: len(c["languages"]), [
        (3, 4, lambda c: f"Uses {len(c['languages'])} languages/technologies"),
        (2, 2, lambda c: f"Uses {len(c['languages'])} languages"),
    ]),
    _check("modern_stack", lambda c: any(lang in MODERN_LANGUAGES for lang in c["languages"]), 4,
           "Uses modern language/framework"),
]


def analyze_code_quality(entries, language_bytes):
    """
    Lint/format configuration at the root plus language mix.

    Inputs:
      entries        - root DirEntry sequence
      language_bytes - {language: bytes}; an empty dict simply earns no
                       language bonuses
    """
    max_score = METRIC_MAX_SCORES["code_quality"]
    ctx = _entry_context(entries)
    ctx["languages"] = list((language_bytes or {}).keys())

    score, details, findings = _run_rules(CODE_QUALITY_RULES, ctx)
    return _finish(score, details, findings, max_score)


# ----------------------------
# Project Structure (max 20)
# ----------------------------
PROJECT_STRUCTURE_RULES = [
    _check("has_source_dir", lambda c: _has_dir(c, SOURCE_DIRS), 5,
           "Organized source directory structure", "Consider organizing code into src/ directory"),
    _check("has_components_dir", lambda c: _has_dir(c, COMPONENT_DIRS), 4,
           "Components directory found"),
    _check("has_config_dir", lambda c: _has_dir(c, CONFIG_DIRS), 2,
           "Configuration directory found"),
    _check("has_utils_dir", lambda c: _has_dir(c, UTILITY_DIRS), 2,
           "Utilities directory found"),
    _check("has_package_manifest", lambda c: _has_name(c, PACKAGE_MANIFESTS), 4,
           "Package manager configuration found"),
    _check("has_gitignore", lambda c: ".gitignore" in c["names"], 3,
           ".gitignore present", "Missing .gitignore file"),
]


def analyze_project_structure(entries):
    max_score = METRIC_MAX_SCORES["project_structure"]
    ctx = _entry_context(entries)

    score, details, findings = _run_rules(PROJECT_STRUCTURE_RULES, ctx)
    return _finish(score, details, findings, max_score)


# ----------------------------
# Documentation (max 20)
# ----------------------------
DOCUMENTATION_RULES = [
    _check("has_readme", lambda c: bool(c["readme"]), 5,
           "README.md present", "Missing README.md - This is critical!"),
    _tiers("detailed_readme", lambda c: len(c["readme"]), [
        (2000, 4, "Comprehensive README documentation"),
        (500, 2, "Basic README documentation"),
    ], fallback="README could be more detailed", strict=True, requires="has_readme"),
    _check("has_installation_section", lambda c: INSTALL_PATTERN.search(c["readme"]) is not None, 2,
           "Installation instructions present", requires="has_readme"),
    _check("has_usage_section", lambda c: USAGE_PATTERN.search(c["readme"]) is not None, 2,
           "Usage examples present", requires="has_readme"),
    _check("readme_mentions_contributing", lambda c: CONTRIBUTING_PATTERN.search(c["readme"]) is not None, 1,
           "Contributing guidelines mentioned", requires="has_readme"),
    # Credited without an evidence line.
    _check("readme_mentions_license", lambda c: LICENSE_PATTERN.search(c["readme"]) is not None, 1,
           requires="has_readme"),
    _check("has_docs_dir", lambda c: _has_dir(c, DOCS_DIRS), 3,
           "Documentation directory found"),
    _check("has_changelog", lambda c: _name_contains(c, "changelog"), 1,
           "Changelog present"),
    _check("has_contributing_file", lambda c: "contributing.md" in c["names"], 1,
           "Contributing guidelines present"),
]


def analyze_documentation(entries, readme_text):
    """
    README presence, size and sections, plus docs/ and community files.

    readme_text is None when the repository has no README. An empty README
    scores the same as a missing one, and the README sub-checks are skipped.
    """
    max_score = METRIC_MAX_SCORES["documentation"]
    ctx = _entry_context(entries)
    ctx["readme"] = readme_text

    score, details, findings = _run_rules(DOCUMENTATION_RULES, ctx)
    return _finish(score, details, findings, max_score)


# ----------------------------
# Test Coverage (max 15)
# ----------------------------
TEST_COVERAGE_RULES = [
    _check("has_test_dir", lambda c: _has_dir(c, TEST_DIRS), 6,
           "Test directory found", "No test directory found"),
    _check("has_e2e_dir", lambda c: _has_dir(c, E2E_DIRS), 4,
           "E2E test setup found"),
    _check("has_test_framework", lambda c: _name_contains(c, *TEST_FRAMEWORK_MARKERS), 3,
           "Test framework configuration found"),
    _check("has_e2e_framework", lambda c: _name_contains(c, *E2E_FRAMEWORK_MARKERS), 2,
           "E2E testing framework configured"),
]


def analyze_test_coverage(entries):
    max_score = METRIC_MAX_SCORES["test_coverage"]
    ctx = _entry_context(entries)

    score, details, findings = _run_rules(TEST_COVERAGE_RULES, ctx)

    # Nothing test-related at all: spell out both missing layers.
    if score == 0:
        details.append("Consider adding unit tests")
        details.append("Consider adding integration tests")

    return _finish(score, details, findings, max_score)


# ----------------------------
# Version Control (max 15)
# ----------------------------
def is_descriptive_message(message):
    """
    A commit message counts as descriptive when it is longer than 10
    characters and does not start with "update" or "fix" (any case).
    """
    lower = (message or "").lower()
    return len(message or "") > 10 and not lower.startswith("update") and not lower.startswith("fix")


def is_conventional_message(message):
    return CONVENTIONAL_COMMIT_PATTERN.match(message or "") is not None


VERSION_CONTROL_RULES = [
    _tiers("has_commit_history", lambda c: c["commit_count"], [
        (50, 5, lambda c: f"Strong commit history ({c['commit_count']}+ commits)"),
        (20, 3, lambda c: f"Good commit history ({c['commit_count']} commits)"),
        (5, 1, lambda c: f"Limited commit history ({c['commit_count']} commits)"),
    ], fallback="Very few commits - consider committing more frequently"),
    _tiers("descriptive_messages", lambda c: c["message_quality"], [
        (0.7, 4, "Good commit message quality"),
        (0.4, 2, "Moderate commit message quality"),
    ], fallback="Improve commit message descriptions", strict=True),
    _tiers("uses_branches", lambda c: c["branch_count"], [
        (3, 4, lambda c: f"Uses branching strategy ({c['branch_count']} branches)"),
        (2, 2, "Some branching usage"),
    ], fallback="Consider using feature branches"),
    _check("conventional_commits", lambda c: c["conventional_count"] > c["commit_count"] * 0.3, 2,
           "Uses conventional commit format"),
]


def analyze_version_control(commits, branches):
    """
    Commit volume, message quality, branching and Conventional Commits.

    Inputs:
      commits  - CommitEntry sequence (newest first, at most 100)
      branches - branch names

    With zero commits the message quality ratio is 0.
    """
    max_score = METRIC_MAX_SCORES["version_control"]

    commit_count = len(commits)
    descriptive = sum(1 for c in commits if is_descriptive_message(c.message))

    ctx = {
        "commit_count": commit_count,
        "message_quality": (descriptive / commit_count) if commit_count else 0,
        "branch_count": len(branches),
        "conventional_count": sum(1 for c in commits if is_conventional_message(c.message)),
    }

    score, details, findings = _run_rules(VERSION_CONTROL_RULES, ctx)
    return _finish(score, details, findings, max_score)


# ----------------------------
# Real-World Relevance (max 10)
# ----------------------------
REAL_WORLD_RULES = [
    _tiers("has_community_interest", lambda c: c["stars"], [
        (100, 3, lambda c: f"Popular project ({c['stars']} stars)"),
        (10, 1, lambda c: f"Some community interest ({c['stars']} stars)"),
    ]),
    _check("has_ci", lambda c: ".github" in c["dirs"], 2,
           "GitHub Actions CI/CD configured"),
    _check("has_docker", lambda c: _has_name(c, DOCKER_FILES), 2,
           "Docker configuration present"),
    _check("has_deploy_config", lambda c: _has_name(c, DEPLOY_FILES), 1,
           "Deployment configuration present"),
    _check("has_description", lambda c: len(c["description"]) > 20, 1,
           "Good project description"),
    _check("has_topics", lambda c: len(c["topics"]) >= 3, 1,
           "Well-tagged with topics"),
    _check("has_license", lambda c: bool(c["license"]), 1,
           lambda c: f"Licensed under {c['license']}", "Consider adding a license"),
]


def analyze_real_world_relevance(repo, entries, readme_text=None):
    """
    Community interest, CI/deployment setup and project metadata.

    readme_text is accepted so every analyzer sees the same inputs the
    provider hands over; no rule here reads it.
    """
    max_score = METRIC_MAX_SCORES["real_world_relevance"]
    ctx = _entry_context(entries)
    ctx["stars"] = max(0, int(repo.stars or 0))
    ctx["description"] = repo.description or ""
    ctx["topics"] = list(repo.topics or ())
    ctx["license"] = repo.license

    score, details, findings = _run_rules(REAL_WORLD_RULES, ctx)
    return _finish(score, details, findings, max_score)


# ----------------------------
# Aggregation
# ----------------------------
def total_score(metrics):
    return sum(m.score for m in metrics.values())


def max_total_score(metrics):
    return sum(m.max_score for m in metrics.values())


def normalized_score(metrics):
    """
    round(total / max_total * 100), rounding halves up.

    Computed from the metrics' own max scores instead of assuming they sum
    to 100.
    """
    max_total = max_total_score(metrics)
    if max_total == 0:
        return 0
    return int(math.floor(total_score(metrics) / max_total * 100 + 0.5))


def score_level(score):
    if score >= 75:
        return "Advanced"
    if score >= 45:
        return "Intermediate"
    return "Beginner"


def score_badge(score):
    if score >= 80:
        return "Gold"
    if score >= 50:
        return "Silver"
    return "Bronze"
