# insights.py
#
# What this file is:
# Turns finished metric scores into the two pieces of text a reader actually
# acts on:
#   1) generate_summary(): a short paragraph (opening line + strengths +
#      weaknesses)
#   2) generate_roadmap(): a prioritized list of at most 10 improvements
#
# Both are pure functions of the metrics dict built in analyzer.py, keyed by
# the names in models.METRIC_MAX_SCORES.

from models import PRIORITY_ORDER, RoadmapItem


MAX_ROADMAP_ITEMS = 10

# (metric key, wording) in the order they are listed in the summary.
STRENGTH_CHECKS = [
    ("code_quality", "code quality"),
    ("project_structure", "project organization"),
    ("documentation", "documentation"),
    ("version_control", "version control practices"),
]

WEAKNESS_CHECKS = [
    ("test_coverage", "test coverage"),
    ("documentation", "documentation"),
    ("version_control", "commit practices"),
]


def opening_line(score):
    """
    Pick the first sentence of the summary from the normalized score.
    """
    if score >= 80:
        return "Excellent repository with professional-grade structure and practices."
    if score >= 60:
        return "Good repository with solid foundations."
    if score >= 40:
        return "Developing repository with room for improvement."
    return "Early-stage repository that needs significant enhancements."


def generate_summary(metrics, score):
    """
    Build the summary paragraph.

    - strengths: metrics at or above 70% of their own max
    - weaknesses: metrics below 30% of their own max
    Each list becomes one sentence, and is left out when empty.
    """
    parts = [opening_line(score)]

    strengths = [label for key, label in STRENGTH_CHECKS
                 if metrics[key].score >= metrics[key].max_score * 0.7]
    if strengths:
        parts.append(f"Strong in {', '.join(strengths)}.")

    weaknesses = [label for key, label in WEAKNESS_CHECKS
                  if metrics[key].score < metrics[key].max_score * 0.3]
    if weaknesses:
        parts.append(f"Needs improvement in {', '.join(weaknesses)}.")

    return " ".join(parts)


# ----------------------------
# Roadmap
# ----------------------------
def _below(metric, fraction):
    return metric.score < metric.max_score * fraction


def _lacks(metric, *findings):
    """True when none of the named findings passed for this metric."""
    return not any(metric.findings.get(f) for f in findings)


# Each rule: (condition(metrics), [items added when the condition holds]).
# The order of this table is the tie-break order inside a priority level.
ROADMAP_RULES = [
    (
        lambda m: _below(m["documentation"], 0.6),
        [RoadmapItem("high", "Documentation", "Improve README.md",
                     "Add project overview, installation instructions, usage examples, and contribution guidelines")],
    ),
    (
        lambda m: _lacks(m["documentation"], "has_installation_section"),
        [RoadmapItem("high", "Documentation", "Add installation instructions",
                     "Include step-by-step setup guide for new developers")],
    ),
    (
        lambda m: _below(m["test_coverage"], 0.4),
        [
            RoadmapItem("high", "Testing", "Add unit tests",
                        "Implement unit tests for core functionality using Jest, Vitest, or pytest"),
            RoadmapItem("medium", "Testing", "Add integration tests",
                        "Test component interactions and API endpoints"),
        ],
    ),
    (
        lambda m: _lacks(m["test_coverage"], "has_e2e_dir", "has_e2e_framework"),
        [RoadmapItem("low", "Testing", "Consider E2E testing",
                     "Add end-to-end tests using Cypress or Playwright")],
    ),
    (
        lambda m: _lacks(m["code_quality"], "has_eslint"),
        [RoadmapItem("medium", "Code Quality", "Add ESLint configuration",
                     "Enforce consistent code style and catch potential bugs")],
    ),
    (
        lambda m: _lacks(m["code_quality"], "has_prettier"),
        [RoadmapItem("low", "Code Quality", "Add Prettier for code formatting",
                     "Ensure consistent code formatting across the project")],
    ),
    (
        lambda m: _below(m["project_structure"], 0.5),
        [RoadmapItem("medium", "Structure", "Reorganize folder structure",
                     "Create src/, components/, utils/ directories for better organization")],
    ),
    (
        lambda m: _lacks(m["project_structure"], "has_gitignore"),
        [RoadmapItem("high", "Structure", "Add .gitignore file",
                     "Prevent committing sensitive files and build artifacts")],
    ),
    (
        lambda m: _below(m["version_control"], 0.5),
        [RoadmapItem("medium", "Version Control", "Improve commit practices",
                     "Write descriptive commit messages and commit more frequently")],
    ),
    (
        lambda m: _lacks(m["version_control"], "uses_branches"),
        [RoadmapItem("medium", "Version Control", "Use feature branches",
                     "Create separate branches for features and merge via pull requests")],
    ),
    (
        lambda m: _lacks(m["real_world_relevance"], "has_ci"),
        [RoadmapItem("medium", "DevOps", "Add CI/CD pipeline",
                     "Set up GitHub Actions for automated testing and deployment")],
    ),
    (
        lambda m: _lacks(m["real_world_relevance"], "has_license"),
        [RoadmapItem("low", "Legal", "Add a license",
                     "Choose an appropriate open-source license (MIT, Apache 2.0, etc.)")],
    ),
]


def generate_roadmap(metrics, limit=MAX_ROADMAP_ITEMS):
    """
    Evaluate every rule, then sort, then cap.

    The steps must stay in this order: all rules fire first, the list is
    stable-sorted by priority (high, medium, low; ties keep rule order), and
    only then is it cut to `limit` items.
    """
    roadmap = []
    for condition, items in ROADMAP_RULES:
        if condition(metrics):
            roadmap.extend(items)

    # sorted() is stable, so rule order survives within a priority.
    roadmap = sorted(roadmap, key=lambda item: PRIORITY_ORDER[item.priority])
    return tuple(roadmap[:limit])
