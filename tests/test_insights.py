"""
test_insights.py

Tests for the summary paragraph and the improvement roadmap.

Metrics are built by hand here (MetricScore with explicit findings) so each
test controls exactly which rules fire.
"""

import unittest

from models import METRIC_MAX_SCORES, MetricScore, PRIORITY_ORDER
from insights import opening_line, generate_summary, generate_roadmap


ALL_FINDINGS = {
    "code_quality": {"has_eslint": True, "has_prettier": True},
    "project_structure": {"has_gitignore": True},
    "documentation": {"has_installation_section": True},
    "test_coverage": {"has_e2e_dir": True, "has_e2e_framework": False},
    "version_control": {"uses_branches": True},
    "real_world_relevance": {"has_ci": True, "has_license": True},
}


def make_metrics(scores=None, findings=None):
    """
    scores: {metric: score}, default = max score for every metric
    findings: {metric: {finding: bool}} merged over ALL_FINDINGS
    """
    scores = scores or {}
    findings = findings or {}
    metrics = {}
    for key, max_score in METRIC_MAX_SCORES.items():
        merged = dict(ALL_FINDINGS[key])
        merged.update(findings.get(key, {}))
        metrics[key] = MetricScore(
            score=scores.get(key, max_score),
            max_score=max_score,
            findings=merged,
        )
    return metrics


class TestSummary(unittest.TestCase):

    def test_opening_line_tiers(self):
        self.assertTrue(opening_line(80).startswith("Excellent"))
        self.assertTrue(opening_line(79).startswith("Good"))
        self.assertTrue(opening_line(60).startswith("Good"))
        self.assertTrue(opening_line(59).startswith("Developing"))
        self.assertTrue(opening_line(40).startswith("Developing"))
        self.assertTrue(opening_line(39).startswith("Early-stage"))

    def test_all_strengths_no_weaknesses(self):
        summary = generate_summary(make_metrics(), 100)
        self.assertEqual(
            summary,
            "Excellent repository with professional-grade structure and practices. "
            "Strong in code quality, project organization, documentation, version control practices.",
        )

    def test_strength_threshold_is_70_percent_of_own_max(self):
        # 14/20 = 70% qualifies, 13/20 does not
        metrics = make_metrics({
            "code_quality": 14,
            "project_structure": 13,
            "documentation": 10,
            "version_control": 10,  # 66% of 15
        })
        summary = generate_summary(metrics, 65)
        self.assertIn("Strong in code quality.", summary)
        self.assertNotIn("project organization", summary)

    def test_weaknesses_in_fixed_order(self):
        metrics = make_metrics({
            "code_quality": 5,
            "project_structure": 5,
            "test_coverage": 4,    # 26% of 15
            "documentation": 5,    # 25% of 20
            "version_control": 4,  # 26% of 15
        })
        summary = generate_summary(metrics, 30)
        self.assertEqual(
            summary,
            "Early-stage repository that needs significant enhancements. "
            "Needs improvement in test coverage, documentation, commit practices.",
        )

    def test_weakness_threshold_is_strict(self):
        # 6/20 is exactly 30%, which is not a weakness
        metrics = make_metrics({"documentation": 6})
        self.assertNotIn("Needs improvement", generate_summary(metrics, 50))


class TestRoadmap(unittest.TestCase):

    def test_nothing_to_improve(self):
        self.assertEqual(generate_roadmap(make_metrics()), ())

    def test_everything_fires_and_is_capped(self):
        metrics = make_metrics(
            scores={k: 0 for k in METRIC_MAX_SCORES},
            findings={k: {f: False for f in v} for k, v in ALL_FINDINGS.items()},
        )
        roadmap = generate_roadmap(metrics)

        self.assertEqual(len(roadmap), 10)
        self.assertEqual(
            [item.action for item in roadmap],
            [
                "Improve README.md",
                "Add installation instructions",
                "Add unit tests",
                "Add .gitignore file",
                "Add integration tests",
                "Add ESLint configuration",
                "Reorganize folder structure",
                "Improve commit practices",
                "Use feature branches",
                "Add CI/CD pipeline",
            ],
        )

    def test_uncapped_list_keeps_rule_order_within_priority(self):
        metrics = make_metrics(
            scores={k: 0 for k in METRIC_MAX_SCORES},
            findings={k: {f: False for f in v} for k, v in ALL_FINDINGS.items()},
        )
        roadmap = generate_roadmap(metrics, limit=20)

        self.assertEqual(len(roadmap), 13)
        self.assertEqual(
            [item.action for item in roadmap if item.priority == "low"],
            ["Consider E2E testing", "Add Prettier for code formatting", "Add a license"],
        )

    def test_priorities_non_decreasing(self):
        metrics = make_metrics(
            scores={"documentation": 5, "test_coverage": 2},
            findings={"code_quality": {"has_prettier": False}, "real_world_relevance": {"has_license": False}},
        )
        ranks = [PRIORITY_ORDER[item.priority] for item in generate_roadmap(metrics)]
        self.assertEqual(ranks, sorted(ranks))

    def test_low_test_coverage_adds_two_items(self):
        roadmap = generate_roadmap(make_metrics({"test_coverage": 5}))  # 33% < 40%
        self.assertEqual(
            [(i.priority, i.category, i.action) for i in roadmap],
            [("high", "Testing", "Add unit tests"), ("medium", "Testing", "Add integration tests")],
        )

    def test_e2e_either_finding_is_enough(self):
        metrics = make_metrics(findings={"test_coverage": {"has_e2e_dir": False, "has_e2e_framework": True}})
        self.assertEqual(generate_roadmap(metrics), ())

        metrics = make_metrics(findings={"test_coverage": {"has_e2e_dir": False, "has_e2e_framework": False}})
        self.assertEqual([i.action for i in generate_roadmap(metrics)], ["Consider E2E testing"])

    def test_score_thresholds(self):
        # documentation 12/20 = 60% is not below 60%
        self.assertEqual(generate_roadmap(make_metrics({"documentation": 12})), ())
        self.assertEqual(
            [i.action for i in generate_roadmap(make_metrics({"documentation": 11}))],
            ["Improve README.md"],
        )
        # project structure 10/20 = 50% is not below 50%
        self.assertEqual(generate_roadmap(make_metrics({"project_structure": 10})), ())
        self.assertEqual(
            [i.action for i in generate_roadmap(make_metrics({"version_control": 7}))],
            ["Improve commit practices"],
        )

    def test_single_findings(self):
        cases = [
            ("documentation", "has_installation_section", "high", "Add installation instructions"),
            ("code_quality", "has_eslint", "medium", "Add ESLint configuration"),
            ("code_quality", "has_prettier", "low", "Add Prettier for code formatting"),
            ("project_structure", "has_gitignore", "high", "Add .gitignore file"),
            ("version_control", "uses_branches", "medium", "Use feature branches"),
            ("real_world_relevance", "has_ci", "medium", "Add CI/CD pipeline"),
            ("real_world_relevance", "has_license", "low", "Add a license"),
        ]
        for metric, finding, priority, action in cases:
            roadmap = generate_roadmap(make_metrics(findings={metric: {finding: False}}))
            self.assertEqual(len(roadmap), 1, finding)
            self.assertEqual(roadmap[0].priority, priority)
            self.assertEqual(roadmap[0].action, action)


if __name__ == "__main__":
    unittest.main()
