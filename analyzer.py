# analyzer.py
#
# Purpose:
# Ties the pieces together:
#   github_api (fetch) -> scoring (metrics + aggregate) -> insights (summary,
#   roadmap) -> analytics (commit activity, file tree) -> RepositoryAnalysis
#
# analyze_repository() is the scoring engine entry point. It never does
# network I/O and never fails on well-formed RawRepositoryData.
# analyze_url() is what the front ends call: it parses the URL, fetches the
# data and returns (analysis, error_string) like the functions in github_api.

from models import RepositoryAnalysis
from scoring import (
    analyze_code_quality,
    analyze_project_structure,
    analyze_documentation,
    analyze_test_coverage,
    analyze_version_control,
    analyze_real_world_relevance,
    normalized_score,
    score_level,
    score_badge,
)
from insights import generate_summary, generate_roadmap
from analytics import commit_activity, file_structure, build_repo_info
from github_api import parse_github_url, fetch_repository_data


def compute_metrics(raw):
    """
    Run the six analyzers. They are independent of each other; the dict
    order matches models.METRIC_MAX_SCORES.
    """
    return {
        "code_quality": analyze_code_quality(raw.entries, raw.language_bytes),
        "project_structure": analyze_project_structure(raw.entries),
        "documentation": analyze_documentation(raw.entries, raw.readme_text),
        "test_coverage": analyze_test_coverage(raw.entries),
        "version_control": analyze_version_control(raw.commits, raw.branches),
        "real_world_relevance": analyze_real_world_relevance(raw.repo, raw.entries, raw.readme_text),
    }


def analyze_repository(raw):
    """
    Build the full RepositoryAnalysis for one repository.

    Input:
      raw (RawRepositoryData) - already fetched and validated

    Output:
      RepositoryAnalysis. Running this twice on the same input gives equal
      results.
    """
    metrics = compute_metrics(raw)
    score = normalized_score(metrics)

    return RepositoryAnalysis(
        repo_info=build_repo_info(raw.repo, raw.language_bytes),
        metrics=metrics,
        score=score,
        level=score_level(score),
        badge=score_badge(score),
        summary=generate_summary(metrics, score),
        roadmap=generate_roadmap(metrics),
        commit_activity=commit_activity(raw.commits),
        file_structure=file_structure(raw.entries),
    )


def analyze_url(url, token=None, use_cache=False, cache_minutes=30, cache_dir="cache"):
    """
    Parse a repository URL, fetch its data and analyze it.

    Returns:
      (analysis, None) on success
      (None, error_string) when the URL is invalid or GitHub fails
    """
    parsed = parse_github_url(url)
    if parsed is None:
        return None, "Invalid GitHub repository URL"

    owner, repo = parsed
    raw, err = fetch_repository_data(
        owner,
        repo,
        token=token,
        use_cache=use_cache,
        cache_minutes=cache_minutes,
        cache_dir=cache_dir,
    )
    if err:
        return None, err

    return analyze_repository(raw), None
