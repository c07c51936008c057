# file_utils.py
#
# Purpose:
# This file handles saving an analysis to disk in two plain formats:
#   1) TXT report (easy for a human to read)
#   2) JSON (easy for code/tools or the web front end to read later)
# It also loads repository URLs from a text file for batch mode.

import os                      # File paths + existence checks
import json                    # Write JSON files (built-in)
from datetime import datetime  # Timestamp for filenames

from models import METRIC_LABELS

REPORTS_DIR = "reports"        # Folder to store all outputs


def ensure_reports_dir(reports_dir=REPORTS_DIR):
    os.makedirs(reports_dir, exist_ok=True)


def _timestamp():
    """
    Return a timestamp string for filenames, e.g. 20260228_014512.
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _base_name(analysis):
    return (analysis.repo_info.get("full_name") or "repository").replace("/", "_")


def save_analysis_report(analysis, reports_dir=REPORTS_DIR):
    """
    Save a human-readable TXT report.
    Returns the saved file path.
    """
    ensure_reports_dir(reports_dir)

    ts = _timestamp()
    path = os.path.join(reports_dir, f"{_base_name(analysis)}_report_{ts}.txt")

    with open(path, "w", encoding="utf-8") as f:
        f.write("GitGrade Repository Report\n")
        f.write(f"Repository: {analysis.repo_info.get('full_name', '')}\n")
        f.write(f"Generated: {ts}\n\n")

        f.write(f"SCORE: {analysis.score}/100 | {analysis.level} | {analysis.badge}\n\n")
        f.write(f"SUMMARY\n{analysis.summary}\n")

        f.write("\nMETRICS\n")
        for key, metric in analysis.metrics.items():
            f.write(f"- {METRIC_LABELS.get(key, key)}: {metric.score}/{metric.max_score}\n")
            for detail in metric.details:
                f.write(f"    * {detail}\n")

        f.write("\nROADMAP\n")
        for item in analysis.roadmap:
            f.write(f"- [{item.priority}] {item.category}: {item.action} - {item.description}\n")

    return path


def save_analysis_json(analysis, reports_dir=REPORTS_DIR):
    """
    Save the whole analysis as JSON.
    Returns the saved file path.
    """
    ensure_reports_dir(reports_dir)

    ts = _timestamp()
    path = os.path.join(reports_dir, f"{_base_name(analysis)}_analysis_{ts}.json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(analysis.to_dict(), f, indent=2)

    return path


def load_repo_urls(path="repos.txt"):
    """
    Load repository URLs (or owner/repo strings) from a text file, one per line.
    Blank lines and lines starting with "#" are ignored.
    """
    if not os.path.exists(path):
        print(f"Error: file not found: {path}")
        return []

    urls = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            u = line.strip()
            if u != "" and not u.startswith("#"):
                urls.append(u)

    return urls
