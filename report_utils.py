# report_utils.py
#
# What this file is:
# This file generates a PDF report for one RepositoryAnalysis using ReportLab.
#
# How it works (high level):
# - Create the reports/ folder if it doesn't exist
# - Build a filename (with timestamp so it doesn't overwrite old files)
# - Use a ReportLab canvas and draw lines of text from top to bottom
# - Long paragraphs are wrapped with ReportLab's simpleSplit
# - If the page fills up, start a new page
# - Save the PDF and return the file path

import os
from datetime import datetime

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from models import METRIC_LABELS


# All PDFs will be saved here so the project stays organized.
REPORTS_DIR = "reports"

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 11


def ensure_reports_dir(reports_dir=REPORTS_DIR):
    """
    Create the reports/ folder if it doesn't exist.
    """
    os.makedirs(reports_dir, exist_ok=True)


def _safe_name(full_name):
    """owner/repo -> owner_repo so it can be used in a filename."""
    return (full_name or "repository").replace("/", "_")


def export_analysis_pdf(analysis, output_name=None, reports_dir=REPORTS_DIR):
    """
    Create a PDF report file and return the saved file path.

    Parameters:
      analysis (RepositoryAnalysis):
        Output of analyzer.analyze_repository().
      output_name (str | None):
        Optional filename override. If None, we generate a timestamped filename.
      reports_dir (str):
        Folder the PDF is written into.

    Returns:
      path (str)
    """
    ensure_reports_dir(reports_dir)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    info = analysis.repo_info

    if not output_name:
        output_name = f"{_safe_name(info.get('full_name'))}_gitgrade_{timestamp}.pdf"

    path = os.path.join(reports_dir, output_name)

    c = canvas.Canvas(path, pagesize=letter)
    width, height = letter  # width/height in points

    x = 50                 # left margin
    y = height - 50        # start near top of the page
    line = 14              # line spacing (points)
    text_width = width - 2 * x

    def write(text, bold=False, indent=0):
        """
        Write text to the PDF, wrapping it to the page width, and move the
        cursor downward. Starts a new page near the bottom margin.
        """
        nonlocal y
        font = FONT_BOLD if bold else FONT

        for chunk in simpleSplit(str(text), font, FONT_SIZE, text_width - indent) or [""]:
            if y < 60:
                c.showPage()
                y = height - 50
            c.setFont(font, FONT_SIZE)
            c.drawString(x + indent, y, chunk)
            y -= line

    # ----------------------------
    # Report Content
    # ----------------------------
    write("GitGrade Repository Report", bold=True)
    write(f"Repository: {info.get('full_name', '')}")
    write(f"URL: {info.get('url', '')}")
    write(f"Generated: {timestamp}")
    write("")

    write("Overall", bold=True)
    write(f"Score: {analysis.score}/100")
    write(f"Level: {analysis.level}")
    write(f"Badge: {analysis.badge}")
    write("")

    write("Summary", bold=True)
    write(analysis.summary)
    write("")

    write("Metrics", bold=True)
    for key, metric in analysis.metrics.items():
        write(f"{METRIC_LABELS.get(key, key)}: {metric.score}/{metric.max_score}")
        for detail in metric.details:
            write(f"- {detail}", indent=12)
    write("")

    write("Improvement Roadmap", bold=True)
    if analysis.roadmap:
        for i, item in enumerate(analysis.roadmap, start=1):
            write(f"{i}. [{item.priority.upper()}] {item.category}: {item.action}")
            write(item.description, indent=12)
    else:
        write("No recommendations. Nice work!")
    write("")

    write("Commit Activity (last 12 active weeks)", bold=True)
    if analysis.commit_activity:
        for point in analysis.commit_activity:
            write(f"Week of {point.week_start}: {point.commit_count} commits")
    else:
        write("No commit activity available.")

    c.save()
    return path
