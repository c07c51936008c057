# app.py
#
# GitGrade (Streamlit UI)
#
# Purpose:
# This file is the Streamlit front-end. It takes a repository URL, runs the
# analysis (analyzer.analyze_url) and shows the score, summary, metrics,
# roadmap, commit activity and file structure.
#
# Design choice:
# UI code lives here. Fetching, scoring and exporting live in their own
# modules and know nothing about Streamlit.

import os                     # Used for file paths and opening generated files (like PDFs)
import json                   # Used to offer the analysis as a JSON download
import base64                 # Used to embed an SVG logo into the page as a base64 data URI
import streamlit as st        # Streamlit is the UI framework for the project
import pandas as pd           # Pandas builds the chart/table data frames

from analyzer import analyze_url
from analytics import language_shares
from github_api import token_from_env
from models import METRIC_LABELS
from report_utils import export_analysis_pdf


# ----------------------------
# Page Config
# ----------------------------
st.set_page_config(page_title="GitGrade", layout="wide")

# How many root entries the Files tab shows before "show all".
FILE_PREVIEW_LIMIT = 20


# ----------------------------
# Logo (inline SVG)
# ----------------------------
def gitgrade_logo_svg(accent="#0EA5E9", accent2="#22C55E"):
    return f"""
<svg width="42" height="42" viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg" role="img" aria-label="GitGrade logo">
  <defs>
    <linearGradient id="g" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0" stop-color="{accent}"/>
      <stop offset="1" stop-color="{accent2}"/>
    </linearGradient>
  </defs>
  <rect x="0" y="0" width="64" height="64" rx="16" fill="#FFFFFF"/>
  <circle cx="32" cy="26" r="14" fill="none" stroke="url(#g)" stroke-width="6"/>
  <path d="M24 38 L20 56 L32 49 L44 56 L40 38" fill="none" stroke="{accent}" stroke-width="4" stroke-linejoin="round"/>
  <path d="M32 19 L34 24 L39 24 L35 27 L37 32 L32 29 L27 32 L29 27 L25 24 L30 24 Z" fill="{accent2}"/>
</svg>
""".strip()


# Streamlit needs images as URLs/paths.
# This helper converts SVG text into a "data URI" that Streamlit can render.
def svg_to_data_uri(svg: str) -> str:
    b64 = base64.b64encode(svg.encode("utf-8")).decode("utf-8")
    return f"data:image/svg+xml;base64,{b64}"


# ----------------------------
# Tooltip text (single source of truth)
# ----------------------------
TOOLTIPS = {
    "Score": "Sum of the six metric scores scaled to 0–100.",
    "Level": "Advanced at 75+, Intermediate at 45+, otherwise Beginner.",
    "Badge": "Gold at 80+, Silver at 50+, otherwise Bronze.",
    "code_quality": "Lint/format configs at the repo root plus language mix.",
    "project_structure": "Source, component, config and utility folders, package manifest, .gitignore.",
    "documentation": "README presence, length and sections, docs/ folder, changelog, contributing guide.",
    "test_coverage": "Test folders, E2E folders and test framework configs.",
    "version_control": "Commit volume, message quality, branches and Conventional Commits.",
    "real_world_relevance": "Stars, CI/CD, Docker/deploy configs, description, topics and license.",
}

BADGE_COLORS = {"Gold": "#EAB308", "Silver": "#94A3B8", "Bronze": "#B45309"}
PRIORITY_ICONS = {"high": "🔴", "medium": "🟠", "low": "🟢"}


# ----------------------------
# UI helpers
# ----------------------------
def score_color(score):
    """
    Convert a score (0–100) into a color used across the UI.
    """
    try:
        s = float(score)
    except (TypeError, ValueError):
        return "#94A3B8"  # gray for invalid/unknown values

    if s >= 80:
        return "#22C55E"  # green
    if s >= 60:
        return "#0EA5E9"  # blue
    if s >= 40:
        return "#F59E0B"  # orange
    return "#EF4444"      # red


def render_badge(label, value, color):
    """
    Render a small pill with a colored dot and a label/value.
    """
    safe_val = value if value is not None else "—"

    return f"""
    <span style="
        display:inline-flex;
        align-items:center;
        gap:8px;
        padding:7px 12px;
        border-radius:999px;
        border:1px solid #E2E8F0;
        background:#FFFFFF;
        font-weight:800;
        color:#0F172A;
        font-size: 13px;">
        <span style="width:10px;height:10px;border-radius:999px;background:{color};"></span>
        <span style="color:#334155; font-weight:800;">{label}:</span>
        <span>{safe_val}</span>
    </span>
    """


def render_score_bar(label, score, max_score):
    """
    Horizontal bar for one metric. The bar width is the metric's share of
    its own max score.
    """
    pct = int(round(100 * score / max_score)) if max_score else 0
    pct = max(0, min(100, pct))
    bar_color = score_color(pct)

    return f"""
    <div style="margin: 10px 0;">
        <div style="display:flex; justify-content:space-between; align-items:center;">
            <div style="font-weight:900; color:#0F172A;">{label}</div>
            <div style="font-weight:900; color:#0F172A;">{score}/{max_score}</div>
        </div>
        <div style="
            width:100%;
            height:12px;
            background:#F1F5F9;
            border-radius:999px;
            overflow:hidden;
            border:1px solid #E2E8F0;
        ">
            <div style="
                height:12px;
                width:{pct}%;
                background:{bar_color};
                border-radius:999px;
            "></div>
        </div>
    </div>
    """


# ----------------------------
# Minimal CSS
# ----------------------------
st.markdown(
    """
<style>
[data-testid="stHeader"]{ background: transparent !important; height: 0px !important; border-bottom: none !important; }
[data-testid="stToolbar"]{ visibility: hidden !important; height: 0px !important; }
[data-testid="stDecoration"]{ display: none !important; }
header{ visibility: hidden !important; height: 0px !important; }
.block-container{ padding-top: 1.2rem !important; }
</style>
""",
    unsafe_allow_html=True,
)


# ----------------------------
# Header
# ----------------------------
logo_uri = svg_to_data_uri(gitgrade_logo_svg())

st.markdown(
    f"""
<div style="display:flex; align-items:center; gap:12px; margin-bottom:6px;">
    <img src="{logo_uri}" width="42" height="42" />
    <div>
      <h1 style="margin:0; padding:0;">GitGrade</h1>
      <div style="font-weight:800; margin-top:2px;">
        Repository quality, graded.
      </div>
    </div>
</div>
<div style="height:5px;width:100%;background: linear-gradient(90deg, #0EA5E9, #22C55E);
border-radius:999px;margin-bottom:18px;"></div>
""",
    unsafe_allow_html=True,
)


# ----------------------------
# Session state
# ----------------------------
# Streamlit re-runs the script on every interaction; the last analysis is
# kept in session state so switching tabs does not refetch.
if "analysis" not in st.session_state:
    st.session_state["analysis"] = None
if "repo_url" not in st.session_state:
    st.session_state["repo_url"] = ""
if "pdf_path" not in st.session_state:
    st.session_state["pdf_path"] = None


# ----------------------------
# Sidebar controls
# ----------------------------
st.sidebar.header("Controls")

repo_url_input = st.sidebar.text_input(
    "GitHub Repository",
    value=st.session_state["repo_url"],
    placeholder="e.g., https://github.com/vercel/next.js or owner/repo",
).strip()

use_cache = st.sidebar.checkbox("Use GitHub cache", value=True)
cache_minutes = st.sidebar.number_input("GitHub cache minutes", 1, 240, 30)

st.sidebar.subheader("GitHub Token")
token_input = st.sidebar.text_input(
    "Token (optional)",
    type="password",
    help="Overrides GITHUB_TOKEN. Raises the rate limit from 60 to 5000 requests/hour.",
).strip()

analyze_btn = st.sidebar.button("Analyze Repository", type="primary")


# ----------------------------
# Analyze
# ----------------------------
if analyze_btn:
    if repo_url_input == "":
        st.error("Enter a repository URL.")
        st.stop()

    st.session_state["repo_url"] = repo_url_input

    with st.spinner("Fetching repository data and scoring..."):
        analysis, err = analyze_url(
            repo_url_input,
            token=token_input or token_from_env(),
            use_cache=use_cache,
            cache_minutes=int(cache_minutes),
            cache_dir="cache",
        )

    if err:
        st.error(err)
        st.stop()

    st.session_state["analysis"] = analysis
    st.session_state["pdf_path"] = None


analysis = st.session_state["analysis"]

tabs = st.tabs(["Overview", "Metrics", "Roadmap", "Activity", "Files"])

if analysis is None:
    with tabs[0]:
        st.info("Enter a repository and click Analyze Repository to begin.")
    st.stop()

info = analysis.repo_info


# ----------------------------
# Overview
# ----------------------------
with tabs[0]:
    st.header(info.get("full_name", ""))
    if info.get("description"):
        st.caption(info["description"])

    c1, c2, c3 = st.columns(3)
    c1.metric("Score", f"{analysis.score}/100", help=TOOLTIPS["Score"])
    c2.metric("Level", analysis.level, help=TOOLTIPS["Level"])
    c3.metric("Badge", analysis.badge, help=TOOLTIPS["Badge"])

    st.markdown(
        render_badge("Badge", analysis.badge, BADGE_COLORS.get(analysis.badge, "#94A3B8"))
        + " "
        + render_badge("Score", analysis.score, score_color(analysis.score)),
        unsafe_allow_html=True,
    )

    st.subheader("Summary")
    st.write(analysis.summary)

    st.divider()
    st.subheader("Repository")
    r1, r2, r3, r4 = st.columns(4)
    r1.metric("Stars", info.get("stars", 0))
    r2.metric("Forks", info.get("forks", 0))
    r3.metric("Watchers", info.get("watchers", 0))
    r4.metric("Open Issues", info.get("open_issues", 0))

    st.write(f"**Primary language:** {info.get('language') or '—'}")
    st.write(f"**License:** {info.get('license') or 'None'}")
    st.write(f"**Default branch:** {info.get('default_branch')}")
    if info.get("topics"):
        st.write("**Topics:** " + ", ".join(info["topics"]))
    st.write(f"[Open on GitHub]({info.get('url')})")

    shares = language_shares(info.get("languages"))
    if shares:
        st.subheader("Languages")
        lang_df = pd.DataFrame(shares).set_index("language")
        st.bar_chart(lang_df["percent"])

    st.divider()
    st.subheader("Export")

    if st.button("Export PDF"):
        st.session_state["pdf_path"] = export_analysis_pdf(analysis)
        st.success("PDF created.")

    pdf_path = st.session_state["pdf_path"]
    if pdf_path and os.path.exists(pdf_path):
        with open(pdf_path, "rb") as f:
            st.download_button(
                "Download PDF",
                data=f.read(),
                file_name=os.path.basename(pdf_path),
                mime="application/pdf",
            )

    st.download_button(
        "Download JSON",
        data=json.dumps(analysis.to_dict(), indent=2),
        file_name=f"{info.get('full_name', 'repository').replace('/', '_')}_analysis.json",
        mime="application/json",
    )


# ----------------------------
# Metrics
# ----------------------------
with tabs[1]:
    st.header("Metrics")

    left, right = st.columns(2)
    for i, (key, metric) in enumerate(analysis.metrics.items()):
        col = left if i % 2 == 0 else right
        with col:
            st.markdown(
                render_score_bar(METRIC_LABELS.get(key, key), metric.score, metric.max_score),
                unsafe_allow_html=True,
            )
            st.caption(TOOLTIPS.get(key, ""))
            with st.expander("Evidence"):
                for detail in metric.details:
                    st.write(f"- {detail}")

    metrics_df = pd.DataFrame(
        [
            {
                "Metric": METRIC_LABELS.get(k, k),
                "Score": m.score,
                "Max": m.max_score,
                "Percent": round(100 * m.ratio, 1),
            }
            for k, m in analysis.metrics.items()
        ]
    )
    st.dataframe(metrics_df, use_container_width=True, hide_index=True)


# ----------------------------
# Roadmap
# ----------------------------
with tabs[2]:
    st.header("Improvement Roadmap")

    if not analysis.roadmap:
        st.success("No recommendations. This repository covers every check.")
    else:
        for priority in ("high", "medium", "low"):
            items = [item for item in analysis.roadmap if item.priority == priority]
            if not items:
                continue
            st.subheader(f"{PRIORITY_ICONS[priority]} {priority.title()} priority")
            for item in items:
                st.write(f"**{item.action}** · _{item.category}_")
                st.caption(item.description)


# ----------------------------
# Activity
# ----------------------------
with tabs[3]:
    st.header("Commit Activity")
    st.caption("Commits per week over the most recent 12 weeks that had commits (last 100 commits).")

    if analysis.commit_activity:
        activity_df = pd.DataFrame(
            [{"week": p.week_start, "commits": p.commit_count} for p in analysis.commit_activity]
        ).set_index("week")
        st.bar_chart(activity_df)
    else:
        st.info("No commit activity available.")


# ----------------------------
# Files
# ----------------------------
with tabs[4]:
    st.header("File Structure (root)")

    if not analysis.file_structure:
        st.info("No files found at the repository root.")
    else:
        show_all = st.checkbox(f"Show all {len(analysis.file_structure)} entries", value=False)
        nodes = analysis.file_structure if show_all else analysis.file_structure[:FILE_PREVIEW_LIMIT]

        files_df = pd.DataFrame(
            [
                {"": "📁" if n.type == "directory" else "📄", "Name": n.name, "Type": n.type, "Path": n.path}
                for n in nodes
            ]
        )
        st.dataframe(files_df, use_container_width=True, hide_index=True)
