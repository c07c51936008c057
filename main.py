# main.py
#
# What this file is:
# The command-line (terminal) version of GitGrade. It uses a simple menu and
# prints results to the console instead of the Streamlit UI in app.py.
#
# Big picture flow (Option 1):
#   parse URL -> GitHub API -> scoring engine -> print -> exports (TXT/JSON/PDF)

from analyzer import analyze_url
from github_api import token_from_env
from models import METRIC_LABELS
from file_utils import save_analysis_report, save_analysis_json, load_repo_urls
from report_utils import export_analysis_pdf


def print_menu():
    print("\nGitGrade - Repository Analyzer")
    print("----------------------------")
    print("1. Analyze a repository (print + export)")
    print("2. Analyze repositories from file (score only)")
    print("q. Quit")


def print_analysis(analysis):
    """
    Print the analysis in a readable format.
    """
    info = analysis.repo_info

    print(f"\n{info.get('full_name')}  ({info.get('url')})")
    print("----------------------------")
    print(f"Score : {analysis.score}/100")
    print(f"Level : {analysis.level}")
    print(f"Badge : {analysis.badge}")
    print(f"Stars : {info.get('stars')} | Forks: {info.get('forks')} | Language: {info.get('language')}")

    print("\nSUMMARY")
    print("----------------------------")
    print(analysis.summary)

    print("\nMETRICS")
    print("----------------------------")
    for key, metric in analysis.metrics.items():
        print(f"{METRIC_LABELS.get(key, key):22} : {metric.score}/{metric.max_score}")
        for detail in metric.details:
            print(f"    - {detail}")

    print("\nROADMAP")
    print("----------------------------")
    if not analysis.roadmap:
        print("No recommendations.")
    for i, item in enumerate(analysis.roadmap, start=1):
        print(f"{i}. [{item.priority}] {item.category}: {item.action}")
        print(f"   {item.description}")

    print("\nCOMMIT ACTIVITY")
    print("----------------------------")
    if not analysis.commit_activity:
        print("No commits.")
    for point in analysis.commit_activity:
        print(f"{point.week_start} | {'#' * min(point.commit_count, 50)} {point.commit_count}")


def analyze_one(token=None):
    """
    Full pipeline for one repository:
      API -> scoring -> print -> exports.
    """
    url = input("Enter GitHub repository URL (or owner/repo): ").strip()

    if url == "":
        print("Error: repository URL cannot be empty.")
        return

    analysis, err = analyze_url(url, token=token, use_cache=True)
    if err:
        print(f"Error: {err}")
        return

    print_analysis(analysis)

    txt_path = save_analysis_report(analysis)
    json_path = save_analysis_json(analysis)
    pdf_path = export_analysis_pdf(analysis)

    print("\nEXPORTS")
    print("----------------------------")
    print("Report TXT :", txt_path)
    print("Analysis JSON:", json_path)
    print("Report PDF :", pdf_path)


def analyze_file(token=None, path="repos.txt"):
    """
    Analyze every repository listed in repos.txt (score-only mode).
    """
    urls = load_repo_urls(path)
    if not urls:
        print(f"No repositories found. Create {path} with one URL per line.")
        return

    for url in urls:
        analysis, err = analyze_url(url, token=token, use_cache=True)
        if err:
            print(f"{url:40} | error: {err}")
            continue
        print(f"{url:40} | {analysis.score:3}/100 | {analysis.level:12} | {analysis.badge}")


def main():
    """
    Sentinel-controlled main menu loop: keep going until the user enters "q".
    """
    token = token_from_env()
    if token is None:
        print("Note: GITHUB_TOKEN is not set, so GitHub allows only 60 requests/hour.")

    choice = ""
    while choice != "q":
        print_menu()
        choice = input("Choice: ").strip().lower()

        if choice == "1":
            analyze_one(token)
        elif choice == "2":
            analyze_file(token)
        elif choice == "q":
            print("Goodbye!")
        else:
            print("Invalid option. Try again.")


if __name__ == "__main__":
    main()
