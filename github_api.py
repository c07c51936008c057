# github_api.py
#
# Purpose:
# This file is the "data ingestion" layer of GitGrade.
# It pulls raw data for ONE repository from the GitHub REST API and converts
# it into a models.RawRepositoryData for the scoring engine.
#
# Main features in this file:
# 1) parse_github_url(): "https://github.com/owner/repo" or "owner/repo"
# 2) Token support (passed in explicitly, higher GitHub rate limits)
# 3) A simple JSON file cache (so I don't spam the API while testing)
# 4) fetch_repository_data(): repo record, languages, last 100 commits,
#    root listing, branches and README text
#
# Error convention:
# Every fetch returns (data, error_string). error_string is a user-facing
# message such as "Repository not found" and data is None when it is set.

import os
import re
import time
import json
import hashlib
import requests

from models import (
    RepoRecord,
    DirEntry,
    CommitEntry,
    RawRepositoryData,
    ENTRY_FILE,
    ENTRY_DIRECTORY,
)

# ----------------------------
# Config
# ----------------------------
API_BASE = "https://api.github.com"

JSON_ACCEPT = "application/vnd.github+json"
RAW_ACCEPT = "application/vnd.github.raw"
USER_AGENT = "GitGrade-Analyzer"

# Default cache directory for API responses.
CACHE_DIR_DEFAULT = "cache"

# Returned as the error string when GitHub answers 409 (repository has no commits).
EMPTY_REPOSITORY = "Repository is empty (409)."

URL_PATTERNS = [
    re.compile(r"github\.com/([^/\s]+)/([^/\s?#]+)"),
    re.compile(r"^([^/\s]+)/([^/\s]+)$"),
]


def token_from_env():
    """
    Read the GitHub token from the environment.
    Front ends call this once and pass the value into every fetch.
    """
    token = os.getenv("GITHUB_TOKEN")
    return token.strip() if token and token.strip() else None


def parse_github_url(text):
    """
    Extract (owner, repo) from a GitHub URL or an "owner/repo" string.

    Returns None if nothing matches. A trailing ".git" is removed.
    """
    text = (text or "").strip()
    if text == "":
        return None

    for pattern in URL_PATTERNS:
        match = pattern.search(text)
        if match:
            owner = match.group(1)
            repo = re.sub(r"\.git$", "", match.group(2))
            if owner and repo:
                return owner, repo
    return None


def _headers(token=None, accept=JSON_ACCEPT):
    """
    Headers sent with every GitHub request.
    If I have a token, attach it as a Bearer token.
    """
    headers = {"Accept": accept, "User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


# ----------------------------
# Simple file cache helpers
# ----------------------------
def _ensure_dir(path):
    """
    Make sure a folder exists before writing cache files into it.
    exist_ok=True prevents crashing if it already exists.
    """
    os.makedirs(path, exist_ok=True)


def _cache_key(prefix, url, params):
    """
    Build a stable cache key from:
      - request type ("GET" or "RAW")
      - URL
      - params (sorted so ordering does not change the hash)
    Then hash it so filenames are short and safe.
    """
    raw = prefix + "|" + url + "|" + json.dumps(params or {}, sort_keys=True)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def _cache_path(cache_dir, key):
    return os.path.join(cache_dir, f"{key}.json")


def _cache_get(cache_dir, key, cache_minutes):
    """
    Try to load cached JSON from disk.
    Returns:
      - Python object if found and not expired
      - None if missing or expired or unreadable
    """
    path = _cache_path(cache_dir, key)

    if not os.path.exists(path):
        return None

    # Age of the cache file from its modification time.
    age_seconds = time.time() - os.path.getmtime(path)
    if age_seconds > cache_minutes * 60:
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None


def _cache_set(cache_dir, key, obj):
    """
    Save a Python object to disk as JSON.
    A failed write only means the next call is a cache miss.
    """
    try:
        _ensure_dir(cache_dir)
        with open(_cache_path(cache_dir, key), "w", encoding="utf-8") as f:
            json.dump(obj, f)
    except (OSError, TypeError):
        pass


def _get(url, params=None, token=None, raw=False, timeout=20,
         use_cache=False, cache_minutes=30, cache_dir=CACHE_DIR_DEFAULT):
    """
    Wrapper around requests.get() with optional caching.

    raw=True asks GitHub for the raw file body (used for the README) and
    returns it as text instead of parsed JSON.

    Returns:
      (data, error_string)
    """
    # 1) Cache check (if enabled)
    key = None
    if use_cache:
        key = _cache_key("RAW" if raw else "GET", url, params)
        hit = _cache_get(cache_dir, key, cache_minutes)
        if hit is not None:
            return hit, None

    # 2) Make the HTTP request
    try:
        resp = requests.get(
            url,
            headers=_headers(token, RAW_ACCEPT if raw else JSON_ACCEPT),
            params=params,
            timeout=timeout,
        )
    except requests.RequestException as e:
        # Timeouts, DNS issues, no internet, etc.
        return None, f"Network error calling GitHub API: {e}"

    # 3) Map HTTP errors to messages a user can act on
    if resp.status_code == 404:
        return None, "Repository not found. Please check the URL and ensure it's a public repository."
    if resp.status_code == 401:
        return None, "Unauthorized (401). Check your GITHUB_TOKEN."
    if resp.status_code == 403:
        # 403 commonly means rate limiting. GitHub often includes a message in JSON.
        msg = ""
        try:
            msg = resp.json().get("message", "")
        except (ValueError, AttributeError):
            msg = ""
        return None, f"API rate limit exceeded. Please try again later or add a GitHub token. {msg}".strip()
    if resp.status_code == 409:
        return None, EMPTY_REPOSITORY
    if resp.status_code != 200:
        return None, f"GitHub API error: {resp.status_code}"

    # 4) Parse the body
    if raw:
        data = resp.text
    else:
        try:
            data = resp.json()
        except ValueError:
            return None, "GitHub response was not valid JSON."

    # 5) Save to cache (if enabled)
    if use_cache:
        _cache_set(cache_dir, key, data)

    return data, None


# ----------------------------
# Payload -> model conversion
# ----------------------------
def _to_repo_record(data):
    license_obj = data.get("license")
    license_name = license_obj.get("name") if isinstance(license_obj, dict) else None

    return RepoRecord(
        name=data.get("name", ""),
        full_name=data.get("full_name", ""),
        description=data.get("description"),
        url=data.get("html_url", ""),
        stars=int(data.get("stargazers_count") or 0),
        forks=int(data.get("forks_count") or 0),
        watchers=int(data.get("watchers_count") or 0),
        language=data.get("language"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        default_branch=data.get("default_branch") or "main",
        open_issues=int(data.get("open_issues_count") or 0),
        license=license_name,
        topics=tuple(data.get("topics") or ()),
    )


def _to_entry(item):
    # Symlinks and submodules are reported as files.
    kind = ENTRY_DIRECTORY if item.get("type") == "dir" else ENTRY_FILE
    name = item.get("name", "")
    return DirEntry(name=name, type=kind, path=item.get("path") or name)


def _to_commit(item):
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    return CommitEntry(message=commit.get("message") or "", authored_at=author.get("date"))


def _languages(data):
    """Keep only numeric byte counts."""
    out = {}
    for lang, count in (data or {}).items():
        if isinstance(count, (int, float)):
            out[lang] = int(count)
    return out


# ----------------------------
# Core API function
# ----------------------------
def fetch_repository_data(owner, repo, token=None, use_cache=False, cache_minutes=30,
                          cache_dir=CACHE_DIR_DEFAULT, timeout=20):
    """
    Fetch everything the scoring engine needs for owner/repo.

    Returns:
      (RawRepositoryData, None) on success
      (None, error_string) on the first hard failure

    Which failures are "hard":
    - repo metadata, languages, commits and branches must load
    - an empty repository (409 on /commits) just means zero commits
    - a failed root listing means an empty listing
    - a missing README means readme_text=None
    """
    owner = (owner or "").strip()
    repo = (repo or "").strip()
    if owner == "" or repo == "":
        return None, "Invalid GitHub repository URL"

    base = f"{API_BASE}/repos/{owner}/{repo}"

    def get(path, params=None, raw=False):
        return _get(
            base + path,
            params=params,
            token=token,
            raw=raw,
            timeout=timeout,
            use_cache=use_cache,
            cache_minutes=cache_minutes,
            cache_dir=cache_dir,
        )

    # 1) Repo metadata
    repo_data, err = get("")
    if err:
        return None, err
    if not isinstance(repo_data, dict):
        return None, "Unexpected response format for repository."

    # 2) Languages {name: bytes}
    lang_data, err = get("/languages")
    if err:
        return None, err

    # 3) Most recent commits (one page of 100)
    commit_data, err = get("/commits", params={"per_page": 100})
    if err == EMPTY_REPOSITORY:
        commit_data, err = [], None
    if err:
        return None, err

    # 4) Root directory listing (best effort)
    contents_data, contents_err = get("/contents/")
    if contents_err or not isinstance(contents_data, list):
        contents_data = []

    # 5) Branches
    branch_data, err = get("/branches", params={"per_page": 100})
    if err:
        return None, err

    # 6) README text (best effort)
    readme_text, readme_err = get("/readme", raw=True)
    if readme_err or not isinstance(readme_text, str):
        readme_text = None

    raw = RawRepositoryData(
        repo=_to_repo_record(repo_data),
        language_bytes=_languages(lang_data if isinstance(lang_data, dict) else {}),
        commits=tuple(_to_commit(c) for c in (commit_data or [])[:100] if isinstance(c, dict)),
        entries=tuple(_to_entry(e) for e in contents_data if isinstance(e, dict)),
        branches=tuple(b.get("name", "") for b in (branch_data or []) if isinstance(b, dict)),
        readme_text=readme_text,
    )
    return raw, None
