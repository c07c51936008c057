"""
test_github_api.py

Tests for the GitHub data layer. requests.get is patched everywhere, so
these tests never touch the network.

A fake GitHub is described as {url_suffix: (status_code, body)} and routed by
the request URL.
"""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from github_api import (
    API_BASE,
    parse_github_url,
    token_from_env,
    fetch_repository_data,
    _get,
)


REPO_JSON = {
    "name": "demo",
    "full_name": "octo/demo",
    "description": "Demo repository for the analyzer tests",
    "html_url": "https://github.com/octo/demo",
    "stargazers_count": 42,
    "forks_count": 3,
    "watchers_count": 42,
    "language": "Python",
    "created_at": "2023-01-01T00:00:00Z",
    "updated_at": "2024-01-01T00:00:00Z",
    "default_branch": "main",
    "open_issues_count": 2,
    "license": {"key": "mit", "name": "MIT License"},
    "topics": ["python", "cli"],
}

COMMITS_JSON = [
    {"sha": "b", "commit": {"message": "feat: add thing", "author": {"date": "2024-01-10T10:00:00Z"}}},
    {"sha": "a", "commit": {"message": "Initial commit", "author": {"date": "2024-01-02T10:00:00Z"}}},
]

CONTENTS_JSON = [
    {"name": "src", "type": "dir", "path": "src"},
    {"name": "README.md", "type": "file", "path": "README.md"},
    {"name": "vendor", "type": "submodule", "path": "vendor"},
]


def fake_response(status, body):
    resp = MagicMock()
    resp.status_code = status
    if isinstance(body, str):
        resp.text = body
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = body
    return resp


def fake_github(overrides=None):
    """
    Build a requests.get replacement for octo/demo.
    overrides replaces individual routes (by suffix after /repos/octo/demo).
    """
    routes = {
        "": (200, REPO_JSON),
        "/languages": (200, {"Python": 9000, "Shell": 100}),
        "/commits": (200, COMMITS_JSON),
        "/contents/": (200, CONTENTS_JSON),
        "/branches": (200, [{"name": "main"}, {"name": "dev"}]),
        "/readme": (200, "# Demo\n\nInstall with pip."),
    }
    routes.update(overrides or {})
    base = f"{API_BASE}/repos/octo/demo"

    def get(url, headers=None, params=None, timeout=None):
        suffix = url[len(base):]
        status, body = routes[suffix]
        return fake_response(status, body)

    return get


class TestParseUrl(unittest.TestCase):

    def test_formats(self):
        self.assertEqual(parse_github_url("https://github.com/vercel/next.js"), ("vercel", "next.js"))
        self.assertEqual(parse_github_url("https://github.com/octo/demo.git"), ("octo", "demo"))
        self.assertEqual(parse_github_url("github.com/octo/demo/tree/main/src"), ("octo", "demo"))
        self.assertEqual(parse_github_url("  octo/demo  "), ("octo", "demo"))

    def test_invalid(self):
        self.assertIsNone(parse_github_url(""))
        self.assertIsNone(parse_github_url(None))
        self.assertIsNone(parse_github_url("octo"))
        self.assertIsNone(parse_github_url("https://github.com/octo"))


class TestTokenFromEnv(unittest.TestCase):

    def test_token(self):
        with patch.dict(os.environ, {"GITHUB_TOKEN": " abc "}):
            self.assertEqual(token_from_env(), "abc")
        with patch.dict(os.environ, {"GITHUB_TOKEN": ""}):
            self.assertIsNone(token_from_env())


class TestGet(unittest.TestCase):

    def test_error_mapping(self):
        cases = [
            (404, "not found"),
            (401, "Unauthorized"),
            (403, "rate limit"),
            (500, "GitHub API error: 500"),
        ]
        for status, fragment in cases:
            with patch("github_api.requests.get", return_value=fake_response(status, {"message": "nope"})):
                data, err = _get("https://api.github.com/x")
            self.assertIsNone(data)
            self.assertIn(fragment, err)

    def test_rate_limit_message_is_included(self):
        resp = fake_response(403, {"message": "API rate limit exceeded for 1.2.3.4."})
        with patch("github_api.requests.get", return_value=resp):
            _, err = _get("https://api.github.com/x")
        self.assertIn("1.2.3.4", err)

    def test_network_error(self):
        with patch("github_api.requests.get", side_effect=requests.ConnectionError("boom")):
            data, err = _get("https://api.github.com/x")
        self.assertIsNone(data)
        self.assertTrue(err.startswith("Network error"))

    def test_invalid_json(self):
        with patch("github_api.requests.get", return_value=fake_response(200, "<html>")):
            data, err = _get("https://api.github.com/x")
        self.assertIsNone(data)
        self.assertIn("not valid JSON", err)

    def test_token_header(self):
        with patch("github_api.requests.get", return_value=fake_response(200, {})) as get:
            _get("https://api.github.com/x", token="secret")
        headers = get.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer secret")
        self.assertEqual(headers["User-Agent"], "GitGrade-Analyzer")

    def test_no_token_no_header(self):
        with patch("github_api.requests.get", return_value=fake_response(200, {})) as get:
            _get("https://api.github.com/x")
        self.assertNotIn("Authorization", get.call_args.kwargs["headers"])

    def test_cache_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            with patch("github_api.requests.get", return_value=fake_response(200, {"n": 1})) as get:
                first, _ = _get("https://api.github.com/x", use_cache=True, cache_dir=tmp)
                second, _ = _get("https://api.github.com/x", use_cache=True, cache_dir=tmp)

            self.assertEqual(first, {"n": 1})
            self.assertEqual(second, {"n": 1})
            self.assertEqual(get.call_count, 1)


class TestFetchRepositoryData(unittest.TestCase):

    def test_success(self):
        with patch("github_api.requests.get", side_effect=fake_github()):
            raw, err = fetch_repository_data("octo", "demo")

        self.assertIsNone(err)
        self.assertEqual(raw.repo.full_name, "octo/demo")
        self.assertEqual(raw.repo.stars, 42)
        self.assertEqual(raw.repo.license, "MIT License")
        self.assertEqual(raw.repo.topics, ("python", "cli"))
        self.assertEqual(raw.language_bytes, {"Python": 9000, "Shell": 100})
        self.assertEqual([c.message for c in raw.commits], ["feat: add thing", "Initial commit"])
        self.assertEqual(raw.commits[0].authored_at, "2024-01-10T10:00:00Z")
        self.assertEqual(
            [(e.name, e.type) for e in raw.entries],
            [("src", "directory"), ("README.md", "file"), ("vendor", "file")],
        )
        self.assertEqual(raw.branches, ("main", "dev"))
        self.assertEqual(raw.readme_text, "# Demo\n\nInstall with pip.")

    def test_repo_not_found(self):
        with patch("github_api.requests.get", side_effect=fake_github({"": (404, {"message": "Not Found"})})):
            raw, err = fetch_repository_data("octo", "demo")
        self.assertIsNone(raw)
        self.assertIn("not found", err)

    def test_rate_limited_midway(self):
        with patch("github_api.requests.get", side_effect=fake_github({"/branches": (403, {"message": "slow down"})})):
            raw, err = fetch_repository_data("octo", "demo")
        self.assertIsNone(raw)
        self.assertIn("rate limit", err)

    def test_empty_repository(self):
        overrides = {
            "/commits": (409, {"message": "Git Repository is empty."}),
            "/contents/": (404, {"message": "This repository is empty."}),
            "/branches": (200, []),
            "/readme": (404, "Not Found"),
        }
        with patch("github_api.requests.get", side_effect=fake_github(overrides)):
            raw, err = fetch_repository_data("octo", "demo")

        self.assertIsNone(err)
        self.assertEqual(raw.commits, ())
        self.assertEqual(raw.entries, ())
        self.assertEqual(raw.branches, ())
        self.assertIsNone(raw.readme_text)

    def test_missing_license_and_topics(self):
        repo_json = dict(REPO_JSON, license=None, topics=None, description=None)
        with patch("github_api.requests.get", side_effect=fake_github({"": (200, repo_json)})):
            raw, err = fetch_repository_data("octo", "demo")

        self.assertIsNone(err)
        self.assertIsNone(raw.repo.license)
        self.assertEqual(raw.repo.topics, ())
        self.assertIsNone(raw.repo.description)

    def test_blank_owner(self):
        raw, err = fetch_repository_data(" ", "demo")
        self.assertIsNone(raw)
        self.assertEqual(err, "Invalid GitHub repository URL")


if __name__ == "__main__":
    unittest.main()
