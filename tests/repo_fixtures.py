"""
repo_fixtures.py

Small builders for the records the scoring engine consumes, so each test
can describe a repository in one or two lines instead of spelling out
every dataclass field.
"""

from models import (
    RepoRecord,
    DirEntry,
    CommitEntry,
    RawRepositoryData,
    ENTRY_FILE,
    ENTRY_DIRECTORY,
)


def f(name):
    """A root-level file entry."""
    return DirEntry(name=name, type=ENTRY_FILE, path=name)


def d(name):
    """A root-level directory entry."""
    return DirEntry(name=name, type=ENTRY_DIRECTORY, path=name)


def commit(message, authored_at="2024-01-10T12:00:00Z"):
    return CommitEntry(message=message, authored_at=authored_at)


def repo(**overrides):
    fields = {"name": "demo", "full_name": "octo/demo", "url": "https://github.com/octo/demo"}
    fields.update(overrides)
    return RepoRecord(**fields)


def raw_data(entries=(), languages=None, commits=(), branches=(), readme=None, **repo_fields):
    return RawRepositoryData(
        repo=repo(**repo_fields),
        language_bytes=dict(languages or {}),
        commits=tuple(commits),
        entries=tuple(entries),
        branches=tuple(branches),
        readme_text=readme,
    )


def empty_raw():
    """No entries, commits, branches, languages or README."""
    return raw_data(name="empty", full_name="octo/empty")


def full_marks_raw():
    """
    A repository that passes every check in every analyzer.
    """
    entries = [
        d("src"), d("components"), d("config"), d("utils"), d("docs"), d("tests"),
        d("e2e"), d(".github"),
        f(".eslintrc.json"), f(".prettierrc"), f(".editorconfig"), f("tsconfig.json"),
        f("package.json"), f(".gitignore"), f("CHANGELOG.md"), f("CONTRIBUTING.md"),
        f("jest.config.js"), f("playwright.config.ts"), f("Dockerfile"), f("vercel.json"),
    ]
    readme = (
        "# Demo\n\n## Installation\n\nnpm install\n\n## Usage\n\nSee the example below.\n\n"
        "## Contributing\n\nPRs welcome.\n\n## License\n\nMIT\n"
    ) + ("Lorem ipsum dolor sit amet. " * 100)
    commits = [commit(f"feat(core): add feature number {i}") for i in range(60)]
    return raw_data(
        entries=entries,
        languages={"TypeScript": 5000, "CSS": 800, "JavaScript": 300},
        commits=commits,
        branches=["main", "develop", "feature/login"],
        readme=readme,
        stars=250,
        description="A thoroughly documented demo project for testing",
        topics=("demo", "testing", "typescript"),
        license="MIT License",
    )
