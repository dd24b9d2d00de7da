"""Nox automation for feedwatch development tasks."""

import shutil
from pathlib import Path

import nox

# Default sessions to run
nox.options.sessions = ["lint", "test"]


@nox.session(python=["3.11", "3.12", "3.13"])
def test(session: nox.Session) -> None:
    """Run the test suite with coverage."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=feedwatch",
        "--cov-report=term-missing",
        "--cov-fail-under=70",
        "-q",
        *session.posargs,
    )


@nox.session(python="3.11")
def lint(session: nox.Session) -> None:
    """Run linting with ruff and black."""
    session.install("ruff", "black")
    session.run("ruff", "check", ".")
    session.run("black", "--check", ".")


@nox.session(python="3.11")
def typecheck(session: nox.Session) -> None:
    """Run type checking with mypy."""
    session.install("mypy", "pandas-stubs", "types-PyYAML")
    session.install("-e", ".")
    session.run("mypy", "feedwatch")


@nox.session(python=False)
def smoke(session: nox.Session) -> None:
    """Run the CLI against a throwaway watch list without network access."""
    root = Path(".nox-smoke")
    root.mkdir(exist_ok=True)
    env = {"FEEDWATCH_CONFIG_PATH": str(root / "config.json")}

    session.run("python", "-m", "feedwatch.cli.main", "stock", "add", "AAPL", "--name", "Apple", env=env)
    session.run("python", "-m", "feedwatch.cli.main", "stock", "list", env=env)
    session.run("python", "-m", "feedwatch.cli.main", "list", env=env)

    shutil.rmtree(root)
    session.log("Smoke test passed!")


@nox.session(python=False)
def clean(session: nox.Session) -> None:
    """Clean up generated files and caches."""
    paths_to_remove = [
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".coverage",
        "htmlcov",
        ".nox",
        ".nox-smoke",
        "dist",
        "build",
        "*.egg-info",
    ]

    for pattern in paths_to_remove:
        for path in Path(".").glob(pattern):
            session.log(f"Removing {path}")
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
