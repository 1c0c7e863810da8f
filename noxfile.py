"""Nox sessions for the email verifier: tests, lint and formatting."""

import nox

nox.options.sessions = ["tests", "lint"]
python_versions = ["3.11", "3.12"]
source_dirs = ["bots", "verifier_bot", "tests", "noxfile.py"]


@nox.session(python=python_versions)
def tests(session):
    """Run the test suite with coverage."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        "--cov=bots",
        "--cov=verifier_bot",
        "--cov-report=term-missing",
        "--cov-report=xml:coverage.xml",
        "--cov-fail-under=80",
        "-v",
        *session.posargs,
    )


@nox.session(python=python_versions[0])
def lint(session):
    """Run ruff lint and format checks."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "check", *source_dirs)
    session.run("ruff", "format", "--check", *source_dirs)


@nox.session(python=python_versions[0])
def format_code(session):
    """Format code with ruff."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "format", *source_dirs)
    session.run("ruff", "check", "--fix", *source_dirs)


@nox.session(python=python_versions[0])
def test_single(session):
    """Run a single test file or test function."""
    if not session.posargs:
        session.error("Please provide a test file or function to run")

    session.install("-e", ".[dev]")
    session.run("pytest", "-v", *session.posargs)
