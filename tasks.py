# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create .venv with the package, test and dev extras."""
    ctx.run("uv sync --all-extras")


@task
def clean(ctx):
    """
    Remove untracked files after a dry-run listing and confirmation.
    """

    ctx.run("git clean -nfdx")

    response = (
        input("Are you sure you want to remove all untracked files? (y/n) [n]: ")
        .strip()
        .lower()
    )
    if response == "y":
        ctx.run("git clean -fdx")


@task
def lint(ctx):
    """
    Run ruff and mypy over sources and tests.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage.
    """
    ctx.run("pytest --cov=goveelan --cov-report=term-missing", pty=True)


@task
def mock(ctx):
    """Run a mock device bound to all interfaces."""
    ctx.run("goveelan mock", pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel with uv.
    """

    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Build the package and publish it to PyPI."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
