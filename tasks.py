# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create the virtual environment and install fwmon with test extras."""
    ctx.run("uv sync --extra test --extra dev")


@task
def lint(ctx):
    """
    Run ruff and mypy over the package sources.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=src/fwmon --cov-report=term-missing", pty=True)


@task
def check(ctx, dry_run=True):
    """Run a firmware check against the configured reference file."""
    ctx.run(f"fwmon check{' --dry-run' if dry_run else ''}", pty=True)


@task
def serve(ctx):
    """Start the record upsert endpoint."""
    ctx.run("fwmon serve", pty=True)


@task
def build_package(ctx):
    """
    Build package using uv.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
