""" Invoke tasks. """
import io
import shutil
import sys
from pathlib import Path

from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')

ROOT = Path(__file__).resolve().parent


@task
def install(c):
    c.run('pip install -e ".[test]"')


@task
def serve(c, host="127.0.0.1", port=8001):
    c.run(f"uvicorn main:app --reload --host {host} --port {port}", env={"PYTHONUTF8": "1"})


@task
def test(c, k=""):
    """Run the pytest suite; -k selects tests by name."""
    c.run("pytest -q" + (f" -k {k}" if k else ""))


@task
def clean(c):
    """Remove bytecode caches, pytest cache and run logs."""
    for cache in ROOT.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
    for leftover in (ROOT / ".pytest_cache", ROOT / "logs"):
        shutil.rmtree(leftover, ignore_errors=True)
