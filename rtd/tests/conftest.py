import io
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path, monkeypatch):
    # Never touch the real per-user data/config directories
    monkeypatch.delenv("RTD_DB_PATH", raising=False)
    monkeypatch.delenv("RTD_CONFIG", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    yield


@pytest.fixture()
def conn():
    from rtd.db import open_connection
    from rtd.services.todo_svc import initialize_schema
    c = open_connection(":memory:")
    initialize_schema(c)
    try:
        yield c
    finally:
        c.close()


@pytest.fixture()
def tmp_db_path(tmp_path, monkeypatch):
    path = tmp_path / "db" / "todos_test.sqlite3"
    monkeypatch.setenv("RTD_DB_PATH", str(path))
    return str(path)


@pytest.fixture()
def run_cli(monkeypatch, capsys):
    """Run rtd.cli.main with the given argv and stdin; returns (code, out, err)."""
    from rtd.cli import main

    def _run(*argv: str, stdin: str = ""):
        monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
        code = main(list(argv))
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run
