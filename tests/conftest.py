"""Shared fixtures for inodekit tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── .config
        ├── a.txt
        ├── b.txt
        ├── sub/
        │   ├── c.txt
        │   ├── inner/
        │   │   └── deep.txt
        │   └── z.md
        └── zeta/
    """
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / ".config").write_text("hidden")
    (tmp_path / "sub" / "inner").mkdir(parents=True)
    (tmp_path / "sub" / "z.md").write_text("z")
    (tmp_path / "sub" / "c.txt").write_text("c")
    (tmp_path / "sub" / "inner" / "deep.txt").write_text("deep")
    (tmp_path / "zeta").mkdir()
    return tmp_path


@pytest.fixture
def gitignore_tree(tmp_path: Path) -> Path:
    """Tree with .gitignore for gitignore-integration testing.

    Structure::

        root/
        ├── .gitignore          (*.log, build/)
        ├── app.py
        ├── build/
        │   └── out.bin
        ├── debug.log
        └── src/
            ├── main.py
            └── trace.log
    """
    (tmp_path / ".gitignore").write_text("*.log\nbuild/\n")
    (tmp_path / "app.py").write_text("app")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.bin").write_bytes(b"\x00")
    (tmp_path / "debug.log").write_text("log")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("main")
    (tmp_path / "src" / "trace.log").write_text("log")
    return tmp_path


SAMPLE_PARAMETERS = """\
# server settings
port = 8080
host=localhost
  # indented comment=ignored
name_without_value=
just a line
=orphan
timeout=30s
"""


@pytest.fixture
def parameter_file(tmp_path: Path) -> Path:
    """Parameter file mixing valid records, comments and malformed lines."""
    path = tmp_path / "server.conf"
    path.write_text(SAMPLE_PARAMETERS, encoding="utf-8")
    return path
