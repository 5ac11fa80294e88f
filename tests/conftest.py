"""Shared fixtures: a throwaway cargo home and a logger that records output."""

from __future__ import annotations

import errno
import shutil
from pathlib import Path

import pytest

from cargo_cache.schemas.cache import CacheLayout


class RecordingLogger:
    """LoggerProtocol implementation that keeps every message for assertions."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def echo(self, message: str) -> None:
        self.lines.append(message)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def write_file(path: Path, size: int) -> Path:
    """Create a file of exactly `size` bytes, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b'x' * size)
    return path


def make_crate_source(registry_dir: Path, dirname: str, size: int) -> Path:
    """Create an extracted crate source directory holding `size` bytes in two files."""
    crate_dir = registry_dir / dirname
    write_file(crate_dir / 'Cargo.toml', size // 2)
    write_file(crate_dir / 'src' / 'lib.rs', size - size // 2)
    return crate_dir


def fail_rmtree_at(monkeypatch: pytest.MonkeyPatch, target: Path, delete_first: str | None = None) -> None:
    """Make shutil.rmtree raise EACCES for `target`, optionally deleting one child file first.

    Every other path is removed by the real rmtree.
    """
    real_rmtree = shutil.rmtree

    def rmtree(path, *args, **kwargs):
        if Path(path) != target:
            return real_rmtree(path, *args, **kwargs)
        if delete_first is not None:
            (target / delete_first).unlink()
        raise OSError(errno.EACCES, 'Permission denied', str(path))

    monkeypatch.setattr(shutil, 'rmtree', rmtree)


@pytest.fixture
def output() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def cargo_home(tmp_path: Path) -> Path:
    """A cargo home with something in every canonical directory."""
    home = tmp_path / 'cargo-home'
    write_file(home / 'bin' / 'cargo-cache', 100)
    write_file(home / 'bin' / 'ripgrep', 200)
    write_file(home / 'registry' / 'index' / 'index.crates.io-1' / '.cache' / 'se' / 'rd' / 'serde', 40)
    write_file(home / 'registry' / 'cache' / 'index.crates.io-1' / 'serde-1.0.1.crate', 30)
    make_crate_source(home / 'registry' / 'src' / 'index.crates.io-1', 'serde-1.0.1', 50)
    write_file(home / 'git' / 'db' / 'tokio-abc' / 'HEAD', 20)
    write_file(home / 'git' / 'checkouts' / 'tokio-abc' / 'deadbeef' / 'lib.rs', 10)
    return home


@pytest.fixture
def layout(cargo_home: Path) -> CacheLayout:
    return CacheLayout.from_root(cargo_home)
