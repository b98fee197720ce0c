"""Shared fixtures: a throwaway process root laid out like /proc."""

from pathlib import Path

import pytest

from pyps.config import Settings


def status_text(name: str, uid: int | str, rss: str | None = None) -> str:
    """Render a minimal status record."""
    lines = [
        f"Name:\t{name}",
        "Umask:\t0022",
        "State:\tS (sleeping)",
        f"Uid:\t{uid}\t{uid}\t{uid}\t{uid}",
        f"Gid:\t{uid}\t{uid}\t{uid}\t{uid}",
    ]
    if rss is not None:
        lines.append(f"VmRSS:\t{rss}")
    lines.append("Threads:\t1")
    return "\n".join(lines) + "\n"


class FakeProcRoot:
    """Builder for a fake process root under a temporary directory."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def root(self) -> str:
        return str(self.path)

    def add_process(self, pid: str, content: str) -> Path:
        """Create <root>/<pid>/status holding content."""
        directory = self.path / pid
        directory.mkdir()
        status = directory / "status"
        status.write_text(content)
        return status

    def add_directory(self, name: str) -> Path:
        """Create a directory with no status record."""
        directory = self.path / name
        directory.mkdir()
        return directory

    def add_file(self, name: str, content: str = "") -> Path:
        target = self.path / name
        target.write_text(content)
        return target

    def settings(self, **kwargs) -> Settings:
        return Settings(proc_root=self.root, **kwargs)


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProcRoot:
    """An empty fake process root."""
    root = tmp_path / "proc"
    root.mkdir()
    return FakeProcRoot(root)
