"""Shared fixtures for woa tests."""

from pathlib import Path

import pytest


@pytest.fixture()
def isolated_cascade(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    """
    Point every config location at tmp_path so no real files or env leak in.

    Returns the paths of the system, user and working-directory config files
    (none of which exist until a test writes them).
    """
    etc = tmp_path / "etc" / "woa"
    home = tmp_path / "home"
    cwd = tmp_path / "cwd"
    for d in (etc, home / ".woa", cwd):
        d.mkdir(parents=True)

    monkeypatch.setattr("woa.config.loader.SYSTEM_CONFIG", etc / "config.yaml")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("WOA_CONFIG", raising=False)
    monkeypatch.chdir(cwd)

    return {
        "system": etc / "config.yaml",
        "user": home / ".woa" / "config.yaml",
        "cwd": cwd / "config.yaml",
    }
