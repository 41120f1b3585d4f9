"""
Pytest configuration and fixtures for inidoc tests.
"""

from pathlib import Path

import pytest

SAMPLE_TEXT = (
    "key=abcdefg\n"
    "\n"
    "[user]\n"
    "name=Adam Eury\n"
    "age=35\n"
    "\n"
    "[address]\n"
    "street=1800 Test Lane\n"
    "city=Testy\n"
)


@pytest.fixture
def sample_text() -> str:
    """Preamble plus two sections."""
    return SAMPLE_TEXT


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    p = tmp_path / "settings.ini"
    p.write_text(SAMPLE_TEXT, encoding="utf-8")
    return p


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory so no global config is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
