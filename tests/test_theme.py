# tests/test_theme.py

from __future__ import annotations

from pathlib import Path

from theme import is_hex_color, read_env_file


def test_is_hex_color() -> None:
    assert is_hex_color("#A7E399")
    assert is_hex_color("48b3af")
    assert not is_hex_color("#12345")
    assert not is_hex_color("zzzzzz")


def test_read_env_file_keeps_valid_palette_keys(tmp_path: Path) -> None:
    env = tmp_path / ".env"
    env.write_text(
        "# palette\n"
        "TODO_PRIMARY=112233\n"
        "TODO_DONE = #abcdef\n"
        "TODO_PENDING=nothex\n"
        "OTHER=#445566\n"
        "garbage line\n",
        encoding="utf-8",
    )

    assert read_env_file(env) == {"TODO_PRIMARY": "#112233", "TODO_DONE": "#abcdef"}


def test_read_env_file_missing_returns_empty(tmp_path: Path) -> None:
    assert read_env_file(tmp_path / "absent.env") == {}
