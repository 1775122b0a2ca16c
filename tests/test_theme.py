from __future__ import annotations

import pytest

from app import theme


@pytest.mark.parametrize(
    ("theme_type", "expected_colors", "expected_map_style"),
    [
        ("dark", theme.DARK_THEME_COLORS, "dark"),
        ("light", theme.LIGHT_THEME_COLORS, "light"),
    ],
)
def test_css_and_map_follow_the_same_theme(
    monkeypatch: pytest.MonkeyPatch,
    theme_type: str,
    expected_colors: dict[str, str],
    expected_map_style: str,
) -> None:
    monkeypatch.setattr(theme, "_theme_type", lambda: theme_type)

    colors = theme.get_theme_colors()
    css = theme.build_global_css(colors)

    assert colors is expected_colors
    assert theme.map_style() == expected_map_style
    assert f"--surface-1: {expected_colors['surface_1']};" in css
    assert "prefers-color-scheme" not in css
