"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (list, detail, editor chrome). Syntax
highlighting style for code previews remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    border: str
    list_title: str
    list_selected_marker: str
    list_selected_title: str
    list_selected_description: str
    list_description: str
    empty_hint: str
    detail_title: str
    token_match: str
    rule: str
    footer_border: str
    footer_label: str
    confirm: str
    status_error: str
    section_border: str
    section_label: str
    editor_footer: str
    cursor: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;245m",
    list_title="\033[1;38;5;230;48;5;62m",
    list_selected_marker="\033[38;5;170m",
    list_selected_title="\033[38;5;170m",
    list_selected_description="\033[38;5;168m",
    list_description="\033[38;5;244m",
    empty_hint="\033[2;38;5;250m",
    detail_title="\033[1;38;5;205m",
    token_match="\033[1;38;5;212m",
    rule="\033[38;5;240m",
    footer_border="\033[38;5;240m",
    footer_label="\033[38;5;250m",
    confirm="\033[1;38;5;214m",
    status_error="\033[31m",
    section_border="\033[38;5;62m",
    section_label="\033[1;38;5;212m",
    editor_footer="\033[38;5;240m",
    cursor="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[2;38;5;31m",
    list_title="\033[1;38;5;231;48;5;31m",
    list_selected_marker="\033[38;5;45m",
    list_selected_title="\033[38;5;45m",
    list_selected_description="\033[38;5;117m",
    list_description="\033[38;5;110m",
    empty_hint="\033[2;38;5;110m",
    detail_title="\033[1;38;5;45m",
    token_match="\033[1;38;5;153m",
    rule="\033[38;5;24m",
    footer_border="\033[38;5;31m",
    footer_label="\033[38;5;110m",
    confirm="\033[1;38;5;215m",
    status_error="\033[38;5;203m",
    section_border="\033[38;5;39m",
    section_label="\033[1;38;5;153m",
    editor_footer="\033[2;38;5;110m",
    cursor="\033[7m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    list_title="",
    list_selected_marker="",
    list_selected_title="",
    list_selected_description="",
    list_description="",
    empty_hint="",
    detail_title="",
    token_match="",
    rule="",
    footer_border="",
    footer_label="",
    confirm="",
    status_error="",
    section_border="",
    section_label="",
    editor_footer="",
    cursor="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
