"""Customization points: one locator/writer pair per patch target.

Each :class:`PatchPoint` turns the current bundle text and the user's
settings into a list of edits, raising
:class:`~cctweak.errors.LocationNotFoundError` (or
:class:`~cctweak.errors.SerializationError`) when it cannot.  Points are
independent: adapting to a new host release means adjusting one locator.

Default order::

    themes → launchText → welcomeMessage → thinkingVerbs → thinkingFormat
    → spinnerGlyphs → spinnerInterval → spinnerWidth → spinnerMirror
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..bundle import Edit
from ..models import LaunchTextConfig, Settings
from . import launch_text, thinking_style, thinking_verbs, themes

GROUP_THEMES = "themes"
GROUP_LAUNCH_TEXT = "launchText"
GROUP_THINKING_VERBS = "thinkingVerbs"
GROUP_THINKING_STYLE = "thinkingStyle"

GROUP_ORDER = [
    GROUP_THEMES,
    GROUP_LAUNCH_TEXT,
    GROUP_THINKING_VERBS,
    GROUP_THINKING_STYLE,
]

BannerRenderer = Callable[[str, str], str]


@dataclass(frozen=True)
class PatchPoint:
    """A named customization point.

    Attributes:
        name: Outcome key reported to the caller.
        group: Settings section the point belongs to.
        build: ``(content, settings, render_banner) -> edits``.
        enabled: Whether the settings ask for this point at all.
        locate: Locator used by :func:`inspect_bundle`.
    """

    name: str
    group: str
    build: Callable[[str, Settings, BannerRenderer], List[Edit]]
    enabled: Callable[[Settings], bool]
    locate: Callable[[str], object]


def resolve_launch_text(config: LaunchTextConfig, render_banner: BannerRenderer) -> str:
    """The banner text the settings ask for; empty when there is none."""
    if config.method == "custom":
        return config.custom_text
    if config.figlet_text:
        return render_banner(config.figlet_text, config.figlet_font)
    return ""


def _launch_text_enabled(settings: Settings) -> bool:
    config = settings.launch_text
    if config.method == "custom":
        return bool(config.custom_text)
    return bool(config.figlet_text)


def _build_themes(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return themes.theme_edits(content, settings.themes)


def _build_banner(content: str, settings: Settings, render: BannerRenderer) -> List[Edit]:
    # Resolve the text first so a generator failure never touches the buffer.
    text = resolve_launch_text(settings.launch_text, render)
    return launch_text.banner_edits(content, text)


def _build_welcome(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return launch_text.welcome_message_edits(content, settings.launch_text.custom_text)


def _build_verbs(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return thinking_verbs.thinking_verbs_edits(content, settings.thinking_verbs.verbs)


def _build_format(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return thinking_verbs.thinking_format_edits(content, settings.thinking_verbs.format)


def _build_glyphs(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return thinking_style.spinner_glyph_edits(content, settings.thinking_style.phases)


def _build_interval(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return thinking_style.spinner_interval_edits(
        content, settings.thinking_style.update_interval
    )


def _build_width(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    width = thinking_style.spinner_width(settings.thinking_style.phases)
    return thinking_style.spinner_width_edits(content, width)


def _build_mirror(content: str, settings: Settings, _render: BannerRenderer) -> List[Edit]:
    return thinking_style.spinner_mirror_edits(
        content, settings.thinking_style.reverse_mirror
    )


def _always(_settings: Settings) -> bool:
    return True


DEFAULT_POINTS: List[PatchPoint] = [
    PatchPoint(
        themes.POINT,
        GROUP_THEMES,
        _build_themes,
        lambda s: bool(s.themes),
        themes.locate_themes,
    ),
    PatchPoint(
        launch_text.BANNER_POINT,
        GROUP_LAUNCH_TEXT,
        _build_banner,
        _launch_text_enabled,
        launch_text.locate_banner,
    ),
    PatchPoint(
        launch_text.WELCOME_POINT,
        GROUP_LAUNCH_TEXT,
        _build_welcome,
        lambda s: s.launch_text.method == "custom" and bool(s.launch_text.custom_text),
        launch_text.locate_welcome_message,
    ),
    PatchPoint(
        thinking_verbs.VERBS_POINT,
        GROUP_THINKING_VERBS,
        _build_verbs,
        _always,
        thinking_verbs.locate_thinking_verbs,
    ),
    PatchPoint(
        thinking_verbs.FORMAT_POINT,
        GROUP_THINKING_VERBS,
        _build_format,
        _always,
        thinking_verbs.locate_thinking_format,
    ),
    PatchPoint(
        thinking_style.GLYPHS_POINT,
        GROUP_THINKING_STYLE,
        _build_glyphs,
        _always,
        thinking_style.locate_spinner_glyphs,
    ),
    PatchPoint(
        thinking_style.INTERVAL_POINT,
        GROUP_THINKING_STYLE,
        _build_interval,
        _always,
        thinking_style.locate_spinner_interval,
    ),
    PatchPoint(
        thinking_style.WIDTH_POINT,
        GROUP_THINKING_STYLE,
        _build_width,
        _always,
        thinking_style.locate_spinner_width,
    ),
    PatchPoint(
        thinking_style.MIRROR_POINT,
        GROUP_THINKING_STYLE,
        _build_mirror,
        _always,
        thinking_style.locate_spinner_mirror,
    ),
]


def points_for_group(group: str, points: Optional[List[PatchPoint]] = None) -> List[PatchPoint]:
    return [p for p in (points or DEFAULT_POINTS) if p.group == group]


def inspect_bundle(
    content: str, points: Optional[List[PatchPoint]] = None
) -> Dict[str, bool]:
    """Report which customization points can be located in ``content``."""
    found: Dict[str, bool] = {}
    for point in points or DEFAULT_POINTS:
        located = point.locate(content)
        found[point.name] = bool(located) if isinstance(located, list) else located is not None
    return found


__all__ = [
    "BannerRenderer",
    "DEFAULT_POINTS",
    "GROUP_ORDER",
    "PatchPoint",
    "inspect_bundle",
    "points_for_group",
    "resolve_launch_text",
]
