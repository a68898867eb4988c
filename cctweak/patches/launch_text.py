"""Launch banner and welcome message."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..bundle import Edit, LocationSpan, js_literal
from ..errors import LocationNotFoundError

logger = logging.getLogger(__name__)

BANNER_POINT = "launchText"
WELCOME_POINT = "welcomeMessage"

# The stock sign-in banner, embedded in the bundle as a template literal.
BANNER_TEXT = """\
 ██████╗██╗      █████╗ ██╗   ██╗██████╗ ███████╗
██╔════╝██║     ██╔══██╗██║   ██║██╔══██╗██╔════╝
██║     ██║     ███████║██║   ██║██║  ██║█████╗
██║     ██║     ██╔══██║██║   ██║██║  ██║██╔══╝
╚██████╗███████╗██║  ██║╚██████╔╝██████╔╝███████╗
 ╚═════╝╚══════╝╚═╝  ╚═╝ ╚═════╝ ╚═════╝ ╚══════╝
 ██████╗ ██████╗ ██████╗ ███████╗
██╔════╝██╔═══██╗██╔══██╗██╔════╝
██║     ██║   ██║██║  ██║█████╗
██║     ██║   ██║██║  ██║██╔══╝
╚██████╗╚██████╔╝██████╔╝███████╗
 ╚═════╝ ╚═════╝ ╚═════╝ ╚══════╝"""

# " Welcome to ",q9.createElement(T,{bold:!0},"Claude Code"),"!"
WELCOME_RE = re.compile(
    r'" Welcome to ",[\w$]+\.createElement\([^,]+,\{bold:!0\},'
    r'("(?:[^"\\]|\\.)*")\),"!"'
)


def locate_banner(content: str, banner: str = BANNER_TEXT) -> Optional[LocationSpan]:
    """Span of the banner literal, including its enclosing backticks."""
    search_from = 0
    while True:
        index = content.find(banner, search_from)
        if index == -1:
            logger.warning("patch: launch text: failed to find banner literal")
            return None
        end = index + len(banner)
        if index > 0 and content[index - 1] == "`" and content[end : end + 1] == "`":
            return LocationSpan(index - 1, end + 1)
        search_from = index + 1


def banner_edits(
    content: str, text: str, location: Optional[LocationSpan] = None
) -> List[Edit]:
    if location is None:
        location = locate_banner(content)
    if location is None:
        raise LocationNotFoundError(BANNER_POINT)
    return [Edit(location, js_literal(text))]


def locate_welcome_message(content: str) -> Optional[LocationSpan]:
    """Span of the application-name string inside the welcome message."""
    match = WELCOME_RE.search(content)
    if match is None:
        logger.warning("patch: welcome message: failed to find location")
        return None
    return LocationSpan(match.start(1), match.end(1))


def welcome_message_edits(
    content: str, name: str, location: Optional[LocationSpan] = None
) -> List[Edit]:
    if location is None:
        location = locate_welcome_message(content)
    if location is None:
        raise LocationNotFoundError(WELCOME_POINT)
    return [Edit(location, js_literal(name))]
