"""Block-letter banner rendering via pyfiglet."""

from __future__ import annotations

import logging
import re
from typing import List

import pyfiglet

from .errors import SerializationError

logger = logging.getLogger(__name__)


def _font_candidates(font: str) -> List[str]:
    # figlet.js names fonts "ANSI Shadow"; pyfiglet ships the same font as "ansi_shadow".
    normalized = re.sub(r"[\s\-]+", "_", font.strip()).lower()
    return [font] if normalized == font else [font, normalized]


def render_figlet(text: str, font: str) -> str:
    """Render ``text`` in ``font``.

    Raises:
        SerializationError: If the font is unknown or rendering fails.
    """
    text = text.replace("\n", " ")
    last_error: Exception = SerializationError(f"unknown figlet font: {font}")
    for candidate in _font_candidates(font):
        try:
            rendered = pyfiglet.figlet_format(text, font=candidate)
        except pyfiglet.FontNotFound as e:
            last_error = e
            continue
        except pyfiglet.FontError as e:
            raise SerializationError(f"figlet font {candidate!r} is invalid: {e}") from e
        return rendered.rstrip("\n")

    logger.error(f"patch: figlet: failed to generate text: {last_error}")
    raise SerializationError(f"unknown figlet font: {font}") from last_error
