"""Japanese-script detection used to pick the generation mode.

The decision is ratio based: mixed input such as an English resume that
mentions a few Japanese company names stays in TRANSLATE mode, while
Japanese prose with embedded English skill names is REFINED.
"""

from __future__ import annotations

import re

from rirekisho.generation.models import GenerationMode

JAPANESE_CHAR = re.compile(
    "[\u3040-\u309f"  # hiragana
    "\u30a0-\u30ff"  # katakana
    "\u31f0-\u31ff"  # katakana phonetic extensions
    "\u3400-\u4dbf"  # CJK extension A
    "\u4e00-\u9fff"  # CJK unified ideographs
    "\uff66-\uff9f]"  # half-width katakana
)


def japanese_ratio(text: str) -> float:
    """Share of alphabetic characters that are Japanese script."""
    letters = [ch for ch in text if ch.isalpha()]
    if not letters:
        return 0.0
    japanese = sum(1 for ch in letters if JAPANESE_CHAR.match(ch))
    return japanese / len(letters)


def detect_mode(text: str, threshold: float = 0.3) -> GenerationMode:
    """REFINE when enough of the text is Japanese, TRANSLATE otherwise.

    Text without any letters is translated: the output must be Japanese and
    nothing in the input shows it already is.
    """
    if japanese_ratio(text) >= threshold:
        return GenerationMode.REFINE
    return GenerationMode.TRANSLATE
