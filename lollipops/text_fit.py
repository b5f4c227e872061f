"""
Domain label fitting

Chooses the text drawn inside a domain block: the long description when it
fits, else the short name, else (in truncate mode) the most informative
fragment of the short name that fits.
"""

import unicodedata

from .constants import DomainLabelStyle
from .fonts import TextMeasurer

ELLIPSIS = ".."


def is_punct(char: str) -> bool:
    """True for Unicode punctuation (categories Pc, Pd, Ps, Pe, Pi, Pf, Po)"""
    return unicodedata.category(char).startswith("P")


def split_on_punct(text: str) -> list[str]:
    """Split text into the non-empty runs between punctuation characters

    Examples:
        >>> split_on_punct("P53_tetramer")
        ['P53', 'tetramer']
        >>> split_on_punct("Domain-ABC-123")
        ['Domain', 'ABC', '123']
    """
    words = []
    current = []
    for char in text:
        if is_punct(char):
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        words.append("".join(current))
    return words


def strip_punct(text: str) -> str:
    """Remove leading and trailing punctuation"""
    start, end = 0, len(text)
    while start < end and is_punct(text[start]):
        start += 1
    while end > start and is_punct(text[end - 1]):
        end -= 1
    return text[start:end]


def fit_label(
    text: str,
    description: str,
    width: float,
    measurer: TextMeasurer,
    style: DomainLabelStyle = DomainLabelStyle.TRUNCATE,
    font_size: float = 12.0,
    text_padding: float = 5.0,
    min_truncate_width: float = 40.0,
) -> str:
    """
    Pick the label for a block of the given pixel width

    Args:
        text: Short feature name (e.g. "P53_tetramer")
        description: Long feature name, preferred when it fits
        width: Block width in pixels
        measurer: Text measurement capability
        style: OFF never labels, FIT only uses unmodified text, TRUNCATE
            shortens the short name until it fits
        font_size: Label font size in pixels
        text_padding: Horizontal space reserved inside the block
        min_truncate_width: Blocks at most this wide skip character trimming

    Returns:
        Label text, or "" when nothing should be drawn

    Examples:
        >>> from lollipops.fonts import HeuristicMeasurer
        >>> fit_label("Domain-ABC-123", "", 60, HeuristicMeasurer())
        '..123'
    """
    if style == DomainLabelStyle.OFF:
        return ""

    budget = width - text_padding

    def fits(candidate: str) -> bool:
        return measurer.measure(candidate, font_size) < budget

    if len(description) > 1 and fits(description):
        return description
    if fits(text):
        return text
    if style != DomainLabelStyle.TRUNCATE:
        return ""

    # The most informative word is usually the last one: P53_TAD and
    # P53_tetramer are both useless as "P53.."
    words = split_on_punct(text)
    prefix, suffix = ELLIPSIS, ""
    for i in range(len(words) - 1, -1, -1):
        if i == 0:
            prefix = ""
        candidate = prefix + words[i] + suffix
        if fits(candidate):
            return candidate
        suffix = ELLIPSIS

    if width <= min_truncate_width:
        return ""

    trimmed = text
    for cut in range(len(text) - 2, 0, -1):
        trimmed = strip_punct(text[:cut]) + ELLIPSIS
        if fits(trimmed):
            break
    return trimmed
