"""
Mutation changelist parsing

Each changelist entry describes one point mutation::

    <AMINO><CODON><AMINO><#COLOR><@COUNT>

Only CODON is required. Examples:

    R273C            non-synonymous mutation at codon 273
    T125@5           synonymous mutation at codon 125 seen 5 times
    R248Q#00ff00     green marker at codon 248
    R248Q#00ff00@131 green marker at codon 248 seen 131 times
    R213*            stop gained at codon 213 (non-synonymous)

Entries that normalize to the same change and color are merged into one
marker whose count is the sum of their counts.

Examples:
    >>> from lollipops.mutations import parse_changelist
    >>> ticks = parse_changelist(["R273C", "R273C", "T125@5"])
    >>> [(t.position, t.count) for t in ticks]
    [(125, 5), (273, 2)]
"""

import math
import re
from collections.abc import Iterable
from dataclasses import replace

from .errors import ParseError
from .logging_config import get_logger
from .models import MutationToken, Tick

logger = get_logger(__name__)

CHANGE_PATTERN = re.compile(r"([A-Za-z]*)([0-9]+)(=|\*|[A-Za-z]*)")
DIGIT_RUN = re.compile(r"[0-9]+")
HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}")
COUNT = re.compile(r"[0-9]+")


def parse_token(token: str) -> MutationToken:
    """
    Parse one changelist entry

    The ``@count`` suffix is removed first, then the ``#color`` suffix; the
    remainder must hold exactly one run of digits, the codon position.

    Args:
        token: Raw entry such as "R248Q#00ff00@3"

    Returns:
        MutationToken with the normalized change text as raw_label

    Raises:
        ParseError: If the position, color or count is missing or malformed

    Examples:
        >>> parse_token("R273C")
        MutationToken(position=273, count=1, color_override=None, is_synonymous=False, raw_label='R273C')
        >>> parse_token("T125@5").count
        5
    """
    change = token.strip()
    count = 1
    color = None

    if "@" in change:
        change, _, count_text = change.partition("@")
        if not COUNT.fullmatch(count_text):
            raise ParseError(token, f"count '{count_text}' is not a number")
        count = int(count_text)
        if count < 1:
            raise ParseError(token, "count must be at least 1")

    if "#" in change:
        change, _, color_text = change.partition("#")
        if not HEX_COLOR.fullmatch(color_text):
            raise ParseError(token, f"color '#{color_text}' is not #RRGGBB")
        color = "#" + color_text.lower()

    if len(DIGIT_RUN.findall(change)) != 1:
        raise ParseError(token, "expected exactly one codon position")

    match = CHANGE_PATTERN.search(change)
    if match is None:
        raise ParseError(token, "no codon position found")

    leading, digits, trailing = match.groups()
    position = int(digits)
    if position < 1:
        raise ParseError(token, "codon positions start at 1")

    changed = trailing not in ("", "=") and trailing != leading

    return MutationToken(
        position=position,
        count=count,
        color_override=color,
        is_synonymous=not changed,
        raw_label=change,
    )


def parse_changelist(
    changelist: Iterable[str],
    synonymous_color: str = "#0000ff",
    mutation_color: str = "#ff0000",
    length: int | None = None,
) -> list[Tick]:
    """
    Parse a changelist into merged mutation ticks

    Empty entries are skipped. Entries sharing the same change text and
    resolved color accumulate their counts into the first occurrence, whose
    index gives the tick priority ``-index`` (earlier entries sort first
    among ticks at the same position).

    Args:
        changelist: Raw mutation entries in user order
        synonymous_color: Color for entries without a distinct alternate residue
        mutation_color: Color for non-synonymous entries
        length: Sequence length; positions beyond it are rejected

    Returns:
        Mutation ticks sorted by (position asc, priority desc)

    Raises:
        ParseError: On the first malformed entry
    """
    merged: dict[tuple[str, str], Tick] = {}

    for index, raw in enumerate(changelist):
        if not raw or not raw.strip():
            continue

        token = parse_token(raw)
        if length is not None and token.position > length:
            raise ParseError(
                raw, f"position {token.position} is beyond the sequence length {length}"
            )

        if token.color_override is not None:
            color = token.color_override
        elif token.is_synonymous:
            color = synonymous_color
        else:
            color = mutation_color
        color = color.lower()

        key = (token.raw_label, color)
        if key in merged:
            seen = merged[key]
            merged[key] = replace(seen, count=seen.count + token.count)
            logger.debug(f"Merged duplicate mutation {raw!r} into {seen.label!r}")
        else:
            merged[key] = Tick(
                position=token.position,
                priority=-index,
                count=token.count,
                color=color,
                label=token.raw_label,
            )

    return sorted(merged.values(), key=lambda t: (t.position, -t.priority))


def lollipop_radius(count: int, base_radius: float) -> float:
    """
    Marker radius for a merged mutation count

    A single observation uses the base radius; higher counts grow with
    ``sqrt(ln(2 + count))`` so the marker area is logarithmic in the count.

    Examples:
        >>> lollipop_radius(1, 4.0)
        4.0
        >>> round(lollipop_radius(4, 4.0), 2)
        5.35
    """
    if count <= 1:
        return base_radius
    return math.sqrt(math.log(2 + count) * base_radius * base_radius)
