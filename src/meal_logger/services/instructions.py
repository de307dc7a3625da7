"""Parsing of free-text meal update instructions."""

import re
from dataclasses import dataclass

ADD_ITEM_PHRASE = "also had"
PORTION_PHRASE = "only ate"
PORTION_PATTERN = re.compile(r"only ate (\d+/\d+) of my (\w+)", re.IGNORECASE)
PORTION_HINT = (
    'Could not parse portion adjustment. Please use format like '
    '"I only ate 1/2 of my potatoes".'
)
UNRECOGNIZED_HINT = (
    'Could not understand the update. Try "I also had a banana" or '
    '"I only ate 1/2 of my potatoes".'
)

_LEADING_ARTICLES = frozenset({"a", "an", "the", "some"})


@dataclass(frozen=True)
class AddItem:
    """The user ate an additional item."""

    item: str


@dataclass(frozen=True)
class AdjustPortion:
    """The user ate only a fraction of an item, e.g. ``"1/2"``."""

    fraction: str
    item: str


@dataclass(frozen=True)
class Unrecognized:
    """The instruction matched no known phrasing."""

    reason: str


Instruction = AddItem | AdjustPortion | Unrecognized


def parse_instruction(text: str) -> Instruction:
    """Classify a chat-style update such as ``"I also had a banana"``."""
    lowered = text.lower()
    if ADD_ITEM_PHRASE in lowered:
        _, _, remainder = lowered.partition(ADD_ITEM_PHRASE)
        item = _strip_article(remainder.strip())
        if not item:
            return Unrecognized(UNRECOGNIZED_HINT)
        return AddItem(item)
    if PORTION_PHRASE in lowered:
        match = PORTION_PATTERN.search(text)
        if match is None:
            return Unrecognized(PORTION_HINT)
        return AdjustPortion(fraction=match.group(1), item=match.group(2).lower())
    return Unrecognized(UNRECOGNIZED_HINT)


def parse_fraction(text: str) -> float:
    """Evaluate ``"numerator/denominator"`` as a number.

    Raises ZeroDivisionError for a zero denominator and ValueError for
    anything that is not two integers separated by a slash, or whose value
    does not fit in a float.
    """
    numerator_text, separator, denominator_text = text.strip().partition("/")
    if not separator:
        raise ValueError(f"Not a fraction: {text!r}")
    numerator = int(numerator_text)
    denominator = int(denominator_text)
    if denominator == 0:
        raise ZeroDivisionError(f"Fraction {text!r} has a zero denominator")
    try:
        return numerator / denominator
    except OverflowError as exc:
        raise ValueError(f"Fraction {text!r} is too large") from exc


def _strip_article(item: str) -> str:
    first, _, rest = item.partition(" ")
    if first in _LEADING_ARTICLES:
        return rest.strip()
    return item
