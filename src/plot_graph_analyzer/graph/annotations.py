"""Parsing of bracketed event annotations.

Labels reported by the reasoning engine are terms followed by an optional
annotation block:

    plant(wheat)[source(self),cause(life[location(universe)])]

Annotation values may be annotated terms themselves, so the block is taken apart
by a small recursive-descent scanner that balances parentheses and brackets
rather than by splitting on commas.
"""

from functools import lru_cache

# Annotation keys that are not edge type names
CAUSE = "cause"
SOURCE = "source"

_PAIRS = {"(": ")", "[": "]"}
_CLOSERS = {")", "]"}


class AnnotationParseError(ValueError):
    """Raised for labels with unbalanced or mis-nested brackets."""


def _skip_string(text: str, pos: int) -> int:
    """Return the index just past the quoted string starting at text[pos]."""
    end = text.find('"', pos + 1)
    if end == -1:
        raise AnnotationParseError(f"Unterminated string at {pos} in {text!r}")
    return end + 1


def _skip_group(text: str, pos: int) -> int:
    """Return the index just past the balanced group opening at text[pos]."""
    closer = _PAIRS[text[pos]]
    start = pos
    pos += 1
    while pos < len(text):
        char = text[pos]
        if char == closer:
            return pos + 1
        if char in _PAIRS:
            pos = _skip_group(text, pos)
        elif char == '"':
            pos = _skip_string(text, pos)
        elif char in _CLOSERS:
            raise AnnotationParseError(f"Unexpected {char!r} at {pos} in {text!r}")
        else:
            pos += 1
    raise AnnotationParseError(f"Unbalanced {text[start]!r} at {start} in {text!r}")


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split text at separator characters that are not nested in any group.

    Args:
        text: Text to split, e.g. the inside of an annotation block
        separator: Single separator character

    Returns:
        The parts, unstripped. An empty text yields an empty list.
    """
    if not text:
        return []

    parts = []
    start = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char in _PAIRS:
            pos = _skip_group(text, pos)
        elif char == '"':
            pos = _skip_string(text, pos)
        elif char in _CLOSERS:
            raise AnnotationParseError(f"Unexpected {char!r} at {pos} in {text!r}")
        elif char == separator:
            parts.append(text[start:pos])
            pos += 1
            start = pos
        else:
            pos += 1
    parts.append(text[start:])
    return parts


@lru_cache(maxsize=4096)
def _split_label(label: str) -> tuple[str, str]:
    """Split a label into (term, annotation block)."""
    pos = 0
    while pos < len(label):
        char = label[pos]
        if char == "[" and pos > 0:
            end = _skip_group(label, pos)
            if end != len(label):
                raise AnnotationParseError(
                    f"Trailing text after annotations at {end} in {label!r}"
                )
            return label[:pos], label[pos:]
        if char in _PAIRS:
            pos = _skip_group(label, pos)
        elif char == '"':
            pos = _skip_string(label, pos)
        elif char in _CLOSERS:
            raise AnnotationParseError(f"Unexpected {char!r} at {pos} in {label!r}")
        else:
            pos += 1
    return label, ""


def _parse_item(item: str) -> tuple[str, str]:
    """Parse a single annotation like ``cause(life[location(universe)])``."""
    for pos, char in enumerate(item):
        if char == "(":
            end = _skip_group(item, pos)
            return item[:pos], item[pos + 1:end - 1]
        if char == "[":
            return item[:pos], ""
    return item, ""


@lru_cache(maxsize=4096)
def _parse_block(label: str) -> tuple[tuple[str, str, str], ...]:
    """Return (key, value, raw item) triples of a label's annotation block."""
    block = _split_label(label)[1]
    items = []
    for raw in split_top_level(block[1:-1]):
        item = raw.strip()
        if not item:
            continue
        key, value = _parse_item(item)
        items.append((key, value, raw))
    return tuple(items)


def remove_annots(label: str) -> str:
    """Strip the trailing annotation block from a label.

    ``plant(wheat[state(great)])[source(self)]`` -> ``plant(wheat[state(great)])``
    """
    return _split_label(label)[0]


def get_annots(label: str, strip_outer_brackets: bool = False) -> str:
    """Return the raw annotation block of a label, or "" if there is none."""
    block = _split_label(label)[1]
    if strip_outer_brackets and block:
        return block[1:-1]
    return block


def parse_annotations(label: str) -> dict[str, str]:
    """Map annotation keys to their values. The first occurrence of a key wins."""
    annotations: dict[str, str] = {}
    for key, value, _ in _parse_block(label):
        annotations.setdefault(key, value)
    return annotations


def get_annotation(label: str, key: str) -> str:
    """Return the value of annotation `key`, or "" if the label does not carry it."""
    for item_key, value, _ in _parse_block(label):
        if item_key == key:
            return value
    return ""


def remove_annotation(label: str, key: str) -> str:
    """Drop every `key` annotation from a label, and the block if nothing is left."""
    term = remove_annots(label)
    kept = [raw for item_key, _, raw in _parse_block(label) if item_key != key]
    if not kept:
        return term
    return f"{term}[{','.join(kept)}]"
