"""Fallback selector chains for scraping pkg.go.dev markup.

pkg.go.dev markup is not a stable contract, so every field is read through an
ordered tuple of strategies. A strategy is a pure function from a parsed node
to an optional string; ``first_of`` runs them in order and returns the first
non-empty value, or the supplied default.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from bs4 import Tag

Strategy = Callable[[Tag], str | None]


def _clean(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.strip()
    return text or None


def first_text_of(selector: str) -> Strategy:
    """Text of the first node matching ``selector``."""

    def strategy(node: Tag) -> str | None:
        match = node.select_one(selector)
        return _clean(match.get_text()) if match is not None else None

    return strategy


def attr_of(selector: str, attr: str) -> Strategy:
    """Attribute value of the first node matching ``selector``."""

    def strategy(node: Tag) -> str | None:
        match = node.select_one(selector)
        if match is None:
            return None
        value = match.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return _clean(value)

    return strategy


def own_attr(attr: str) -> Strategy:
    """Attribute of the node itself (for markers placed on header elements)."""

    def strategy(node: Tag) -> str | None:
        value = node.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return _clean(value)

    return strategy


def html_of(selector: str) -> Strategy:
    """Inner HTML of the first node matching ``selector``."""

    def strategy(node: Tag) -> str | None:
        match = node.select_one(selector)
        return _clean(match.decode_contents()) if match is not None else None

    return strategy


def child_paragraphs() -> Strategy:
    """Direct ``<p>`` children, joined by blank lines."""

    def strategy(node: Tag) -> str | None:
        paragraphs = (p.get_text().strip() for p in node.find_all("p", recursive=False))
        return _clean("\n\n".join(p for p in paragraphs if p))

    return strategy


def first_of(node: Tag, strategies: Iterable[Strategy], default: str | None = None) -> str | None:
    for strategy in strategies:
        value = strategy(node)
        if value:
            return value
    return default


def texts_of(node: Tag, selector: str) -> list[str]:
    """Non-empty stripped text of every node matching ``selector``."""
    texts = (match.get_text().strip() for match in node.select(selector))
    return [text for text in texts if text]


def first_texts_of(node: Tag, selectors: Sequence[str]) -> list[str]:
    """``texts_of`` for the first selector that yields any text."""
    for selector in selectors:
        texts = texts_of(node, selector)
        if texts:
            return texts
    return []


def first_matching(node: Tag, selectors: Sequence[str]) -> list[Tag]:
    """Nodes for the first selector that matches anything at all."""
    for selector in selectors:
        matches = node.select(selector)
        if matches:
            return matches
    return []
