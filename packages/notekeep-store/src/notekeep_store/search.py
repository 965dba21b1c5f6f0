"""Keyword and relevance search over notes.

Both searches work on the note's searchable text: title, content lines and
tags joined by spaces, lower-cased. Nothing is indexed; every call scans the
whole collection.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notekeep_core.types import Note

# Terms of this length or shorter are ignored by relevance scoring
SHORT_TERM_LENGTH = 3
RELEVANCE_THRESHOLD = 0.1


def query_terms(query: str) -> list[str]:
    """Lower-case ``query`` and split it on whitespace."""
    return query.lower().split()


def matches(note: Note, terms: Iterable[str]) -> bool:
    """True if every term is a substring of the note's searchable text."""
    haystack = note.searchable_text().lower()
    return all(term in haystack for term in terms)


def search_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Notes containing every query term, in collection order."""
    terms = query_terms(query)
    return [note for note in notes if matches(note, terms)]


def significant_terms(text: str) -> set[str]:
    """Distinct lower-cased whitespace tokens longer than SHORT_TERM_LENGTH."""
    return {
        term for term in text.lower().split()
        if len(term) > SHORT_TERM_LENGTH
    }


def relevance_score(note_terms: set[str], context_terms: set[str]) -> float:
    """Overlap of the two term sets, normalized by the larger one.

    Returns 0.0 when both sets are empty.
    """
    denominator = max(len(context_terms), len(note_terms))
    if denominator == 0:
        return 0.0
    overlap = sum(1 for term in note_terms if term in context_terms)
    return overlap / denominator


def rank_by_relevance(
    notes: Iterable[Note],
    context: str,
    threshold: float = RELEVANCE_THRESHOLD,
) -> list[Note]:
    """Score notes against ``context`` and keep those above ``threshold``.

    Results are copies carrying ``relevance_score``, sorted by score
    descending. Notes with equal scores keep their collection order.
    """
    context_terms = significant_terms(context)

    scored: list[Note] = []
    for note in notes:
        score = relevance_score(
            significant_terms(note.searchable_text()), context_terms
        )
        if score > threshold:
            scored.append(replace(note, relevance_score=score))

    # sorted() is stable, so ties stay in collection order
    return sorted(scored, key=lambda n: n.relevance_score, reverse=True)
