"""Free-text search grammar: quoted phrases and +required / -excluded terms.

Pure functions, no I/O.

    parse('"data engineer" +python -php sql')
    -> phrases=("data engineer",), and_terms=("python",),
       not_terms=("php",), or_terms=("sql",)
"""

import re

from pydantic import BaseModel, ConfigDict

_PHRASE_RE = re.compile(r'"([^"]+)"')

AND_MARKER = "+"
NOT_MARKER = "-"


class ParsedQuery(BaseModel):
    """Typed term groups of a search query. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    phrases: tuple[str, ...] = ()
    and_terms: tuple[str, ...] = ()
    not_terms: tuple[str, ...] = ()
    or_terms: tuple[str, ...] = ()


def parse(raw: str) -> ParsedQuery:
    """Split raw user input into phrases, required, excluded and optional terms.

    Only balanced quote pairs form phrases; an unmatched quote stays part of
    an ordinary token. Phrases keep their case, all other terms are
    lower-cased. Terms keep input order and are not deduplicated.
    """
    phrases: list[str] = []

    def _take_phrase(match: re.Match[str]) -> str:
        phrase = match.group(1).strip()
        if phrase:
            phrases.append(phrase)
        # Leave a gap so the neighbours of a phrase stay separate tokens
        return " "

    remaining = _PHRASE_RE.sub(_take_phrase, raw)

    and_terms: list[str] = []
    not_terms: list[str] = []
    or_terms: list[str] = []

    for token in remaining.split():
        if token.startswith(AND_MARKER):
            bucket, term = and_terms, token[1:]
        elif token.startswith(NOT_MARKER):
            bucket, term = not_terms, token[1:]
        else:
            bucket, term = or_terms, token
        if term:
            bucket.append(term.lower())

    return ParsedQuery(
        phrases=tuple(phrases),
        and_terms=tuple(and_terms),
        not_terms=tuple(not_terms),
        or_terms=tuple(or_terms),
    )


def serialize(query: ParsedQuery) -> str:
    """Render a ParsedQuery in the job index's free-text syntax.

    Order: quoted phrases, ``+`` terms, bare terms, ``-`` terms.
    """
    parts: list[str] = [f'"{phrase}"' for phrase in query.phrases]
    parts.extend(f"{AND_MARKER}{term}" for term in query.and_terms)
    parts.extend(query.or_terms)
    parts.extend(f"{NOT_MARKER}{term}" for term in query.not_terms)
    return " ".join(parts)
