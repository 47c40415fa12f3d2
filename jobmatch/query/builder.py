"""Turn an extracted skill list into a job-index query."""

from collections.abc import Sequence

from jobmatch.query.grammar import ParsedQuery, serialize


def build_query(skills: Sequence[str]) -> str:
    """Build an any-of query: every skill becomes an optional (OR) term.

    No AND/NOT inference; skill order is kept so the index sees the most
    relevant terms first.
    """
    return serialize(ParsedQuery(or_terms=tuple(skills)))
