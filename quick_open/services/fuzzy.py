"""Fuzzy matching for the quick-open finder.

Greedy, single-pass subsequence matcher with positional scoring:
- Each matched character earns a base score
- Runs of adjacent matches earn a growing consecutive bonus
- Matches at the start, after a separator or on a camelCase hump score higher
- Matching the query's exact case earns a small bonus
- Longer candidates are penalized, exact-length candidates rewarded

The first (leftmost) alignment wins. This is not an optimal-alignment
matcher; ranking quirks that follow from that are intentional.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple

from ..models.search import Candidate, MatchResult

WORD_SEPARATORS = frozenset("/_-.")


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable bonus magnitudes.

    Only the relative ordering they produce is a contract, not the numbers.
    """

    base: int = 10  # Per matched character
    consecutive_step: int = 20  # Multiplied by the current run length
    start_of_string: int = 50
    word_boundary: int = 20  # Previous char is one of / _ - .
    camel_case: int = 20  # lower -> Upper transition
    exact_case: int = 5
    exact_length: int = 100
    length_penalty: int = 1  # Per unmatched candidate character
    empty_query_score: int = 1
    minimum_score: int = 1


DEFAULT_WEIGHTS = ScoringWeights()


class FuzzyScore(NamedTuple):
    """Outcome of scoring one candidate."""

    matched: bool
    score: int
    positions: tuple[int, ...]


NO_MATCH = FuzzyScore(False, 0, ())


def fuzzy_score(
    query: str,
    text: str,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> FuzzyScore:
    """Score query against text.

    Returns:
        FuzzyScore - matched is True iff text contains query as a
        case-insensitive subsequence. positions holds one strictly
        increasing index into text per query character.
    """
    if not query:
        return FuzzyScore(True, weights.empty_query_score, ())

    query_len = len(query)
    text_len = len(text)
    if query_len > text_len:
        return NO_MATCH

    query_idx = 0
    score = 0
    consecutive = 0
    last_match_idx = -2  # -2 so the first match isn't "consecutive"
    positions: list[int] = []

    for i, char in enumerate(text):
        if query_idx == query_len:
            break
        wanted = query[query_idx]
        # Fold per character so indices stay aligned with the original text
        if char.lower() != wanted.lower():
            continue

        positions.append(i)

        if i == last_match_idx + 1:
            consecutive += 1
            score += consecutive * weights.consecutive_step
        else:
            consecutive = 0

        if i == 0:
            score += weights.start_of_string
        else:
            prev = text[i - 1]
            if prev in WORD_SEPARATORS:
                score += weights.word_boundary
            if prev.islower() and char.isupper():
                score += weights.camel_case

        if char == wanted:
            score += weights.exact_case

        score += weights.base
        last_match_idx = i
        query_idx += 1

    if query_idx < query_len:
        return NO_MATCH

    score -= (text_len - query_len) * weights.length_penalty
    if text_len == query_len:
        score += weights.exact_length

    return FuzzyScore(True, max(weights.minimum_score, score), tuple(positions))


def fuzzy_match(query: str, text: str) -> tuple[bool, int]:
    """Check if query fuzzy-matches text and return score.

    Returns:
        (matches, score) - Higher score = better match.
        Score of 0 means no match.
    """
    result = fuzzy_score(query, text)
    return result.matched, result.score


def rank(
    query: str,
    candidates: Iterable[Candidate],
    limit: int | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[MatchResult]:
    """Rank candidates by fuzzy match quality.

    Args:
        query: Search string
        candidates: Candidates in enumeration order
        limit: Maximum results to keep (None = unlimited)

    Returns:
        Matching results sorted by score descending. Ties keep the
        enumeration order; truncation drops the lowest-ranked tail.
    """
    results: list[MatchResult] = []
    for candidate in candidates:
        matched, score, positions = fuzzy_score(query, candidate.text, weights)
        if matched and score > 0:
            results.append(MatchResult(score=score, positions=positions, candidate=candidate))

    # list.sort is stable
    results.sort(key=lambda r: -r.score)
    if limit is not None:
        del results[limit:]
    return results
