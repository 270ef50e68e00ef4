"""Greedy unique assignment of candidate pairs."""

import numpy as np

from trkmatch.data import MatchResult

__all__ = ["select"]


def select(candidates, cutoff):
    """Greedily commits the best non-conflicting candidates of one pool.

    Candidates are visited in increasing score order (stable with respect
    to the input order for equal scores). A candidate is accepted if its
    score does not exceed the cutoff and neither of its tracks has already
    been claimed by a better candidate. The scan stops at the first
    candidate above the cutoff, or with a non-finite score, since all
    subsequent ones are worse.

    This is not a global optimum: the total score of the accepted pairs is
    not minimized.

    Parameters
    ----------
    candidates : List[MatchCandidate]
        Candidates of one pool (one upstream source)
    cutoff : float
        Maximum acceptable score

    Returns
    -------
    List[MatchResult]
        Accepted matches, in order of acceptance
    """
    if not len(candidates):
        return []

    # Sort the candidates by increasing score
    scores = np.array([c.score for c in candidates], dtype=np.float64)
    order = np.argsort(scores, kind="stable")

    # Claimed references only live for the duration of this pass
    claimed_down, claimed_up = set(), set()
    matches = []
    for i in order:
        candidate = candidates[i]
        if not np.isfinite(candidate.score) or candidate.score > cutoff:
            break

        if candidate.down_ref in claimed_down or candidate.up_ref in claimed_up:
            continue

        claimed_down.add(candidate.down_ref)
        claimed_up.add(candidate.up_ref)
        matches.append(MatchResult.from_candidate(candidate))

    return matches
