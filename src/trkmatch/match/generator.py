"""Generation of scored candidate pairs, one pool per upstream source."""

from trkmatch.data import TrackRef
from trkmatch.utils.enums import RecoSourceEnum
from trkmatch.utils.logger import logger

__all__ = ["CandidateGenerator"]


class CandidateGenerator:
    """Builds one candidate for every pair of admissible downstream and
    upstream tracks of a given upstream reconstruction source.

    Candidates built from different upstream sources live in separate pools
    and never compete with each other.
    """

    def __init__(self, fiducial, scorer):
        """Initialize the generator.

        Parameters
        ----------
        fiducial : FiducialFilter
            Admissibility predicates
        scorer : CompatibilityScorer
            Pair scorer
        """
        self.fiducial = fiducial
        self.scorer = scorer

    @staticmethod
    def enumerate_tracks(interactions, source):
        """Loops over all the tracks of a list of interactions.

        Parameters
        ----------
        interactions : List[Interaction]
            List of interactions
        source : int
            Reconstruction source tag

        Yields
        ------
        TrackRef
            Reference to the track
        Track
            Track itself
        """
        for ixn, interaction in enumerate(interactions):
            for idx in range(interaction.num_tracks):
                yield TrackRef(ixn, idx, int(source)), interaction[idx]

    def admitted_downstream(self, interactions):
        """Lists the downstream tracks which pass the fiducial filter.

        Parameters
        ----------
        interactions : List[Interaction]
            Downstream interactions

        Returns
        -------
        List[Tuple[TrackRef, Track]]
            Admissible downstream tracks
        """
        admitted = []
        for ref, track in self.enumerate_tracks(interactions, RecoSourceEnum.DOWNSTREAM):
            if self.fiducial.admit_downstream(track):
                admitted.append((ref, track))
            else:
                logger.debug("Downstream track %s rejected by the fiducial filter.", ref)

        return admitted

    def admitted_upstream(self, interactions, source):
        """Lists the upstream tracks which pass the fiducial filter.

        Parameters
        ----------
        interactions : List[Interaction]
            Upstream interactions of one reconstruction source
        source : int
            Upstream reconstruction source tag

        Returns
        -------
        List[Tuple[TrackRef, Track]]
            Admissible upstream tracks
        """
        admitted = []
        for ref, track in self.enumerate_tracks(interactions, source):
            if self.fiducial.admit_upstream(track):
                admitted.append((ref, track))
            else:
                logger.debug("Upstream track %s rejected by the fiducial filter.", ref)

        return admitted

    def generate(self, downstream, upstream, source, trigger=None, truth=None):
        """Builds the candidate pool of one upstream source.

        Parameters
        ----------
        downstream : List[Interaction]
            Downstream interactions
        upstream : List[Interaction]
            Upstream interactions of one reconstruction source
        source : int
            Upstream reconstruction source tag
        trigger : Trigger, optional
            Trigger information, used by the time term
        truth : object, optional
            Truth resolver, used by the time term

        Returns
        -------
        List[MatchCandidate]
            One candidate per admissible (downstream, upstream) pair
        """
        down_tracks = self.admitted_downstream(downstream)
        if not len(down_tracks):
            return []

        up_tracks = self.admitted_upstream(upstream, source)

        candidates = []
        for down_ref, down_track in down_tracks:
            for up_ref, up_track in up_tracks:
                candidates.append(
                    self.scorer.score(
                        down_track, up_track, down_ref, up_ref, trigger, truth
                    )
                )

        return candidates
