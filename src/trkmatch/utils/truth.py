"""Resolution of the true particle responsible for a reconstructed track."""

import numpy as np

from trkmatch.utils.logger import logger

__all__ = ["TruthResolver"]


class TruthResolver:
    """Looks up the true particle which contributes the most to a track.

    Tracks reference true particles through their `truth_ids` and
    `truth_overlap` attributes (parallel arrays). The leading particle is the
    one with the largest overlap fraction.
    """

    def __init__(self, particles):
        """Initialize the resolver.

        Parameters
        ----------
        particles : Union[List[Particle], Dict[int, Particle]]
            True particles of the event, indexed by their ID
        """
        if isinstance(particles, dict):
            self.particles = dict(particles)
        else:
            self.particles = {int(p.id): p for p in particles}

    def __len__(self):
        return len(self.particles)

    def resolve(self, track):
        """Finds the true particle with the largest overlap with a track.

        Parameters
        ----------
        track : Track
            Reconstructed track

        Returns
        -------
        Particle
            Leading true particle, or `None` if it cannot be found
        """
        overlap, truth_ids = track.truth_overlap, track.truth_ids
        if not len(overlap):
            return None

        if len(overlap) != len(truth_ids):
            logger.warning(
                "Track truth IDs (%d) and overlap fractions (%d) do not match.",
                len(truth_ids),
                len(overlap),
            )
            return None

        particle_id = int(truth_ids[np.argmax(overlap)])

        return self.particles.get(particle_id, None)
