"""Admissibility of tracks for matching across the boundary plane."""

from trkmatch.utils.globals import DOWN_Z_CUTOFF, UP_Z_CUTOFF

from .projector import project

__all__ = ["FiducialFilter"]


class FiducialFilter:
    """Decides whether tracks are close enough to the boundary, and pointed
    the right way, to be considered for matching.

    All containment checks use strict inequalities: a point which sits
    exactly on a fiducial boundary is rejected.
    """

    def __init__(self, geometry, down_z_cutoff=DOWN_Z_CUTOFF, up_z_cutoff=UP_Z_CUTOFF):
        """Initialize the filter.

        Parameters
        ----------
        geometry : MatchGeometry
            Fiducial volumes of the two subsystems
        down_z_cutoff : float, default 20
            Maximum distance (cm) between the downstream entrance plane and
            the start of a downstream track
        up_z_cutoff : float, default 20
            Maximum distance (cm) between the end of an upstream track and
            the upstream exit plane
        """
        if down_z_cutoff <= 0 or up_z_cutoff <= 0:
            raise ValueError("The boundary-proximity cutoffs must be positive.")

        self.geo = geometry
        self.down_z_cutoff = down_z_cutoff
        self.up_z_cutoff = up_z_cutoff

    def admit_downstream(self, track, z_cutoff=None):
        """Checks whether a downstream track can be matched.

        The track must start inside the downstream volume, within `z_cutoff`
        of its entrance plane, and its backward projection must land inside
        the upstream exit face.

        Parameters
        ----------
        track : Track
            Downstream track
        z_cutoff : float, optional
            Boundary-proximity cutoff in cm (default: value set at construction)

        Returns
        -------
        bool
            `True` if the track is admissible
        """
        z_cutoff = self.down_z_cutoff if z_cutoff is None else z_cutoff
        box, z_entrance = self.geo.downstream, self.geo.down_entrance_z

        # Track must begin within the fiducial volume, close enough to the front
        if not box.contains(track.start[:2], axes=(0, 1)):
            return False
        if not z_entrance < track.start[2] < z_entrance + z_cutoff:
            return False

        # Direction must allow the track to originate from the upstream volume
        proj = project(track, "backward", self.geo)

        return self.geo.upstream.contains(proj[:2], axes=(0, 1))

    def admit_upstream(self, track, z_cutoff=None):
        """Checks whether an upstream track can be matched.

        The track must start and end inside the upstream volume, end within
        `z_cutoff` of its exit plane, and its forward projection must land
        inside the downstream entrance face.

        Parameters
        ----------
        track : Track
            Upstream track
        z_cutoff : float, optional
            Boundary-proximity cutoff in cm (default: value set at construction)

        Returns
        -------
        bool
            `True` if the track is admissible
        """
        z_cutoff = self.up_z_cutoff if z_cutoff is None else z_cutoff
        box, z_exit = self.geo.upstream, self.geo.up_exit_z

        # Track must begin within the fiducial volume
        if not box.contains(track.start):
            return False

        # Track must end within the fiducial volume, close enough to the back
        if not box.contains(track.end[:2], axes=(0, 1)):
            return False
        if not z_exit - z_cutoff < track.end[2] < z_exit:
            return False

        # Direction must allow the track to reach the downstream volume
        proj = project(track, "forward", self.geo)

        return self.geo.downstream.contains(proj[:2], axes=(0, 1))
