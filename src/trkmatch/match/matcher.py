"""Module that supports the association of upstream and downstream tracks."""

from trkmatch.data import MatchCollection
from trkmatch.geo import MatchGeometry, geo_factory
from trkmatch.utils.enums import RecoSourceEnum, enum_factory
from trkmatch.utils.globals import DEFAULT_GEO, DOWN_Z_CUTOFF, UP_Z_CUTOFF
from trkmatch.utils.logger import logger

from .fiducial import FiducialFilter
from .generator import CandidateGenerator
from .scorer import CompatibilityScorer
from .selector import select

__all__ = ["TrackMatcher"]


class TrackMatcher:
    """Matches downstream tracks with the upstream tracks they continue.

    For each upstream reconstruction source independently, it builds one
    scored candidate per admissible (downstream, upstream) pair and greedily
    accepts the best non-conflicting candidates below the score cutoff. Each
    track is matched at most once per upstream source.
    """

    def __init__(
        self,
        sigma_x,
        sigma_y,
        score_cutoff,
        single_angle=True,
        sigma_angle=None,
        sigma_angle_x=None,
        sigma_angle_y=None,
        use_time=False,
        mean_t=0.0,
        sigma_t=None,
        unscored_policy="exclude",
        down_z_cutoff=DOWN_Z_CUTOFF,
        up_z_cutoff=UP_Z_CUTOFF,
        detector=DEFAULT_GEO,
        tag=None,
        version=None,
        geometry=None,
    ):
        """Initialize the track matcher.

        Parameters
        ----------
        sigma_x : float
            Tolerance on the transverse displacement along x, in cm
        sigma_y : float
            Tolerance on the transverse displacement along y, in cm
        score_cutoff : float
            Maximum score of an accepted match
        single_angle : bool, default True
            Use the overall 3D angle (`True`) or two planar angles (`False`)
        sigma_angle : float, optional
            Tolerance on the overall angle, in degrees
        sigma_angle_x : float, optional
            Tolerance on the x-z angle, in degrees
        sigma_angle_y : float, optional
            Tolerance on the y-z angle, in degrees
        use_time : bool, default False
            Whether to include the timing term in the score
        mean_t : float, default 0.
            Expected time difference between the two tracks, in ns
        sigma_t : float, optional
            Tolerance on the time difference, in ns
        unscored_policy : str, default 'exclude'
            Handling of candidates which cannot be time-scored ('exclude'
            or 'base')
        down_z_cutoff : float, default 20
            Maximum distance between a downstream track start and the
            downstream entrance plane, in cm
        up_z_cutoff : float, default 20
            Maximum distance between an upstream track end and the upstream
            exit plane, in cm
        detector : str, default 'ndlar_tms'
            Name of the packaged geometry to load
        tag : str, optional
            Tag of the packaged geometry to load
        version : str, optional
            Version of the packaged geometry to load
        geometry : Union[dict, MatchGeometry], optional
            Explicit geometry, used instead of the packaged one
        """
        if not score_cutoff >= 0:
            raise ValueError(
                f"The score cutoff must be a non-negative number, got {score_cutoff}."
            )

        # Initialize the geometry
        if isinstance(geometry, MatchGeometry):
            self.geo = geometry
        elif geometry is not None:
            self.geo = geo_factory(geometry=geometry)
        else:
            self.geo = geo_factory(detector, tag, version)

        # Initialize the matching components
        self.fiducial = FiducialFilter(self.geo, down_z_cutoff, up_z_cutoff)
        self.scorer = CompatibilityScorer(
            self.geo,
            sigma_x,
            sigma_y,
            single_angle=single_angle,
            sigma_angle=sigma_angle,
            sigma_angle_x=sigma_angle_x,
            sigma_angle_y=sigma_angle_y,
            use_time=use_time,
            mean_t=mean_t,
            sigma_t=sigma_t,
            unscored_policy=unscored_policy,
        )
        self.generator = CandidateGenerator(self.fiducial, self.scorer)
        self.score_cutoff = score_cutoff

    @property
    def use_time(self):
        """Whether the timing term is included in the score."""
        return self.scorer.use_time

    @staticmethod
    def parse_source(source):
        """Converts an upstream source name or tag to its tag value.

        Parameters
        ----------
        source : Union[str, int]
            Upstream source name (e.g. 'pandora') or tag

        Returns
        -------
        int
            Upstream source tag
        """
        if isinstance(source, str):
            source = enum_factory("source", source)

        source = RecoSourceEnum(source)
        if source == RecoSourceEnum.DOWNSTREAM:
            raise ValueError("The downstream source cannot be used as an upstream one.")

        return int(source)

    @classmethod
    def parse_sources(cls, sources):
        """Converts a set of upstream source names or tags to tag values.

        Parameters
        ----------
        sources : Iterable[Union[str, int]]
            Upstream source names or tags

        Returns
        -------
        List[int]
            Upstream source tags, in the same order

        Raises
        ------
        ValueError
            If two entries refer to the same upstream source
        """
        tags = []
        for source in sources:
            tag = cls.parse_source(source)
            if tag in tags:
                raise ValueError(
                    f"Upstream source `{source}` is provided more than once "
                    f"(as `{RecoSourceEnum(tag).name.lower()}`)."
                )
            tags.append(tag)

        return tags

    def match(self, downstream, upstream, output=None, trigger=None, truth=None):
        """Finds the unique matches of one event.

        Parameters
        ----------
        downstream : List[Interaction]
            Downstream interactions
        upstream : Dict[Union[str, int], List[Interaction]]
            Upstream interactions, one list per reconstruction source
        output : MatchCollection, optional
            Collection to append the matches to. If not specified, a new one
            is created.
        trigger : Trigger, optional
            Trigger information (required when the time term is used)
        truth : object, optional
            Truth resolver with a `resolve(track)` method (required when the
            time term is used)

        Returns
        -------
        MatchCollection
            Collection the matches were appended to
        """
        if self.use_time and (trigger is None or truth is None):
            raise ValueError(
                "Time matching requires both a `trigger` and a `truth` resolver."
            )

        sources = self.parse_sources(upstream.keys())
        if output is None:
            output = MatchCollection()

        # Each pool is built and resolved independently of the others
        for source, interactions in zip(sources, upstream.values()):
            candidates = self.generator.generate(
                downstream, interactions, source, trigger, truth
            )
            matches = select(candidates, self.score_cutoff)
            output.extend(matches)

            logger.debug(
                "Source %s: %d candidate(s), %d match(es).",
                RecoSourceEnum(source).name.lower(),
                len(candidates),
                len(matches),
            )

        return output
