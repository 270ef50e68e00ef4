"""Post-processor in charge of finding matches between upstream and
downstream tracks."""

from trkmatch.data import MatchCollection
from trkmatch.match import TrackMatcher
from trkmatch.post.base import PostBase
from trkmatch.utils.truth import TruthResolver

__all__ = ["TrackMatchProcessor"]


class TrackMatchProcessor(PostBase):
    """Associates downstream tracks with upstream tracks, uniquely for each
    upstream reconstruction source."""

    # Name of the post-processor (as specified in the configuration)
    name = "track_match"

    # Alternative allowed names of the post-processor
    aliases = ("unique_match",)

    def __init__(
        self,
        down_key="tms_interactions",
        up_keys=None,
        trigger_key="trigger",
        truth_key="truth_particles",
        output_key="track_matches",
        **kwargs,
    ):
        """Initialize the track matching post-processor.

        Parameters
        ----------
        down_key : str, default 'tms_interactions'
            Data product key which provides the downstream interactions
        up_keys : Dict[str, str], optional
            Maps each upstream source name onto the data product key which
            provides its interactions. Defaults to the Pandora and SPINE
            ND-LAr reconstructions.
        trigger_key : str, default 'trigger'
            Data product key which provides the trigger (time matching only)
        truth_key : str, default 'truth_particles'
            Data product key which provides the list of true particles (time
            matching only)
        output_key : str, default 'track_matches'
            Data product key under which the match collection is stored. If
            it is already in the data, the matches are appended to it.
        **kwargs : dict
            Keyword arguments to pass to the :class:`TrackMatcher`
        """
        # Initialize the matcher
        self.matcher = TrackMatcher(**kwargs)

        # Store the data product keys
        if up_keys is None:
            up_keys = {"pandora": "pandora_interactions", "spine": "spine_interactions"}
        if not len(up_keys):
            raise ValueError("Must provide at least one upstream source.")

        self.down_key = down_key
        sources = self.matcher.parse_sources(up_keys.keys())
        self.up_keys = dict(zip(sources, up_keys.values()))
        self.trigger_key = trigger_key
        self.truth_key = truth_key
        self.output_key = output_key

        # Register the necessary data products
        self.update_keys({down_key: True, output_key: False})
        self.update_keys({k: True for k in self.up_keys.values()})
        if self.matcher.use_time:
            self.update_keys({trigger_key: True, truth_key: True})

    def process(self, data):
        """Find the unique (downstream, upstream) track matches of one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Dictionary with the match collection under `output_key`
        """
        # Fetch the output collection, if the caller already owns one
        output = data.get(self.output_key, None)
        if output is None:
            output = MatchCollection()

        # Fetch the time matching inputs, if needed
        trigger, truth = None, None
        if self.matcher.use_time:
            trigger = data[self.trigger_key]
            truth = TruthResolver(data[self.truth_key])

        # Run the matching
        upstream = {s: data[k] for s, k in self.up_keys.items()}
        self.matcher.match(data[self.down_key], upstream, output, trigger, truth)

        return {self.output_key: output}
