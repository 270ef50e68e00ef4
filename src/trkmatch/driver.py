"""Track matching driver.

Takes care of everything in one centralized place:
- Configuration parsing
- Trigger lookup
- Post-processing (track matching)
- Writing matches to file
"""


import yaml

from .config import load_config_file
from .data import MatchCollection
from .io import CSVWriter, TriggerTable
from .post import PostManager
from .utils.logger import logger
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central track matching driver.

    Processes global configuration and runs the appropriate modules on one
    event at a time:
      1. Attach the trigger information, if a trigger file is provided
      2. Run the post-processors (track matching)
      3. Write the accepted matches to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          verbosity: info
        io:
          trigger_file: <path to the trigger CSV file>
          writer:
            file_name: matches.csv
        post:
          track_match:
            sigma_x: 10.
            ...

    Events are independent: the driver keeps no state between events beside
    the output file and the running match count.
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : Union[dict, str]
            Global configuration dictionary, or path to a YAML file
        """
        if isinstance(cfg, str):
            cfg = load_config_file(cfg)

        self.cfg = cfg
        base = cfg.get("base", {}) or {}
        io = cfg.get("io", {}) or {}

        # Set the verbosity, dump the configuration
        logger.setLevel(base.get("verbosity", "info").upper())
        logger.info("Release version: %s\n", __version__)
        logger.info(yaml.dump(cfg, default_flow_style=None, sort_keys=False))

        # Initialize the trigger lookup, if requested
        self.triggers = None
        if io.get("trigger_file", None) is not None:
            self.triggers = TriggerTable(io["trigger_file"])

        # Initialize the post-processors
        if "post" not in cfg or not cfg["post"]:
            raise KeyError("Configuration file must contain a `post` block.")
        self.post = PostManager(cfg["post"])

        # Initialize the writer
        self.writer = None
        if io.get("writer", None) is not None:
            self.writer = CSVWriter(**io["writer"])

        self.num_matches = 0

    def process(self, data):
        """Process one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products of one event. If a trigger file is
            provided, it must contain the `run` and `event` numbers.

        Returns
        -------
        dict
            Updated dictionary of data products
        """
        # Attach the trigger, looked up by explicit key
        if self.triggers is not None and "trigger" not in data:
            data["trigger"] = self.triggers.get(data["run"], data["event"])

        # Record the size of collections provided by the caller, if any
        offsets = {
            id(value): len(value)
            for value in data.values()
            if isinstance(value, MatchCollection)
        }

        # Run the post-processors
        self.post(data)

        # Log and store the matches appended during this event only
        for key, value in data.items():
            if not isinstance(value, MatchCollection):
                continue

            matches = value.matches[offsets.get(id(value), 0) :]
            self.num_matches += len(matches)
            logger.info(
                "Event %s: %d match(es) in `%s`.",
                data.get("event", "?"),
                len(matches),
                key,
            )

            if self.writer is not None:
                for match in matches:
                    row = {
                        "run": data.get("run", -1),
                        "event": data.get("event", -1),
                        **match.scalar_dict(),
                    }
                    self.writer.append(row)

        return data

    def run(self, events):
        """Process an iterable of events.

        Parameters
        ----------
        events : Iterable[dict]
            Events to process, one dictionary of data products each

        Returns
        -------
        List[dict]
            Processed events
        """
        results = [self.process(data) for data in events]
        logger.info("Processed %d event(s), %d match(es).", len(results), self.num_matches)

        return results
