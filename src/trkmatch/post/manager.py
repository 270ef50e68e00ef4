"""Manages the operation of post-processors."""

from collections import OrderedDict
from copy import deepcopy

import numpy as np

from .factories import post_processor_factory


class PostManager:
    """Manager in charge of handling post-processing modules.

    It loads all the post-processor objects once and feeds them data, one
    event at a time.
    """

    def __init__(self, cfg):
        """Initialize the post-processing manager.

        Parameters
        ----------
        cfg : dict
            Post-processor configurations
        """
        # Loop over the post-processor modules and get their priorities
        cfg = deepcopy(cfg)
        keys = np.array(list(cfg.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, key in enumerate(keys):
            if "priority" in cfg[key]:
                priorities[i] = cfg[key].pop("priority")

        # Add the modules to a processor list in decreasing order of priority
        self.modules = OrderedDict()
        keys = keys[np.argsort(-priorities, kind="stable")]
        for key in map(str, keys):
            self.modules[key] = post_processor_factory(key, cfg[key])

            # Check dependencies
            for post in self.modules[key]._upstream:
                if post not in self.modules:
                    raise KeyError(
                        f"Post-processor `{key}` is missing an essential "
                        f"upstream post-processor: `{post}`."
                    )

    def __call__(self, data):
        """Pass one event worth of data through the post-processors.

        Parameters
        ----------
        data : dict
            Dictionary of data products, updated in place
        """
        for module in self.modules.values():
            result = module(data)
            if result is not None:
                data.update(result)
