"""Construct a post-processor module class from its name."""

from trkmatch.utils.factory import instantiate, module_dict

from . import match

# Build a dictionary of available post-processor modules
POST_DICT = {}
for module in [match]:
    POST_DICT.update(**module_dict(module))


def post_processor_factory(name, cfg):
    """Instantiates a post-processor module from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the post-processor module
    cfg : dict
        Post-processor module configuration

    Returns
    -------
    object
         Initialized post-processor object
    """
    # Provide the name to the configuration
    cfg = dict(cfg, name=name)

    return instantiate(POST_DICT, cfg)
