"""Builds objects from configuration blocks.

Classes are looked up by name (or alias) in a dictionary built from a module,
then instantiated with the keyword arguments found in the block.
"""

from copy import deepcopy
from warnings import warn

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module, class_name=None):
    """Converts module into a dictionary which maps class names onto classes.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    class_name : str, optional
        If specified, warns when it matches a deprecated alias

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    # Loop over classes/functions in the module
    result = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name[0] == "_":
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        # Store the class name as an option to fetch it
        result[cls_name] = cls

        # If a name is provided, add it to the allowed options
        if getattr(cls, "name", None):
            result[cls.name] = cls

        # If aliases are specified, it is allowed but should be avoided
        for al in getattr(cls, "aliases", ()):
            if class_name is not None and class_name == al:
                warn(
                    f"This name ({al}) is deprecated. Use {cls.name} instead.",
                    DeprecationWarning,
                )
            result[al] = cls

    return result


def instantiate(module_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class from a configuration block.

    The block names the class to build under `name` (or `alt_name`). Its
    other keys are passed as keyword arguments, either at the top level or
    grouped under `kwargs`:

    .. code-block:: yaml

        track_match:
          name: track_match
          sigma_x: 10.
          kwargs:
            sigma_y: 10.

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps acceptable names onto classes
    cfg : Union[str, dict]
        Configuration block, or a bare class name if it takes no argument
    alt_name : str, optional
        Alternative key under which the class name may be specified
    **kwargs : dict, optional
        Additional keyword arguments to pass to the class

    Returns
    -------
    object
        Instantiated object
    """
    config = {"name": cfg} if isinstance(cfg, str) else deepcopy(cfg)

    # Fetch the class name from exactly one location
    keys = ("name",) if alt_name is None else ("name", alt_name)
    found = [k for k in keys if k in config]
    if len(found) != 1:
        raise KeyError(f"Must specify the class name under exactly one of {keys}.")

    class_name = config.pop(found[0])
    if class_name not in module_dict:
        raise ValueError(
            f"Class name not recognized: '{class_name}'. Must be one of "
            f"{list(module_dict.keys())}."
        )

    # Collect the arguments, refuse keys provided twice
    args = config.pop("args", [])
    kwargs = dict(config.pop("kwargs", {}), **kwargs)
    duplicates = set(config).intersection(kwargs)
    if duplicates:
        raise KeyError(
            f"Keyword argument(s) {sorted(duplicates)} provided both at the top "
            "level and under `kwargs`."
        )
    kwargs.update(config)

    cls = module_dict[class_name]
    try:
        return cls(*args, **kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with args %s and kwargs %s.",
            cls.__name__,
            args,
            kwargs,
        )
        raise err
