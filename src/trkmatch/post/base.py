"""Parent class of all post-processors."""

from abc import ABC, abstractmethod

__all__ = ["PostBase"]


class PostBase(ABC):
    """Base class of all post-processors.

    A post-processor declares the data products it reads, each flagged as
    required or optional. Calling it on an event dictionary checks that the
    required products are present, hands the declared products to
    :meth:`process` and returns its update to the event dictionary.

    Attributes
    ----------
    name : str
        Name of the post-processor in the configuration
    aliases : Tuple[str]
        Deprecated names under which the post-processor can still be found
    """

    # Name of the post-processor in the configuration
    name = None

    # Deprecated names of the post-processor
    aliases = ()

    # (key, required) pairs of data products read by the post-processor
    _keys = ()

    # Names of the post-processors which must run before this one
    _upstream = ()

    @property
    def keys(self):
        """Data products read by the post-processor.

        Returns
        -------
        Dict[str, bool]
            Maps each data product key onto whether it is required
        """
        return dict(self._keys)

    def update_keys(self, update_dict):
        """Declares additional data products, or changes their necessity.

        Parameters
        ----------
        update_dict : Dict[str, bool]
            Maps data product keys onto whether they are required
        """
        if update_dict:
            self._keys = tuple({**self.keys, **update_dict}.items())

    def __call__(self, data):
        """Runs the post-processor on one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products of one event

        Returns
        -------
        dict
            Update to the event dictionary
        """
        missing = [k for k, req in self._keys if req and k not in data]
        if missing:
            raise KeyError(
                f"Post-processor `{self.name}` is missing required data "
                f"product(s): {missing}."
            )

        return self.process({k: data[k] for k, _ in self._keys if k in data})

    @abstractmethod
    def process(self, data):
        """Processes the declared data products of one event.

        Parameters
        ----------
        data : dict
            Declared data products which are present in the event
        """
        raise NotImplementedError("Must define the `process` function.")
