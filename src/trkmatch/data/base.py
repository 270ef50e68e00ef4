"""Module with a parent class of all data structures."""

from dataclasses import dataclass, fields

import numpy as np

__all__ = ["DataBase"]


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Subclasses list their array attributes in the class-level tuples below.
    This is used to give them default values, to check their shape and to
    flatten them to scalars when writing to file.
    """

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Variable-length attributes as (key, dtype) pairs
    _var_length_attrs = ()

    # Attributes specifying coordinates
    _pos_attrs = ()

    # Attributes specifying vector components
    _vec_attrs = ()

    # Attributes that must never be stored to file
    _skip_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Casts array attributes to numpy arrays of the expected type.

        Unset array attributes get a fresh default here rather than in the
        attribute definition, so that instances never share memory.
        """
        for attr, dtype in self._var_length_attrs:
            value = getattr(self, attr)
            value = np.empty(0, dtype=dtype) if value is None else value
            setattr(self, attr, np.asarray(value, dtype=dtype))

        for attr, size in self._fixed_length_attrs:
            size, dtype = size if isinstance(size, tuple) else (size, np.float64)
            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, np.full(size, -np.inf, dtype=dtype))
                continue

            value = np.asarray(value, dtype=dtype)
            if value.shape != (size,):
                raise ValueError(
                    f"The `{attr}` attribute of `{self.__class__.__name__}` "
                    f"must have shape ({size},), got {value.shape}."
                )
            setattr(self, attr, value)

    def __eq__(self, other):
        """Checks that two objects of the same class hold identical values.

        Array attributes are compared element-wise.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for key, value in self.__dict__.items():
            other_value = getattr(other, key)
            if isinstance(value, np.ndarray):
                if not np.array_equal(value, other_value):
                    return False

            elif value != other_value:
                return False

        return True

    def as_dict(self):
        """Returns the storable attributes as a dictionary.

        Nested data classes are left as is.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in self._skip_attrs
        }

    def scalar_dict(self, attrs=None, lengths=None):
        """Returns the data class attributes as a dictionary of scalars.

        Used to store objects as CSV rows. Positions and vectors are expanded
        per axis (`start_x`, ...), other fixed-length arrays per index.
        Nested objects which provide a `scalar_dict` method are expanded with
        the attribute name as a prefix. Unset (`None`) attributes are skipped.

        Parameters
        ----------
        attrs : List[str], optional
            Attributes to include. If not specified, all are included.
        lengths : Dict[str, int], optional
            Number of columns of each variable-length attribute to store.
            Variable-length attributes without a length are skipped.

        Returns
        -------
        dict
            Dictionary of (column, scalar) pairs
        """
        values = self.as_dict()
        if attrs is not None:
            miss = sorted(set(attrs).difference(values))
            if miss:
                raise AttributeError(
                    f"Attribute(s) {miss} do(es) not appear in "
                    f"{self.__class__.__name__}."
                )
            values = {k: v for k, v in values.items() if k in attrs}

        lengths = lengths or {}
        scalars = {}
        for attr, value in values.items():
            if value is None:
                continue

            if np.isscalar(value):
                scalars[attr] = value

            elif hasattr(value, "scalar_dict"):
                for key, sub_value in value.scalar_dict().items():
                    scalars[f"{attr}_{key}"] = sub_value

            elif attr in self._pos_attrs or attr in self._vec_attrs:
                for axis, sub_value in zip(self._axes, value):
                    scalars[f"{attr}_{axis}"] = sub_value

            elif attr in self.fixed_length_attrs:
                for i, sub_value in enumerate(value):
                    scalars[f"{attr}_{i}"] = sub_value

            elif attr in self.var_length_attrs:
                for i in range(lengths.get(attr, 0)):
                    scalars[f"{attr}_{i}"] = value[i] if i < len(value) else None

            else:
                raise ValueError(
                    f"Cannot expand the `{attr}` attribute of "
                    f"`{self.__class__.__name__}` to scalar values."
                )

        return scalars

    @property
    def fixed_length_attrs(self):
        """Dict[str, int]: Maps fixed-length attributes onto their length."""
        return dict(self._fixed_length_attrs)

    @property
    def var_length_attrs(self):
        """Dict[str, type]: Maps variable-length attributes onto their type."""
        return dict(self._var_length_attrs)
