"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

from .globals import *

__all__ = [
    "enum_factory",
    "RecoSourceEnum",
    "MatchTypeEnum",
    "ProjectionEnum",
    "UnscoredPolicyEnum",
]


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to value(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, List[str]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[int, List[int]]
        Value or values of the enumerated objects
    """
    # Get the enumerated type
    ENUM_DICT = {
        "source": RecoSourceEnum,
        "match_type": MatchTypeEnum,
        "projection": ProjectionEnum,
        "unscored": UnscoredPolicyEnum,
    }
    if enum not in ENUM_DICT:
        raise KeyError(
            f"Enumerated type not recognized: {enum}. Must be one of "
            f"{list(ENUM_DICT.keys())}."
        )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings into values
    if isinstance(value, str):
        if not hasattr(enum, value.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {value}. Must be one "
                f"of {[e.name for e in enum]}."
            )

        return getattr(enum, value.upper()).value

    values = []
    for v in value:
        if not hasattr(enum, v.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {v}. Must be one "
                f"of {[e.name for e in enum]}."
            )
        values.append(getattr(enum, v.upper()).value)

    return values


class RecoSourceEnum(IntEnum):
    """Enumerates the reconstruction sources a track can come from."""

    DOWNSTREAM = DOWN_SRC
    PANDORA = PAN_SRC
    SPINE = DLP_SRC


class MatchTypeEnum(IntEnum):
    """Enumerates the kind of association stored in a match."""

    UNIQUE_NO_TIME = UNIQUE_NO_TIME
    UNIQUE_WITH_TIME = UNIQUE_WITH_TIME


class ProjectionEnum(IntEnum):
    """Enumerates the directions in which a track can be projected."""

    FORWARD = 1
    BACKWARD = -1


class UnscoredPolicyEnum(IntEnum):
    """Enumerates how candidates which cannot be time-scored are handled."""

    EXCLUDE = 0
    BASE = 1
