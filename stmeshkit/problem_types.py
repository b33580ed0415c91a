"""Problem types: named layouts of the per-node values of a solution."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class DataEntry:
    """One named field of a problem type and the number of values it spans."""

    name: str
    length: int


@dataclass(frozen=True)
class ProblemType:
    """An ordered collection of data entries describing a node's data vector."""

    data_entries: tuple[DataEntry, ...]

    def __post_init__(self):
        object.__setattr__(self, "data_entries", tuple(self.data_entries))

    def entries(self) -> int:
        """The total number of values per node."""
        return sum(entry.length for entry in self.data_entries)

    def split(self, data) -> list[tuple[DataEntry, np.ndarray]]:
        """Split a data vector into its fields, in order, pairing each entry with its values."""
        values = np.asarray(data, dtype=float)
        if values.ndim != 1 or len(values) < self.entries():
            raise ValueError(f"expected a vector of at least {self.entries()} values")
        parts = []
        offset = 0
        for entry in self.data_entries:
            parts.append((entry, values[offset:offset + entry.length]))
            offset += entry.length
        return parts


def generic_problem_type(n: int) -> ProblemType:
    """A problem type of n scalar entries named u_0 to u_{n-1}."""
    return ProblemType(tuple(DataEntry(f"u_{i}", 1) for i in range(n)))


SOLID_PROBLEM = ProblemType((DataEntry("displacement", 3),))
VISCOELASTIC_PROBLEM = ProblemType((DataEntry("velocity", 3), DataEntry("stress", 6)))
ADVECTION_DIFFUSION_PROBLEM = ProblemType((DataEntry("concentration", 1),))
INS_PROBLEM = ProblemType((DataEntry("velocity", 3), DataEntry("pressure", 1)))
CNS_PROBLEM = ProblemType(
    (DataEntry("pressure", 1), DataEntry("velocity", 3), DataEntry("temperature", 1))
)
RVTCNS_PROBLEM = ProblemType(
    (DataEntry("density", 1), DataEntry("velocity", 3), DataEntry("temperature", 1))
)
EMUM_PROBLEM = ProblemType((DataEntry("displacement", 4),))
SOLID_UV_PROBLEM = ProblemType((DataEntry("displacement", 3), DataEntry("velocity", 3)))


class ProblemTypeEnum(enum.Enum):
    """The known problem types."""

    SOLID = 0
    VISCOELASTIC = 1
    ADVECTION_DIFFUSION = 2
    INS = 3
    CNS = 4
    RVTCNS = 5
    EMUM = 6
    SOLID_UV = 7


PROBLEM_TYPE_MAP = {
    ProblemTypeEnum.SOLID: SOLID_PROBLEM,
    ProblemTypeEnum.VISCOELASTIC: VISCOELASTIC_PROBLEM,
    ProblemTypeEnum.ADVECTION_DIFFUSION: ADVECTION_DIFFUSION_PROBLEM,
    ProblemTypeEnum.INS: INS_PROBLEM,
    ProblemTypeEnum.CNS: CNS_PROBLEM,
    ProblemTypeEnum.RVTCNS: RVTCNS_PROBLEM,
}

NAME_MAP = {
    "solid": SOLID_PROBLEM,
    "viscoelastic": VISCOELASTIC_PROBLEM,
    "advection_diffusion": ADVECTION_DIFFUSION_PROBLEM,
    "ins": INS_PROBLEM,
    "cns": CNS_PROBLEM,
    "rvtcns": RVTCNS_PROBLEM,
    "emum": EMUM_PROBLEM,
    "soliduv": SOLID_UV_PROBLEM,
}


def problem_type_from_name(name: str) -> ProblemType:
    """Look up a problem type by its command-line name."""
    try:
        return NAME_MAP[name]
    except KeyError:
        raise ValueError(
            f"unknown problem type {name!r}; expected one of {', '.join(NAME_MAP)}"
        ) from None