"""
Beam definitions.

A FluxType turns random numbers into an incoming lepton momentum and
reports the matching sampling weight. Only monochromatic beams are
provided; energy-spectrum sampling lives outside this package.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Set

from .kinematics import FourVector
from .particles import PID


class FluxType(ABC):
    """Capability interface for beam flux models."""

    type: str = "abstract"

    @abstractmethod
    def n_variables(self) -> int:
        """Number of random variables consumed by flux()."""

    @abstractmethod
    def flux(self, rans: List[float], smin: float) -> FourVector:
        ...

    @abstractmethod
    def generate_weight(self, p: FourVector, rans: List[float], smin: float) -> float:
        ...

    @abstractmethod
    def evaluate_flux(self, p: FourVector) -> float:
        ...


class Monochromatic(FluxType):
    """Fixed-energy massless beam along +z."""

    type = "Monochromatic"

    def __init__(self, energy: float):
        if energy <= 0.0:
            raise ValueError(f"Beam energy must be positive, got {energy}")
        self.energy = float(energy)

    def n_variables(self) -> int:
        return 0

    def flux(self, rans: List[float], smin: float) -> FourVector:
        return FourVector(self.energy, 0.0, 0.0, self.energy)

    def generate_weight(self, p: FourVector, rans: List[float], smin: float) -> float:
        return 1.0

    def evaluate_flux(self, p: FourVector) -> float:
        return 1.0

    def __repr__(self):
        return f"Monochromatic(energy={self.energy})"


class Beam:
    """Flux models keyed by beam particle."""

    def __init__(self, beams: Dict):
        self._beams: Dict[PID, FluxType] = {}
        for pid, flux in beams.items():
            pid = PID(pid)
            if pid in self._beams:
                raise ValueError(f"Multiple beams exist for PID: {pid.code}")
            self._beams[pid] = flux
        self._n_vars = max((f.n_variables() for f in self._beams.values()), default=0)

    def n_variables(self) -> int:
        return self._n_vars

    @property
    def beam_ids(self) -> Set[PID]:
        return set(self._beams)

    def __len__(self) -> int:
        return len(self._beams)

    def __getitem__(self, pid) -> FluxType:
        return self._beams[PID(pid)]

    def flux(self, pid, rans: List[float], smin: float = 0.0) -> FourVector:
        return self[pid].flux(rans, smin)

    def generate_weight(self, pid, p: FourVector, rans: List[float], smin: float = 0.0) -> float:
        return self[pid].generate_weight(p, rans, smin)

    def evaluate_flux(self, pid, p: FourVector) -> float:
        return self[pid].evaluate_flux(p)
