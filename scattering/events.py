from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .kinematics import FourVector
from .particles import PID


@dataclass
class Event:
    """
    Event record handed to the amplitude engine.

    Momentum roles (fixed convention):
        momenta[0]   initial target nucleon
        momenta[1]   incoming lepton
        momenta[2:-1] hadronic final state
        momenta[-1]  outgoing lepton

    The engine only reads momenta. Target selection and process stamping
    happen in HardScattering.fill_event via the nuclear model.
    """

    momenta: List[FourVector]
    weight: float = 1.0
    xsecs: List[float] = field(default_factory=list)
    target: Optional[PID] = None
    process_ids: Tuple[PID, ...] = ()

    def __post_init__(self):
        if len(self.momenta) < 3:
            raise ValueError(f"Event needs target, incoming and outgoing lepton momenta, got {len(self.momenta)}")

    @property
    def target_in(self) -> FourVector:
        return self.momenta[0]

    @property
    def lepton_in(self) -> FourVector:
        return self.momenta[1]

    @property
    def lepton_out(self) -> FourVector:
        return self.momenta[-1]

    @property
    def hadrons_out(self) -> List[FourVector]:
        return list(self.momenta[2:-1])

    @property
    def total_xsec(self) -> float:
        return float(sum(self.xsecs))
