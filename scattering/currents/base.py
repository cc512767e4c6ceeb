from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from ..form_factors import FormFactorInfo
from ..kinematics import FourVector
from ..particles import PID
from ..process import ProcessInfo

# One current: 4 complex values, one per Lorentz index
Current = List[complex]
# mediator -> currents ordered by helicity-pair index 2*i + j
Currents = Dict[PID, List[Current]]


class CurrentBuilder(ABC):
    """
    Base class for leptonic current calculators.

    A builder is initialised once per process and then evaluated per event.
    calc_currents must be a pure function of the momenta (no RNG, no shared
    mutable state) so that events can be evaluated in parallel.
    """

    name: str = "abstract"
    description: str = ""

    @abstractmethod
    def initialize(self, process: ProcessInfo) -> None:
        """Resolve everything that depends only on the process."""

    @abstractmethod
    def calc_currents(self, momenta: Sequence[FourVector], mu2: float = 100.0) -> Currents:
        """
        Return helicity-resolved leptonic currents.

        Args:
            momenta: event momenta; index 1 = incoming lepton, last = outgoing lepton
            mu2: renormalisation scale squared (unused at tree level)

        Returns:
            {mediator: [current for each helicity pair]}
        """

    @property
    @abstractmethod
    def mediators(self) -> List[PID]:
        """Mediator keys calc_currents will produce for the initialised process."""

    @abstractmethod
    def form_factors(self, target: PID, mediator: PID) -> List[FormFactorInfo]:
        """Form-factor couplings of the hadronic vertex for target and mediator."""
