import copy
import logging
import math
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .constants import HBARC2, MB_TO_NB
from .currents import CurrentBuilder, Currents, get_builder
from .events import Event
from .exceptions import NumericalSingularity, UninitializedProcessError
from .form_factors import TARGETS
from .kinematics import FourVector
from .nuclear_model import FFInfoMap, NuclearModel
from .particles import ParticleInfo
from .process import ProcessInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ProcessSetup:
    """Everything cross_section reads for one process, swapped in as a unit."""

    process: ProcessInfo
    builder: CurrentBuilder
    ff_info: List[FFInfoMap]


class HardScattering:
    """
    Cross-section assembler.

    Contracts leptonic currents from a CurrentBuilder with hadronic currents
    from a NuclearModel, sums over spin states, and normalises by flux:

        xsec[k] = sum_{i,j} |sum_mu g_mu L[i][mu] H[k][j][mu]|^2 * (hbar c)^2 / spin_avg / flux

    in nanobarns. Each set_process initialises a private copy of the builder
    and publishes it together with the form-factor info in one assignment.
    cross_section reads that snapshot once, so it is safe to call from
    several threads, also while another thread switches the process.
    """

    def __init__(self, nuclear_model: NuclearModel, builder: Optional[CurrentBuilder] = None):
        self.nuclear_model = nuclear_model
        self._prototype = builder or get_builder()
        self._setup: Optional[_ProcessSetup] = None
        self._lock = threading.Lock()

    # -------------------- Setup --------------------

    def set_process(self, process: ProcessInfo):
        """
        Resolve couplings and build the per-target form-factor info once.

        On failure the previously configured process stays active.
        """
        logger.debug(f"Adding Process: {process}")
        with self._lock:
            builder = copy.copy(self._prototype)
            builder.initialize(process)
            ff_info = [
                {boson: builder.form_factors(target, boson) for boson in builder.mediators}
                for target in TARGETS
            ]
            self._setup = _ProcessSetup(process, builder, ff_info)

    @property
    def process(self) -> Optional[ProcessInfo]:
        setup = self._setup
        return setup.process if setup else None

    @property
    def builder(self) -> CurrentBuilder:
        """Builder of the active process, or the unconfigured prototype."""
        setup = self._setup
        return setup.builder if setup else self._prototype

    def _require(self) -> _ProcessSetup:
        setup = self._setup
        if setup is None:
            raise UninitializedProcessError("HardScattering used before set_process()")
        return setup

    def form_factor_info(self) -> List[FFInfoMap]:
        return self._require().ff_info

    # -------------------- Amplitudes --------------------

    def leptonic_currents(self, momenta: Sequence[FourVector], mu2: float = 100.0) -> Currents:
        return self._require().builder.calc_currents(momenta, mu2)

    def flux(self, event: Event) -> float:
        """2 E_lepton * 2 sqrt(|p_target|^2 + m_target^2)."""
        return _flux(self._require().process, event)

    def spin_average(self) -> float:
        return self._spin_average(self._require().process)

    def _spin_average(self, process: ProcessInfo) -> float:
        spin_avg = 1.0
        if not process.beam.is_neutrino:
            spin_avg *= 2
        if self.nuclear_model.n_spins() > 1:
            spin_avg *= 2
        return spin_avg

    def cross_section(self, event: Event) -> List[float]:
        """
        Per-target cross sections (nb), ordered as the nuclear model's currents.

        Raises:
            UninitializedProcessError: set_process has not been called
            NumericalSingularity: propagator pole, or a negative / non-finite result
        """
        setup = self._require()
        lepton_current = setup.builder.calc_currents(event.momenta, 100)
        hadron_current = self.nuclear_model.calc_currents(event, setup.ff_info)

        amps2 = contract_currents(lepton_current, hadron_current, self.nuclear_model.n_spins())

        spin_avg = self._spin_average(setup.process)
        flux = _flux(setup.process, event)
        if not flux > 0.0:
            raise NumericalSingularity(f"Non-positive flux factor {flux}")

        xsecs = []
        for k, amp2 in enumerate(amps2):
            xsec = amp2 * HBARC2 / spin_avg / flux * MB_TO_NB
            if not math.isfinite(xsec) or xsec < 0.0:
                raise NumericalSingularity(f"Invalid cross section Xsec[{k}] = {xsec}")
            logger.debug(f"Xsec[{k}] = {xsec}")
            xsecs.append(xsec)
        return xsecs

    def fill_event(self, event: Event, xsecs: Sequence[float]) -> bool:
        """Let the nuclear model pick the target, then stamp the process on the event."""
        process = self._require().process
        if not self.nuclear_model.fill_nucleus(event, xsecs):
            return False
        event.process_ids = (process.beam, *process.hadrons_in, process.final_lepton, *process.hadrons_out)
        return True


def _flux(process: ProcessInfo, event: Event) -> float:
    mass = ParticleInfo(process.hadrons_in[0]).mass
    return 2 * event.lepton_in.E * 2 * math.sqrt(event.target_in.p2 + mass * mass)


def contract_currents(lepton_current: Currents,
                      hadron_current: Sequence[Dict],
                      n_hadron_spins: int) -> List[float]:
    """
    Spin-summed |amplitude|^2 per target.

    For each lepton helicity pair i and hadron spin state j, every mediator
    present on both sides is added coherently into one amplitude before the
    modulus is squared; the (i, j) terms are then summed incoherently.
    Targets whose currents lack a mediator simply get no contribution from it.
    """
    amps2 = [0.0] * len(hadron_current)
    if not lepton_current:
        return amps2
    nlep_spins = len(next(iter(lepton_current.values())))
    for i in range(nlep_spins):
        for j in range(n_hadron_spins):
            amps = [0j] * len(hadron_current)
            for mu in range(4):
                sign = 1.0 if mu == 0 else -1.0
                for boson, lcurrent in lepton_current.items():
                    for k, hcurrent in enumerate(hadron_current):
                        if boson in hcurrent:
                            amps[k] += sign * lcurrent[i][mu] * hcurrent[boson][j][mu]
            for k in range(len(hadron_current)):
                amps2[k] += abs(amps[k]) ** 2
    return amps2
