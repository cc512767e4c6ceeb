"""
Standard-Model leptonic current.

    J^mu(h_out, h_in) = ubar(h_out) (cL gamma^mu PL + cR gamma^mu PR) u(h_in) * prop
    prop = i / (q^2 - M^2 - i M Gamma)

with q = p_in - p_out and couplings from couplings.resolve_couplings.
"""
import logging
from typing import List, Optional, Sequence

from ..couplings import CouplingParameters, resolve_couplings
from ..dirac import SpinMatrix, u_spinor, ubar_spinor
from ..exceptions import NumericalSingularity, UninitializedProcessError
from ..form_factors import FFDictionary, FormFactorInfo, form_factor_table, lookup_form_factors
from ..kinematics import FourVector
from ..particles import PID
from ..process import ProcessInfo
from .base import CurrentBuilder, Currents

logger = logging.getLogger(__name__)

HELICITIES = (-1, 1)


class LeptonicCurrent(CurrentBuilder):
    """Tree-level W / Z / photon exchange with V-A (or pure vector) couplings."""

    name = "Standard Model"
    description = "Built-in leptonic current with Breit-Wigner propagator"

    def __init__(self):
        self.params: Optional[CouplingParameters] = None
        self._ff_table: Optional[FFDictionary] = None
        self._vertex: List[SpinMatrix] = []

    def initialize(self, process: ProcessInfo) -> None:
        self.params = resolve_couplings(process.ids)
        self._ff_table = form_factor_table(self.params.mediator)
        pl, pr = SpinMatrix.pl(), SpinMatrix.pr()
        self._vertex = [
            self.params.coupl_left * SpinMatrix.gamma_mu(mu) * pl
            + self.params.coupl_right * SpinMatrix.gamma_mu(mu) * pr
            for mu in range(4)
        ]

    @property
    def mediator(self) -> PID:
        return self._require().mediator

    @property
    def mediators(self) -> List[PID]:
        return [self.mediator]

    def _require(self) -> CouplingParameters:
        if self.params is None:
            raise UninitializedProcessError("LeptonicCurrent used before initialize()")
        return self.params

    def propagator(self, q2: float) -> complex:
        """Breit-Wigner propagator; an exact pole is reported, not returned as inf."""
        params = self._require()
        denom = complex(q2 - params.mass * params.mass, -params.mass * params.width)
        if denom == 0:
            raise NumericalSingularity(
                f"Propagator pole for mediator {params.mediator.code}: "
                f"q^2 = {q2} equals M^2 = {params.mass ** 2} with width {params.width}"
            )
        return 1j / denom

    def calc_currents(self, momenta: Sequence[FourVector], mu2: float = 100.0) -> Currents:
        params = self._require()
        p_in, p_out = momenta[1], momenta[-1]

        # antileptons enter through crossed (negated) momenta: ubar(-p_in) = vbar(p_in)
        if params.anti:
            p_ubar, p_u = -p_in, -p_out
        else:
            p_ubar, p_u = p_out, p_in
        ubar = [ubar_spinor(h, p_ubar) for h in HELICITIES]
        u = [u_spinor(h, p_u) for h in HELICITIES]

        q2 = (p_in - p_out).m2
        prop = self.propagator(q2)
        logger.debug(f"Calculating current for {params.mediator.code}: q2={q2:.6e}, prop={prop:.6e}")

        result = []
        for i in range(2):
            for j in range(2):
                subcur = [(ubar[i] * self._vertex[mu] * u[j]) * prop for mu in range(4)]
                result.append(subcur)
        return {params.mediator: result}

    def form_factors(self, target: PID, mediator: PID) -> List[FormFactorInfo]:
        self._require()
        return lookup_form_factors(self._ff_table, target, mediator)
