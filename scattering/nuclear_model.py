"""
Hadronic side of the amplitude.

NuclearModel is the interface the cross-section assembler consumes;
FreeNucleon is a reference implementation for quasi-free scattering off a
single on-shell nucleon with dipole form factors.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import numpy as np

from .constants import MV2, MA, GA, MU_P, MU_N
from .dirac import METRIC, SpinMatrix, u_spinor, ubar_spinor
from .events import Event
from .form_factors import FormFactorInfo, FormFactorType, TARGETS
from .kinematics import FourVector
from .particles import PID

logger = logging.getLogger(__name__)

# Per target: mediator -> form-factor couplings
FFInfoMap = Dict[PID, List[FormFactorInfo]]
# Per target: mediator -> [spin state][Lorentz index]
HadronicCurrents = Dict[PID, List[List[complex]]]


class NuclearModel(ABC):
    """
    Provider of hadronic currents.

    calc_currents returns one entry per target species, in the same order as
    the ff_info list it receives (proton, neutron, carbon).
    """

    @abstractmethod
    def calc_currents(self, event: Event, ff_info: Sequence[FFInfoMap]) -> List[HadronicCurrents]:
        ...

    @abstractmethod
    def n_spins(self) -> int:
        """Number of hadronic spin states per current."""

    @abstractmethod
    def fill_nucleus(self, event: Event, xsecs: Sequence[float]) -> bool:
        """Select the final-state target from the per-species cross sections."""


# -----------------------------
# Nucleon form factors
# -----------------------------
def nucleon_form_factors(Q2: float, nucleon_mass: float) -> Dict[FormFactorType, float]:
    """
    Dipole parametrisation of the nucleon form factors at Q^2 = -q^2 (MeV^2).

    Sachs: GEp = GD, GMp = mu_p GD, GEn = 0, GMn = mu_n GD,
    Dirac/Pauli: F1 = (GE + tau GM)/(1 + tau), F2 = (GM - GE)/(1 + tau).
    """
    GD = 1.0 / (1.0 + Q2 / MV2) ** 2
    tau = Q2 / (4.0 * nucleon_mass * nucleon_mass)
    GEp, GMp = GD, MU_P * GD
    GEn, GMn = 0.0, MU_N * GD
    return {
        FormFactorType.F1p: (GEp + tau * GMp) / (1.0 + tau),
        FormFactorType.F2p: (GMp - GEp) / (1.0 + tau),
        FormFactorType.F1n: (GEn + tau * GMn) / (1.0 + tau),
        FormFactorType.F2n: (GMn - GEn) / (1.0 + tau),
        FormFactorType.FA: GA / (1.0 + Q2 / (MA * MA)) ** 2,
        FormFactorType.FCoh: 0.0,
    }


_DIRAC = (FormFactorType.F1p, FormFactorType.F1n)
_PAULI = (FormFactorType.F2p, FormFactorType.F2n)


class FreeNucleon(NuclearModel):
    """
    Single on-shell nucleon, current ubar(p') Gamma^mu u(p) with

        Gamma^mu = sum_ff c_ff * [F1 gamma^mu | F2 i sigma^{mu nu} q_nu / 2M | FA gamma^mu gamma^5]

    where M is the mean of the incoming and outgoing nucleon masses, read
    from the on-shell momenta, and also sets tau in the form factors.

    Coherent nuclear scattering is not modelled: the carbon slot carries no
    currents and so contributes a zero cross section.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def n_spins(self) -> int:
        return 4

    def _vertices(self, q: FourVector, mass: float) -> Dict[str, List[SpinMatrix]]:
        q_lower = METRIC @ q.to_array()
        gamma5 = SpinMatrix.gamma_5()
        vector = [SpinMatrix.gamma_mu(mu) for mu in range(4)]
        pauli = []
        for mu in range(4):
            sigma_q = SpinMatrix()
            for nu in range(4):
                if q_lower[nu] != 0.0:
                    sigma_q = sigma_q + float(q_lower[nu]) * SpinMatrix.sigma_mu_nu(mu, nu)
            pauli.append((1j / (2.0 * mass)) * sigma_q)
        axial = [g * gamma5 for g in vector]
        return {"vector": vector, "pauli": pauli, "axial": axial}

    def _nucleon_current(self, event: Event, ffs: List[FormFactorInfo]) -> List[List[complex]]:
        p_in = event.target_in
        p_out = event.momenta[2]
        q = p_out - p_in
        # CC legs differ in mass (n -> p); the vertex uses the average nucleon mass
        mass = 0.5 * (p_in.mass + p_out.mass)
        values = nucleon_form_factors(-q.m2, mass)
        vertices = self._vertices(q, mass)

        gamma = [SpinMatrix() for _ in range(4)]
        for ff in ffs:
            weight = ff.coupling * values[ff.type]
            if ff.type in _DIRAC:
                kind = "vector"
            elif ff.type in _PAULI:
                kind = "pauli"
            elif ff.type == FormFactorType.FA:
                kind = "axial"
            else:
                continue
            for mu in range(4):
                gamma[mu] = gamma[mu] + weight * vertices[kind][mu]

        helicities = (-1, 1)
        ubar = [ubar_spinor(h, p_out) for h in helicities]
        u = [u_spinor(h, p_in) for h in helicities]
        return [[ubar[i] * gamma[mu] * u[j] for mu in range(4)] for i in range(2) for j in range(2)]

    def calc_currents(self, event: Event, ff_info: Sequence[FFInfoMap]) -> List[HadronicCurrents]:
        results: List[HadronicCurrents] = []
        for target, ff_map in zip(TARGETS, ff_info):
            currents: HadronicCurrents = {}
            if target in (PID.proton(), PID.neutron()):
                for mediator, ffs in ff_map.items():
                    if ffs:
                        currents[mediator] = self._nucleon_current(event, ffs)
            results.append(currents)
        return results

    def fill_nucleus(self, event: Event, xsecs: Sequence[float]) -> bool:
        total = float(sum(xsecs))
        if total <= 0.0:
            logger.debug("All cross sections vanish, event cannot be filled")
            return False
        probs = np.asarray(xsecs, dtype=float) / total
        k = int(self.rng.choice(len(probs), p=probs))
        event.target = TARGETS[k]
        event.xsecs = list(xsecs)
        logger.debug(f"Selected target {event.target.code} (p={probs[k]:.3f})")
        return True
