"""
Cross-section assembly.

Tests:
    1. Uninitialised use and process setup failures
    2. Form-factor info handed to the nuclear model
    3. End-to-end nu_mu + p via W against a hand-contracted amplitude
    4. Coherent sum over mediators in the contraction
    5. Non-negativity / finiteness with the free-nucleon model
    6. Pole regression, thread safety and process switching
"""
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from scattering.constants import HBARC2, MB_TO_NB
from scattering.currents import LeptonicCurrent
from scattering.events import Event
from scattering.exceptions import ClassificationError, NumericalSingularity, UninitializedProcessError
from scattering.form_factors import FormFactorType
from scattering.hard_scattering import HardScattering, contract_currents
from scattering.kinematics import FourVector, elastic_scatter
from scattering.nuclear_model import FreeNucleon, NuclearModel
from scattering.particles import PID, ParticleInfo
from scattering.process import ProcessInfo

M_P = ParticleInfo(PID.proton()).mass
M_MU = ParticleInfo(PID.muon()).mass


class ConstantHadrons(NuclearModel):
    """Stub provider returning fixed currents for the proton slot only."""

    def __init__(self, currents, n_spins=1):
        self.currents = currents
        self._n_spins = n_spins
        self.seen_ff_info = None

    def calc_currents(self, event, ff_info):
        self.seen_ff_info = ff_info
        return [self.currents, {}, {}]

    def n_spins(self):
        return self._n_spins

    def fill_nucleus(self, event, xsecs):
        event.target = PID.proton()
        return True


def _event(energy=1000.0, cos_theta=0.8, m_out=M_MU, m_in=0.0):
    lepton_in = FourVector(math.sqrt(energy ** 2 + m_in ** 2), 0.0, 0.0, energy)
    lepton_out, target_out = elastic_scatter(lepton_in, M_P, m_out, cos_theta)
    return Event(momenta=[FourVector(M_P, 0.0, 0.0, 0.0), lepton_in, target_out, lepton_out])


# ------------------------------ Setup --------------------------------
def test_cross_section_requires_process():
    xs = HardScattering(FreeNucleon())
    with pytest.raises(UninitializedProcessError):
        xs.cross_section(_event())


def test_invalid_process_fails_setup():
    xs = HardScattering(FreeNucleon())
    with pytest.raises(ClassificationError):
        xs.set_process(ProcessInfo.from_string("14 2112 -> 11 2212"))
    with pytest.raises(UninitializedProcessError):
        xs.form_factor_info()


def test_form_factor_info_per_target():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2212 -> 14 2212"))
    info = xs.form_factor_info()
    assert len(info) == 3
    assert all(list(entry) == [PID.z()] for entry in info)
    assert [ff.type for ff in info[0][PID.z()]][0] == FormFactorType.F1p
    assert info[2][PID.z()] == []


def test_new_process_rebuilds_tables():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    xs.set_process(ProcessInfo.from_string("11 2212 -> 11 2212"))
    assert list(xs.form_factor_info()[0]) == [PID.photon()]


# ---------------------------- End to end ------------------------------
def test_end_to_end_neutrino_proton():
    """
    nu_mu (E along z) + p -> mu- via W with a fixed hadronic current H = (1, 0, 0, 0).

    Only mu = 0 contributes, so amp2 = sum_ij |L^0_ij|^2 and the V-A trace gives
    sum |ubar' gamma^0 PL u|^2 = 2 (2 E E' - k.k').
    """
    H = [[1.0 + 0j, 0j, 0j, 0j]]
    model = ConstantHadrons({PID.w_plus(): H})
    xs = HardScattering(model)
    xs.set_process(ProcessInfo.from_string("14 2212 -> 13 2212"))

    event = _event()
    k, k_prime = event.lepton_in, event.lepton_out
    q2 = (k - k_prime).m2
    params = xs.builder.params
    prop = 1j / (q2 - params.mass ** 2 - 1j * params.mass * params.width)
    amp2 = abs(params.coupl_left * prop) ** 2 * 2.0 * (2.0 * k.E * k_prime.E - k.dot(k_prime))

    flux = 2 * k.E * 2 * M_P
    expected = amp2 * HBARC2 / 1.0 / flux * MB_TO_NB

    xsecs = xs.cross_section(event)
    assert xsecs[0] == pytest.approx(expected, rel=1e-9)
    assert xsecs[1] == 0.0
    assert xsecs[2] == 0.0
    assert model.seen_ff_info is xs.form_factor_info()


def test_spin_average_factors():
    model = ConstantHadrons({PID.photon(): [[1.0 + 0j, 0j, 0j, 0j]] * 4}, n_spins=4)
    xs = HardScattering(model)
    xs.set_process(ProcessInfo.from_string("11 2212 -> 11 2212"))
    assert xs.spin_average() == 4.0

    xs.set_process(ProcessInfo.from_string("14 2212 -> 14 2212"))
    assert xs.spin_average() == 2.0


def test_flux_uses_target_mass():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    event = _event(energy=750.0)
    m_n = ParticleInfo(PID.neutron()).mass
    assert xs.flux(event) == pytest.approx(2 * 750.0 * 2 * math.sqrt(event.target_in.p2 + m_n ** 2))


def test_contraction_sums_mediators_coherently():
    """Two mediators on both sides add before squaring."""
    lepton = {PID.photon(): [[1.0, 0.0, 0.0, 0.0]], PID.z(): [[1.0, 0.0, 0.0, 0.0]]}
    hadron = [{PID.photon(): [[1.0, 0, 0, 0]], PID.z(): [[1.0, 0, 0, 0]]}, {PID.z(): [[1.0, 0, 0, 0]]}]
    amps2 = contract_currents(lepton, hadron, 1)
    assert amps2[0] == pytest.approx(4.0)
    assert amps2[1] == pytest.approx(1.0)


def test_contraction_metric_signs():
    lepton = {PID.z(): [[1.0, 2.0, 0.0, 0.0]]}
    hadron = [{PID.z(): [[3.0, 1.0, 0.0, 0.0]]}]
    assert contract_currents(lepton, hadron, 1) == [pytest.approx((3.0 - 2.0) ** 2)]


def test_non_finite_result_is_reported():
    """A NaN from the hadronic side surfaces as an error, never as a clamped value."""
    xs = HardScattering(ConstantHadrons({PID.w_plus(): [[complex("nan"), 0j, 0j, 0j]]}))
    xs.set_process(ProcessInfo.from_string("14 2212 -> 13 2212"))
    with pytest.raises(NumericalSingularity):
        xs.cross_section(_event())


# ------------------------- Free-nucleon model --------------------------
@pytest.mark.parametrize(
    "process,m_out,m_in",
    [
        ("14 2112 -> 13 2212", M_MU, 0.0),
        ("-14 2212 -> -13 2112", M_MU, 0.0),
        ("14 2212 -> 14 2212", 0.0, 0.0),
        ("-12 2112 -> -12 2112", 0.0, 0.0),
        ("11 2212 -> 11 2212", 0.51099895, 0.51099895),
        ("-13 2212 -> -13 2212", M_MU, M_MU),
    ],
)
@pytest.mark.parametrize("cos_theta", [-0.9, 0.0, 0.5, 0.95])
def test_cross_sections_non_negative(process, m_out, m_in, cos_theta):
    xs = HardScattering(FreeNucleon(np.random.default_rng(1)))
    xs.set_process(ProcessInfo.from_string(process))
    xsecs = xs.cross_section(_event(energy=1500.0, cos_theta=cos_theta, m_out=m_out, m_in=m_in))
    assert len(xsecs) == 3
    assert all(math.isfinite(x) and x >= 0.0 for x in xsecs)
    assert sum(xsecs) > 0.0


def test_charged_current_selects_coupled_slot():
    xs = HardScattering(FreeNucleon(np.random.default_rng(7)))
    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    event = _event()
    xsecs = xs.cross_section(event)
    assert xsecs[0] > 0.0
    assert xsecs[1] == 0.0 and xsecs[2] == 0.0
    assert xs.fill_event(event, xsecs)
    assert event.target == PID.proton()
    assert event.process_ids == (PID(14), PID(2112), PID(13), PID(2212))


def test_fill_event_rejects_zero_cross_sections():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    event = _event()
    assert xs.fill_event(event, [0.0, 0.0, 0.0]) is False
    assert event.target is None


# ---------------------------- Regression ------------------------------
def test_photon_pole_raises_instead_of_inf():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("11 2212 -> 11 2212"))
    k = FourVector(math.sqrt(400.0 ** 2 + 0.51099895 ** 2), 0.0, 0.0, 400.0)
    target = FourVector(M_P, 0.0, 0.0, 0.0)
    with pytest.raises(NumericalSingularity):
        xs.cross_section(Event(momenta=[target, k, target, k]))


def test_parallel_events_match_serial():
    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2212 -> 14 2212"))
    events = [_event(energy=800.0, cos_theta=c, m_out=0.0) for c in np.linspace(-0.8, 0.9, 8)]
    serial = [xs.cross_section(e) for e in events]
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(xs.cross_section, events))
    assert parallel == serial


def test_set_process_swaps_in_fresh_builder():
    """A new process never mutates the builder an earlier process handed out."""
    prototype = LeptonicCurrent()
    xs = HardScattering(FreeNucleon(), prototype)
    assert xs.builder is prototype

    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    first = xs.builder
    xs.set_process(ProcessInfo.from_string("11 2212 -> 11 2212"))

    assert first.mediator == PID.w_plus()
    assert xs.builder.mediator == PID.photon()
    assert prototype.params is None


def test_failed_setup_keeps_previous_process():
    xs = HardScattering(FreeNucleon())
    process = ProcessInfo.from_string("14 2212 -> 14 2212")
    xs.set_process(process)
    with pytest.raises(ClassificationError):
        xs.set_process(ProcessInfo.from_string("14 2112 -> 11 2212"))
    assert xs.process == process
    assert sum(xs.cross_section(_event(m_out=0.0))) > 0.0


def test_switching_process_during_parallel_events():
    """Every concurrent result matches one complete process, never a mix of two."""
    processes = [ProcessInfo.from_string("14 2212 -> 14 2212"), ProcessInfo.from_string("11 2212 -> 11 2212")]
    events = [_event(energy=800.0, cos_theta=c, m_out=0.0) for c in np.linspace(-0.8, 0.9, 6)]
    xs = HardScattering(FreeNucleon())

    reference = []
    for process in processes:
        xs.set_process(process)
        reference.append([xs.cross_section(e) for e in events])

    def switch(n):
        for i in range(n):
            xs.set_process(processes[i % 2])

    def compute(i):
        k = i % len(events)
        return k, xs.cross_section(events[k])

    with ThreadPoolExecutor(max_workers=4) as pool:
        switcher = pool.submit(switch, 40)
        results = list(pool.map(compute, range(48)))
        switcher.result()

    for k, xsecs in results:
        assert xsecs in (reference[0][k], reference[1][k])
