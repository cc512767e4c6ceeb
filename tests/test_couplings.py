"""
Process classification and coupling tables.

Tests:
    1. Charged-current, neutral-current and photon branches
    2. Mediator sign for particles and antiparticles
    3. Classification failures
    4. Form-factor table contents and lookup failures
"""
import math

import pytest

from scattering.constants import ee, sw, cw, MW, GAMW, MZ, GAMZ
from scattering.couplings import resolve_couplings, is_charged_current, is_neutral_current
from scattering.exceptions import ClassificationError, UnsupportedMediatorError
from scattering.form_factors import FormFactorType, form_factor_table, lookup_form_factors
from scattering.particles import PID
from scattering.process import ProcessInfo


# --------------------------- Classification ---------------------------
def test_charged_current_nue_to_electron():
    """nu_e -> e- goes through a W with purely left-handed coupling."""
    params = resolve_couplings([PID(12), PID(11)])
    assert params.mediator == PID.w_plus()
    assert params.coupl_right == 0
    assert params.coupl_left == pytest.approx(ee * 1j / (sw * math.sqrt(2)))
    assert params.mass == MW
    assert params.width == GAMW
    assert params.anti is False


@pytest.mark.parametrize(
    "initial,final,mediator",
    [
        (14, 13, 24),     # nu_mu -> mu-
        (-14, -13, -24),  # nu_mu~ -> mu+
        (11, 12, -24),    # e- -> nu_e
        (-11, -12, 24),   # e+ -> nu_e~
        (16, 15, 24),     # nu_tau -> tau-
    ],
)
def test_charged_current_mediator_sign(initial, final, mediator):
    params = resolve_couplings([initial, final])
    assert params.mediator == PID(mediator)
    assert params.anti == (initial < 0)


def test_neutral_current_neutrino_uses_z():
    params = resolve_couplings([PID(14), PID(14)])
    assert params.mediator == PID.z()
    assert params.coupl_right == 0
    assert params.coupl_left == pytest.approx(cw * ee * 1j / (2 * sw) + ee * 1j * sw / (2 * cw))
    assert (params.mass, params.width) == (MZ, GAMZ)


def test_photon_has_equal_couplings():
    params = resolve_couplings([PID(11), PID(11)])
    assert params.mediator == PID.photon()
    assert params.coupl_left == params.coupl_right == -ee * 1j
    assert params.mass == 0.0
    assert params.width == 0.0


def test_antiparticle_flag():
    assert resolve_couplings([-13, -13]).anti is True
    assert resolve_couplings([13, 13]).anti is False


def test_spectators_ignored():
    """Only the first and last leg classify the process."""
    params = resolve_couplings([14, 22, 13])
    assert params.mediator == PID.w_plus()


@pytest.mark.parametrize("ids", [(14, 11), (11, 13), (14, -13), (13, 15)])
def test_unclassifiable_process(ids):
    with pytest.raises(ClassificationError):
        resolve_couplings(ids)


def test_classification_error_is_value_error():
    with pytest.raises(ValueError):
        resolve_couplings([12, 13])


def test_neutral_and_charged_are_exclusive():
    for code in (11, 12, 13, 14, 15, 16):
        pid = PID(code)
        assert is_neutral_current(pid, pid)
        assert not is_charged_current(pid.is_neutrino, pid, pid)


def test_resolve_from_process_info():
    process = ProcessInfo.from_string("14 2112 -> 13 2212")
    assert resolve_couplings(process.ids).mediator == PID.w_plus()


# -------------------------- Form-factor table --------------------------
def test_w_plus_couples_to_proton_slot_only():
    table = form_factor_table(24)
    coupl = ee * 1j / (sw * math.sqrt(2) * 2)
    proton = lookup_form_factors(table, PID.proton(), 24)
    assert [ff.type for ff in proton] == [
        FormFactorType.F1p, FormFactorType.F1n, FormFactorType.F2p, FormFactorType.F2n, FormFactorType.FA
    ]
    assert [ff.coupling for ff in proton] == pytest.approx([coupl, -coupl, coupl, -coupl, coupl])
    assert lookup_form_factors(table, PID.neutron(), 24) == []
    assert lookup_form_factors(table, PID.carbon(), 24) == []


def test_w_minus_couples_to_neutron_slot_only():
    table = form_factor_table(PID.w_minus())
    assert len(lookup_form_factors(table, PID.neutron(), -24)) == 5
    assert lookup_form_factors(table, PID.proton(), -24) == []


def test_z_table_order():
    table = form_factor_table(PID.z())
    coupl1 = cw * ee * 1j / (2 * sw) - ee * 1j * sw / (2 * cw)
    coupl2 = -(cw * ee * 1j / (2 * sw))
    neutron = lookup_form_factors(table, PID.neutron(), PID.z())
    assert [ff.type for ff in neutron] == [
        FormFactorType.F1n, FormFactorType.F1p, FormFactorType.F2n, FormFactorType.F2p, FormFactorType.FA
    ]
    assert [ff.coupling for ff in neutron] == pytest.approx([coupl1, coupl2, coupl1, coupl2, coupl2])
    assert lookup_form_factors(table, PID.carbon(), PID.z()) == []


def test_photon_table_includes_coherent_carbon():
    table = form_factor_table(22)
    carbon = lookup_form_factors(table, PID.carbon(), 22)
    assert len(carbon) == 1
    assert carbon[0].type == FormFactorType.FCoh
    assert carbon[0].coupling == pytest.approx(6.0 * 1j * ee)
    assert [ff.type for ff in lookup_form_factors(table, PID.proton(), 22)] == [
        FormFactorType.F1p, FormFactorType.F2p
    ]


@pytest.mark.parametrize("mediator", [25, 11, 0, -23])
def test_unknown_mediator_fails(mediator):
    with pytest.raises(UnsupportedMediatorError):
        form_factor_table(mediator)


def test_lookup_missing_key_fails():
    """A (target, mediator) pair absent from the table is an error, not []."""
    table = form_factor_table(24)
    with pytest.raises(UnsupportedMediatorError):
        lookup_form_factors(table, PID.proton(), PID.z())
    with pytest.raises(KeyError):
        lookup_form_factors(table, PID(2214), 24)
