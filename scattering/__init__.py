"""
ScatterX: lepton-nucleon scattering amplitudes for Monte Carlo event generation.

Usage:
    from scattering import HardScattering, FreeNucleon, ProcessInfo

    xs = HardScattering(FreeNucleon())
    xs.set_process(ProcessInfo.from_string("14 2112 -> 13 2212"))
    xsecs = xs.cross_section(event)
"""
from .particles import PID, ParticleInfo
from .kinematics import FourVector
from .dirac import SpinMatrix, Spinor, u_spinor, ubar_spinor, v_spinor, vbar_spinor
from .process import ProcessInfo
from .couplings import CouplingParameters, resolve_couplings
from .form_factors import FormFactorType, FormFactorInfo, form_factor_table, lookup_form_factors
from .currents import CurrentBuilder, LeptonicCurrent, get_builder
from .events import Event
from .nuclear_model import NuclearModel, FreeNucleon
from .hard_scattering import HardScattering
from .exceptions import (
    ScatteringError,
    ClassificationError,
    UnsupportedMediatorError,
    UninitializedProcessError,
    NumericalSingularity,
)

__all__ = [
    "PID",
    "ParticleInfo",
    "FourVector",
    "SpinMatrix",
    "Spinor",
    "u_spinor",
    "ubar_spinor",
    "v_spinor",
    "vbar_spinor",
    "ProcessInfo",
    "CouplingParameters",
    "resolve_couplings",
    "FormFactorType",
    "FormFactorInfo",
    "form_factor_table",
    "lookup_form_factors",
    "CurrentBuilder",
    "LeptonicCurrent",
    "get_builder",
    "Event",
    "NuclearModel",
    "FreeNucleon",
    "HardScattering",
    "ScatteringError",
    "ClassificationError",
    "UnsupportedMediatorError",
    "UninitializedProcessError",
    "NumericalSingularity",
]
