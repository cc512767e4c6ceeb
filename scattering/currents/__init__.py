"""
Leptonic current builders for ScatterX.

Usage:
    from scattering.currents import get_builder

    builder = get_builder("sm")
    builder.initialize(ProcessInfo.from_string("14 -> 13"))
    currents = builder.calc_currents(momenta)
"""
from .base import CurrentBuilder, Current, Currents
from .standard_model import LeptonicCurrent
from .registry import register, get_builder, list_registered_builders, DEFAULT_BUILDER

__all__ = [
    "CurrentBuilder",
    "Current",
    "Currents",
    "LeptonicCurrent",
    "register",
    "get_builder",
    "list_registered_builders",
    "DEFAULT_BUILDER",
]
