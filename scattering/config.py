"""
Run configuration.

Defaults come from environment variables, command-line arguments override
them:

    SCATTERX_PROCESS       process descriptor, e.g. "14 2112 -> 13 2212"
    SCATTERX_BEAM_ENERGY   beam energy in MeV
    SCATTERX_BUILDER       current builder name (default "sm")
    SCATTERX_LOG_LEVEL     logging level name (default WARNING)
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .currents import DEFAULT_BUILDER
from .process import ProcessInfo


@dataclass
class RunConfig:
    process: str = "14 2112 -> 13 2212"
    beam_energy: float = 1000.0
    cos_theta: float = 0.9
    builder: str = DEFAULT_BUILDER
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        self.beam_energy = float(self.beam_energy)
        self.cos_theta = float(self.cos_theta)
        if self.beam_energy <= 0.0:
            raise ValueError(f"Beam energy must be positive, got {self.beam_energy}")
        if not -1.0 <= self.cos_theta <= 1.0:
            raise ValueError(f"cos(theta) must lie in [-1, 1], got {self.cos_theta}")
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        self.log_level = level

    @classmethod
    def from_env(cls, **overrides) -> "RunConfig":
        values = dict(
            process=os.getenv("SCATTERX_PROCESS", cls.process),
            beam_energy=os.getenv("SCATTERX_BEAM_ENERGY", cls.beam_energy),
            builder=os.getenv("SCATTERX_BUILDER", cls.builder),
            log_level=os.getenv("SCATTERX_LOG_LEVEL", cls.log_level),
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def process_info(self) -> ProcessInfo:
        return ProcessInfo.from_string(self.process)
