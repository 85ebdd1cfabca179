"""
Simulation Configuration

Every tunable of a simulation run lives here so experiments can override
them in one place:

    config = SimulationConfig(decay_factor=0.5, pace=True)
    config = SimulationConfig.from_env()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SimulationConfig:
    """Configuration for a multi-region simulation run."""

    # ==========================================================================
    # ACTIVITY HISTORY
    # ==========================================================================
    decay_factor: float = 0.55  # Applied to every region before each new stage
    insight_window: int = 3  # Insights quoted by the integrative summary

    # ==========================================================================
    # PRESENTATION PACING (does not change results)
    # ==========================================================================
    pace: bool = False
    stage_delay: float = 0.65  # Seconds after each stage
    final_stage_delay: float = 0.2  # Seconds after the prefrontal stage

    # ==========================================================================
    # LOGGING / PERSISTENCE
    # ==========================================================================
    log_level: str = "WARNING"
    export_directory: Path = field(default_factory=lambda: Path("./profiles"))

    def __post_init__(self):
        if not 0.0 <= self.decay_factor <= 1.0:
            raise ValueError(f"decay_factor must be within [0, 1], got {self.decay_factor}")
        if self.insight_window < 1:
            raise ValueError(f"insight_window must be positive, got {self.insight_window}")
        self.export_directory = Path(self.export_directory)
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> SimulationConfig:
        """Load configuration from SCENARIO_BRAIN_* environment variables."""
        return cls(
            decay_factor=float(os.getenv("SCENARIO_BRAIN_DECAY_FACTOR", "0.55")),
            insight_window=int(os.getenv("SCENARIO_BRAIN_INSIGHT_WINDOW", "3")),
            pace=os.getenv("SCENARIO_BRAIN_PACE", "false").lower() == "true",
            stage_delay=float(os.getenv("SCENARIO_BRAIN_STAGE_DELAY", "0.65")),
            final_stage_delay=float(os.getenv("SCENARIO_BRAIN_FINAL_STAGE_DELAY", "0.2")),
            log_level=os.getenv("SCENARIO_BRAIN_LOG_LEVEL", "WARNING"),
            export_directory=Path(os.getenv("SCENARIO_BRAIN_EXPORT_DIR", "./profiles")),
        )
