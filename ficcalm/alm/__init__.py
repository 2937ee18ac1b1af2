"""Asset/liability management: rollover simulation and batch pricing."""

from ficcalm.instruments.types import PositionType

from .npv_engine import NPVEngine, NPVEngineConfig
from .position_generator import PositionGenerator
from .rollover import RolloverSimulationEngine, outstanding_by_date
from .types import GrowthMode, RolloverConfig, RolloverStrategy

__all__ = [
    "GrowthMode",
    "NPVEngine",
    "NPVEngineConfig",
    "PositionGenerator",
    "PositionType",
    "RolloverConfig",
    "RolloverSimulationEngine",
    "RolloverStrategy",
    "outstanding_by_date",
]
