"""
Data types for scenario documents.

Contains the dataclasses shared by the scenario section codecs.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..versions import DataSet, DLCPackage, StartingAge, VictoryCondition


@dataclass
class DLCOptions:
    """HD Edition DLC requirements (header version 3+). The version is the bundle's `dlc_options` axis."""
    game_data_set: DataSet = DataSet.EXPANSIONS
    dependencies: List[DLCPackage] = field(
        default_factory=lambda: [DLCPackage.AGE_OF_KINGS, DLCPackage.AGE_OF_CONQUERORS])


@dataclass
class SCXHeader:
    """Uncompressed file header. Its version is the bundle's `header` axis."""
    timestamp: int = 0
    description: Optional[str] = None
    any_sp_victory: bool = False
    active_player_count: int = 2
    dlc_options: Optional[DLCOptions] = None


@dataclass
class PlayerBaseProperties:
    active: int = 0
    human: int = 0
    civilization: int = 1
    posture: int = 4


@dataclass
class PlayerSetup:
    """Starting resources and age of one player."""
    gold: int = 0
    wood: int = 0
    food: int = 0
    stone: int = 0
    starting_age: StartingAge = StartingAge.DEFAULT


@dataclass
class Messages:
    """Scenario instruction texts and their string table ids (-1 = none)."""
    instructions: Optional[str] = None
    hints: Optional[str] = None
    victory: Optional[str] = None
    loss: Optional[str] = None
    history: Optional[str] = None
    scout: Optional[str] = None
    instructions_id: int = -1
    hints_id: int = -1
    victory_id: int = -1
    loss_id: int = -1
    history_id: int = -1
    scout_id: int = -1


@dataclass
class Cinematics:
    pregame: Optional[str] = None
    victory: Optional[str] = None
    loss: Optional[str] = None
    background: Optional[str] = None


@dataclass
class GlobalVictory:
    """Standard victory settings shared by all players."""
    conquest: int = 1
    ruins: int = 0
    relics: int = 0
    discoveries: int = 0
    explored_percent: int = 0
    gold: int = 0
    all_custom_conditions_required: int = 0
    mode: int = 0
    score: int = 0
    time_limit: int = 0


@dataclass
class VictoryEntry:
    """A custom per-player victory condition."""
    condition: VictoryCondition
    object_type: int = -1  # unit type id
    player: int = -1
    area: Tuple[float, float, float, float] = (-1.0, -1.0, -1.0, -1.0)
    number: int = 0
    count: int = 0
    source_object: int = -1
    target_object: int = -1
    group: int = 0


@dataclass
class ScenarioObject:
    """A placed unit, building or other object."""
    position: Tuple[float, float, float]
    id: int
    unit_type: int
    state: int = 2
    angle: float = 0.0
    frame: int = 0
    garrisoned_in: int = -1


@dataclass
class TriggerCondition:
    """A trigger condition; properties are the raw i32 parameter block."""
    condition_type: int
    properties: List[int] = field(default_factory=list)


@dataclass
class TriggerEffect:
    """A trigger effect; properties are the raw i32 parameter block."""
    effect_type: int
    properties: List[int] = field(default_factory=list)
    text: Optional[str] = None
    sound: Optional[str] = None
    selected_units: List[int] = field(default_factory=list)


@dataclass
class Trigger:
    enabled: bool = True
    looping: bool = False
    is_objective: bool = False
    objective_order: int = 0
    description: Optional[str] = None
    name: Optional[str] = None
    effects: List[TriggerEffect] = field(default_factory=list)
    effect_order: List[int] = field(default_factory=list)
    conditions: List[TriggerCondition] = field(default_factory=list)
    condition_order: List[int] = field(default_factory=list)


@dataclass
class TriggerSystem:
    """Triggers of a scenario; the layout version is the bundle's `triggers` axis."""
    objectives_state: int = 0
    triggers: List[Trigger] = field(default_factory=list)
    order: List[int] = field(default_factory=list)
