"""
Scenario Package

The scenario document and the codecs for its sections:

- scenario: Scenario, whole-file read/write against a VersionBundle
- header: uncompressed header and HD Edition DLC options
- players: player names, properties, setups and diplomacy
- victory: global and per-player victory conditions
- objects: placed objects per player
- triggers: trigger system and the property layouts of conditions/effects
"""

from .data_types import (
    DLCOptions,
    SCXHeader,
    PlayerBaseProperties,
    PlayerSetup,
    Messages,
    Cinematics,
    GlobalVictory,
    VictoryEntry,
    ScenarioObject,
    TriggerCondition,
    TriggerEffect,
    Trigger,
    TriggerSystem,
)
from .triggers import (
    ParameterLayout,
    condition_layout,
    effect_layout,
    convert_properties,
    relayout_trigger_system,
)
from .scenario import Scenario

__all__ = [
    # Document
    'Scenario',
    # Data types
    'DLCOptions',
    'SCXHeader',
    'PlayerBaseProperties',
    'PlayerSetup',
    'Messages',
    'Cinematics',
    'GlobalVictory',
    'VictoryEntry',
    'ScenarioObject',
    'TriggerCondition',
    'TriggerEffect',
    'Trigger',
    'TriggerSystem',
    # Trigger layouts
    'ParameterLayout',
    'condition_layout',
    'effect_layout',
    'convert_properties',
    'relayout_trigger_system',
]
