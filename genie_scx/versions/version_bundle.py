"""
Version Bundle

A scenario file is made of independently versioned sections. The bundle keeps
one version number per section so every codec can pick its layout:

- format:      4-byte ASCII container version (b"1.21")
- header:      u32 header version
- dlc_options: i32 HD Edition DLC options version, only used when header >= 3
- data:        f32 compressed data version
- picture:     u32 embedded bitmap version
- victory:     f32 victory conditions version
- triggers:    f64 trigger system version

Bundles are immutable. Converting a document produces a new bundle.
"""

from dataclasses import dataclass, replace

from ..constants import KNOWN_FORMATS, DLC_OPTIONS_HEADER_VERSION
from ..errors import UnsupportedPresetError


@dataclass(frozen=True)
class VersionBundle:
    """All the versions an SCX file uses."""
    format: bytes
    header: int
    dlc_options: int
    data: float
    picture: int
    victory: float
    triggers: float

    def __post_init__(self):
        if len(self.format) != 4:
            raise ValueError(f"Format version must be 4 bytes, got {self.format!r}")

    # Presets

    @classmethod
    def aoe(cls) -> 'VersionBundle':
        """Age of Empires 1 defaults. No verified parameters exist for this preset."""
        raise UnsupportedPresetError("aoe")

    @classmethod
    def ror(cls) -> 'VersionBundle':
        """Rise of Rome defaults. No verified parameters exist for this preset."""
        raise UnsupportedPresetError("ror")

    @classmethod
    def aok(cls) -> 'VersionBundle':
        """Age of Kings defaults. No verified parameters exist for this preset."""
        raise UnsupportedPresetError("aok")

    @classmethod
    def aoc(cls) -> 'VersionBundle':
        """The parameters The Conquerors uses by default."""
        return cls(
            format=b"1.21",
            header=2,
            dlc_options=-1,
            data=1.22,
            picture=1,
            victory=2.0,
            triggers=1.6,
        )

    @classmethod
    def userpatch_14(cls) -> 'VersionBundle':
        """UserPatch 1.4 writes the same versions as AoC."""
        return cls.aoc()

    @classmethod
    def userpatch_15(cls) -> 'VersionBundle':
        """UserPatch 1.5 (and WololoKingdoms) writes the same versions as UserPatch 1.4."""
        return cls.userpatch_14()

    @classmethod
    def hd_edition(cls) -> 'VersionBundle':
        """The parameters HD Edition uses by default."""
        return cls(
            format=b"1.21",
            header=3,
            dlc_options=1000,
            data=1.26,
            picture=3,
            victory=2.0,
            triggers=1.6,
        )

    @classmethod
    def preset(cls, name: str) -> 'VersionBundle':
        """
        Look up a preset by its command line name.

        Args:
            name: One of aoe, ror, aok, aoc, hd, wk

        Returns:
            The preset bundle

        Raises:
            ValueError: for unknown names
            UnsupportedPresetError: for presets without known parameters
        """
        factories = {
            'aoe': cls.aoe,
            'ror': cls.ror,
            'aok': cls.aok,
            'aoc': cls.aoc,
            'hd': cls.hd_edition,
            'wk': cls.userpatch_15,
        }
        factory = factories.get(name.lower())
        if factory is None:
            raise ValueError(f"Unknown version '{name}' (expected one of {', '.join(factories)})")
        return factory()

    # Classification

    def is_aok(self) -> bool:
        """Whether this version is (likely) for an AoK scenario."""
        return self.format in (b"1.18", b"1.19", b"1.20")

    def is_aoc(self) -> bool:
        """Whether this version is (likely) for an AoC scenario."""
        return self.format == b"1.21" and self.data <= 1.22

    def is_hd_edition(self) -> bool:
        """Whether this version is (likely) for an HD Edition scenario."""
        return self.format in (b"1.21", b"1.22") and self.data > 1.22

    def is_known_format(self) -> bool:
        return self.format in KNOWN_FORMATS

    def has_dlc_options(self) -> bool:
        """DLC options are only stored from header version 3 onwards."""
        return self.header >= DLC_OPTIONS_HEADER_VERSION

    @property
    def format_name(self) -> str:
        return self.format.decode('ascii', errors='replace')

    def with_data(self, data: float) -> 'VersionBundle':
        return replace(self, data=data)

    def with_triggers(self, triggers: float) -> 'VersionBundle':
        return replace(self, triggers=triggers)

    def __str__(self) -> str:
        return (f"SCX {self.format_name} (header {self.header}, dlc {self.dlc_options}, "
                f"data {self.data}, picture {self.picture}, victory {self.victory}, "
                f"triggers {self.triggers})")
