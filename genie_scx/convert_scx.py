#!/usr/bin/env python3
"""
Convert Age of Empires scenario files between versions.

When the target version is 'wk', HD Edition and AoC scenarios are converted
to WololoKingdoms first (swapping out unit types and terrains).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConversionConfig
from .remapping import AutoToWK
from .scenario import Scenario
from .utils import init_logging, log, logDebug, logError, print_summary
from .versions import VersionBundle

VERSION_CHOICES = ('aoe', 'ror', 'aoc', 'hd', 'wk')


def convert(input_path: Path, output_path: Path, version_name: str = 'aoc',
            config: Optional[ConversionConfig] = None):
    """
    Convert one scenario file.

    Args:
        input_path: Scenario to read
        output_path: Scenario to write (overwritten in place)
        version_name: Target preset name
        config: Extra remap entries for the WololoKingdoms conversion
    """
    version = VersionBundle.preset(version_name)

    log(f"Reading {input_path}")
    scenario = Scenario.from_file(input_path)
    logDebug(f"  {scenario.version}")

    if version_name == 'wk':
        log("Applying WololoKingdoms conversion...")
        AutoToWK(config).convert(scenario)

    log(f"Writing {output_path} ({version})")
    scenario.write_to_file(output_path, version)
    log("Conversion complete!")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description='Convert Age of Empires scenario files between versions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    convert-scx hd_map.scx wk_map.scx wk

    # With extra unit/terrain mappings and a log file:
    convert-scx hd_map.scx wk_map.scx wk --config conversion.ini --log convert.log

Note: conversion.ini extends the built-in HD Edition -> WololoKingdoms tables:
    [units]
    1001 = 1501

    [terrains]
    41 = 55
        """
    )

    parser.add_argument('input', type=Path, help='Input scenario file')
    parser.add_argument('output', type=Path, help='Output scenario file')
    parser.add_argument('version', nargs='?', default='aoc', choices=VERSION_CHOICES,
                        help="Scenario version to output (default: aoc). 'wk' converts "
                             "HD Edition and AoC scenarios to WololoKingdoms")
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to conversion.ini with extra id mappings')
    parser.add_argument('--log', type=Path, default=None,
                        help='Also write a log file')
    args = parser.parse_args(argv)

    # Initialize logging
    init_logging(args.log)

    try:
        config = ConversionConfig(args.config) if args.config is not None else None
        convert(args.input, args.output, args.version, config)
    except (OSError, EOFError, ValueError, NotImplementedError) as e:
        logError(f"{e}")
        print_summary()
        sys.exit(1)

    print_summary()


if __name__ == '__main__':
    main()
