"""Tests for the conversion config loader."""

from genie_scx.config import ConversionConfig
from genie_scx.utils import get_counts


def test_loads_units_and_terrains(tmp_path) -> None:
    path = tmp_path / "conversion.ini"
    path.write_text("[units]\n1001 = 1501\n1002 = 1502\n\n[terrains]\n41 = 55\n", encoding='utf-8')

    config = ConversionConfig(path)
    assert config.units == {1001: 1501, 1002: 1502}
    assert config.terrains == {41: 55}
    assert config.entry_count == 3
    assert get_counts() == (0, 0)


def test_invalid_lines_are_skipped_with_warnings() -> None:
    config = ConversionConfig.from_string(
        "[units]\n"
        "archer = 4\n"
        "83 = villager\n"
        "70000 = 1\n"
        "5 = 6\n"
        "\n"
        "[terrains]\n"
        "41 = 200\n"
        "42 = 56\n"
        "\n"
        "[techs]\n"
        "1 = 2\n"
    )
    assert config.units == {5: 6}
    assert config.terrains == {42: 56}
    # 4 bad entries, 1 unknown section, 1 summary line
    assert get_counts() == (0, 6)


def test_missing_file_gives_empty_config(tmp_path) -> None:
    config = ConversionConfig(tmp_path / "missing.ini")
    assert config.entry_count == 0
    assert get_counts() == (0, 1)


def test_unparsable_file_gives_empty_config() -> None:
    config = ConversionConfig.from_string("1001 = 1501\n")
    assert config.entry_count == 0
    assert get_counts() == (0, 1)


def test_no_path_is_empty() -> None:
    config = ConversionConfig()
    assert config.units == {} and config.terrains == {}
