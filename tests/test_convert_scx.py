"""Tests for the convert-scx command."""

import pytest

from conftest import make_scenario
from genie_scx.convert_scx import main
from genie_scx.scenario import Scenario
from genie_scx.utils import close_logging
from genie_scx.versions import VersionBundle


@pytest.fixture
def hd_file(tmp_path):
    path = tmp_path / "hd.scx"
    make_scenario(VersionBundle.hd_edition()).write_to_file(path)
    return path


def test_default_target_is_aoc(hd_file, tmp_path) -> None:
    output = tmp_path / "out.scx"
    main([str(hd_file), str(output)])

    loaded = Scenario.from_file(output)
    assert loaded.version == VersionBundle.aoc()
    # No id conversion without 'wk'
    assert loaded.map.tile(1, 1).terrain == 41


def test_wk_target_converts_ids(hd_file, tmp_path) -> None:
    output = tmp_path / "out.scx"
    main([str(hd_file), str(output), "wk"])

    loaded = Scenario.from_file(output)
    assert loaded.version == VersionBundle.userpatch_15()
    assert loaded.map.tile(1, 1).terrain == 55
    assert [obj.unit_type for _, obj in loaded.objects()] == [59, 1501, 4]


def test_config_file_is_applied(hd_file, tmp_path) -> None:
    config = tmp_path / "conversion.ini"
    config.write_text("[units]\n4 = 900\n", encoding='utf-8')
    output = tmp_path / "out.scx"
    main([str(hd_file), str(output), "wk", "--config", str(config)])

    loaded = Scenario.from_file(output)
    assert [obj.unit_type for _, obj in loaded.objects()] == [59, 1501, 900]


def test_log_file_is_written(hd_file, tmp_path) -> None:
    close_logging()
    log_path = tmp_path / "logs" / "convert.log"
    main([str(hd_file), str(tmp_path / "out.scx"), "hd", "--log", str(log_path)])
    close_logging()

    text = log_path.read_text(encoding='utf-8')
    assert "Conversion started" in text
    assert "Conversion complete!" in text
    assert "Conversion finished" in text


def test_unsupported_preset_exits_nonzero(hd_file, tmp_path) -> None:
    output = tmp_path / "out.scx"
    with pytest.raises(SystemExit) as excinfo:
        main([str(hd_file), str(output), "aoe"])
    assert excinfo.value.code == 1
    assert not output.exists()


def test_missing_input_exits_nonzero(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.scx"), str(tmp_path / "out.scx")])
    assert excinfo.value.code == 1


def test_unknown_version_is_a_usage_error(hd_file, tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(hd_file), str(tmp_path / "out.scx"), "de"])
    assert excinfo.value.code == 2
