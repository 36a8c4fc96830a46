import pytest

from dhvxc_cli.utils.path import UNDATED_DIR, create_dir, flight_dir, igc_path


def test_igc_path_layout(tmp_path):
    assert igc_path(tmp_path, "2022-05-14", "1234") == tmp_path / "2022-05-14" / "1234.igc"


def test_empty_date_goes_to_undated_dir(tmp_path):
    assert flight_dir(tmp_path, "") == tmp_path / UNDATED_DIR
    assert flight_dir(tmp_path, "   ") == tmp_path / UNDATED_DIR


def test_server_values_cannot_escape_target_dir(tmp_path):
    path = igc_path(tmp_path, "2022/05/14", "../1234")

    assert path.parent.parent == tmp_path
    assert path.name.endswith(".igc")
    assert "/" not in path.parent.name


@pytest.mark.parametrize("date", ["..", ".", " .. "])
def test_relative_dates_stay_inside_target_dir(tmp_path, date):
    path = igc_path(tmp_path, date, "1234")

    assert path == tmp_path / UNDATED_DIR / "1234.igc"
    assert path.resolve().parent.parent == tmp_path.resolve()


def test_create_dir_is_idempotent(tmp_path):
    target = tmp_path / "a" / "b"

    create_dir(target)
    create_dir(target)

    assert target.is_dir()
