import pytest
from pydantic import ValidationError

from dhvxc_cli.models.flight import FlightInfo, FlightList, LoginCredentials


def test_flight_info_parses_api_keys():
    flight = FlightInfo.model_validate(
        {"idflight": "1234", "FlightDate": "2022-05-14", "takeofflocation": "Brauneck"}
    )

    assert flight.flight_id == "1234"
    assert flight.date == "2022-05-14"
    assert flight.takeoff == "Brauneck"


def test_flight_info_normalizes_numeric_id_and_nulls():
    flight = FlightInfo.model_validate(
        {"idflight": 99, "FlightDate": None, "takeofflocation": None}
    )

    assert flight.flight_id == "99"
    assert flight.date == ""
    assert flight.takeoff == ""


@pytest.mark.parametrize("payload", [{}, {"idflight": None}, {"idflight": "  "}])
def test_flight_info_requires_id(payload):
    with pytest.raises(ValidationError):
        FlightInfo.model_validate(payload)


def test_matches_id_compares_numerically():
    assert FlightInfo(flight_id="0042").matches_id(42)
    assert not FlightInfo(flight_id="43").matches_id(42)
    assert not FlightInfo(flight_id="abc").matches_id(42)


def test_flight_list_tolerates_missing_fields():
    flights = FlightList.model_validate({"data": None, "message": None})

    assert flights.data == []
    assert flights.success is None
    assert flights.message == ""


def test_flight_list_parses_entries():
    flights = FlightList.model_validate(
        {
            "data": [{"idflight": "1"}, {"idflight": "2", "FlightDate": "2023-01-02"}],
            "success": True,
            "message": "",
        }
    )

    assert [f.flight_id for f in flights.data] == ["1", "2"]
    assert flights.data[1].date == "2023-01-02"


def test_login_credentials_payload_uses_api_names():
    credentials = LoginCredentials(user="pilot", password="secret")

    assert credentials.to_payload() == {"uid": "pilot", "pwd": "secret"}
    assert "secret" not in repr(credentials)
