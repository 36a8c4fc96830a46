"""
Pydantic models for the records exchanged with the DHV-XC API.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class LoginCredentials(BaseModel):
    """The user name and password pair sent to the login endpoint."""

    user: str = Field(..., alias="uid")
    password: str = Field(..., alias="pwd", repr=False)

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    def to_payload(self) -> dict[str, str]:
        """Returns the JSON body expected by 'xc/login/login'."""
        return self.model_dump(by_alias=True)


class FlightInfo(BaseModel):
    """A single entry of the flight list."""

    flight_id: str = Field(..., alias="idflight")
    date: str = Field("", alias="FlightDate")
    takeoff: str = Field("", alias="takeofflocation")

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    @field_validator("flight_id", mode="before")
    @classmethod
    def validate_flight_id(cls, v: Any) -> str:
        """The API sends IDs either as strings or as numbers."""
        if v is None or str(v).strip() == "":
            raise ValueError("Flight entry has no 'idflight'.")
        return str(v).strip()

    @field_validator("date", "takeoff", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def matches_id(self, flight_id: int) -> bool:
        """Checks whether this flight carries the given numeric ID."""
        try:
            return int(self.flight_id) == flight_id
        except ValueError:
            return False


class FlightList(BaseModel):
    """The response body of 'fli/flights'."""

    data: list[FlightInfo] = Field(default_factory=list)
    success: bool | None = None
    message: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("message", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)
