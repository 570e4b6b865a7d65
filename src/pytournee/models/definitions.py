"""Static round data: the stop and parcel definitions a round is built from."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from pytournee.models._base import TourneeBaseModel
from pytournee.models.state import StopStatus


class ParcelDefinition(TourneeBaseModel):
    """One parcel expected at a stop.

    ``name`` must be unique within its stop: it is the parcel's key.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    type: str | None = None
    brand: str | None = None
    model: str | None = None
    weight: str | None = None
    category: str | None = None


class StopDefinition(TourneeBaseModel):
    """One stop of the round, as supplied by the external data source.

    Parameters
    ----------
    id : int
        Stable stop number. Must be unique within a round.
    address : str
        Street address.
    latitude, longitude : float
        Coordinates in degrees.
    client_name, phone, notes : str or None
        Contact details shown to the driver.
    time_window : str or None
        Time-window label (e.g. ``"9h00 - 11h00"``).
    city : str or None
        City, also used for the unloading stage when ``is_unloading`` is set.
    mission_type, mission_ref, mission_partner : str or None
        Mission metadata.
    is_unloading : bool
        Marks the depot stop whose address/city/notes describe the unloading stage.
    confirmation_code : str or None
        Code the customer gives the driver to confirm the visit.
    initial_status : StopStatus or None
        Overrides the ``pending`` status the builder assigns.
    parcels : tuple of ParcelDefinition
        Parcels to collect, in display order.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    address: str
    latitude: float
    longitude: float
    client_name: str | None = None
    phone: str | None = None
    notes: str | None = None
    time_window: str | None = None
    city: str | None = None
    mission_type: str | None = None
    mission_ref: str | None = None
    mission_partner: str | None = None
    is_unloading: bool = False
    confirmation_code: str | None = None
    initial_status: StopStatus | None = None
    parcels: tuple[ParcelDefinition, ...] = ()
