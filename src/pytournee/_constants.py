"""Internal constants shared across the library."""

from typing import Final

DEFAULT_ROUND_ID: Final = "T01"

# Fallback depot info used when no stop definition is flagged as the unloading stop.
DEFAULT_DEPOT_ADDRESS: Final = "22 Rue des Entrepôts"
DEFAULT_DEPOT_CITY: Final = "Saint-Ouen-sur-Seine"
DEFAULT_DEPOT_TIME_WINDOW: Final = "16h00 - 18h00"

# ------------------------------------------------------------------
# Analysis scores
# ------------------------------------------------------------------

SCORE_MIN: Final = 1
SCORE_MAX: Final = 10
# Used in place of a missing score when routing a parcel at unloading.
DEFAULT_SCORE: Final = 5
# Averages at or above this threshold go to recycling (ties included).
RECYCLING_THRESHOLD: Final = 5.0

# ------------------------------------------------------------------
# QR payloads and scan keys
# ------------------------------------------------------------------

QR_SEPARATOR: Final = ":"
SCAN_KEY_SEPARATOR: Final = "-"


def scan_key(stop_id: int, parcel_name: str) -> str:
    """Key of a scanned parcel in :attr:`Unloading.scanned_parcels`."""
    return f"{stop_id}{SCAN_KEY_SEPARATOR}{parcel_name}"


def qr_payload(stop_id: int, parcel_name: str) -> str:
    """Content to print in a parcel's QR code (``"{stopId}:{parcelName}"``)."""
    return f"{stop_id}{QR_SEPARATOR}{parcel_name}"


# ------------------------------------------------------------------
# Reason catalogues offered to the driver
# ------------------------------------------------------------------

REFUSAL_REASONS: tuple[str, ...] = (
    "Appareil non au domicile",
    "Appareil non DEEE",
    "Appareil non intègre",
    "Collecte >5e étage sans ascenseur",
    "Client non présent / ne répond pas",
)

FAILURE_REASONS: tuple[str, ...] = (
    "Personne absente",
    "Accès impossible",
    "La réponse D",
)
