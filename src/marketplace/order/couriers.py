"""Known couriers and the format of their tracking IDs."""

import re

from protean.exceptions import ValidationError

COURIER_PATTERNS = {
    "delhivery": re.compile(r"[0-9]{9,14}"),
    "bluedart": re.compile(r"[A-Z0-9]{8,12}"),
    "ekart": re.compile(r"FMPC[0-9A-Z]{8,12}"),
    "ecomExpress": re.compile(r"[A-Z]{2}[0-9]{9}"),
    "xpressbees": re.compile(r"XB[0-9]{9}"),
    "shadowfax": re.compile(r"[A-Z0-9]{10,15}"),
}


def is_valid_tracking_id(courier: str | None, tracking_id: str | None) -> bool:
    pattern = COURIER_PATTERNS.get(courier or "")
    return bool(pattern and tracking_id and pattern.fullmatch(tracking_id))


def validate_tracking_id(courier: str | None, tracking_id: str | None) -> None:
    """Raise ``ValidationError`` unless ``tracking_id`` fits ``courier``'s format."""
    if not courier or not tracking_id:
        raise ValidationError({"courier": ["Courier and tracking ID required"]})
    if courier not in COURIER_PATTERNS:
        raise ValidationError({"courier": [f"Unknown courier: {courier}"]})
    if not is_valid_tracking_id(courier, tracking_id):
        raise ValidationError({"tracking_id": [f"Invalid tracking ID format for {courier}"]})
