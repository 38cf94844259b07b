"""Request payloads accepted by the HTTP API."""

from pydantic import BaseModel

from hostel_gate.services.verification import ScanMethod


class LoginRequest(BaseModel):
    """Login form payload."""

    username: str
    password: str


class RegisterResidentRequest(BaseModel):
    """Resident registration form payload."""

    name: str
    room_number: str
    photo_url: str = ""


class ScanRequest(BaseModel):
    """A scanned QR code or the resident picked for fingerprint matching."""

    resident_id: str
    method: ScanMethod = ScanMethod.QR


class ExitRequest(BaseModel):
    """Destination chosen for a pending check-out."""

    destination: str
