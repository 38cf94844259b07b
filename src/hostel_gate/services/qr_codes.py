"""QR code rendering for resident ids."""

import base64
import io
import logging
from dataclasses import dataclass

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from hostel_gate.domain.errors import UnknownResidentError
from hostel_gate.services.roster import RosterService

logger = logging.getLogger(__name__)


@dataclass
class QrCodeService:
    """Renders the QR code a resident shows at the gate."""

    roster_service: RosterService
    size: int = 256

    def png(self, resident_id: str) -> bytes:
        """Return a PNG QR code encoding the resident id."""
        resident = self.roster_service.find_resident(resident_id)
        if resident is None:
            raise UnknownResidentError(resident_id)

        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=10, border=2)
        qr.add_data(resident.id)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")
        image = image.resize((self.size, self.size))

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        logger.info("Generated QR code for %s", resident.id)
        return buffer.getvalue()

    def data_url(self, resident_id: str) -> str:
        """Return the QR code as a ``data:`` URI."""
        encoded = base64.b64encode(self.png(resident_id)).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    @staticmethod
    def filename(resident_id: str) -> str:
        """Download filename for a resident's QR code."""
        return f"QRCode_{resident_id.upper()}.png"
