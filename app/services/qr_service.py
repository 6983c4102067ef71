"""
QR code generation service
"""

import io

import qrcode

from app.core.config import settings
from app.utils.slug import generate_slug

class QRService:
    """Service for event join QR codes"""

    @staticmethod
    def get_join_url(qr_code: str) -> str:
        """URL a participant lands on after scanning the code"""
        return f"{settings.BASE_URL.rstrip('/')}/join/{qr_code}"

    @staticmethod
    def generate_join_qr(qr_code: str, format: str = "PNG") -> bytes:
        """Render the join URL for an event as an image"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.get_join_url(qr_code))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)
        return buffer.getvalue()

    @staticmethod
    def download_filename(title: str) -> str:
        return f"{generate_slug(title)}-qr.png"
