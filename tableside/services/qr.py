"""
QR code rendering for table-side ordering URLs.

Pure helpers: building the ordering URL and turning it into a PNG. Issuing
the session token behind the URL is the caller's job.
"""

import base64
import enum
from io import BytesIO

import qrcode
from PIL import Image

from tableside.config import settings


class QRSize(str, enum.Enum):
    """Output size presets"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    PRINT = "print"


SIZE_PIXELS = {
    QRSize.SMALL: 128,
    QRSize.MEDIUM: 192,
    QRSize.LARGE: 256,
    QRSize.PRINT: 300,
}

# Quiet zone, in modules
QR_BORDER = 2


def build_order_url(session_token: str, base_url: str = None) -> str:
    """Ordering URL a guest lands on after scanning the table's code"""
    base = (base_url or settings.order_base_url).rstrip("/")
    return f"{base}/order/{session_token}"


def render_qr_png(data: str, size: QRSize = QRSize.MEDIUM) -> bytes:
    """Encode data as a square black-on-white PNG of the preset's pixel size"""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=QR_BORDER,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    pixels = SIZE_PIXELS[QRSize(size)]
    img = img.convert("RGB").resize((pixels, pixels), Image.NEAREST)

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(png: bytes) -> str:
    """Inline a PNG as a data URI"""
    return "data:image/png;base64," + base64.b64encode(png).decode()
