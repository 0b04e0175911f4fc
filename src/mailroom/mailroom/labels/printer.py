from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Protocol

import qrcode
from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)

_TEXT_BAND = 44


class LabelPrinter(Protocol):
    def print_label(self, package_id: int, name: str) -> bool:
        raise NotImplementedError


class QRLabelPrinter(LabelPrinter):
    """Renders package labels (QR code of the id + owner name) as PNG files.

    Files land in a spool directory picked up by whatever drives the physical
    printer; the PNG bytes are also available directly via ``render``.
    """

    def __init__(self, spool_dir: str | Path, *, box_size: int = 6):
        self._spool_dir = Path(spool_dir)
        self._box_size = int(box_size)

    @property
    def spool_dir(self) -> Path:
        return self._spool_dir

    def render(self, package_id: int, name: str) -> bytes:
        qr = qrcode.QRCode(box_size=self._box_size, border=2)
        qr.add_data(str(package_id))
        qr.make(fit=True)
        code = qr.make_image(fill_color="black", back_color="white").convert("RGB")

        label = Image.new("RGB", (code.width, code.height + _TEXT_BAND), "white")
        label.paste(code, (0, 0))
        draw = ImageDraw.Draw(label)
        draw.text((8, code.height + 4), name, fill="black")
        draw.text((8, code.height + 22), str(package_id), fill="black")

        buf = io.BytesIO()
        label.save(buf, format="PNG")
        return buf.getvalue()

    def print_label(self, package_id: int, name: str) -> bool:
        try:
            self._spool_dir.mkdir(parents=True, exist_ok=True)
            out_file = self._spool_dir / f"{package_id}.png"
            out_file.write_bytes(self.render(package_id, name))
        except OSError as e:
            logger.warning("Failed to print label for package %s: %s", package_id, e)
            return False
        logger.info("Label for package %s written to %s", package_id, out_file)
        return True
