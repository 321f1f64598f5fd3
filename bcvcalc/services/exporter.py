"""PNG rendering of the conversion card with Pillow."""

from __future__ import annotations

import io
import logging
from typing import Dict, Tuple

from PIL import Image, ImageDraw, ImageFont

from .capabilities import CardSnapshot, ExportError

logger = logging.getLogger("bcvcalc.exporter")

PALETTES: Dict[bool, Dict[str, str]] = {
    True: {
        "background": "#0a0a0b",
        "card": "#161618",
        "border": "#27272a",
        "text": "#ffffff",
        "muted": "#71717a",
        "primary": "#3b82f6",
    },
    False: {
        "background": "#f9fafb",
        "card": "#ffffff",
        "border": "#e4e4e7",
        "text": "#18181b",
        "muted": "#a1a1aa",
        "primary": "#3b82f6",
    },
}


class PillowCardExporter:
    WIDTH = 360
    HEIGHT = 420
    PADDING = 24
    RADIUS = 28

    def __init__(self, scale: int = 3):
        if scale <= 0:
            raise ValueError("capture scale must be positive")
        self.scale = scale

    def _font(self, size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        return ImageFont.load_default(size=size * self.scale)

    def _px(self, value: int) -> int:
        return value * self.scale

    def _text_centered(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        center_x: int,
        y: int,
        size: int,
        fill: str,
    ) -> None:
        font = self._font(size)
        bbox = draw.textbbox((0, 0), text, font=font)
        draw.text((center_x - (bbox[2] - bbox[0]) // 2, y), text, font=font, fill=fill)

    def _amount_block(
        self,
        draw: ImageDraw.ImageDraw,
        origin: Tuple[int, int],
        code: str,
        label: str,
        amount: str,
        palette: Dict[str, str],
    ) -> None:
        x, y = origin
        right = self._px(self.WIDTH - self.PADDING * 2)
        draw.text((x, y), code, font=self._font(20), fill=palette["text"])
        label_font = self._font(10)
        bbox = draw.textbbox((0, 0), label, font=label_font)
        draw.text((right - (bbox[2] - bbox[0]), y + self._px(6)), label, font=label_font, fill=palette["muted"])
        draw.text((x, y + self._px(34)), amount or "0.00", font=self._font(40), fill=palette["text"])

    def export(self, snapshot: CardSnapshot) -> bytes:
        palette = PALETTES[snapshot.dark]
        size = (self._px(self.WIDTH), self._px(self.HEIGHT))
        try:
            image = Image.new("RGB", size, palette["background"])
            draw = ImageDraw.Draw(image)
            center_x = size[0] // 2

            self._text_centered(draw, snapshot.title, center_x, self._px(self.PADDING), 16, palette["text"])

            card_top = self._px(self.PADDING + 36)
            card_box = [
                self._px(self.PADDING),
                card_top,
                size[0] - self._px(self.PADDING),
                size[1] - self._px(self.PADDING + 40),
            ]
            draw.rounded_rectangle(
                card_box,
                radius=self._px(self.RADIUS),
                fill=palette["card"],
                outline=palette["border"],
                width=self.scale,
            )

            inner_x = self._px(self.PADDING * 2)
            self._amount_block(draw, (inner_x, card_top + self._px(24)), "USD", "DÓLARES", snapshot.source_amount, palette)
            divider_y = card_top + self._px(128)
            draw.line(
                [(inner_x, divider_y), (size[0] - inner_x, divider_y)],
                fill=palette["border"],
                width=self.scale,
            )
            self._amount_block(draw, (inner_x, divider_y + self._px(20)), "VES", "BOLÍVARES", f"{snapshot.target_amount} Bs.", palette)
            self._text_centered(draw, snapshot.footer.upper(), center_x, card_box[3] - self._px(26), 10, palette["muted"])

            self._text_centered(draw, snapshot.rate_line, center_x, card_box[3] + self._px(8), 14, palette["primary"])
            self._text_centered(draw, snapshot.caption, center_x, card_box[3] + self._px(24), 10, palette["muted"])

            buffer = io.BytesIO()
            image.save(buffer, "PNG")
        except (ValueError, OSError) as exc:
            raise ExportError(f"could not render capture: {exc}") from exc
        logger.debug("capture rendered %dx%d", size[0], size[1])
        return buffer.getvalue()
