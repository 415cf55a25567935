from __future__ import annotations

import base64
import io

from PIL import Image


def image_data_uri(image: Image.Image, image_format: str = "PNG") -> str:
    """Encode a Pillow image as a `data:` URI suitable for an SVG `href`."""

    fmt = image_format.upper()
    if fmt == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    payload = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/{fmt.lower()};base64,{payload}"
