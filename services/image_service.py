"""
Image processing for uploads.

Crops uploads to the aspect ratio each screen displays them at and
renders the rounded browser favicon.
"""

import time
from io import BytesIO
from typing import Optional
from PIL import Image, ImageDraw, UnidentifiedImageError
import structlog

from exceptions import InvalidImageError
from services.storage_service import UploadFileData

logger = structlog.get_logger(__name__)


# Display aspect ratio per upload folder
ASPECT_RATIOS = {
    "products": 1.0,
    "categories": 1.0,
    "blog": 16 / 9,
    "branding": 1.0,
}

JPEG_QUALITY = 95
FAVICON_SIZE = 32
FAVICON_RADIUS = 8


def centered_crop_box(width: int, height: int, aspect: float) -> tuple[int, int, int, int]:
    """
    Largest box of the given aspect ratio centred in the image.

    Returns:
        (left, top, right, bottom) in pixels
    """
    crop_w = min(width, height * aspect)
    crop_h = crop_w / aspect
    left = (width - crop_w) / 2
    top = (height - crop_h) / 2
    return (
        round(left),
        round(top),
        round(left + crop_w),
        round(top + crop_h),
    )


def _open(content: bytes, filename: Optional[str]) -> Image.Image:
    try:
        img = Image.open(BytesIO(content))
        img.load()
        return img
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("image_open_failed", filename=filename, error=str(e))
        raise InvalidImageError(filename, "file is not a readable image")


def crop_image(
    content: bytes,
    filename: Optional[str] = None,
    aspect: Optional[float] = None,
    box: Optional[tuple[int, int, int, int]] = None,
) -> UploadFileData:
    """
    Crop an image and re-encode it as JPEG.

    Args:
        content: Raw image bytes
        filename: Original filename, for logging
        aspect: Target width/height ratio, crop is centred
        box: Explicit (left, top, right, bottom) pixel box, wins over aspect

    Returns:
        UploadFileData named cropped-{epoch_ms}.jpg

    Raises:
        InvalidImageError: If the bytes are not an image or the box is outside it
    """
    img = _open(content, filename)
    width, height = img.size

    if box is None and aspect:
        box = centered_crop_box(width, height, aspect)

    if box is not None:
        left, top, right, bottom = box
        if left < 0 or top < 0 or right > width or bottom > height or right <= left or bottom <= top:
            raise InvalidImageError(filename, f"crop box {box} outside {width}x{height}")
        img = img.crop(box)

    if img.mode != "RGB":
        img = img.convert("RGB")

    out = BytesIO()
    img.save(out, format="JPEG", quality=JPEG_QUALITY)

    logger.debug("image_cropped", filename=filename, size=img.size)

    return UploadFileData(
        filename=f"cropped-{int(time.time() * 1000)}.jpg",
        content=out.getvalue(),
    )


def prepare_upload(content: bytes, filename: Optional[str], folder: str) -> UploadFileData:
    """Crop an upload to the aspect ratio used for its folder."""
    return crop_image(content, filename, aspect=ASPECT_RATIOS.get(folder))


def render_favicon(content: bytes, filename: Optional[str] = None) -> bytes:
    """
    Render a 32x32 PNG favicon with rounded corners.

    Returns:
        PNG bytes
    """
    img = _open(content, filename).convert("RGBA")
    img = img.resize((FAVICON_SIZE, FAVICON_SIZE), Image.LANCZOS)

    mask = Image.new("L", (FAVICON_SIZE, FAVICON_SIZE), 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (0, 0, FAVICON_SIZE - 1, FAVICON_SIZE - 1),
        radius=FAVICON_RADIUS,
        fill=255,
    )

    rounded = Image.new("RGBA", (FAVICON_SIZE, FAVICON_SIZE), (0, 0, 0, 0))
    rounded.paste(img, (0, 0), mask)

    out = BytesIO()
    rounded.save(out, format="PNG")
    return out.getvalue()
