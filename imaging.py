import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

from errors import UploadError

logger = logging.getLogger(__name__)

# File validation settings
ALLOWED_CONTENT_TYPES = ["image/jpeg", "image/png", "image/webp"]
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
MAX_ENCODED_SIZE_KB = 500


def validate_upload(content_type: str, image_bytes: bytes) -> None:
    """Reject uploads the model cannot use before any image work is done."""
    if content_type not in ALLOWED_CONTENT_TYPES:
        logger.warning(f"Invalid file type uploaded: {content_type}")
        raise UploadError(
            "Invalid file type. Please upload a JPEG, PNG, or WEBP image.",
            status_code=422,
        )
    if not image_bytes:
        raise UploadError("No image data provided")
    if len(image_bytes) > MAX_FILE_SIZE_BYTES:
        logger.warning(f"File uploaded exceeds size limit: {len(image_bytes)} bytes")
        raise UploadError(
            f"File size exceeds limit of {MAX_FILE_SIZE_MB} MB.",
            status_code=413,
        )


def image_to_data_url(image_bytes: bytes) -> str:
    """
    Re-encode an image as a JPEG data URL no larger than MAX_ENCODED_SIZE_KB,
    lowering quality and then shrinking the image until it fits.
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Uploaded file is not a readable image: {e}")
        raise UploadError("Uploaded file is not a readable image.")

    if img.mode != "RGB":
        img = img.convert("RGB")

    quality = 85
    while True:
        img_buffer = io.BytesIO()
        img.save(img_buffer, format="JPEG", quality=quality)
        size_kb = len(img_buffer.getvalue()) / 1024

        if size_kb <= MAX_ENCODED_SIZE_KB or quality <= 10:
            break

        width, height = img.size
        img = img.resize((max(1, int(width * 0.9)), max(1, int(height * 0.9))), Image.LANCZOS)
        quality -= 5

    base64_data = base64.b64encode(img_buffer.getvalue()).decode("utf-8")
    return f"data:image/jpeg;base64,{base64_data}"
