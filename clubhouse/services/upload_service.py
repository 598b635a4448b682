import hashlib
import logging
import time

import requests

from clubhouse.config import get_cloudinary_config
from clubhouse.services.exceptions import ServiceError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def _signature(params: dict, api_secret: str) -> str:
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1((to_sign + api_secret).encode()).hexdigest()


def upload_image(filename: str, content: bytes, content_type: str | None = None) -> str:
    """Send an image to the hosted image service and return its public URL."""
    cfg = get_cloudinary_config()
    if not (cfg["cloud_name"] and cfg["api_key"] and cfg["api_secret"]):
        raise ServiceError(
            "Image hosting not configured. Check env vars: CLOUDINARY_CLOUD_NAME, "
            "CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET",
            500,
            "configuration",
        )
    if not filename or not content:
        raise ValidationError("No file provided")
    if not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise ValidationError("Unsupported image format")

    params = {"folder": cfg["folder"], "timestamp": int(time.time())}
    data = {**params, "api_key": cfg["api_key"], "signature": _signature(params, cfg["api_secret"])}

    try:
        resp = requests.post(
            UPLOAD_URL.format(cloud_name=cfg["cloud_name"]),
            data=data,
            files={"file": (filename, content, content_type or "application/octet-stream")},
            timeout=30,
        )
        resp.raise_for_status()
        url = resp.json().get("secure_url")
    except (requests.RequestException, ValueError) as e:
        logger.warning("Image upload failed: %s", e)
        raise UpstreamError("Upload failed") from e

    if not url:
        raise UpstreamError("Upload failed")
    return url
