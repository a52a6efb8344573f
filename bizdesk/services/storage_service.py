"""
Receipt file storage on Cloudinary.
"""

import logging
import uuid

import cloudinary.uploader
from flask import current_app

logger = logging.getLogger(__name__)


def allowed_receipt(filename: str) -> bool:
    if not filename or "." not in filename:
        return False
    ext = filename.rsplit(".", 1)[-1].lower()
    return ext in current_app.config["ALLOWED_RECEIPT_EXTENSIONS"]


def upload_receipt(file, owner_id: str) -> str:
    """Upload *file* and return its HTTPS URL."""
    upload_result = cloudinary.uploader.upload(
        file,
        folder="bizdesk/receipts",
        public_id=f"receipt_{owner_id}_{uuid.uuid4().hex[:8]}",
        resource_type="auto",
        overwrite=True,
    )
    logger.info("Receipt uploaded for %s", owner_id)
    return upload_result["secure_url"]
