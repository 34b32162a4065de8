# logic/uploads.py
import logging
import os
import time

from flask import current_app
from werkzeug.utils import secure_filename

from logic.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".png"


def ensure_uploads_directory(path):
    os.makedirs(path, exist_ok=True)
    return path


def is_image(file_storage):
    return bool(file_storage and (file_storage.mimetype or "").startswith("image/"))


def build_filename(original_name, outlet_slug, level, now_ms=None):
    extension = os.path.splitext(original_name or "")[1].lower() or DEFAULT_EXTENSION
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return secure_filename(f"{outlet_slug}-floor-{level}-{stamp}{extension}")


def public_url(filename):
    return f"{current_app.config['BACKEND_PUBLIC_URL']}/uploads/{filename}"


def save_image(file_storage, outlet_slug, level):
    """Write an uploaded image into the uploads directory.

    Non-image uploads are rejected before anything touches the disk.
    Returns the generated filename.
    """
    if not is_image(file_storage):
        raise ValidationError("The uploaded file must be an image.", fields={"image": "must be an image"})

    filename = build_filename(file_storage.filename, outlet_slug, level)
    uploads_dir = ensure_uploads_directory(current_app.config["UPLOADS_DIR"])
    file_storage.save(os.path.join(uploads_dir, filename))
    logger.info("Stored upload %s", filename)
    return filename


def remove_upload(filename):
    if not filename:
        return
    path = os.path.join(current_app.config["UPLOADS_DIR"], os.path.basename(filename))
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Could not remove upload %s: %s", path, e)


def delete_local_image(image_url):
    """Remove the file behind ``image_url`` when it is hosted by this backend.

    Foreign URLs are left alone; failures are logged and swallowed.
    """
    if not image_url:
        return
    prefix = f"{current_app.config['BACKEND_PUBLIC_URL']}/uploads/"
    if not image_url.startswith(prefix):
        return
    remove_upload(image_url[len(prefix):])
