from typing import Optional

# Fallback when the upload layer does not declare an image content-type
EXTENSION_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


def is_image_mime_type(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def resolve_mime_type(declared: Optional[str], filename: Optional[str]) -> Optional[str]:
    """Return the image MIME type to send to the model, or None if it can't be determined.

    The declared content-type wins when it is already ``image/*``; otherwise the
    lowercased filename extension is looked up in ``EXTENSION_MIME_TYPES``.
    """
    if is_image_mime_type(declared):
        return declared

    name = (filename or "").lower()
    if "." in name:
        extension = name[name.rfind("."):]
        inferred = EXTENSION_MIME_TYPES.get(extension)
        if inferred:
            return inferred

    return None
