from .cloudinary_uploader import CloudinaryMediaUploader, CloudinarySettings

__all__ = ["CloudinaryMediaUploader", "CloudinarySettings"]
