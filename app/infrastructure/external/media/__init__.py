"""Uploaded media: image optimisation and spreadsheet parsing."""

from app.infrastructure.external.media.images import WEBP_CONTENT_TYPE, optimize_image
from app.infrastructure.external.media.spreadsheets import read_rows

__all__ = ["WEBP_CONTENT_TYPE", "optimize_image", "read_rows"]
