"""Supporting document metadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Evidence:
    """Metadata for an uploaded supporting document."""

    evidence_id: str
    workpaper_id: str
    file_name: str
    content_type: str
    size_bytes: int
    uploaded_at: datetime
    uploaded_by: str
