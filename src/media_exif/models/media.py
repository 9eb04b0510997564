"""
Media and EXIF Models

Plain data records shared between parsers, the save orchestrator and stores.
"""

from dataclasses import dataclass, fields, asdict
from datetime import datetime
from typing import Optional, Dict, Any


# Float fields that must be finite before they reach a store
NUMERIC_FIELDS = (
    "exposure",
    "aperture",
    "focal_length",
    "gps_latitude",
    "gps_longitude",
)


@dataclass
class ExifRecord:
    """
    Structured EXIF metadata extracted from one media file.

    Attributes:
        exposure: Exposure time in seconds (e.g. 0.004 for 1/250)
        aperture: F-number (e.g. 2.8)
        focal_length: Lens focal length in mm
        gps_latitude: Latitude in signed decimal degrees
        gps_longitude: Longitude in signed decimal degrees
        date_shot: Capture timestamp
        camera: Camera model
        maker: Camera manufacturer
        lens: Lens model
        description: Image description
        iso: ISO speed
        flash: Raw EXIF flash value
        orientation: Raw EXIF orientation value (1-8)
        exposure_program: Raw EXIF exposure program value
        id: Store identifier, set once persisted
    """
    exposure: Optional[float] = None
    aperture: Optional[float] = None
    focal_length: Optional[float] = None
    gps_latitude: Optional[float] = None
    gps_longitude: Optional[float] = None
    date_shot: Optional[datetime] = None

    camera: Optional[str] = None
    maker: Optional[str] = None
    lens: Optional[str] = None
    description: Optional[str] = None
    iso: Optional[int] = None
    flash: Optional[int] = None
    orientation: Optional[int] = None
    exposure_program: Optional[int] = None

    id: Optional[int] = None

    def is_empty(self) -> bool:
        """Check if no metadata field is populated"""
        return all(
            getattr(self, f.name) is None
            for f in fields(self)
            if f.name != "id"
        )

    @property
    def has_location(self) -> bool:
        """Check if record has GPS coordinates"""
        return self.gps_latitude is not None and self.gps_longitude is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        data = asdict(self)
        if self.date_shot:
            data["date_shot"] = self.date_shot.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExifRecord":
        """Create from dictionary (e.g. a stored row)"""
        data = data.copy()
        if isinstance(data.get("date_shot"), str):
            data["date_shot"] = datetime.fromisoformat(data["date_shot"])
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class MediaRecord:
    """
    A media file known to the ingestion pipeline.

    Only `exif_id` and `date_shot` are changed by save_exif().
    """
    path: str
    id: Optional[int] = None
    exif_id: Optional[int] = None
    date_shot: Optional[datetime] = None

    @property
    def has_exif(self) -> bool:
        """Check if an EXIF record is already linked"""
        return self.exif_id is not None
