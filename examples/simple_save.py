"""
Simple example of extracting and storing EXIF data for one image
"""

import sys
from pathlib import Path

from media_exif import MediaRecord, SqliteStore, initialize_exif_parser, save_exif


def main():
    image_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("example.jpg")

    if not image_path.exists():
        print(f"Error: {image_path} not found")
        print("Usage: python simple_save.py <image>")
        return

    # Pick exiftool if installed, otherwise the internal parser
    service = initialize_exif_parser()
    store = SqliteStore("media.db")

    with store.transaction() as tx:
        media = tx.add_media(MediaRecord(path=str(image_path)))
        exif = save_exif(tx, media, service)

    print(f"Parser:         {service.variant}")
    print("-" * 60)

    if exif is None:
        print("No EXIF data found")
        return

    if exif.date_shot:
        print(f"Taken at:       {exif.date_shot.isoformat()}")
    if exif.maker or exif.camera:
        print(f"Camera:         {exif.maker or ''} {exif.camera or ''}".rstrip())
    if exif.has_location:
        print(f"GPS:            {exif.gps_latitude}, {exif.gps_longitude}")
    if exif.aperture:
        print(f"Aperture:       f/{exif.aperture}")
    if exif.exposure:
        print(f"Exposure:       {exif.exposure}s")
    if exif.focal_length:
        print(f"Focal length:   {exif.focal_length}mm")


if __name__ == "__main__":
    main()
