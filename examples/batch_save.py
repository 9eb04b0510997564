"""
Example of storing EXIF data for a directory of images
"""

from pathlib import Path

from media_exif import (
    MediaRecord,
    SqliteStore,
    batch_save_exif,
    init_logging,
    initialize_exif_parser,
    load_settings,
)


def main():
    photo_dir = Path("./photos")

    if not photo_dir.exists():
        print(f"Error: Directory {photo_dir} not found")
        print("Please create a 'photos' directory with some images")
        return

    images = sorted(photo_dir.glob("*.jpg")) + sorted(photo_dir.glob("*.jpeg"))
    if not images:
        print(f"No JPEG images found in {photo_dir}")
        return

    settings = load_settings()
    init_logging(settings.log_level, settings.log_dir)
    service = initialize_exif_parser(settings)
    store = SqliteStore("media.db")

    with store.transaction() as tx:
        media = [tx.add_media(MediaRecord(path=str(path))) for path in images]

    print(f"Found {len(media)} images, parser: {service.variant}")
    print("=" * 60)

    def on_progress(current, total, result):
        name = Path(result.media.path).name
        if result.failed:
            print(f"[{current}/{total}] ✗ {name}: {result.error}")
        elif result.has_exif:
            print(f"[{current}/{total}] ✓ {name}")
            if result.exif.date_shot:
                print(f"           Taken: {result.exif.date_shot}")
        else:
            print(f"[{current}/{total}] - {name} (no EXIF)")

    results = batch_save_exif(store, media, service, progress_callback=on_progress)

    print("=" * 60)
    saved = [r for r in results if r.has_exif]
    failed = [r for r in results if r.failed]
    with_gps = [r for r in saved if r.exif.has_location]

    print("\nResults:")
    print(f"  With EXIF:  {len(saved)}")
    print(f"  No EXIF:    {len(results) - len(saved) - len(failed)}")
    print(f"  Failed:     {len(failed)}")
    if saved:
        print(f"\nPhotos with GPS: {len(with_gps)}/{len(saved)}")


if __name__ == "__main__":
    main()
