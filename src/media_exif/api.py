"""
High-level API for media-exif

Extracts EXIF data for media records and stores it at most once per item.
"""

from typing import Callable, List, Optional

from loguru import logger

from .errors import (
    DateShotUpdateError,
    ExifError,
    ExifSaveError,
    ParseError,
    ParserNotInitializedError,
    StoreReadError,
)
from .metadata.sanitize import sanitize_exif
from .metadata.selector import ExtractionService
from .models.media import ExifRecord, MediaRecord
from .models.save_result import SaveResult
from .store.base import ExifStore, ExifTransaction


def save_exif(
    tx: ExifTransaction,
    media: MediaRecord,
    service: Optional[ExtractionService],
) -> Optional[ExifRecord]:
    """
    Scan a media file for EXIF metadata and save it if found.

    A media item that already links an EXIF record is never parsed again;
    the stored record is returned as-is without any writes.

    Args:
        tx: Open store transaction
        media: Media record to extract EXIF data for
        service: ExtractionService built by initialize_exif_parser()

    Returns:
        The stored ExifRecord, or None if the file holds no EXIF data

    Raises:
        StoreReadError: If the linked record cannot be loaded
        ParserNotInitializedError: If no parser is bound
        ParseError: If the parser fails on the file
        ExifSaveError: If saving or linking the new record fails
        DateShotUpdateError: If the record was saved but the media
            capture date could not be updated

    Example:
        >>> service = initialize_exif_parser()
        >>> with store.transaction() as tx:
        ...     exif = save_exif(tx, media, service)
    """
    # Check if EXIF data already exists
    if media.exif_id is not None:
        try:
            return tx.get_exif(media.exif_id)
        except Exception as e:
            raise StoreReadError(f"get EXIF for media from database: {e}") from e

    if service is None or service.parser is None:
        raise ParserNotInitializedError("no exif parser initialized")

    try:
        parsed = service.parse(media.path)
    except Exception as e:
        raise ParseError(f"failed to parse exif data: {e}") from e

    if parsed is None:
        return None

    # Add EXIF to database and link to media
    try:
        exif = tx.replace_exif(media, sanitize_exif(parsed))
    except Exception as e:
        raise ExifSaveError(f"save media exif to database: {e}") from e

    if exif.date_shot is not None and exif.date_shot != media.date_shot:
        if media.date_shot is not None and _is_aware(exif.date_shot) != _is_aware(media.date_shot):
            logger.warning(
                "Comparing naive and timezone-aware capture dates for {} ({} vs {})",
                media.path, exif.date_shot, media.date_shot,
            )
        media.date_shot = exif.date_shot
        try:
            tx.save_media(media)
        except Exception as e:
            raise DateShotUpdateError(f"update media date_shot: {e}", exif=exif) from e

    return exif


def batch_save_exif(
    store: ExifStore,
    media_list: List[MediaRecord],
    service: Optional[ExtractionService],
    progress_callback: Optional[Callable[[int, int, SaveResult], None]] = None,
) -> List[SaveResult]:
    """
    Save EXIF data for many media items, one transaction per item.

    A failing item is rolled back and reported in its SaveResult; the
    remaining items are still processed.

    Args:
        store: Store that hands out transactions
        media_list: Media records to process
        service: ExtractionService built by initialize_exif_parser()
        progress_callback: Optional callback(current, total, result)

    Returns:
        List of SaveResult objects, in input order

    Example:
        >>> def on_progress(current, total, result):
        ...     status = "ok" if result.success else result.error
        ...     print(f"[{current}/{total}] {result.media.path}: {status}")
        >>>
        >>> results = batch_save_exif(store, media, service, on_progress)
    """
    results = []
    total = len(media_list)

    for i, media in enumerate(media_list, 1):
        exif_id, date_shot = media.exif_id, media.date_shot
        try:
            with store.transaction() as tx:
                exif = save_exif(tx, media, service)
        except BaseException as e:
            # The transaction was rolled back (or never committed), so undo
            # in-memory changes too
            media.exif_id, media.date_shot = exif_id, date_shot
            if not isinstance(e, ExifError):
                raise
            logger.warning("EXIF save failed for {}: {}", media.path, e)
            result = SaveResult(
                media=media,
                success=False,
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            result = SaveResult(media=media, success=True, exif=exif)
        results.append(result)

        if progress_callback:
            progress_callback(i, total, result)

    return results


def _is_aware(value) -> bool:
    return value.tzinfo is not None and value.tzinfo.utcoffset(value) is not None
