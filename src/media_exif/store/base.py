"""
Store Protocols

The operations save_exif() needs from a transactional record store.
"""

from typing import ContextManager, Protocol

from ..models.media import ExifRecord, MediaRecord


class ExifTransaction(Protocol):
    """
    A handle inside one store transaction.

    Every operation may raise; save_exif() wraps failures with the step
    that failed.
    """

    def get_exif(self, exif_id: int) -> ExifRecord:
        """Load an EXIF record by id, raising KeyError if it is missing"""
        ...

    def replace_exif(self, media: MediaRecord, exif: ExifRecord) -> ExifRecord:
        """
        Persist `exif` as the one EXIF record of `media`.

        Supersedes any record previously linked to the media item, sets
        `media.exif_id` and returns the stored record with its id.
        """
        ...

    def save_media(self, media: MediaRecord) -> None:
        """Persist the media record's date_shot and exif_id"""
        ...


class ExifStore(Protocol):
    """A store that hands out transactions"""

    def transaction(self) -> ContextManager[ExifTransaction]:
        """Commit on clean exit, roll back when the block raises"""
        ...
