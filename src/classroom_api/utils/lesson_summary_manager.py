"""Lesson summary files.

Files are stored under UPLOAD_DIR with a generated key; the database keeps
the original name and content type. Replacing a summary writes the new file
first, then updates the record, then removes the old file, so a failed
upload never loses the existing summary.
"""

import logging
import secrets
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from classroom_api import config
from classroom_api.core.exceptions import (
    LessonNotFoundError,
    SummaryNotFoundError,
    ValidationError,
)
from classroom_api.models.lesson import LessonModel, LessonSummaryModel

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class LessonSummaryManager:
    """Stores and serves the summary file attached to a lesson."""

    def __init__(self, db: Session, upload_dir: Optional[Path] = None):
        self.db = db
        self.upload_dir = Path(upload_dir or config.UPLOAD_DIR)

    def _path(self, file_key: str) -> Path:
        return self.upload_dir / file_key

    def _write(self, stream: BinaryIO, file_name: str) -> str:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = "".join(c for c in Path(file_name).suffix if c.isalnum() or c == ".")
        file_key = f"{secrets.token_hex(16)}{suffix}"
        path = self._path(file_key)
        written = 0
        try:
            with open(path, "wb") as out:
                while True:
                    chunk = stream.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > config.MAX_UPLOAD_SIZE:
                        raise ValidationError("File is too large")
                    out.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        if written == 0:
            path.unlink(missing_ok=True)
            raise ValidationError("No file uploaded")
        return file_key

    def save_summary(
        self,
        lesson_id: str,
        stream: BinaryIO,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> LessonSummaryModel:
        """Attach or replace the summary of a lesson.

        Args:
            lesson_id: Lesson to attach the file to.
            stream: Readable binary file object.
            file_name: Original file name, returned on download.
            content_type: MIME type reported by the client.

        Returns:
            The LessonSummaryModel record.

        Raises:
            LessonNotFoundError: If the lesson does not exist.
            ValidationError: If the file is empty or too large.
        """
        if not self.db.query(LessonModel).filter(LessonModel.id == lesson_id).first():
            raise LessonNotFoundError(lesson_id)

        file_key = self._write(stream, file_name)
        summary = self.get_record(lesson_id)
        old_key = None
        try:
            if summary is not None:
                old_key = summary.file_key
                summary.file_name = file_name
                summary.file_key = file_key
                summary.file_type = content_type
            else:
                summary = LessonSummaryModel(
                    id=secrets.token_hex(8),
                    lesson_id=lesson_id,
                    file_name=file_name,
                    file_key=file_key,
                    file_type=content_type,
                )
                self.db.add(summary)
            self.db.commit()
        except Exception:
            self.db.rollback()
            self._path(file_key).unlink(missing_ok=True)
            raise
        self.db.refresh(summary)

        if old_key:
            self.discard_files([old_key])
        logger.info("Stored summary for lesson %s as %s", lesson_id, file_key)
        return summary

    def get_record(self, lesson_id: str) -> Optional[LessonSummaryModel]:
        return (
            self.db.query(LessonSummaryModel)
            .filter(LessonSummaryModel.lesson_id == lesson_id)
            .first()
        )

    def get_summary_file(self, lesson_id: str) -> Tuple[LessonSummaryModel, Path]:
        """Return the record and the on-disk path of a lesson's summary.

        Raises:
            SummaryNotFoundError: If there is no record or the file is gone.
        """
        summary = self.get_record(lesson_id)
        if summary is None:
            raise SummaryNotFoundError(lesson_id)
        path = self._path(summary.file_key)
        if not path.exists():
            raise SummaryNotFoundError(lesson_id, "Summary file not found")
        return summary, path

    def delete_summary(self, lesson_id: str) -> None:
        summary = self.get_record(lesson_id)
        if summary is None:
            raise SummaryNotFoundError(lesson_id)
        file_key = summary.file_key
        self.db.delete(summary)
        self.db.commit()
        self.discard_files([file_key])
        logger.info("Deleted summary for lesson %s", lesson_id)

    def discard_files(self, file_keys: Iterable[str]) -> None:
        for file_key in file_keys:
            try:
                self._path(file_key).unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove summary file %s: %s", file_key, e)
