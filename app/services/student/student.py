import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.database import create_database_tables, ping
from app.core.exceptions import StoreError
from app.schemas.student import Student, StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "SELECT id, first_name, last_name, email, enrollment_date FROM students"


def _store_message(exc: SQLAlchemyError) -> str:
    # Driver text ("duplicate key value violates unique constraint ...") when there is one
    return str(getattr(exc, "orig", None) or exc)


class StudentStore:
    """
    Store client for student records.

    Built once at startup around the process-wide engine and handed to the
    app factory. Every method is a single round trip; uniqueness and id
    generation are left to the database.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def init_schema(self):
        """Liveness check, then idempotent table creation. Errors propagate."""
        ping(self.engine)
        logger.info("Successfully connected to the database")
        create_database_tables(self.engine)

    def is_alive(self) -> bool:
        try:
            ping(self.engine)
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database liveness check failed: {e}")
            return False

    def list_students(self) -> List[Student]:
        """All students ordered by id. Rows that do not decode are skipped."""
        try:
            with self._session_factory() as db:
                rows = db.execute(text(f"{_SELECT_COLUMNS} ORDER BY id")).mappings().all()
        except SQLAlchemyError as e:
            raise StoreError(_store_message(e)) from e

        students = []
        for row in rows:
            try:
                students.append(Student.model_validate(dict(row)))
            except ValidationError as e:
                logger.warning(f"Error decoding student row {row.get('id')!r}: {e}")
        return students

    def get_student(self, student_id: int) -> Optional[Student]:
        try:
            with self._session_factory() as db:
                row = db.execute(
                    text(f"{_SELECT_COLUMNS} WHERE id = :id"),
                    {"id": student_id},
                ).mappings().first()
        except SQLAlchemyError as e:
            raise StoreError(_store_message(e)) from e

        if row is None:
            return None
        try:
            return Student.model_validate(dict(row))
        except ValidationError as e:
            raise StoreError(f"Error decoding student {student_id}: {e}") from e

    def create_student(self, student: StudentCreate) -> Student:
        """Insert and read back the store-assigned id and enrollment_date."""
        try:
            with self._session_factory() as db:
                row = db.execute(
                    text(
                        "INSERT INTO students (first_name, last_name, email) "
                        "VALUES (:first_name, :last_name, :email) "
                        "RETURNING id, enrollment_date"
                    ),
                    student.model_dump(),
                ).mappings().one()
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Error creating student: {_store_message(e)}") from e

        return Student(**student.model_dump(), id=row["id"], enrollment_date=row["enrollment_date"])

    def update_student(self, student_id: int, student: StudentUpdate) -> Optional[Student]:
        """
        Overwrite all mutable fields. Returns None when no row has that id.

        enrollment_date is not read back and stays unset on the result.
        """
        try:
            with self._session_factory() as db:
                affected = db.execute(
                    text(
                        "UPDATE students SET first_name = :first_name, "
                        "last_name = :last_name, email = :email WHERE id = :id"
                    ),
                    {**student.model_dump(), "id": student_id},
                ).rowcount
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(_store_message(e)) from e

        if affected == 0:
            return None
        return Student(**student.model_dump(), id=student_id)

    def delete_student(self, student_id: int) -> bool:
        """Returns False when no row has that id."""
        try:
            with self._session_factory() as db:
                affected = db.execute(
                    text("DELETE FROM students WHERE id = :id"),
                    {"id": student_id},
                ).rowcount
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(_store_message(e)) from e

        return affected > 0
