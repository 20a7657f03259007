import logging
from app.core.database import create_db_engine
from app.core.exceptions import StoreError
from app.schemas.student import StudentCreate
from app.services.student.student import StudentStore

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    StudentCreate(first_name="Ada", last_name="Lovelace", email="ada@example.com"),
    StudentCreate(first_name="Alan", last_name="Turing", email="alan@example.com"),
    StudentCreate(first_name="Grace", last_name="Hopper", email="grace@example.com"),
]


def seed_data(store: StudentStore, students=SAMPLE_STUDENTS) -> int:
    """
    Insert sample students. Returns how many were created.
    """
    # Check if data already exists to avoid duplication
    if store.list_students():
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding data...")
    created = 0
    for student in students:
        try:
            store.create_student(student)
            created += 1
        except StoreError as e:
            logger.warning(f"Skipping {student.email}: {e.message}")

    logger.info(f"Seeded {created} students")
    return created


if __name__ == "__main__":
    store = StudentStore(create_db_engine())
    store.init_schema()
    try:
        seed_data(store)
    finally:
        store.engine.dispose()
