from sqlalchemy import Column, Date, Integer, String, func
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"
    # ids are never handed out twice, even after the highest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    enrollment_date = Column(Date, server_default=func.current_date())
