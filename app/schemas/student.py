from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StudentBase(BaseModel):
    # Missing fields are sent to the store as empty strings
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class StudentCreate(StudentBase):
    pass


class StudentUpdate(StudentBase):
    pass


class StudentInDB(StudentBase):
    id: int
    enrollment_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class Student(StudentInDB):
    pass
