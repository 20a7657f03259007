from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from typing import Annotated, List
from app.api.deps import get_store, json_body
from app.core.exceptions import BadRequestException, NotFoundException
from app.services.student.student import StudentStore
from app.schemas.student import Student, StudentCreate, StudentUpdate

router = APIRouter()

StudentId = Annotated[int, Path(ge=0, description="Numeric student id")]


@router.get("", response_model=List[Student])
def get_students(store: StudentStore = Depends(get_store)):
    """
    List every student, ordered by id.
    """
    return store.list_students()


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate = Depends(json_body(StudentCreate)),
    store: StudentStore = Depends(get_store)
):
    """
    Create a student.

    - **first_name**, **last_name**, **email**: stored as given
    - **id** and **enrollment_date** are assigned by the database

    A duplicate email is rejected by the database and returned as a 500
    carrying the database's message.
    """
    return store.create_student(student)


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: StudentId,
    store: StudentStore = Depends(get_store)
):
    student = store.get_student(student_id)
    if student is None:
        raise NotFoundException("Student not found")
    return student


@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: StudentId,
    student: StudentUpdate = Depends(json_body(StudentUpdate)),
    store: StudentStore = Depends(get_store)
):
    """
    Replace first_name, last_name and email. Omitted fields are cleared.

    The response echoes the submitted fields; enrollment_date is not
    re-read and comes back as null.
    """
    updated_student = store.update_student(student_id, student)
    if updated_student is None:
        raise NotFoundException("Student not found")
    return updated_student


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: StudentId,
    store: StudentStore = Depends(get_store)
):
    if not store.delete_student(student_id):
        raise NotFoundException("Student not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route(
    "/{student_ref:path}",
    methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    include_in_schema=False,
)
def malformed_student_path(student_ref: str):
    """
    Anything under /students/ the routes above did not take: an empty,
    nested or non-numeric id is a 400, a valid id here means the method
    is not supported.
    """
    if student_ref.isascii() and student_ref.isdigit():
        raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Method Not Allowed")
    raise BadRequestException("Invalid student ID format")
