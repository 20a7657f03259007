from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from app.core.exceptions import BadRequestException
from app.services.student.student import StudentStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_store(request: Request) -> StudentStore:
    """
    Dependency returning the store client the app was built with.
    """
    return request.app.state.store


def json_body(model: Type[ModelT]):
    """
    Dependency decoding the raw request body into `model`, whatever
    Content-Type the client sent. Invalid JSON or a wrong shape is a 400.
    """
    async def dependency(request: Request) -> ModelT:
        try:
            return model.model_validate_json(await request.body())
        except ValidationError as e:
            details = {
                ".".join(str(x) for x in error["loc"]) or "body": error["msg"]
                for error in e.errors()
            }
            raise BadRequestException("Invalid request body", details=details) from e

    return dependency
