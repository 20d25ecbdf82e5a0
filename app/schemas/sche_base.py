from typing import Optional, TypeVar, Generic

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ''
    data: Optional[T] = None

    class Config:
        arbitrary_types_allowed = True

    def success_response(self, data: T = None):
        self.success = True
        self.message = 'Success'
        self.data = data
        return self
