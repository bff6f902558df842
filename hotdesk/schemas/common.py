
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# Wire format is camelCase (seatId, bookingDate, ...); Python side stays snake_case
class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str


# Error responses
class ErrorResponse(BaseModel):
    detail: str
