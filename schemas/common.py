from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar

from fastapi import Path
from pydantic import BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from core.db import MAX_DB_INT

T = TypeVar("T")

# Fixed-point amounts stay Decimal in Python and go out as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Primary keys in request bodies and path segments
DbId = Annotated[int, Field(ge=1, le=MAX_DB_INT)]
PathId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Page(CamelModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
