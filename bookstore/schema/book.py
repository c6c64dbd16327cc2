from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import inspect

from bookstore.domain.models import Book


class AuthorReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class AuthorCreateSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class BookReadSchema(BaseModel):
    """읽기용 스키마.

    `author` 는 레포지터리 조회 시 ``includes`` 로 함께 로드된 경우에만 채워집니다.
    직렬화 과정에서 추가 쿼리가 일어나지 않도록 로드되지 않은 관계는 ``None`` 입니다.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author_id: int
    author: Optional[AuthorReadSchema] = None

    @classmethod
    def from_entity(cls, book: Book) -> BookReadSchema:
        author = None
        if "author" not in inspect(book).unloaded:
            author = book.author  # type: ignore
        return cls(
            id=book.id,
            title=book.title,
            author_id=book.author_id,
            author=AuthorReadSchema.model_validate(author) if author else None,
        )


class BookCreateSchema(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    author_id: int
