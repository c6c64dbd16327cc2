"""FastAPI 엔드포인트 라우팅 모듈입니다."""
from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, HTTPException

from repouow.api import app
from repouow.config import get_config
from repouow.repo import SqlAlchemyRepository

from bookstore.adapters.repos import BooksRepository
from bookstore.domain.models import Author, Book
from bookstore.schema.book import (
    AuthorCreateSchema,
    AuthorReadSchema,
    BookCreateSchema,
    BookReadSchema,
)
from bookstore.uow import BookstoreUnitOfWork

# 고정된 예제 조회 값
EXAMPLE_AUTHOR_ID = 2
EXAMPLE_ASYNC_AUTHOR_ID = 1
EXAMPLE_BOOK_ID = 1
EXAMPLE_TITLE = "Ninga"


def get_uow() -> Generator[BookstoreUnitOfWork, None, None]:
    """요청마다 UoW 를 하나 만들고, 요청이 끝나면 닫습니다."""
    with get_config().uow as uow:
        yield uow


def get_authors() -> Generator[SqlAlchemyRepository[Author], None, None]:
    with SqlAlchemyRepository(Author) as authors:
        yield authors


def get_books() -> Generator[BooksRepository, None, None]:
    with BooksRepository(Book) as books:
        yield books


@app.get("/authors", response_model=Optional[AuthorReadSchema])
def get_example_author(uow: BookstoreUnitOfWork = Depends(get_uow)):
    """``GET /authors`` 예제 저자를 UoW 의 레포지터리로 조회합니다."""
    return uow.authors.get_by_id(EXAMPLE_AUTHOR_ID)


@app.get("/authors/getByIdAsync", response_model=Optional[AuthorReadSchema])
async def get_example_author_async(
    authors: SqlAlchemyRepository[Author] = Depends(get_authors),
):
    """``GET /authors/getByIdAsync`` 예제 저자를 비동기로 조회합니다."""
    return await authors.get_by_id_async(EXAMPLE_ASYNC_AUTHOR_ID)


@app.get("/authors/{author_id}", response_model=AuthorReadSchema)
def get_author(author_id: int, uow: BookstoreUnitOfWork = Depends(get_uow)):
    author = uow.authors.get_by_id(author_id)
    if not author:
        raise HTTPException(status_code=404, detail=f"author {author_id} not found")
    return author


@app.post("/authors", status_code=201, response_model=AuthorReadSchema)
def add_author(data: AuthorCreateSchema, uow: BookstoreUnitOfWork = Depends(get_uow)):
    """``POST /authors`` 요청을 처리하여 새로운 저자를 저장소에 추가합니다."""
    author = Author(data.name)
    uow.authors.add(author)
    uow.commit()
    return AuthorReadSchema.model_validate(author)


@app.get("/books", response_model=Optional[BookReadSchema])
def get_example_book(books: BooksRepository = Depends(get_books)):
    book = books.get_by_id(EXAMPLE_BOOK_ID)
    return BookReadSchema.from_entity(book) if book else None


@app.get("/books/GetAll", response_model=list[BookReadSchema])
def get_all_books(books: BooksRepository = Depends(get_books)):
    return [BookReadSchema.from_entity(b) for b in books.get_all()]


@app.get("/books/GetByTitle", response_model=Optional[BookReadSchema])
def get_book_by_title(books: BooksRepository = Depends(get_books)):
    """제목이 예제 문자열과 정확히 같은 첫 번째 책을 저자와 함께 조회합니다."""
    book = books.find(Book.title == EXAMPLE_TITLE, ["author"])  # type: ignore
    return BookReadSchema.from_entity(book) if book else None


@app.get("/books/GetAllWithAuthors", response_model=list[BookReadSchema])
def get_all_books_with_authors(books: BooksRepository = Depends(get_books)):
    """제목에 예제 문자열이 들어간 모든 책을 저자와 함께 조회합니다."""
    found = books.find_all(Book.title.contains(EXAMPLE_TITLE), ["author"])  # type: ignore
    return [BookReadSchema.from_entity(b) for b in found]


@app.get("/books/{book_id}", response_model=BookReadSchema)
def get_book(book_id: int, books: BooksRepository = Depends(get_books)):
    book = books.find(id=book_id, includes=["author"])
    if not book:
        raise HTTPException(status_code=404, detail=f"book {book_id} not found")
    return BookReadSchema.from_entity(book)


@app.post("/books", status_code=201, response_model=BookReadSchema)
def add_book(data: BookCreateSchema, uow: BookstoreUnitOfWork = Depends(get_uow)):
    """``POST /books`` 요청을 처리합니다.

    존재하지 않는 저자를 가리키면 커밋이 실패하고 ``409`` 로 응답합니다.
    """
    book = Book(data.title, author_id=data.author_id)
    uow.books.add(book)
    uow.commit()
    return BookReadSchema.from_entity(book)
