"""서점 앱의 UnitOfWork."""
from __future__ import annotations

from typing import Optional, cast

from repouow.orm import SessionMaker
from repouow.repo import SqlAlchemyRepository
from repouow.uow import RepoMakerDict, SqlAlchemyUnitOfWork

from bookstore.adapters.repos import BooksRepository
from bookstore.domain.models import Author, Book


class BookstoreUnitOfWork(SqlAlchemyUnitOfWork):
    """저자와 책 레포지터리가 하나의 세션을 공유하는 UoW.

    ``authors`` 와 ``books`` 는 생성 시점에 한 번 바인딩되는 읽기 전용 속성입니다.
    """

    def __init__(self, get_session: Optional[SessionMaker] = None) -> None:
        repo_maker: RepoMakerDict = {
            Book: lambda session: BooksRepository(Book, session)
        }
        super().__init__([Author, Book], get_session, repo_maker=repo_maker)

    @property
    def authors(self) -> SqlAlchemyRepository[Author]:
        return cast(SqlAlchemyRepository[Author], self.repos[Author])

    @property
    def books(self) -> BooksRepository:
        return cast(BooksRepository, self.repos[Book])
