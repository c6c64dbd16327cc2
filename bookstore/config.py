"""Bookstore App Configuration."""


import os
from dataclasses import dataclass

from repouow.config import RepoUoWConfig


@dataclass
class Config(RepoUoWConfig):
    """여기에 변경할 설정을 추가합니다.

    설정 가능한 모든 항목들은 `RepoUoWConfig` 클래스 정의를 참고하세요.
    """

    name: str = "bookstore"
    title: str = "Bookstore API"
    module_name: str = "bookstore"

    @property
    def uow(self):
        from bookstore.uow import BookstoreUnitOfWork

        return BookstoreUnitOfWork()

    def get_init_hooks(self):
        from bookstore.adapters.orm import init_mappers

        return [init_mappers]

    def get_db_url(self) -> str:
        """DB 접속 정보.

        ``ENV=prod`` 이면 PostgreSQL 접속 정보를 환경변수에서 읽습니다.
        """
        env = os.environ.get("ENV", "dev")
        if env == "prod":
            db_host = os.environ.get("DB_HOST", "localhost")
            db_user = os.environ.get("DB_USER", "postgres")
            db_pass = os.environ.get("DB_PASS", "test")
            db_name = os.environ.get("DB_NAME", db_user)
            return f"postgresql://{db_user}:{db_pass}@{db_host}/{db_name}"

        return super().get_db_url()

    def seed(self, uow):
        """예제 저자와 책을 추가합니다."""
        from bookstore.domain.models import Author, Book

        mohamed, jane = Author("Mohamed"), Author("Jane")
        uow.authors.add(mohamed)
        uow.authors.add(jane)

        for title, author in [
            ("Clean Code", mohamed),
            ("Ninja", jane),
            ("Ninga Warrior", jane),
        ]:
            book = Book(title)
            book.author = author  # type: ignore
            uow.books.add(book)
