from typing import Optional

from repouow.core import Includes
from repouow.repo import SqlAlchemyRepository

from ..domain.models import Book


class BooksRepository(SqlAlchemyRepository[Book]):
    """:class:`Book` 전용 레포지터리.

    기본 레포지터리 계약은 그대로 두고 책에 특화된 조회 메소드만 추가합니다.
    """

    def __repr__(self):
        return self.__class__.__name__

    def find_by_title(self, title: str, includes: Includes = None) -> Optional[Book]:
        """제목이 정확히(대소문자 구분) 일치하는 첫 번째 책을 조회합니다."""
        return self.find(Book.title == title, includes)  # type: ignore
