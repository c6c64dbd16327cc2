"""도메인 모델."""

from __future__ import annotations

from typing import Optional


class Author:
    """책을 쓴 저자 모델입니다.

    저자의 책 목록(`books`)은 ORM 매핑이 추가하는 조회용 관계이며,
    저자가 소유하는 컬렉션이 아닙니다.
    """

    def __init__(self, name: str, id: Optional[int] = None):  # pylint: disable=redefined-builtin
        self.id = id  # pylint: disable=invalid-name
        """매핑된 DB가 할당한 고유 ID. 세션이 flush 될 때 값이 부여됩니다."""

        self.name = name

    def __repr__(self) -> str:
        return f"Author(id={self.id!r}, name={self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Author):
            return False
        return (other.id, other.name) == (self.id, self.name)

    def __hash__(self) -> int:
        return hash((Author, self.id))


class Book:
    """한 명의 저자(:class:`Author`)가 쓴 책입니다."""

    def __init__(
        self, title: str, author_id: Optional[int] = None, id: Optional[int] = None
    ):  # pylint: disable=redefined-builtin
        self.id = id  # pylint: disable=invalid-name
        self.title = title

        self.author_id = author_id
        """:attr:`Author.id` 를 가리키는 외래키. 항상 존재하는 저자를 가리켜야 합니다."""

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, author_id={self.author_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return False
        return (other.id, other.title, other.author_id) == (
            self.id,
            self.title,
            self.author_id,
        )

    def __hash__(self) -> int:
        return hash((Book, self.id))
