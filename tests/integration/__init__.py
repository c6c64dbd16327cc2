from typing import Optional, cast

from sqlalchemy import text
from sqlalchemy.orm import Session

from tests import random_name, random_title


def insert_author(session: Session, name: str = "", id: Optional[int] = None) -> int:
    if not name:
        name = random_name()

    if id is None:
        session.execute(text("INSERT INTO author (name) VALUES (:name)"), dict(name=name))
    else:
        session.execute(
            text("INSERT INTO author (id, name) VALUES (:id, :name)"),
            dict(id=id, name=name),
        )
    [[author_id]] = session.execute(
        text("SELECT id FROM author WHERE name=:name"), dict(name=name)
    )

    return cast(int, author_id)


def insert_book(
    session: Session, title: str = "", author_id: int = 0, id: Optional[int] = None
) -> int:
    if not title:
        title = random_title()

    if id is None:
        session.execute(
            text("INSERT INTO book (title, author_id) VALUES (:title, :author_id)"),
            dict(title=title, author_id=author_id),
        )
    else:
        session.execute(
            text(
                "INSERT INTO book (id, title, author_id)"
                " VALUES (:id, :title, :author_id)"
            ),
            dict(id=id, title=title, author_id=author_id),
        )
    [[book_id]] = session.execute(
        text("SELECT id FROM book WHERE title=:title"), dict(title=title)
    )

    return cast(int, book_id)
