"""ORM 어댑터 모듈"""
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table
from sqlalchemy.orm import registry, relationship

from bookstore.domain.models import Author, Book


def init_mappers(metadata: MetaData) -> MetaData:
    """도메인 객체들을 SqlAlchemy ORM 매퍼에 등록합니다."""
    mapper_registry = registry(metadata=metadata)

    author = Table(
        "author",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(255), nullable=False),
        extend_existing=True,
    )

    book = Table(
        "book",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("title", String(255), nullable=False),
        Column("author_id", ForeignKey("author.id"), nullable=False),  # 외래키 관계
        extend_existing=True,
    )

    # Author.books 는 필요할 때마다 쿼리하는 관계입니다.
    mapper_registry.map_imperatively(
        Author,
        author,
        properties={
            "books": relationship(
                Book, back_populates="author", lazy="dynamic", order_by=book.c.id
            )
        },
    )
    mapper_registry.map_imperatively(
        Book,
        book,
        properties={"author": relationship(Author, back_populates="books")},
    )

    return metadata
