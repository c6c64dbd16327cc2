"""단위/통합 테스트 헬퍼."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from repouow.orm import (
    InitHook,
    SessionMaker,
    clear_mappers,
    init_engine,
    start_mappers,
)


def memory_sessionmaker(init_hooks: Optional[list[InitHook]] = None) -> SessionMaker:
    """매번 새로 매핑된 인메모리 SQLite DB 의 Session 팩토리를 리턴합니다.

    모든 세션과 스레드가 하나의 커넥션을 공유합니다.
    """
    clear_mappers()
    metadata = start_mappers(use_exist=False, init_hooks=init_hooks)
    engine = init_engine(
        metadata,
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return sessionmaker(engine)


class QueryCounter:
    """엔진에서 실행된 SQL 문장 수를 셉니다.

    Example: ::

        with QueryCounter.of(session) as counter:
            book.author
        assert counter.count == 0
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.statements = list[str]()

    @classmethod
    def of(cls, session: Session) -> QueryCounter:
        return cls(session.get_bind())

    @property
    def count(self) -> int:
        return len(self.statements)

    def _on_execute(self, conn: Any, cursor: Any, statement: str, *args: Any) -> None:
        self.statements.append(statement)

    def __enter__(self) -> QueryCounter:
        event.listen(self.engine, "before_cursor_execute", self._on_execute)
        return self

    def __exit__(self, *args: Any) -> None:
        event.remove(self.engine, "before_cursor_execute", self._on_execute)
