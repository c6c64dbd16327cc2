"""UnitOfWork 패턴 모듈.

SqlAlchemy를 이용한 기본 구현체를 제공합니다.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Type

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from repouow.core import (
    AbstractRepository,
    AbstractUnitOfWork,
    Entity,
    EntityReposMap,
    PersistenceError,
    RepoUoWError,
    get_logger,
)
from repouow.orm import Session, SessionMaker, get_sessionmaker
from repouow.repo import SqlAlchemyRepository

RepoMakerFunc = Callable[[Session], AbstractRepository]
RepoMakerDict = dict[Type[Entity], RepoMakerFunc]


logger = get_logger("repouow.uow")


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """``SqlAlchemy`` ORM을 이용한 UnitOfWork 패턴 구현입니다.

    생성 시점에 세션을 하나 할당받고, 등록된 엔티티마다 그 세션을 공유하는
    레포지터리를 하나씩 만듭니다. 레포지터리와 세션은 UoW가 닫힐 때까지 바뀌지
    않습니다.

    Example: ::

        with SqlAlchemyUnitOfWork([Author, Book]) as uow:
            uow[Author].add(Author("Jane"))
            uow.commit()
    """

    # pylint: disable=super-init-not-called
    def __init__(
        self,
        entity_classes: Sequence[Type[Entity]],
        get_session: Optional[SessionMaker] = None,
        repo_maker: Optional[RepoMakerDict] = None,
    ) -> None:
        """``SqlAlchemy`` 기반의 UoW를 초기화합니다."""
        self.entity_classes = entity_classes
        self.repo_maker = repo_maker or {}
        self.get_session = get_session or get_sessionmaker()

        self.session: Session = self.get_session()
        self.closed = False
        self.committed = False
        self._affected = 0

        self.repos: EntityReposMap = {}
        try:
            for entity_class in self.entity_classes:
                make_repo = self.repo_maker.get(entity_class)
                self.repos[entity_class] = (
                    make_repo(self.session)
                    if make_repo
                    else SqlAlchemyRepository(entity_class, self.session)
                )
        except Exception:
            # 레포지터리를 만들지 못하면 UoW 도 없으므로 세션을 바로 반환합니다.
            self.session.close()
            raise

        event.listen(self.session, "after_flush", self._count_flushed)

    def __repr__(self):
        names = ", ".join(c.__name__ for c in self.entity_classes)
        return f"SqlAlchemyUnitOfWork[{names}]"

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        """``with`` 블록에 진입했을 때 필요한 작업을 수행합니다."""
        if self.closed:
            raise RepoUoWError(f"{self!r} is already closed")
        return self

    def _count_flushed(self, session: Session, _: Any) -> None:
        # after_flush 시점에는 new/dirty/deleted 가 아직 flush 이전 상태입니다.
        # 역참조 컬렉션만 바뀐 객체는 테이블에 쓰지 않으므로 세지 않습니다.
        dirty = [
            obj
            for obj in session.dirty
            if session.is_modified(obj, include_collections=False)
        ]
        self._affected += len(session.new) + len(dirty) + len(session.deleted)

    def _commit(self) -> int:
        """세션을 커밋합니다.

        실패하면 트랜잭션을 롤백하고 :class:`PersistenceError` 를 발생시킵니다.
        """
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.warning("commit failed, rolling back: %s", e)
            self.rollback()
            raise PersistenceError(f"commit failed: {e}") from e

        affected, self._affected = self._affected, 0
        self.committed = True
        logger.debug("%r committed %d rows", self, affected)
        return affected

    def rollback(self) -> None:
        """세션을 롤백합니다."""
        self._affected = 0
        self.session.rollback()
        logger.debug("%r rolled back", self)

    def close(self) -> None:
        """커밋되지 않은 변경을 롤백하고 세션을 닫습니다."""
        if self.closed:
            return
        try:
            super().close()
        finally:
            event.remove(self.session, "after_flush", self._count_flushed)
            self.session.close()
            self.closed = True
