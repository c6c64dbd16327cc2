"""레포지터리 패턴 구현."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Type, TypeVar

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Load, Query, Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from repouow.core import (
    AbstractRepository,
    Entity,
    Includes,
    InfrastructureError,
    PersistenceError,
    get_logger,
)
from repouow.orm import get_sessionmaker

E = TypeVar("E", bound=Entity)

logger = get_logger("repouow.repo")


@contextmanager
def infrastructure_errors(entity_class: Type[Any]) -> Generator[None, None, None]:
    """블록에서 발생한 SqlAlchemy 에러를 :class:`InfrastructureError` 로 감쌉니다.

    조회 전 autoflush 에서 스테이징된 쓰기가 실패한 경우는
    :class:`PersistenceError` 입니다.
    """
    try:
        yield
    except (IntegrityError, StaleDataError) as e:
        raise PersistenceError(
            f"flush before query on {entity_class.__name__} failed: {e}"
        ) from e
    except SQLAlchemyError as e:
        raise InfrastructureError(
            f"query on {entity_class.__name__} failed: {e}"
        ) from e


def eager_options(entity_class: Type[Any], includes: Includes) -> list[Load]:
    """`includes` 경로들을 ``joinedload`` 옵션 리스트로 변환합니다.

    ``"author"`` 처럼 관계 속성 이름을 쓰며, ``"author.books"`` 처럼 점으로
    이어서 중첩된 관계를 지정할 수 있습니다.

    Raises:
        :class:`InfrastructureError`: 경로가 실제 관계를 가리키지 않을 때.
    """
    options = list[Load]()

    for path in includes or []:
        option: Optional[Load] = None
        owner = entity_class

        for name in path.split("."):
            rel = inspect(owner).relationships.get(name)
            if rel is None:
                logger.warning("invalid include path %r for %s", path, entity_class)
                raise InfrastructureError(
                    f"{path!r} is not a relationship of {entity_class.__name__}"
                )
            attr = getattr(owner, name)
            option = option.joinedload(attr) if option else joinedload(attr)
            owner = rel.mapper.class_

        if option is not None:
            options.append(option)

    return options


class SqlAlchemyRepository(AbstractRepository[E]):
    """SqlAlchemy ORM을 저장소로 하는 :class:`AbstractRepository` 구현입니다.

    `find`, `find_all`, `get_all` 의 결과는 PK 오름차순으로 정렬됩니다.
    """

    def __init__(self, entity_class: Type[E], session: Optional[Session] = None):
        """임의의 엔티티 E 를 받아 E에 대한 Repository를 초기화합니다.

        `session` 이 주어지지 않으면 기본 Session 팩토리로 세션을 열고,
        그 세션은 :meth:`close` 에서 닫습니다.
        """
        super().__init__()
        self.entity_class = entity_class
        self.session: Session
        self.owns_session = not session
        if not session:
            self.session = get_sessionmaker()()
        else:
            self.session = session

    def __repr__(self) -> str:
        return f"SqlAlchemyRepository[{self.entity_class.__name__}]"

    def __enter__(self) -> SqlAlchemyRepository[E]:
        """`module`:contextmanager`의 필수 인터페이스 구현."""
        return self

    def close(self) -> None:
        if self.owns_session:
            self.session.close()

    def add(self, item: E) -> None:
        self.session.add(item)

    def delete(self, item: E) -> None:
        self.session.delete(item)

    def get_by_id(self, id: Any) -> Optional[E]:
        with infrastructure_errors(self.entity_class):
            return self.session.get(self.entity_class, id)

    async def get_by_id_async(self, id: Any) -> Optional[E]:
        # 세션은 스레드풀의 작업 하나만 사용하고, 호출자는 결과를 기다리는 동안만 멈춥니다.
        return await run_in_threadpool(self.get_by_id, id)

    def find(
        self, match: Any = None, includes: Includes = None, **filter_by: Any
    ) -> Optional[E]:
        with infrastructure_errors(self.entity_class):
            return self._query(match, includes, filter_by).first()

    def find_all(
        self, match: Any = None, includes: Includes = None, **filter_by: Any
    ) -> List[E]:
        with infrastructure_errors(self.entity_class):
            return self._query(match, includes, filter_by).all()

    def get_all(self) -> List[E]:
        with infrastructure_errors(self.entity_class):
            return self._query().all()

    def _query(
        self,
        match: Any = None,
        includes: Includes = None,
        filter_by: Optional[dict[str, Any]] = None,
    ) -> Query:
        query = self.session.query(self.entity_class)

        if includes:
            query = query.options(*eager_options(self.entity_class, includes))
        if match is not None:
            query = query.filter(match)
        if filter_by:
            query = query.filter_by(**filter_by)

        return query.order_by(*inspect(self.entity_class).primary_key)
