from __future__ import annotations

import abc
from contextlib import AbstractContextManager, ContextDecorator
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Literal,
    Optional,
    Protocol,
    Sequence,
    Type,
    TypeVar,
)

from repouow.core.errors import ConfigError, RepoUoWError


class Entity(Protocol):
    """Entity 프로토콜 명세."""

    id: Any  # PK 컬럼으로 id 라는 필드를 제공해야 합니다.


E = TypeVar("E", bound=Entity)

Includes = Optional[Sequence[str]]
"""함께 로드할 관계(relationship) 경로 목록. ``"author"`` 처럼 속성 이름을 사용합니다."""


class AbstractRepository(Generic[E], abc.ABC, ContextDecorator):
    """Repository 패턴의 추상 인터페이스 입니다.

    조회 메소드는 저장소 상태를 변경하지 않으며 호출할 때마다 다시 쿼리합니다.
    결과가 없는 것은 에러가 아니라 ``None`` 이나 빈 리스트로 표현합니다.
    """

    entity_class: Type[E]

    def __enter__(self) -> AbstractRepository[E]:
        """`module`:contextmanager`의 필수 인터페이스 구현."""
        return self

    def __exit__(
        self, typ: Any = None, value: Any = None, traceback: Any = None
    ) -> Literal[False]:
        self.close()
        return False

    def close(self) -> None:
        """레포지터리와 연결된 저장소 객체를 종료합니다."""
        return

    @abc.abstractmethod
    def add(self, item: E) -> None:
        """레포지터리에 :class:`E` 객체를 추가합니다.

        실제 저장은 UoW 가 커밋할 때 이루어집니다.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, item: E) -> None:
        """레포지터리에서 :class:`E` 객체를 삭제합니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_by_id(self, id: Any) -> Optional[E]:
        """주어진 PK 에 해당하는 :class:`E` 객체를 조회합니다.

        못 찾을 경우 ``None`` 을 리턴합니다.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_by_id_async(self, id: Any) -> Optional[E]:
        """:meth:`get_by_id` 의 비동기 버전입니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def find(
        self, match: Any = None, includes: Includes = None, **filter_by: Any
    ) -> Optional[E]:
        """조건 `match` 에 맞는 첫 번째 객체를 조회합니다.

        Args:
            match: 엔티티 필드에 대한 불리언 조건식.
            includes: 함께 로드할 관계 경로 목록.
            filter_by: 필드 이름과 값이 같은지 비교하는 조건.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def find_all(
        self, match: Any = None, includes: Includes = None, **filter_by: Any
    ) -> List[E]:
        """조건 `match` 에 맞는 모든 객체 리스트를 조회합니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_all(self) -> List[E]:
        """모든 객체 리스트를 조회합니다."""
        raise NotImplementedError


EntityReposMap = dict[Type[Entity], AbstractRepository]


class AbstractUnitOfWork(AbstractContextManager["AbstractUnitOfWork"]):
    """UnitOfWork 패턴의 추상 인터페이스입니다.

    UnitOfWork(UoW)는 영구 저장소의 유일한 진입점이며, 로드된 객체의
    최신 상태를 계속 트래킹 합니다.
    """

    repos: EntityReposMap
    entity_classes: Sequence[Type[Entity]]

    def __enter__(self) -> AbstractUnitOfWork:
        """``with`` 블록에 진입했을때 실행되는 메소드입니다."""
        return self

    def __exit__(self, *args: Any) -> None:
        """``with`` 블록에서 빠져나갈 때 실행되는 메소드입니다.

        예외나 취소로 빠져나가는 경우에도 항상 :meth:`close` 가 호출됩니다.
        """
        self.close()

    def __getitem__(self, key: Type[E]) -> AbstractRepository[E]:
        if key not in self.repos:
            raise RepoUoWError("repository not found for: %r" % key)
        return self.repos[key]

    def commit(self) -> int:
        """세션을 커밋하고 변경된 행의 수를 리턴합니다."""
        return self._commit()

    @abc.abstractmethod
    def _commit(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        """세션을 롤백합니다."""
        raise NotImplementedError

    def close(self) -> None:
        """커밋되지 않은 변경을 롤백하고 자원을 반환합니다."""
        self.rollback()


@dataclass
class AbstractConfig(abc.ABC):
    """RepoUoW App 설정."""

    name: str
    title: str
    module_name: str

    def get_api_host(self) -> str:
        """Get API server's host address."""
        return "127.0.0.1"

    def get_api_port(self) -> int:
        """Get API server's host port."""
        return 5000

    def get_api_url(self) -> str:
        """Get API server's full url."""
        return f"http://{self.get_api_host()}:{self.get_api_port()}"

    @abc.abstractmethod
    def get_db_url(self) -> str:
        """SqlAlchemy 에서 사용 가능한 형식의 DB URL을 리턴합니다."""
        raise NotImplementedError

    def get_db_connect_args(self) -> dict[str, Any]:
        """Get db connection arguments for SQLAlchemy's engine creation.

        Example:
            For SQLite dbs, it could be: ::

                {'check_same_thread': False}
        """
        return {}

    def get_db_poolclass(self) -> Optional[Type[Any]]:
        """Get db poolclass argument for SQLAlchemy's engine creation."""
        return None

    def get_init_hooks(self) -> list[Callable[[Any], Any]]:
        """ORM 매핑 함수 목록. 각 함수는 ``MetaData`` 를 인자로 받습니다."""
        return []

    @property
    def uow(self) -> AbstractUnitOfWork:
        """앱에서 사용할 새로운 UoW 객체를 리턴합니다."""
        raise ConfigError(f"no unit of work configured for {self.name!r}")

    def seed(self, uow: AbstractUnitOfWork) -> None:
        """``initdb --seed`` 명령에서 예제 데이터를 추가합니다. 커밋은 호출자가 합니다."""
        return
