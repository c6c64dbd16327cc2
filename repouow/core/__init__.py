"""RepoUoW 의 저장소 독립적인 핵심 모듈.

- 엔티티 프로토콜과 레포지터리 / UnitOfWork 추상 인터페이스
- 앱 설정의 기본 클래스 :class:`AbstractConfig`
- 에러 계층 (:class:`RepoUoWError` 와 하위 클래스들)
- uvicorn 포맷을 쓰는 :func:`get_logger`
"""
from ._logging import get_logger  # noqa
from .errors import (  # noqa
    ConfigError,
    InfrastructureError,
    PersistenceError,
    RepoUoWError,
)
from .models import (  # noqa
    AbstractConfig,
    AbstractRepository,
    AbstractUnitOfWork,
    Entity,
    EntityReposMap,
    Includes,
)
