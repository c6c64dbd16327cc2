"""RepoUoW - Repository 와 UnitOfWork 패턴을 SqlAlchemy 와 FastAPI 위에 구현한 프레임워크."""
from repouow.core import (  # noqa
    AbstractConfig,
    AbstractRepository,
    AbstractUnitOfWork,
    ConfigError,
    Entity,
    InfrastructureError,
    PersistenceError,
    RepoUoWError,
)
