class RepoUoWError(Exception):
    """``RepoUoW`` 와 관련된 모든 에러의 기본 클래스."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    ...


class ConfigError(RepoUoWError):
    """설정 파일을 읽거나 해석할 수 없을 때 발생하는 에러."""

    ...


class InfrastructureError(RepoUoWError):
    """저장소 연결 실패나 잘못된 쿼리(존재하지 않는 include 경로 등) 에러."""

    ...


class PersistenceError(RepoUoWError):
    """커밋 시점의 제약조건 위반이나 쓰기 실패 에러.

    이 에러가 발생하면 트랜잭션은 이미 롤백된 상태입니다.
    """

    ...
