import uuid


def random_suffix() -> str:
    """랜덤 ID뒤에 붙일 UUID 기반의 6자리 임의의 ID를 생성합니다."""
    return uuid.uuid4().hex[:6]


def random_name(name: str = "") -> str:
    """임의의 저자 이름을 생성합니다."""
    return f"author-{name}-{random_suffix()}"


def random_title(name: str = "") -> str:
    """임의의 책 제목을 생성합니다."""
    return f"title-{name}-{random_suffix()}"
