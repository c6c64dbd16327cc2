import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

from repouow.core import InfrastructureError
from repouow.orm import SessionMaker, set_default_sessionmaker
from repouow.repo import SqlAlchemyRepository
from repouow.test import QueryCounter

from bookstore.adapters.repos import BooksRepository
from bookstore.domain.models import Author, Book
from tests.integration import insert_author, insert_book


def test_repository_can_save_an_author(session: Session):
    repo = SqlAlchemyRepository(Author, session)
    repo.add(Author("Jane"))
    session.commit()

    rows = list(session.execute(text("SELECT id, name FROM author")))
    assert rows == [(1, "Jane")]


def test_get_by_id_returns_equal_entity_after_commit(get_session: SessionMaker):
    session = get_session()
    author = Author("Jane")
    SqlAlchemyRepository(Author, session).add(author)
    session.commit()
    expected = Author("Jane", id=author.id)
    session.close()

    with SqlAlchemyRepository(Author, get_session()) as repo:
        assert repo.get_by_id(expected.id) == expected


def test_get_by_id_returns_none_when_not_found(session: Session):
    assert SqlAlchemyRepository(Author, session).get_by_id(999) is None


def test_no_match_is_none_or_empty_list(session: Session, seed):
    books = SqlAlchemyRepository(Book, session)

    assert books.find(Book.title == "Missing") is None  # type: ignore
    assert books.find_all(Book.title == "Missing") == []  # type: ignore


def test_find_returns_lowest_id_first(session: Session):
    jane_id = insert_author(session, "Jane")
    insert_book(session, "Ninja", jane_id, id=7)
    insert_book(session, "Ninja Returns", jane_id, id=3)
    session.commit()

    book = SqlAlchemyRepository(Book, session).find(Book.title.startswith("Ninja"))  # type: ignore
    assert book.id == 3


def test_find_all_and_get_all_are_ordered_by_id(session: Session):
    jane_id = insert_author(session, "Jane")
    for id, title in [(5, "B"), (2, "A"), (9, "C")]:
        insert_book(session, title, jane_id, id=id)
    session.commit()

    books = SqlAlchemyRepository(Book, session)
    assert [b.id for b in books.get_all()] == [2, 5, 9]
    assert [b.id for b in books.find_all(Book.id > 2)] == [5, 9]  # type: ignore


def test_find_accepts_field_equality_keywords(session: Session, seed):
    books = SqlAlchemyRepository(Book, session)

    assert books.find(title="Ninja").id == seed["Ninja"]
    assert [b.title for b in books.find_all(author_id=seed["Jane"])] == [
        "Ninja",
        "Ninga Warrior",
    ]


def test_results_are_materialized_lists(get_session: SessionMaker, seed):
    books = SqlAlchemyRepository(Book, get_session())
    found = books.find_all(author_id=seed["Jane"])
    everything = books.get_all()
    assert isinstance(found, list)
    assert isinstance(everything, list)

    other = get_session()
    insert_book(other, "Ninja II", seed["Jane"])
    other.commit()
    other.close()

    assert len(found) == 2
    assert len(everything) == 3
    assert len(books.find_all(author_id=seed["Jane"])) == 3
    assert len(books.get_all()) == 4


def test_includes_load_author_without_extra_query(get_session: SessionMaker, seed):
    session = get_session()
    book = SqlAlchemyRepository(Book, session).find(Book.title == "Ninja", ["author"])  # type: ignore

    with QueryCounter.of(session) as counter:
        assert book.author.name == "Jane"  # type: ignore

    assert counter.count == 0


def test_without_includes_author_is_loaded_lazily(get_session: SessionMaker, seed):
    session = get_session()
    book = SqlAlchemyRepository(Book, session).find(Book.title == "Ninja")  # type: ignore

    with QueryCounter.of(session) as counter:
        assert book.author.name == "Jane"  # type: ignore

    assert counter.count == 1


def test_find_all_with_includes(get_session: SessionMaker, seed):
    session = get_session()
    books = SqlAlchemyRepository(Book, session).find_all(
        Book.title.contains("Nin"), ["author"]  # type: ignore
    )

    with QueryCounter.of(session) as counter:
        assert [b.author.name for b in books] == ["Jane", "Jane"]  # type: ignore

    assert counter.count == 0


@pytest.mark.parametrize("path", ["publisher", "title", "author.publisher"])
def test_invalid_include_path_raises_infrastructure_error(session: Session, path):
    books = SqlAlchemyRepository(Book, session)

    with pytest.raises(InfrastructureError):
        books.find(Book.title == "Ninja", [path])  # type: ignore


def test_query_failure_raises_infrastructure_error(session: Session):
    session.execute(text("DROP TABLE book"))

    with pytest.raises(InfrastructureError):
        SqlAlchemyRepository(Book, session).get_all()


def test_delete_removes_entity_after_commit(session: Session):
    author_id = insert_author(session, "Nobody")
    session.commit()

    authors = SqlAlchemyRepository(Author, session)
    authors.delete(authors.get_by_id(author_id))
    session.commit()

    assert authors.get_by_id(author_id) is None


def test_given_session_is_not_closed_by_repository(session: Session):
    author = Author("Jane")

    with SqlAlchemyRepository(Author, session) as repo:
        repo.add(author)

    assert not repo.owns_session
    assert author in session


def test_repository_closes_its_own_session(get_session: SessionMaker):
    set_default_sessionmaker(get_session)
    author = Author("Jane")

    with SqlAlchemyRepository(Author) as repo:
        repo.add(author)
        assert author in repo.session

    assert repo.owns_session
    assert author not in repo.session


def test_find_by_title_is_exact_match(session: Session, seed):
    books = BooksRepository(Book, session)

    assert books.find_by_title("Ninga") is None
    assert books.find_by_title("ninja") is None
    assert books.find_by_title("Ninja").id == seed["Ninja"]  # type: ignore


def test_find_with_similar_title_returns_none(session: Session):
    insert_author(session, "Jane", id=2)
    insert_book(session, "Ninja", 2, id=5)
    session.commit()

    books = SqlAlchemyRepository(Book, session)
    assert books.find(Book.title == "Ninga") is None  # type: ignore
    assert books.find(Book.title == "Ninja") == Book("Ninja", author_id=2, id=5)  # type: ignore
