import pytest

from portal.db.init_db import init_db
from portal.db.session import Database
from portal.tests.factories import make_dirs


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'catalog.db'}")
    init_db(database)
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    db = database.get_session()
    yield db
    db.rollback()
    db.close()


@pytest.fixture
def parts_root(tmp_path):
    """
    <root>/
        12300-12399/12347 Foo Bar, 12310 BAE 1050468-0001 Rev E-A, Misc, notes.txt
        90000-90099/90001, 90002 Harris
        1234-12399/12345 Ignored
        Archive/
    """
    root = tmp_path / "EngJobs"
    make_dirs(
        root,
        "12300-12399/12347 Foo Bar",
        "12300-12399/12310 BAE 1050468-0001 Rev E-A",
        "12300-12399/Misc",
        "90000-90099/90001",
        "90000-90099/90002 Harris",
        "1234-12399/12345 Ignored",
        "Archive",
    )
    (root / "12300-12399" / "notes.txt").write_text("not a folder")
    return root


@pytest.fixture
def app(database, parts_root):
    from portal.app_factory import create_app

    app = create_app(
        {"TESTING": True, "PARTS_ROOT": str(parts_root)},
        database=database,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


