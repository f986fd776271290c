from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from campusvote import create_app
from campusvote.extensions import db
from campusvote.models import Candidate, Election, Voter


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            # Concurrency tests hold many writers; wait on the file lock instead of failing.
            "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"timeout": 30}},
            "TALLY_MODE": "derived",
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def active_election(db_session):
    election = Election(title="Student Council 2026", status=Election.ACTIVE)
    db_session.add(election)
    db_session.commit()
    return election


@pytest.fixture()
def draft_election(db_session):
    election = Election(title="Sports Secretary 2026", status=Election.DRAFT)
    db_session.add(election)
    db_session.commit()
    return election


@pytest.fixture()
def candidate(db_session, active_election):
    candidate = Candidate(
        election_id=active_election.id,
        roll_number="C005",
        name="Asha Rao",
        department="Physics",
        is_approved=True,
    )
    db_session.add(candidate)
    db_session.commit()
    return candidate


@pytest.fixture()
def make_voter(db_session):
    def _make_voter(roll_number, approved=True, password_hash="hashed-password"):
        voter = Voter(
            id=f"v{roll_number}",
            roll_number=roll_number,
            full_name=f"Voter {roll_number}",
            password_hash=password_hash,
            is_approved=approved,
        )
        db_session.add(voter)
        db_session.commit()
        return voter

    return _make_voter


@pytest.fixture()
def voter(make_voter):
    return make_voter("101")
