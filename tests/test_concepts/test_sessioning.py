import pytest
from bson import ObjectId

from concept_server.concepts.sessioning import SESSION_USER_KEY, SessioningConcept
from concept_server.core.exceptions import NotAllowedError, UnauthenticatedError


@pytest.fixture
def sessioning() -> SessioningConcept:
    return SessioningConcept()


def test_start_and_get_user(sessioning):
    session = {}
    user = ObjectId()

    sessioning.start(session, user)

    assert session[SESSION_USER_KEY] == str(user)
    assert sessioning.get_user(session) == user


def test_start_twice_fails(sessioning):
    session = {}
    sessioning.start(session, ObjectId())
    with pytest.raises(NotAllowedError):
        sessioning.start(session, ObjectId())


def test_end(sessioning):
    session = {}
    sessioning.start(session, ObjectId())

    sessioning.end(session)

    assert SESSION_USER_KEY not in session
    with pytest.raises(UnauthenticatedError):
        sessioning.end(session)


def test_get_user_when_logged_out(sessioning):
    with pytest.raises(UnauthenticatedError):
        sessioning.get_user({})


def test_get_user_with_corrupt_session(sessioning):
    with pytest.raises(UnauthenticatedError):
        sessioning.get_user({SESSION_USER_KEY: "not-an-object-id"})


def test_logged_in_and_out_checks(sessioning):
    session = {}
    sessioning.is_logged_out(session)
    with pytest.raises(UnauthenticatedError):
        sessioning.is_logged_in(session)

    sessioning.start(session, ObjectId())
    sessioning.is_logged_in(session)
    with pytest.raises(NotAllowedError):
        sessioning.is_logged_out(session)
