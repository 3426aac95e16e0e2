"""
Concurrent friendship operations against a file-backed database

Each worker thread gets its own session, as request handlers do; all of them
share one PairLockRegistry.
"""
import threading

import pytest

from vibely.core.exceptions import AppError, DuplicateRequestError
from vibely.core.locks import PairLockRegistry
from vibely.database import Database, build_engine
from vibely.models.friend_request import FriendRequest, STATUS_PENDING
from vibely.repositories import UserRepository
from vibely.services.friendship_service import FriendshipService


@pytest.fixture
def file_database(tmp_path):
    database = Database(build_engine(f"sqlite:///{tmp_path / 'vibely.db'}"))
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def pair(file_database, password_hash):
    """Two committed users, returned as ids"""
    session = file_database.SessionLocal()
    try:
        repo = UserRepository(session)
        alice = repo.create("alice@example.com", password_hash, "Alice")
        bob = repo.create("bob@example.com", password_hash, "Bob")
        session.commit()
        return alice.id, bob.id
    finally:
        session.close()


def run_concurrently(database, locks, calls):
    """Start every call at once, each with its own session; return outcomes"""
    barrier = threading.Barrier(len(calls))
    outcomes = []
    guard = threading.Lock()

    def worker(call):
        session = database.SessionLocal()
        try:
            barrier.wait()
            call(FriendshipService(session, locks))
            outcome = "ok"
        except AppError as e:
            outcome = type(e)
        except Exception as e:
            outcome = e
        finally:
            session.close()
        with guard:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker, args=(call,)) for call in calls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


def friendship_state(database, a, b):
    session = database.SessionLocal()
    try:
        users = UserRepository(session)
        return users.is_friend(a, b), users.is_friend(b, a)
    finally:
        session.close()


def test_racing_sends_in_both_directions_create_one_request(file_database, pair):
    alice, bob = pair
    locks = PairLockRegistry()
    calls = [
        (lambda s: s.send_request(alice, bob)) if i % 2 == 0 else (lambda s: s.send_request(bob, alice))
        for i in range(8)
    ]

    outcomes = run_concurrently(file_database, locks, calls)

    assert outcomes.count("ok") == 1
    assert outcomes.count(DuplicateRequestError) == 7

    session = file_database.SessionLocal()
    try:
        pending = session.query(FriendRequest).filter(FriendRequest.status == STATUS_PENDING).count()
    finally:
        session.close()
    assert pending == 1
    assert len(locks) == 0


def test_racing_accept_and_remove_keep_friendship_symmetric(file_database, pair):
    alice, bob = pair
    locks = PairLockRegistry()

    for _ in range(5):
        session = file_database.SessionLocal()
        try:
            service = FriendshipService(session, locks)
            service.remove_friend(alice, bob)
            request_id = service.send_request(alice, bob).id
        finally:
            session.close()

        outcomes = run_concurrently(file_database, locks, [
            lambda s: s.accept_request(bob, request_id),
            lambda s: s.remove_friend(alice, bob),
            lambda s: s.remove_friend(bob, alice),
        ])

        assert outcomes == ["ok", "ok", "ok"]
        forward, backward = friendship_state(file_database, alice, bob)
        assert forward == backward
