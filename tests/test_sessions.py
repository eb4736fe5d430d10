import unittest
from datetime import datetime, timedelta

from portal.auth.sessions import DatabaseSessionDirectory, MemorySessionDirectory
from portal.configs.database import create_db_engine, init_db


class FakeClock:

    def __init__(self):
        self.now = datetime(2024, 3, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class SessionDirectoryContract:

    def make_directory(self, ttl, sliding=True):
        raise NotImplementedError

    def setUp(self):
        self.clock = FakeClock()

    def test_resolves_until_ttl_passes(self):
        sessions = self.make_directory(timedelta(minutes=30), sliding=False)
        sid = sessions.create(1)
        self.clock.advance(minutes=29)
        self.assertEqual(sessions.resolve(sid), 1)
        self.clock.advance(minutes=1)
        self.assertIsNone(sessions.resolve(sid))

    def test_expired_session_never_resolves_again(self):
        sessions = self.make_directory(timedelta(minutes=30), sliding=False)
        sid = sessions.create(1)
        self.clock.advance(hours=1)
        self.assertIsNone(sessions.resolve(sid))
        self.clock.now -= timedelta(hours=1)
        self.assertIsNone(sessions.resolve(sid))

    def test_sliding_expiry_extends_on_use(self):
        sessions = self.make_directory(timedelta(minutes=30), sliding=True)
        sid = sessions.create(1)
        for _ in range(4):
            self.clock.advance(minutes=20)
            self.assertEqual(sessions.resolve(sid), 1)
        self.clock.advance(minutes=31)
        self.assertIsNone(sessions.resolve(sid))

    def test_fixed_expiry_ignores_use(self):
        sessions = self.make_directory(timedelta(minutes=30), sliding=False)
        sid = sessions.create(1)
        self.clock.advance(minutes=20)
        self.assertEqual(sessions.resolve(sid), 1)
        self.clock.advance(minutes=20)
        self.assertIsNone(sessions.resolve(sid))

    def test_revoke_ends_only_that_session(self):
        sessions = self.make_directory(timedelta(hours=1))
        laptop = sessions.create(1)
        phone = sessions.create(1)
        self.assertNotEqual(laptop, phone)
        self.assertTrue(sessions.revoke(laptop))
        self.assertFalse(sessions.revoke(laptop))
        self.assertIsNone(sessions.resolve(laptop))
        self.assertEqual(sessions.resolve(phone), 1)

    def test_unknown_session_does_not_resolve(self):
        sessions = self.make_directory(timedelta(hours=1))
        self.assertIsNone(sessions.resolve("not-a-session"))

    def test_prune_removes_only_expired_sessions(self):
        sessions = self.make_directory(timedelta(minutes=30), sliding=False)
        stale = sessions.create(1)
        self.clock.advance(minutes=20)
        fresh = sessions.create(2)
        self.clock.advance(minutes=15)
        self.assertEqual(sessions.prune(), 1)
        self.assertIsNone(sessions.resolve(stale))
        self.assertEqual(sessions.resolve(fresh), 2)


class MemorySessionDirectoryTest(SessionDirectoryContract, unittest.TestCase):

    def make_directory(self, ttl, sliding=True):
        return MemorySessionDirectory(ttl, sliding=sliding, check_period=timedelta(hours=1), clock=self.clock)

    def test_expired_sessions_are_pruned_on_create_after_check_period(self):
        sessions = self.make_directory(timedelta(minutes=10))
        for user_id in range(3):
            sessions.create(user_id)
        self.clock.advance(minutes=30)
        sessions.create(10)
        self.assertEqual(len(sessions), 4)
        self.clock.advance(minutes=30)
        sessions.create(11)
        self.assertEqual(len(sessions), 1)


class DatabaseSessionDirectoryTest(SessionDirectoryContract, unittest.TestCase):

    def make_directory(self, ttl, sliding=True):
        engine = create_db_engine("sqlite://")
        init_db(engine)
        self.addCleanup(engine.dispose)
        return DatabaseSessionDirectory(engine, ttl, sliding=sliding, clock=self.clock)


if __name__ == "__main__":
    unittest.main()
