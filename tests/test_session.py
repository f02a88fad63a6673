"""
Unit tests for the session accessor.
"""
import pytest
from authapp.session import (
    FlaskSessionAccessor,
    Session,
    SessionAccessor,
    SessionStatus,
    SessionUser,
)


class TestSessionUser:
    """Test cases for SessionUser."""

    def test_from_dict(self):
        user = SessionUser.from_dict({'name': 'Ada', 'email': 'ada@example.com'})
        assert user.name == 'Ada'
        assert user.email == 'ada@example.com'
        assert user.image is None

    def test_from_empty(self):
        assert SessionUser.from_dict(None) == SessionUser()
        assert SessionUser.from_dict({}) == SessionUser()


class TestSessionAccessor:
    """Test cases for SessionAccessor."""

    def test_starts_loading(self, accessor):
        assert accessor.status is SessionStatus.LOADING
        assert accessor.user is None

    def test_update_notifies_listeners(self, accessor):
        seen = []
        accessor.subscribe(seen.append)

        changed = accessor.update(SessionStatus.UNAUTHENTICATED)

        assert changed is True
        assert seen == [Session(SessionStatus.UNAUTHENTICATED)]

    def test_unchanged_update_does_not_notify(self, accessor):
        seen = []
        accessor.subscribe(seen.append)

        accessor.update(SessionStatus.UNAUTHENTICATED)
        changed = accessor.update(SessionStatus.UNAUTHENTICATED)

        assert changed is False
        assert len(seen) == 1

    def test_user_change_notifies(self, accessor):
        seen = []
        accessor.subscribe(seen.append)

        accessor.update(SessionStatus.AUTHENTICATED, SessionUser(name='Ada'))
        accessor.update(SessionStatus.AUTHENTICATED, SessionUser(name='Grace'))

        assert [s.user.name for s in seen] == ['Ada', 'Grace']

    def test_status_string_is_coerced(self, accessor):
        accessor.update('authenticated')
        assert accessor.status is SessionStatus.AUTHENTICATED

    def test_unknown_status_rejected(self, accessor):
        with pytest.raises(ValueError):
            accessor.update('expired')

    def test_user_dropped_unless_authenticated(self):
        accessor = SessionAccessor(SessionStatus.UNAUTHENTICATED, SessionUser(name='Ada'))
        assert accessor.user is None

    def test_authenticated_without_user_gets_empty_record(self):
        accessor = SessionAccessor(SessionStatus.AUTHENTICATED)
        assert accessor.user == SessionUser()

    def test_unsubscribe(self, accessor):
        seen = []
        unsubscribe = accessor.subscribe(seen.append)

        unsubscribe()
        unsubscribe()
        accessor.update(SessionStatus.UNAUTHENTICATED)

        assert seen == []
        assert accessor.listener_count == 0

    def test_listener_may_unsubscribe_during_notification(self, accessor):
        calls = []

        def once(session):
            calls.append(session.status)
            unsubscribe()

        unsubscribe = accessor.subscribe(once)
        accessor.update(SessionStatus.UNAUTHENTICATED)
        accessor.update(SessionStatus.AUTHENTICATED)

        assert calls == [SessionStatus.UNAUTHENTICATED]

    def test_to_dict(self):
        accessor = SessionAccessor(SessionStatus.AUTHENTICATED,
                                   SessionUser(name='Ada', email='ada@example.com'))
        assert accessor.session.to_dict() == {
            'status': 'authenticated',
            'user': {'name': 'Ada', 'email': 'ada@example.com', 'image': None}
        }

    def test_to_dict_without_user(self):
        assert Session(SessionStatus.UNAUTHENTICATED).to_dict() == {
            'status': 'unauthenticated',
            'user': None
        }


class TestFlaskSessionAccessor:
    """Test cases for reading the session store."""

    def test_empty_store_is_unauthenticated(self):
        accessor = FlaskSessionAccessor({})
        assert accessor.status is SessionStatus.LOADING

        assert accessor.refresh() is True
        assert accessor.status is SessionStatus.UNAUTHENTICATED

    def test_authenticated_store(self):
        accessor = FlaskSessionAccessor({
            'authenticated': True,
            'user': {'name': 'Ada', 'email': 'ada@example.com', 'image': None}
        })
        accessor.refresh()

        assert accessor.session.is_authenticated
        assert accessor.user.name == 'Ada'

    def test_pending_sign_in_stays_loading(self):
        accessor = FlaskSessionAccessor({'auth_state': {'email': 'ada@example.com'}})

        assert accessor.refresh() is False
        assert accessor.status is SessionStatus.LOADING

    def test_authenticated_wins_over_pending(self):
        accessor = FlaskSessionAccessor({'authenticated': True, 'auth_state': {}})
        accessor.refresh()
        assert accessor.status is SessionStatus.AUTHENTICATED

    def test_refresh_follows_store_changes(self):
        store = {}
        accessor = FlaskSessionAccessor(store)
        seen = []
        accessor.subscribe(lambda s: seen.append(s.status))

        accessor.refresh()
        store['authenticated'] = True
        accessor.refresh()
        accessor.refresh()

        assert seen == [SessionStatus.UNAUTHENTICATED, SessionStatus.AUTHENTICATED]
