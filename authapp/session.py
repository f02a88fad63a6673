"""
Session accessor.
Exposes the current authentication session to views and notifies them of changes.
The session itself is written by the external sign-in service - nothing here mutates it.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# Keys the sign-in service writes into the shared session store
AUTHENTICATED_KEY = 'authenticated'
USER_KEY = 'user'
PENDING_KEY = 'auth_state'


class SessionStatus(str, enum.Enum):
    """Authentication status of the current session."""
    LOADING = 'loading'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


@dataclass(frozen=True)
class SessionUser:
    """
    The signed-in user as the sign-in service describes them.
    Every field is optional.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> 'SessionUser':
        if not data:
            return cls()
        return cls(
            name=data.get('name'),
            email=data.get('email'),
            image=data.get('image')
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'email': self.email,
            'image': self.image
        }


@dataclass(frozen=True)
class Session:
    """Snapshot of the session: a status and, when authenticated, the user."""
    status: SessionStatus
    user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'user': self.user.to_dict() if self.user else None
        }


SessionListener = Callable[[Session], None]


class SessionAccessor:
    """
    Read-only view of the current session with change notifications.

    Views subscribe when they become active and unsubscribe when they go away.
    Listeners are called with the new Session whenever it changes.
    """

    def __init__(self, status=SessionStatus.LOADING, user: Optional[SessionUser] = None):
        self._session = self._build(status, user)
        self._listeners: List[SessionListener] = []

    @staticmethod
    def _build(status, user) -> Session:
        status = SessionStatus(status)
        if status is not SessionStatus.AUTHENTICATED:
            user = None
        elif user is None:
            user = SessionUser()
        return Session(status=status, user=user)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def user(self) -> Optional[SessionUser]:
        return self._session.user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a change listener.

        Args:
            listener: Called with the new Session after every change

        Returns:
            Callable that removes the listener again (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def update(self, status, user: Optional[SessionUser] = None) -> bool:
        """
        Publish a new session state.

        Args:
            status: SessionStatus or its string value
            user: The user record, ignored unless authenticated

        Returns:
            bool: True if the session changed and listeners were notified

        Raises:
            ValueError: If status is not a known session status
        """
        new_session = self._build(status, user)
        if new_session == self._session:
            return False

        old_status = self._session.status
        self._session = new_session
        if old_status is not new_session.status:
            logger.debug(f"Session status {old_status.value} -> {new_session.status.value}")

        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(new_session)
        return True


class FlaskSessionAccessor(SessionAccessor):
    """
    Session accessor backed by the Flask session store.
    Starts out loading until refresh() reads the store.
    """

    def __init__(self, store):
        super().__init__()
        self._store = store

    def refresh(self) -> bool:
        """Resolve the session from the store and publish it."""
        if self._store.get(AUTHENTICATED_KEY):
            user = SessionUser.from_dict(self._store.get(USER_KEY))
            return self.update(SessionStatus.AUTHENTICATED, user)

        # A sign-in is still in progress
        if self._store.get(PENDING_KEY):
            return self.update(SessionStatus.LOADING)

        return self.update(SessionStatus.UNAUTHENTICATED)
