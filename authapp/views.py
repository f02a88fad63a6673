"""
Session-gated views.
Each view follows the session accessor and asks the router to navigate
away when the session contradicts the page it renders.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from authapp.session import Session, SessionAccessor, SessionStatus, SessionUser
from authapp.utils import email_local_part, first_non_empty, initial

logger = logging.getLogger(__name__)

# Routes
LANDING_ROUTE = '/'
DASHBOARD_ROUTE = '/dashboard'
LOGIN_ROUTE = '/login'
REGISTER_ROUTE = '/register'

PLACEHOLDER_NAME = 'User'
PLACEHOLDER_INITIAL = 'U'


@dataclass(frozen=True)
class Badge:
    label: str
    value: str
    tone: str  # 'ok' or 'warn'


@dataclass(frozen=True)
class Feature:
    title: str
    text: str
    icon: str


@dataclass(frozen=True)
class Stat:
    value: str
    label: str


# Fixed presentation values, not backed by any check
SECURITY_BADGES = (
    Badge('Email Verified', 'Complete', 'ok'),
    Badge('Strong Password', 'Secure', 'ok'),
    Badge('Two-Factor Authentication', 'Recommended', 'warn'),
)
ACCOUNT_STATS = (
    Stat('1', 'Account'),
    Stat('100%', 'Secure'),
)
ACCOUNT_STATUS = 'Active'
LANDING_FEATURES = (
    Feature('Secure', 'Industry-standard encryption', 'lock'),
    Feature('Protected', 'Your data is safe with us', 'shield'),
    Feature('Simple', 'Easy to use interface', 'user-plus'),
)


@dataclass(frozen=True)
class Page:
    """A template to render and its context."""
    template: str
    context: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Profile:
    """Profile fields shown on the dashboard."""
    name: str
    greeting: str
    initial: str
    email: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_user(cls, user: Optional[SessionUser]) -> 'Profile':
        user = user or SessionUser()
        return cls(
            name=first_non_empty(user.name, default=PLACEHOLDER_NAME),
            greeting=display_label(user),
            initial=first_non_empty(initial(user.name), initial(user.email),
                                    default=PLACEHOLDER_INITIAL),
            email=user.email,
            image=user.image or None
        )


def display_label(user: Optional[SessionUser]) -> str:
    """
    Label used to greet the user.

    Precedence: display name, then the local part of the email address,
    then the generic placeholder.
    """
    if user is None:
        return PLACEHOLDER_NAME
    return first_non_empty(user.name, email_local_part(user.email),
                           default=PLACEHOLDER_NAME)


# ============================================
# Navigation
# ============================================

class Router:
    """Navigation target used by views."""

    def navigate(self, path: str):
        raise NotImplementedError


class RedirectRouter(Router):
    """
    Records navigation requests so a request handler can answer them
    with an HTTP redirect.
    """

    def __init__(self):
        self.history: List[str] = []

    def navigate(self, path: str):
        logger.info(f"Navigating to {path}")
        self.history.append(path)

    @property
    def location(self) -> Optional[str]:
        return self.history[-1] if self.history else None


# ============================================
# Views
# ============================================

class SessionGatedView:
    """
    Base class for views bound to the session.

    Subclasses name the status that sends the user elsewhere
    (redirect_status) and where to (redirect_to). The redirect fires once
    per observed status transition, never on a steady-state re-render.
    """

    redirect_status: SessionStatus = None
    redirect_to: str = None
    loading_template = 'loading.html'

    def __init__(self, accessor: SessionAccessor, router: Router):
        self.accessor = accessor
        self.router = router
        self._observed_status = None
        self._unsubscribe = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def activate(self):
        """Start following the session and evaluate its current status."""
        if self._unsubscribe is None:
            self._unsubscribe = self.accessor.subscribe(self._on_session_change)
        self._observe(self.accessor.status)

    def deactivate(self):
        """Stop following the session."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_session_change(self, session: Session):
        self._observe(session.status)

    def _observe(self, status: SessionStatus):
        if status is self._observed_status:
            return
        self._observed_status = status
        if status is self.redirect_status:
            logger.debug(f"{type(self).__name__}: session is {status.value}, leaving page")
            self.router.navigate(self.redirect_to)

    def render(self) -> Optional[Page]:
        """
        Render the view for the current session.

        Returns:
            Page to show, or None when the view is being left
        """
        session = self.accessor.session
        self._observe(session.status)

        if session.status is SessionStatus.LOADING:
            return Page(self.loading_template)
        if session.status is self.redirect_status:
            return None
        return self.render_page(session)

    def render_page(self, session: Session) -> Page:
        raise NotImplementedError


class LandingView(SessionGatedView):
    """Landing page. Signed-in users belong on the dashboard."""

    redirect_status = SessionStatus.AUTHENTICATED
    redirect_to = DASHBOARD_ROUTE

    def render_page(self, session):
        return Page('index.html', {
            'register_url': REGISTER_ROUTE,
            'login_url': LOGIN_ROUTE,
            'features': LANDING_FEATURES,
        })


class DashboardView(SessionGatedView):
    """Dashboard. Anonymous users are sent to the login page."""

    redirect_status = SessionStatus.UNAUTHENTICATED
    redirect_to = LOGIN_ROUTE

    def render_page(self, session):
        return Page('dashboard.html', {
            'profile': Profile.from_user(session.user),
            'account_status': ACCOUNT_STATUS,
            'stats': ACCOUNT_STATS,
            'badges': SECURITY_BADGES,
        })

    def sign_out(self):
        # Revoking the session is the sign-in service's job
        self.router.navigate(LANDING_ROUTE)
