"""
Main routes for the application.
Renders pages and handles general navigation.
"""
from flask import Blueprint, render_template, session, redirect, current_app

from authapp.session import FlaskSessionAccessor, SessionStatus
from authapp.utils import get_client_ip
from authapp.views import (
    DashboardView,
    LandingView,
    RedirectRouter,
    DASHBOARD_ROUTE,
    LANDING_ROUTE,
)

main_bp = Blueprint('main', __name__)


def render_view(view_cls):
    """
    Run a session-gated view for the current request.
    The view is activated before the session store is read so that it sees
    the transition out of loading, and deactivated before responding.
    """
    accessor = FlaskSessionAccessor(session)
    router = RedirectRouter()
    view = view_cls(accessor, router)

    view.activate()
    try:
        accessor.refresh()
        page = view.render()
    finally:
        view.deactivate()

    if router.location:
        current_app.logger.info(
            f"{view_cls.__name__}: {accessor.status.value} session from {get_client_ip()} "
            f"redirected to {router.location}"
        )
        return redirect(router.location)
    if page is None:
        # Left the page on an earlier transition
        return redirect(view_cls.redirect_to)
    return render_template(page.template, **page.context)


def redirect_if_authenticated(template):
    """Entry pages are pointless for a signed-in user."""
    accessor = FlaskSessionAccessor(session)
    accessor.refresh()
    if accessor.status is SessionStatus.AUTHENTICATED:
        return redirect(DASHBOARD_ROUTE)
    return render_template(template)


@main_bp.route('/')
def index():
    """Home page - redirect based on auth status."""
    return render_view(LandingView)


@main_bp.route('/register')
def register_page():
    """Registration page."""
    return redirect_if_authenticated('register.html')


@main_bp.route('/login')
def login_page():
    """Login page."""
    return redirect_if_authenticated('login.html')


@main_bp.route('/dashboard')
def dashboard():
    """Dashboard - requires authentication."""
    return render_view(DashboardView)


@main_bp.route('/dashboard/sign-out', methods=['POST'])
def sign_out():
    """
    Sign-out button on the dashboard.
    Only navigates home; the session is revoked by the sign-in service.
    """
    router = RedirectRouter()
    DashboardView(FlaskSessionAccessor(session), router).sign_out()
    current_app.logger.info(f"Sign-out requested from {get_client_ip()}")
    return redirect(router.location or LANDING_ROUTE)
