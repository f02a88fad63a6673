"""
pytest configuration and fixtures for Auth App tests.
"""
import os
import pytest
from authapp.main import create_app
from authapp.session import SessionAccessor
from authapp.views import RedirectRouter


@pytest.fixture(scope='session')
def app():
    """Create and configure a test application instance."""
    # Set test environment variables
    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'

    app = create_app('testing')
    app.config.update({
        'TESTING': True,
        'SERVER_NAME': 'localhost',
    })

    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the application."""
    return app.test_client()


@pytest.fixture
def sample_user():
    """User record as the sign-in service stores it."""
    return {
        'name': 'Test User',
        'email': 'test@example.com',
        'image': 'https://example.com/avatar.png'
    }


@pytest.fixture
def authenticated_client(client, sample_user):
    """Create an authenticated test client."""
    with client.session_transaction() as session:
        session['authenticated'] = True
        session['user'] = sample_user
    return client


@pytest.fixture
def pending_client(client):
    """Test client whose sign-in is still in progress."""
    with client.session_transaction() as session:
        session['auth_state'] = {'email': 'test@example.com'}
    return client


@pytest.fixture
def accessor():
    """Session accessor that starts out loading."""
    return SessionAccessor()


@pytest.fixture
def router():
    """Router that records navigation requests."""
    return RedirectRouter()
