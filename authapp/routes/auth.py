"""
Session routes.
Exposes the session accessor to browser code.
"""
from flask import Blueprint, jsonify, session, current_app

from authapp.main import limiter
from authapp.session import FlaskSessionAccessor

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/session', methods=['GET'])
@limiter.limit("60 per minute")
def session_status():
    """Current session status and user."""
    accessor = FlaskSessionAccessor(session)
    accessor.refresh()
    current_app.logger.debug(f"Session status requested: {accessor.status.value}")
    return jsonify(accessor.session.to_dict()), 200
