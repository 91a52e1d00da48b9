"""
Authentication helpers - resolves the signed-in restaurant owner
"""
from functools import wraps
from flask import request, jsonify, current_app, g
import logging

logger = logging.getLogger(__name__)

def get_current_owner():
    """
    Verify the Firebase ID token sent as 'Authorization: Bearer <token>'

    Returns:
        Dict with 'uid' and 'email', or None when no valid token was sent
    """
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None

    id_token = header[len('Bearer '):].strip()
    if not id_token:
        return None

    try:
        return current_app.get_firebase_service().verify_id_token(id_token)
    except Exception as e:
        logger.warning(f"Rejected ID token: {str(e)}")
        return None

def login_required(view):
    """Reject the request with 401 unless a restaurant owner is signed in"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        owner = get_current_owner()
        if not owner:
            return jsonify({'error': 'Authentication required'}), 401
        g.owner = owner
        return view(*args, **kwargs)
    return wrapper
