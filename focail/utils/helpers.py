"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Tuple
from flask import request, jsonify


def get_user_identity(request_obj=None) -> Dict[str, str]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)
    }


def error_response(message: str, status: int) -> Tuple:
    """Standard JSON error envelope."""
    return jsonify({
        'success': False,
        'error': message
    }), status
