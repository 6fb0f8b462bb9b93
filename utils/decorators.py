from functools import wraps

from flask import jsonify, request

from services.access_service import AccessService

ROLE_HEADER = 'X-User-Role'


def view_required(view_name):
    """Reject the request with 403 unless the caller's role maps to view_name"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            role = (request.headers.get(ROLE_HEADER) or '').strip().lower()

            if not role:
                return jsonify({'success': False, 'message': 'Role header is required'}), 401

            if not AccessService.can_access(role, view_name):
                return jsonify({
                    'success': False,
                    'message': f"Access denied: role '{role}' cannot open '{view_name}'"
                }), 403

            return func(*args, **kwargs)
        return wrapper
    return decorator
