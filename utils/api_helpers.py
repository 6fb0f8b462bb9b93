"""
Helpers shared by the JSON blueprints
"""

from flask import current_app, jsonify, request

from services.record_store import RecordStore
from services.reporting_service import ReportingService


def get_store():
    """The records store of the running application"""
    return RecordStore.from_app(current_app)


def get_reporting():
    return ReportingService(get_store())


def error_response(message, status=400):
    return jsonify({'success': False, 'message': message}), status


def get_json_payload():
    """Request body as a dict; empty dict when absent or not an object"""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}
