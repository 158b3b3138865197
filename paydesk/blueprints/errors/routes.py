from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException
from ...errors import PaydeskError, InternalError
from . import errors_bp


# Domain errors (validation / not found / internal)
@errors_bp.app_errorhandler(PaydeskError)
def err_domain(e: PaydeskError):
    if isinstance(e, InternalError):
        current_app.logger.error(f"Internal error on {request.method} {request.path}: {e.message}")
    return jsonify(e.to_dict()), e.status_code

# 404 – Not Found
@errors_bp.app_errorhandler(404)
def err_404(e):
    return jsonify({"success": False, "error": "Not found", "path": request.path}), 404

# 405 – Method Not Allowed
@errors_bp.app_errorhandler(405)
def err_405(e):
    return jsonify({"success": False, "error": "Method not allowed"}), 405

# Fallback for uncaught HTTPException
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    return jsonify({"success": False, "error": e.description or e.name}), e.code

# Last-resort: any other Exception
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    current_app.logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
    # Don’t leak internals, just a generic 500
    return jsonify({"success": False, "error": "Internal server error"}), 500
