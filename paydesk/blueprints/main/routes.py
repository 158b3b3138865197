from datetime import datetime, timezone
from flask import current_app, jsonify
from ...services.storage_service import get_storage
from . import main_bp


@main_bp.route("/")
def index():
    return jsonify({
        "service": "paydesk",
        "version": current_app.config.get("APP_VERSION"),
        "endpoints": ["/api/payments", "/api/payments/ledger", "/api/payments/stats", "/api/developers"],
    })


# ---- Tiny JSON health route (store ping + version) ----
@main_bp.route("/api/health")
def health():
    ok_store = True
    try:
        get_storage().get_developer_ledgers()
    except Exception as e:
        current_app.logger.error(f"Store health failed: {e}")
        ok_store = False

    payload = {
        "status": "ok" if ok_store else "fail",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": current_app.config.get("ENV", "development"),
        "version": current_app.config.get("APP_VERSION"),
        "checks": {"storage": "ok" if ok_store else "fail"},
    }
    return jsonify(payload), 200 if ok_store else 503
