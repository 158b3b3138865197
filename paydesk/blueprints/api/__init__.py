from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import route modules to register their endpoints
from . import payments     # noqa: E402,F401
from . import ledger       # noqa: E402,F401
from . import developers   # noqa: E402,F401
