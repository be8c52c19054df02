# routes/pages.py
from flask import Blueprint, render_template

from routes.api_todos import api_todos_bp

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def index():
    """Single-page todo client. All data is loaded through the RPC blueprint."""
    return render_template("index.html", rpc_prefix=api_todos_bp.url_prefix)
