"""
Health Check Endpoints

1. /health/live - Liveness probe (is the process alive?)
2. /health/ready - Readiness probe (can it reach the todo database?)
3. /health/startup - Startup probe (has create_app finished?)
"""

import time
import logging
from datetime import datetime, timezone
from typing import Dict, Any
from flask import Blueprint, jsonify

logger = logging.getLogger(__name__)

health_production_bp = Blueprint('health_production', __name__, url_prefix='/health')

# Track startup time for uptime calculation
_startup_time = time.time()
_startup_complete = False


def mark_startup_complete():
    """Call this after all initialization is done."""
    global _startup_complete
    _startup_complete = True
    logger.info("✅ Startup marked complete - application ready for traffic")


def get_uptime_seconds() -> float:
    """Get application uptime in seconds."""
    return time.time() - _startup_time


def check_database_health() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns dict with:
    - healthy: bool
    - latency_ms: response time
    - error: error message if unhealthy
    """
    from models import db
    from sqlalchemy import text

    start = time.time()
    dialect = db.engine.dialect.name
    try:
        db.session.execute(text("SELECT 1")).fetchone()
        db.session.rollback()  # Don't leave open transaction

        latency_ms = (time.time() - start) * 1000
        return {
            "healthy": True,
            "latency_ms": round(latency_ms, 2),
            "type": dialect
        }
    except Exception as e:
        db.session.rollback()
        latency_ms = (time.time() - start) * 1000
        logger.warning(f"Database health check failed: {e}")
        return {
            "healthy": False,
            "latency_ms": round(latency_ms, 2),
            "error": str(e)[:100],
            "type": dialect
        }


@health_production_bp.route('/live')
def liveness():
    """Liveness probe. Fast, no external dependencies."""
    return jsonify({
        "status": "alive",
        "uptime_seconds": round(get_uptime_seconds(), 2)
    }), 200


@health_production_bp.route('/ready')
def readiness():
    """
    Readiness probe - can the application serve traffic?

    Returns 503 if the database is unavailable.
    """
    db_health = check_database_health()
    is_ready = db_health.get("healthy", False)

    return jsonify({
        "status": "ready" if is_ready else "not_ready",
        "checks": {"database": db_health},
        "timestamp": datetime.now(timezone.utc).isoformat()
    }), 200 if is_ready else 503


@health_production_bp.route('/startup')
def startup():
    """Startup probe: 200 once create_app has finished, 503 before."""
    return jsonify({
        "status": "started" if _startup_complete else "starting",
        "uptime_seconds": round(get_uptime_seconds(), 2)
    }), 200 if _startup_complete else 503
