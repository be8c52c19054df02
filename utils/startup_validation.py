"""
Startup Validation Module

1. Configuration validation - report missing or weak settings
2. Database connectivity check
3. Blueprint audit - track which route modules loaded vs degraded
"""

import os
import sys
import logging
from typing import Dict, List, Optional, Tuple, Any
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check."""
    name: str
    passed: bool
    message: str
    severity: str = "error"  # error, warning, info
    remediation: Optional[str] = None


@dataclass
class StartupReport:
    """Startup validation report."""
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    environment: str = "unknown"
    validations: List[ValidationResult] = field(default_factory=list)
    features_loaded: List[str] = field(default_factory=list)
    features_degraded: List[str] = field(default_factory=list)
    ready: bool = False

    def add_validation(self, result: ValidationResult):
        self.validations.append(result)

    def has_critical_failures(self) -> bool:
        return any(v.severity == "error" and not v.passed for v in self.validations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "environment": self.environment,
            "ready": self.ready,
            "validations": [
                {
                    "name": v.name,
                    "passed": v.passed,
                    "message": v.message,
                    "severity": v.severity,
                    "remediation": v.remediation
                }
                for v in self.validations
            ],
            "features": {
                "loaded": self.features_loaded,
                "degraded": self.features_degraded
            },
            "summary": {
                "total_validations": len(self.validations),
                "passed": sum(1 for v in self.validations if v.passed),
                "failed": sum(1 for v in self.validations if not v.passed),
            }
        }


class StartupValidator:
    """
    Validates configuration and storage before the app serves requests.

    In production a critical failure stops the process; in development it is
    logged and the app keeps going.
    """

    REQUIRED_ENV_VARS = [
        ("DATABASE_URL", "SQLAlchemy connection string for the todos table"),
        ("SESSION_SECRET", "Flask secret key"),
    ]

    def __init__(self, app):
        self.app = app
        self.report = StartupReport(environment=os.getenv("FLASK_ENV", "development"))

    def is_production(self) -> bool:
        return self.report.environment == "production"

    def validate_required_env_vars(self) -> None:
        """Missing variables only fail in production; development has defaults."""
        for var_name, description in self.REQUIRED_ENV_VARS:
            if os.getenv(var_name):
                self.report.add_validation(ValidationResult(
                    name=f"env:{var_name}",
                    passed=True,
                    message=f"{var_name} is configured",
                ))
            else:
                self.report.add_validation(ValidationResult(
                    name=f"env:{var_name}",
                    passed=not self.is_production(),
                    message=f"{var_name} not set - using development default",
                    severity="error" if self.is_production() else "warning",
                    remediation=f"Set {var_name} environment variable. {description}"
                ))

    def validate_database_connection(self) -> None:
        """Test database connectivity through the app's engine."""
        from models import db
        from sqlalchemy import text

        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            self.report.add_validation(ValidationResult(
                name="db:connection",
                passed=True,
                message=f"Database connection successful ({db.engine.dialect.name})",
            ))
        except Exception as e:
            self.report.add_validation(ValidationResult(
                name="db:connection",
                passed=False,
                message=f"Database connection failed: {str(e)[:100]}",
                severity="error",
                remediation="Check DATABASE_URL and ensure the database is reachable"
            ))

    def run_all_validations(self) -> StartupReport:
        """Run all validation checks and return the report."""
        logger.info(f"Startup validation (environment: {self.report.environment})")

        self.validate_required_env_vars()
        with self.app.app_context():
            self.validate_database_connection()

        self.report.ready = not self.report.has_critical_failures()

        summary = self.report.to_dict()["summary"]
        logger.info(f"Validations: {summary['passed']}/{summary['total_validations']} passed")
        for v in self.report.validations:
            if not v.passed:
                logger.error(f"  - {v.name}: {v.message}")
            elif v.severity == "warning":
                logger.warning(f"  - {v.name}: {v.message}")

        return self.report

    def fail_if_not_ready(self) -> None:
        """Exit in production when a critical check failed."""
        if not self.report.ready:
            if self.is_production():
                logger.critical("Application cannot start - critical configuration missing")
                sys.exit(1)
            logger.warning("Development mode: continuing despite validation failures")


class BlueprintRegistry:
    """
    Track blueprint loading. Non-critical blueprints that fail to import are
    logged and skipped so the API keeps serving.
    """

    def __init__(self, app=None):
        self.app = app
        self.loaded: List[str] = []
        self.failed: List[Tuple[str, str]] = []

    def register(self, module_path: str, blueprint_name: str, critical: bool = False) -> bool:
        """
        Attempt to register a blueprint.

        Args:
            module_path: Python module path (e.g., 'routes.api_todos')
            blueprint_name: Name of blueprint variable in module
            critical: If True, re-raise on failure

        Returns:
            True if registered successfully, False otherwise
        """
        try:
            module = __import__(module_path, fromlist=[blueprint_name])
            blueprint = getattr(module, blueprint_name)
            self.app.register_blueprint(blueprint)
            self.loaded.append(f"{module_path}.{blueprint_name}")
            logger.info(f"✅ Loaded: {module_path}.{blueprint_name}")
            return True

        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)[:100]}"
            self.failed.append((f"{module_path}.{blueprint_name}", error_msg))

            if critical:
                logger.error(f"❌ CRITICAL - Failed to load {module_path}: {error_msg}")
                raise
            logger.warning(f"⚠️ Degraded - Failed to load {module_path}: {error_msg}")
            return False

    def get_status(self) -> Dict[str, Any]:
        """Get registration status summary."""
        return {
            "loaded_count": len(self.loaded),
            "failed_count": len(self.failed),
            "loaded": self.loaded,
            "failed": [{"name": n, "error": e} for n, e in self.failed],
            "health": "healthy" if not self.failed else "degraded"
        }


def run_startup_validation(app, registry: Optional[BlueprintRegistry] = None) -> StartupReport:
    """
    Validate configuration and storage for `app`.

    Call this at application startup before serving requests.
    """
    validator = StartupValidator(app)
    if registry is not None:
        validator.report.features_loaded.extend(registry.loaded)
        validator.report.features_degraded.extend(f"{n}: {e}" for n, e in registry.failed)
    report = validator.run_all_validations()
    validator.fail_if_not_ready()
    return report
