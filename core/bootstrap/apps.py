"""
SariWais Bootstrap — App Configuration
=========================================
Seeds the process-wide StoreDirectory when Django finishes loading.

Rules:
- Runs once via ready()
- Skips during management commands that don't serve requests
- Skips under pytest; tests build their own directories
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("sariwais.bootstrap")

# Commands that should NOT seed demo data
SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "showmigrations",
    "flush",
    "shell",
    "dbshell",
    "test",
    "collectstatic",
    "check",
}


def _is_management_command_skip():
    """Check if current command should skip seeding."""
    if len(sys.argv) >= 2:
        return sys.argv[1] in SKIP_COMMANDS
    return False


def _is_pytest_context() -> bool:
    return (
        "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


class BootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "SariWais Bootstrap"

    def ready(self):
        if _is_management_command_skip() or _is_pytest_context():
            logger.info("Demo seed skipped for management/test context.")
            return

        from adapters.django_api.wiring import get_directory
        from core.bootstrap.seed import preload_accounts
        preload_accounts(get_directory())
