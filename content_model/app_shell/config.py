import logging
import os
import sys
from pathlib import Path

from content_model.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when required environment variables are missing.
    """
    ops = rules.ops

    if ops.data_dir_required and not os.access(base_dir, os.W_OK):
        logger.critical("Data directory %s is not writable", base_dir)
        sys.exit(1)

    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    logger.info("Configuration validated.")
