# logger_setup.py

import logging
import logging.handlers
import os
from typing import Dict, Any

import constants

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Rotates when a run log reaches 1MB, keeps 3 backups.
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def setup_logging(config: Dict[str, Any], log_root: str = 'runs') -> logging.Logger:
    """
    Configures the "hdr_fireworks" logger for one run.

    Output goes to the console and to runs/<run_id>/simulation.log. Only the
    application's own logger is configured; it does not propagate, so Numba's
    and pygame's logging stays out of the run log.

    Data Contract:
    - Inputs:
        - config (dict): The loaded config.json. Reads 'run_id' and the optional
          'logging' section ('level', 'format').
        - log_root (str): Directory under which run directories are created.
    - Outputs: The configured logger.
    - Side Effects: Creates the run directory. Replaces (and closes) any
      handlers a previous call installed.
    """
    run_id = config.get('run_id', 'default')
    log_config = config.get('logging', {})
    level = str(log_config.get('level', 'INFO')).upper()

    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'simulation.log')

    formatter = logging.Formatter(log_config.get('format', DEFAULT_FORMAT))
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
    )
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Level: {level}. Log file: {log_file}")
    return logger
