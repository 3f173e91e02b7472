"""
Logging configuration for orbitkit.

The library itself only creates module loggers and never configures logging
on import. Applications and scripts call :func:`setup_logging` once to route
those records to the console and to rotating log files:

    ```python
    from orbitkit.logging_config import setup_logging
    setup_logging()
    ```
"""

import logging
import logging.config
from pathlib import Path


def setup_logging(default_level=logging.INFO, log_dir="logs"):
    """
    Setup logging configuration for orbitkit.

    Parameters
    ----------
    default_level : int, optional
        Level of the root logger. Default is logging.INFO.
    log_dir : str or Path, optional
        Directory for the log files, created if missing. Default is "logs".

    Returns
    -------
    dict
        The configuration passed to ``logging.config.dictConfig``.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': 'INFO',
                'formatter': 'standard',
                'stream': 'ext://sys.stdout',
            },
            'file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': 'DEBUG',
                'formatter': 'detailed',
                'filename': str(log_path / 'orbitkit.log'),
                'maxBytes': 10485760,  # 10 MB
                'backupCount': 5,
                'encoding': 'utf8'
            },
            'error_file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': 'ERROR',
                'formatter': 'detailed',
                'filename': str(log_path / 'error.log'),
                'maxBytes': 10485760,
                'backupCount': 5,
                'encoding': 'utf8'
            },
        },
        'loggers': {
            '': {
                'handlers': ['console', 'file', 'error_file'],
                'level': default_level,
                'propagate': True
            },
            'orbitkit.algorithms': {
                'handlers': ['console', 'file'],
                'level': 'DEBUG',
                'propagate': False
            },
            'orbitkit.models': {
                'handlers': ['console', 'file'],
                'level': 'DEBUG',
                'propagate': False
            },
            'orbitkit.utils': {
                'handlers': ['console', 'file'],
                'level': 'INFO',
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug("Logging configuration applied")
    return config
