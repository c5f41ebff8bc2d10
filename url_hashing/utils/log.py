"""
Logger Utilities
"""
import os
import logging

from url_hashing.utils.config import logs_folder as configured_logs_folder

LOG_FILENAME: str = "progress.log"


def init_logger(logs_folder: str = "") -> logging.Logger:
    """Return a logger with custom format settings.

    Records go to stderr and to `LOG_FILENAME` in `logs_folder`,
    which is created beforehand, parent folders included, if it does not exist yet.

    Args:
        logs_folder (str, optional): Logs folder location.
        Defaults to "", which means the `LOGS_FOLDER` configuration value.

    Returns:
        logging.Logger: logger that appends to `LOG_FILENAME` in `logs_folder`
    """
    logs_folder = logs_folder or configured_logs_folder()
    if not os.path.exists(logs_folder):
        os.makedirs(logs_folder)

    # Add information like timestamp, filename, and line number to logging messages
    logging.basicConfig(
        handlers=[
            logging.FileHandler(os.path.join(logs_folder, LOG_FILENAME), mode="a"),
            logging.StreamHandler(),
        ],
        format="""
        %(asctime)s %(levelname)-4s [%(filename)s:%(lineno)s - %(funcName)2s() ] %(message)s
        """,
        level=logging.INFO,
        datefmt="%d-%m-%Y %H:%M:%S",
    )

    logger = logging.getLogger()
    logger.setLevel("INFO")

    return logger
