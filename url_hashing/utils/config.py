"""
Configuration

Settings are read from a `.env` file in the current working directory,
falling back to `DEFAULTS` for any key that is missing.
"""
from dotenv import dotenv_values

DEFAULTS: dict[str, str] = {
    "LOGS_FOLDER": "logs",
    "URL_BATCH_SIZE": "40000",
    "SHOW_PROGRESS": "true",
}


def load_config(env_filepath: str = ".env") -> dict[str, str]:
    """Merge `.env` values at `env_filepath` over `DEFAULTS`.

    Keys declared without a value (e.g. a bare `LOGS_FOLDER` line) are ignored.

    Args:
        env_filepath (str, optional): Path to `.env` file. Defaults to ".env".

    Returns:
        dict[str, str]: Configuration values
    """
    env_values = {key: value for key, value in dotenv_values(env_filepath).items() if value is not None}
    return {**DEFAULTS, **env_values}


CONFIG = load_config()


def logs_folder() -> str:
    """Logs folder location"""
    return CONFIG["LOGS_FOLDER"] or DEFAULTS["LOGS_FOLDER"]


def url_batch_size() -> int:
    """Number of URLs processed per batch; invalid values fall back to the default."""
    try:
        batch_size = int(CONFIG["URL_BATCH_SIZE"])
    except ValueError:
        return int(DEFAULTS["URL_BATCH_SIZE"])
    return batch_size if batch_size > 0 else int(DEFAULTS["URL_BATCH_SIZE"])


def show_progress() -> bool:
    """Whether tqdm progressbars are displayed"""
    return CONFIG["SHOW_PROGRESS"].strip().lower() not in ("false", "0", "no", "off")
