"""
Configuration for the system monitor, read from the environment.

A .env file in the working directory is loaded on import; the CLI can point
at another one with --env-file, after which read_config() must be called again.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name, default):
    """Positive float from the environment; anything else gives the default"""
    value = os.getenv(name)
    if not value or not value.strip():
        return default
    try:
        number = float(value)
    except ValueError:
        return default
    # rejects nan as well as zero and negatives
    if not number > 0:
        return default
    return number


def _env_int(name, default):
    value = os.getenv(name)
    if not value or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def read_config():
    """Read configuration from environment into module-level variables.

    Call this after load_dotenv() so a CLI-provided env file takes effect.
    """
    global INTERVAL, FULL_INTERVAL, OUTPUT_DIR, PROCESS_LIMIT, COMMAND_TIMEOUT
    global LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT

    # --------------------------
    # - SYSMON_INTERVAL: seconds between CPU / memory samples
    # - SYSMON_FULL_INTERVAL: seconds between samples in full monitoring
    # - SYSMON_OUTPUT_DIR: where exported reports are written
    # - SYSMON_PROCESS_LIMIT: how many process rows to keep per listing
    # - SYSMON_COMMAND_TIMEOUT: timeout for df / ps / wmic / tasklist
    # --------------------------
    INTERVAL = _env_float("SYSMON_INTERVAL", 1.0)
    FULL_INTERVAL = _env_float("SYSMON_FULL_INTERVAL", 2.0)
    OUTPUT_DIR = os.getenv("SYSMON_OUTPUT_DIR") or "."
    PROCESS_LIMIT = _env_int("SYSMON_PROCESS_LIMIT", 20)
    COMMAND_TIMEOUT = _env_int("SYSMON_COMMAND_TIMEOUT", 30)

    # Logging
    LOG_FILE = os.path.expanduser(os.getenv("LOG_FILE") or "~/sysmon.log")
    LOG_MAX_BYTES = _env_int("LOG_MAX_BYTES", 5 * 1024 * 1024)
    LOG_BACKUP_COUNT = _env_int("LOG_BACKUP_COUNT", 3)


def load_env_file(env_file):
    """Load an explicit .env file, overriding the environment, and re-read."""
    load_dotenv(dotenv_path=env_file, override=True)
    read_config()


read_config()
