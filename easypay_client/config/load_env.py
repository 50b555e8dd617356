from dotenv import load_dotenv
import os
from typing import Optional

# Project root, one level above the package
DEFAULT_ENV_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env")


def load_env(env_path: Optional[str] = None) -> bool:
    """
    Load a .env file into os.environ without overriding variables already set.
    Returns True if a file was found and loaded.
    """
    return load_dotenv(env_path or DEFAULT_ENV_PATH, override=False)
