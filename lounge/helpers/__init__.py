"""Small shared helpers."""

from .ids import next_id
from .env import env_flag, env_path

__all__ = ["env_flag", "env_path", "next_id"]
