"""JSON-file user store for restricted-access mode.

Each user lives in ``<users_dir>/<name>.json``. The store is read once at
startup (``load_all``) and written when a user changes their password
(``save``). Writes go to a temporary file in the same directory which is
then renamed over the original, so a failed write never leaves a partial
configuration behind.
"""

from __future__ import annotations

import os
import json
import asyncio
import logging
import tempfile
import contextlib
from pathlib import Path

from ..errors import PersistenceError
from ..state.user import UserConfig
from ..config.access import USERS_DIR

logger = logging.getLogger(__name__)


class UserStore:
    """Load and persist user configurations.

    Attributes:
        users_dir: Directory holding one JSON file per user.
    """

    def __init__(self, users_dir: Path | str = USERS_DIR):
        self.users_dir = Path(users_dir)

    def path_for(self, config: UserConfig) -> Path:
        """Return the file a configuration lives in (its source file once loaded)."""
        return config.source or self.users_dir / f"{config.user}.json"

    def load_all(self) -> list[UserConfig]:
        """Read every user file, sorted by file name.

        Unreadable files are logged and skipped so a single broken file
        does not keep the other users from signing in.
        """
        if not self.users_dir.is_dir():
            logger.warning("users directory %s does not exist; no users loaded", self.users_dir)
            return []

        configs: list[UserConfig] = []
        for path in sorted(self.users_dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.error("skipping unreadable user file %s: %s", path.name, exc)
                continue
            if not isinstance(data, dict):
                logger.error("skipping user file %s: expected a JSON object", path.name)
                continue
            configs.append(UserConfig.from_dict(path.stem, data, source=path))
        logger.info("loaded %s user(s) from %s", len(configs), self.users_dir)
        return configs

    def _write(self, config: UserConfig) -> None:
        target = self.path_for(config)
        payload = json.dumps(config.to_dict(), indent=2, sort_keys=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{config.user}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    async def save(self, config: UserConfig) -> None:
        """Persist a user configuration off the event loop.

        Raises:
            PersistenceError: If the file could not be written.
        """
        try:
            await asyncio.to_thread(self._write, config)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("failed to write user file for %s: %s", config.user, exc)
            raise PersistenceError(config.user) from exc


__all__ = ["UserStore"]
