"""Builds and runs the external player command line."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import List, Optional

from ..errors import PlayerProcessError
from ..utils.proxy import for_player_process

DEFAULT_PLAYER = "streamlink"
LOG_LEVELS = ("none", "error", "warning", "info", "debug", "trace")


class PlayerCommand:
    """Accumulates player options, then runs the player once."""

    def __init__(self, url: str, quality: str = "best", executable: str = DEFAULT_PLAYER) -> None:
        self.url = url
        self.quality = quality
        self.executable = executable
        self._options: List[str] = []

    def with_proxy(self, proxy: Optional[str]) -> "PlayerCommand":
        if proxy:
            self._options.extend(["--http-proxy", for_player_process(proxy)])
        return self

    def with_header(self, name: str, value: str) -> "PlayerCommand":
        self._options.extend(["--http-header", f"{name}={value}"])
        return self

    def with_loglevel(self, level: Optional[str]) -> "PlayerCommand":
        if level:
            if level not in LOG_LEVELS:
                raise ValueError(f"unknown player log level {level!r}")
            self._options.extend(["--loglevel", level])
        return self

    def build(self) -> List[str]:
        return [self.executable, *self._options, self.url, self.quality]

    def run(self) -> None:
        binary = shutil.which(self.executable)
        if not binary:
            raise PlayerProcessError(f"{self.executable} not found on PATH")

        cmd = self.build()
        cmd[0] = binary
        logging.info("Starting player: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True)
        except subprocess.CalledProcessError as exc:
            if exc.returncode < 0:
                raise PlayerProcessError(
                    f"{self.executable} was terminated by signal {-exc.returncode}", exc.returncode
                ) from exc
            raise PlayerProcessError(f"{self.executable} exit code: {exc.returncode}", exc.returncode) from exc
        except OSError as exc:
            raise PlayerProcessError(f"could not start {self.executable}: {exc}") from exc
