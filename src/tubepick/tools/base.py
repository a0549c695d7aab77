"""
Base class for external command-line tools.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass

from tubepick.exceptions import ToolNotFoundError
from tubepick.utils.system import find_tool

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one external command run.

    ``error`` is set when the command could not run to completion at all
    (timeout, OS error); a command that ran and failed only has a non-zero
    ``returncode``.
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> CommandResult:
        return cls(success=False, error=error, returncode=-1)


class ExternalTool(ABC):
    """An executable located on PATH (or via an override env var) and run as a subprocess."""

    timeout: float = 30
    env_var: str | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Executable name, also used in log and error messages."""

    def get_path(self) -> str:
        return find_tool(self.name, env_var=self.env_var)

    def is_available(self) -> bool:
        try:
            result = subprocess.run(
                [self.get_path(), "--version"],
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError):
            return False
        return result.returncode == 0

    def run(self, args: list[str]) -> CommandResult:
        """Run the tool with ``args`` and capture its output as text.

        Raises:
            ToolNotFoundError: The executable does not exist
        """
        cmd = [self.get_path(), *args]
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise ToolNotFoundError(self.name) from e
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.name} timed out after {self.timeout}s")
            return CommandResult.failed(f"Timeout after {self.timeout}s")
        except OSError as e:
            return CommandResult.failed(str(e))

        return CommandResult(
            success=proc.returncode == 0,
            stdout=proc.stdout,
            stderr=proc.stderr,
            returncode=proc.returncode,
        )
