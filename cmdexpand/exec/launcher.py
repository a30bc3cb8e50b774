"""
Command launcher for prepared commands.
Expands a command against its environment and runs it without a shell.
"""

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
from dataclasses import dataclass

from ..exceptions import ParseFailure
from .preparer import CommandPreparer, parse_env_declarations


logger = logging.getLogger(__name__)


@dataclass
class LaunchResult:
    """Result of launching a prepared command."""
    argv: List[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict for reporting."""
        result = {
            "argv": self.argv,
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "duration_ms": self.duration_ms,
        }
        if self.error:
            result["error"] = self.error
        return result


class CommandLauncher:
    """
    Prepares and executes commands.

    String commands are expanded strictly: any ParseFailure aborts the launch
    with exit code 2 and nothing is executed. List commands go through the
    lenient CommandPreparer.
    """

    def __init__(
        self,
        workspace: Optional[Path] = None,
        inherit_env: bool = True,
        preparer: Optional[CommandPreparer] = None
    ):
        """
        Initialize command launcher.

        Args:
            workspace: Default working directory (default: current directory)
            inherit_env: Seed the environment from os.environ
            preparer: Command preparer to use
        """
        self.workspace = workspace or Path.cwd()
        self.inherit_env = inherit_env
        self.preparer = preparer or CommandPreparer()

    def build_env(self, env_declarations: Optional[Iterable[str]] = None) -> Dict[str, str]:
        """Compose the expansion and child environment; declarations win."""
        env = os.environ.copy() if self.inherit_env else {}
        env.update(parse_env_declarations(env_declarations))
        return env

    def prepare(
        self,
        command: Union[str, List[str]],
        env: Dict[str, str],
        use_advanced_parser: bool = True
    ) -> List[str]:
        """
        Turn a command into an argv list.

        Raises:
            ParseFailure: If a string command fails to expand
            ValueError: If command is neither a string nor a list
        """
        if isinstance(command, str):
            if use_advanced_parser:
                return self.preparer.expander.expand(command, env)
            return self.preparer.prepare_with_env(command.split(), env, use_advanced_parser=False)
        elif isinstance(command, list):
            return self.preparer.prepare_with_env(command, env, use_advanced_parser)
        else:
            raise ValueError(f"Invalid command type: {type(command)}. Expected str or list.")

    def launch(
        self,
        command: Union[str, List[str]],
        env_declarations: Optional[Iterable[str]] = None,
        cwd: Optional[Path] = None,
        timeout_sec: Optional[int] = None,
        use_advanced_parser: bool = True,
    ) -> LaunchResult:
        """
        Prepare and execute a command.

        Args:
            command: Command string or token list
            env_declarations: KEY=VALUE strings overlaid on the base environment
            cwd: Working directory (default: workspace)
            timeout_sec: Timeout in seconds
            use_advanced_parser: Use quote-aware expansion

        Returns:
            LaunchResult with decoded output and metadata
        """
        env = self.build_env(env_declarations)

        try:
            argv = self.prepare(command, env, use_advanced_parser)
        except ParseFailure as e:
            logger.error(f"Failed to expand command: {e.message}")
            return LaunchResult(
                argv=[],
                exit_code=e.exit_code,
                error={
                    "type": "parse_error",
                    "message": e.message,
                    "context": {"command": command, "name": e.name}
                }
            )

        if not argv:
            return LaunchResult(
                argv=[],
                exit_code=2,
                error={
                    "type": "empty_command",
                    "message": "Command expanded to an empty argument list",
                    "context": {"command": command}
                }
            )

        working_dir = cwd or self.workspace
        logger.debug(f"Executing command: {argv} in {working_dir}")
        start_time = time.time()

        try:
            # argv mode, never shell=True
            result = subprocess.run(
                argv,
                cwd=str(working_dir),
                env=env,
                capture_output=True,
                timeout=timeout_sec,
            )
            exit_code = result.returncode
            stdout = result.stdout
            stderr = result.stderr
            error = None

        except subprocess.TimeoutExpired as e:
            # Timeout: exit code 124 like coreutils timeout(1)
            exit_code = 124
            stdout = e.stdout or b""
            stderr = e.stderr or b""
            error = {
                "type": "timeout",
                "message": f"Command timed out after {timeout_sec} seconds",
                "context": {"timeout_sec": timeout_sec}
            }

        except OSError as e:
            exit_code = 1
            stdout = b""
            stderr = str(e).encode('utf-8')
            error = {
                "type": "execution_error",
                "message": str(e),
                "context": {"argv": argv}
            }

        duration_ms = int((time.time() - start_time) * 1000)

        return LaunchResult(
            argv=argv,
            exit_code=exit_code,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            duration_ms=duration_ms,
            error=error,
        )


def _decode(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode('utf-8', errors='replace')
