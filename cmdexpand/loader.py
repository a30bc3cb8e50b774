"""Job file loader and validation."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field
import yaml

from cmdexpand.exceptions import ValidationError, JobValidationError


@dataclass
class Job:
    """A validated job: one command plus its environment declarations."""
    command: Union[str, List[str]]
    env: List[str] = field(default_factory=list)
    advanced_parser: bool = True
    inherit_env: bool = True
    timeout_sec: Optional[int] = None
    cwd: Optional[Path] = None
    path: Optional[Path] = None


class JobLoader:
    """Loads and validates job YAML files, collecting every error."""

    SUPPORTED_VERSIONS = {"1"}
    ALLOWED_KEYS = {'version', 'command', 'env', 'advanced_parser', 'inherit_env', 'timeout_sec', 'cwd'}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, job_path: Path) -> Job:
        """Load and validate a job YAML file."""
        self.errors = []
        try:
            with open(job_path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load job file: {e}")
            self._raise_validation_errors()

        job = self.load_dict(data, base_dir=Path(job_path).resolve().parent)
        job.path = Path(job_path)
        return job

    def load_dict(self, data: Any, base_dir: Optional[Path] = None) -> Job:
        """Validate an already parsed job document."""
        self.errors = []
        if data is None or not isinstance(data, dict):
            self._add_error("Job file must be a YAML object/dictionary")
            self._raise_validation_errors()

        # YAML allows non-string keys such as `1: x`
        for key in sorted(set(data) - self.ALLOWED_KEYS, key=str):
            if not isinstance(key, str):
                self._add_error(f"Field names must be strings, got {key!r}", path=str(key))
            else:
                self._add_error(f"Unknown field '{key}'", path=key)

        version = data.get('version')
        if version is None:
            self._add_error("'version' field is required", path='version')
        elif str(version) not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}", path='version')

        command = self._validate_command(data.get('command'))
        env = self._validate_env(data.get('env'))

        advanced_parser = self._validate_bool(data, 'advanced_parser', True)
        inherit_env = self._validate_bool(data, 'inherit_env', True)

        timeout_sec = data.get('timeout_sec')
        if timeout_sec is not None:
            if isinstance(timeout_sec, bool) or not isinstance(timeout_sec, int) or timeout_sec <= 0:
                self._add_error("'timeout_sec' must be a positive integer", path='timeout_sec')
                timeout_sec = None

        cwd = None
        if data.get('cwd') is not None:
            if not isinstance(data['cwd'], str):
                self._add_error("'cwd' must be a string", path='cwd')
            else:
                cwd = Path(data['cwd'])
                if base_dir is not None and not cwd.is_absolute():
                    cwd = base_dir / cwd

        self._raise_validation_errors()

        return Job(
            command=command,
            env=env,
            advanced_parser=advanced_parser,
            inherit_env=inherit_env,
            timeout_sec=timeout_sec,
            cwd=cwd,
        )

    def _validate_command(self, command: Any) -> Union[str, List[str]]:
        if command is None:
            self._add_error("'command' field is required", path='command')
            return []
        if isinstance(command, str):
            if not command.strip():
                self._add_error("'command' must not be empty", path='command')
            return command
        if isinstance(command, list):
            if not command:
                self._add_error("'command' must not be empty", path='command')
            for i, token in enumerate(command):
                if not isinstance(token, str):
                    self._add_error(f"Command tokens must be strings, got {type(token).__name__}", path=f"command[{i}]")
            return [token for token in command if isinstance(token, str)]
        self._add_error(f"'command' must be a string or list, got {type(command).__name__}", path='command')
        return []

    def _validate_env(self, env: Any) -> List[str]:
        """Normalize env to KEY=VALUE declarations."""
        if env is None:
            return []
        if isinstance(env, dict):
            declarations = []
            for key, value in env.items():
                if not isinstance(key, str) or not key:
                    self._add_error(f"Environment keys must be non-empty strings, got {key!r}", path='env')
                    continue
                declarations.append(f"{key}={_stringify(value)}")
            return declarations
        if isinstance(env, list):
            declarations = []
            for i, item in enumerate(env):
                if not isinstance(item, str):
                    self._add_error(f"Environment declarations must be KEY=VALUE strings, got {type(item).__name__}", path=f"env[{i}]")
                    continue
                # Malformed declarations are dropped later by the preparer
                declarations.append(item)
            return declarations
        self._add_error(f"'env' must be a list or mapping, got {type(env).__name__}", path='env')
        return []

    def _validate_bool(self, data: Dict[str, Any], key: str, default: bool) -> bool:
        value = data.get(key, default)
        if not isinstance(value, bool):
            self._add_error(f"'{key}' must be a boolean", path=key)
            return default
        return value

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        if self.errors:
            raise JobValidationError(self.errors)


def _stringify(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
