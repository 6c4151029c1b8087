"""Export config loader and strict validation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional
import yaml

from tokenexport.exceptions import ConfigValidationError, ValidationError
from tokenexport.formats.registry import FormatRegistry
from tokenexport.publish.github import parse_repo_url


@dataclass
class GitHubTarget:
    """Where `run --push` sends the generated files."""
    repo: str
    branch: str = "main"
    path: str = ""
    commit_message: Optional[str] = None


@dataclass
class ExportConfig:
    """Validated export config."""
    version: str
    formats: List[str]
    name: str = ""
    snapshot: Optional[Path] = None
    figma_file: Optional[str] = None
    collections: List[str] = field(default_factory=list)
    output_dir: Path = Path("tokens")
    github: Optional[GitHubTarget] = None


class ExportConfigLoader:
    """Loads and validates export config YAML."""

    SUPPORTED_VERSIONS = {"1"}
    KNOWN_FIELDS = {'version', 'name', 'source', 'collections', 'output_dir', 'formats', 'github'}
    SOURCE_FIELDS = {'snapshot', 'figma_file'}
    GITHUB_FIELDS = {'repo', 'branch', 'path', 'commit_message'}

    def __init__(self, workspace: Path, registry: Optional[FormatRegistry] = None):
        """Initialize loader with workspace root."""
        self.workspace = workspace.resolve()
        self.registry = registry or FormatRegistry()
        self.errors: List[ValidationError] = []

    def load(self, config_path: Path) -> ExportConfig:
        """Load and validate export config YAML."""
        self.errors = []
        try:
            with open(config_path, 'r') as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load config: {e}")
            self._raise_validation_errors()

        return self.validate(raw)

    def validate(self, raw: Any) -> ExportConfig:
        """Validate an already parsed config document."""
        self.errors = []

        if raw is None or not isinstance(raw, dict):
            self._add_error("Config must be a YAML object/dictionary")
            self._raise_validation_errors()

        version = raw.get('version')
        if not version:
            self._add_error("'version' field is required")
            version = ""
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}")
            version = ""
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}")

        if version:
            for key in raw.keys():
                if key not in self.KNOWN_FIELDS:
                    self._add_error(f"Unknown field '{key}' at version '{version}'")

        name = raw.get('name', "")
        if not isinstance(name, str):
            self._add_error("'name' must be a string")
            name = ""

        snapshot, figma_file = self._validate_source(raw.get('source'))
        collections = self._validate_collections(raw.get('collections', []))
        formats = self._validate_formats(raw.get('formats'))

        output_dir = raw.get('output_dir', 'tokens')
        if not isinstance(output_dir, str) or not output_dir:
            self._add_error("'output_dir' must be a non-empty string")
            output_dir = 'tokens'
        else:
            self._validate_path_safety(output_dir, 'output_dir')

        github = self._validate_github(raw.get('github')) if 'github' in raw else None

        if self.errors:
            self._raise_validation_errors()

        return ExportConfig(
            version=version,
            name=name,
            formats=formats,
            snapshot=self.workspace / snapshot if snapshot else None,
            figma_file=figma_file,
            collections=collections,
            output_dir=self.workspace / output_dir,
            github=github,
        )

    def _validate_source(self, source: Any):
        if not isinstance(source, dict):
            self._add_error("'source' is required and must be a dictionary")
            return None, None

        for key in source.keys():
            if key not in self.SOURCE_FIELDS:
                self._add_error(f"Unknown source field '{key}'")

        present = [key for key in ('snapshot', 'figma_file') if source.get(key)]
        if len(present) != 1:
            self._add_error("'source' requires exactly one of 'snapshot' or 'figma_file'")
            return None, None

        value = source[present[0]]
        if not isinstance(value, str):
            self._add_error(f"'source.{present[0]}' must be a string")
            return None, None

        if present[0] == 'snapshot':
            self._validate_path_safety(value, 'source.snapshot')
            return value, None
        return None, value

    def _validate_collections(self, collections: Any) -> List[str]:
        if not isinstance(collections, list) or not all(isinstance(c, str) for c in collections):
            self._add_error("'collections' must be a list of collection names")
            return []
        return collections

    def _validate_formats(self, formats: Any) -> List[str]:
        if not formats:
            self._add_error("'formats' field is required and must not be empty")
            return []
        if not isinstance(formats, list):
            self._add_error("'formats' must be a list")
            return []

        known = self.registry.list_formats()
        valid = []
        for i, format_id in enumerate(formats):
            if not isinstance(format_id, str):
                self._add_error(f"'formats[{i}]' must be a string")
            elif format_id not in known:
                self._add_error(f"Unknown format '{format_id}'. Available: {', '.join(known)}")
            elif format_id in valid:
                self._add_error(f"Duplicate format '{format_id}'")
            else:
                valid.append(format_id)
        return valid

    def _validate_github(self, github: Any) -> Optional[GitHubTarget]:
        if not isinstance(github, dict):
            self._add_error("'github' must be a dictionary")
            return None

        for key in github.keys():
            if key not in self.GITHUB_FIELDS:
                self._add_error(f"Unknown github field '{key}'")

        repo = github.get('repo')
        if not isinstance(repo, str) or not repo:
            self._add_error("'github.repo' is required")
            return None
        try:
            parse_repo_url(repo)
        except ValueError as e:
            self._add_error(f"'github.repo': {e}")

        branch = github.get('branch', 'main')
        path = github.get('path', '')
        if not isinstance(branch, str) or not branch:
            self._add_error("'github.branch' must be a non-empty string")
            branch = 'main'
        if not isinstance(path, str):
            self._add_error("'github.path' must be a string")
            path = ''

        commit_message = github.get('commit_message')
        if commit_message is not None and (not isinstance(commit_message, str) or not commit_message.strip()):
            self._add_error("'github.commit_message' must be a non-empty string")
            commit_message = None

        return GitHubTarget(repo=repo, branch=branch, path=path, commit_message=commit_message)

    def _validate_path_safety(self, path: str, context: str):
        """Reject absolute paths and parent traversal."""
        if Path(path).is_absolute():
            self._add_error(f"{context}: absolute paths not allowed")

        if '..' in Path(path).parts:
            self._add_error(f"{context}: parent directory traversal ('..') not allowed")

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise ConfigValidationError with accumulated errors."""
        raise ConfigValidationError(self.errors)
