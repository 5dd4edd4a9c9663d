"""
Configuration Manager

Handles hierarchical configuration loading, validation, and management
with support for CLI args → environment variables → config files → defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union

import yaml
from pydantic import BaseModel, ValidationError

from activityfilter.core.conditions import ConditionName
from activityfilter.core.config.models import AppConfig, OptionsConfig, RemoveConfig, RunOnConfig
from activityfilter.core.exceptions import ConfigurationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages application configuration with hierarchical loading and validation.

    Configuration sources in order of precedence:
    1. CLI arguments (highest priority)
    2. Environment variables
    3. Configuration files
    4. Default values (lowest priority)
    """

    PROFILES = ("default", "media-free", "discussions-only")

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[AppConfig] = None
        self._config_paths = self._get_default_config_paths()

    def _get_default_config_paths(self) -> List[Path]:
        """Get default configuration file search paths."""
        search_paths = [
            Path.cwd() / "activityfilter.yaml",
            Path.cwd() / "activityfilter.yml",
            Path.cwd() / "activityfilter.json",
            Path.cwd() / ".activityfilter.yaml",
            Path.home() / ".config" / "activityfilter" / "config.yaml",
        ]

        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            search_paths.append(Path(xdg_config) / "activityfilter" / "config.yaml")

        return search_paths

    def load_config(
        self,
        cli_args: Optional[Dict[str, Any]] = None,
        env_prefix: str = "ACTIVITYFILTER_"
    ) -> AppConfig:
        """
        Load and validate configuration from all sources.

        Args:
            cli_args: Dictionary of CLI arguments
            env_prefix: Prefix for environment variables

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_config_file()
        if file_config:
            config_data = self._normalize_keys(file_config)

        env_config = self._load_env_config(env_prefix)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if cli_args:
            cli_config = self._normalize_cli_args(cli_args)
            config_data = self._deep_merge(config_data, cli_config)

        self._config = self.build_config(config_data)
        return self._config

    @staticmethod
    def build_config(config_data: Dict[str, Any]) -> AppConfig:
        """
        Validate raw configuration data.

        Raises:
            ConfigurationError: If the data does not describe a valid configuration
        """
        try:
            return AppConfig.model_validate(config_data)
        except ValidationError as e:
            problems = [
                f"{ConfigManager._alias_path(error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(problems)}",
                error_code=ErrorCode.CONFIG_SCHEMA_VALIDATION,
                cause=e,
            )

    @staticmethod
    def _alias_path(loc: Tuple[Union[str, int], ...]) -> str:
        """Render an error location with the camelCase keys used in config files."""
        model: Optional[Type[BaseModel]] = AppConfig
        parts = []
        for part in loc:
            field = model.model_fields.get(part) if model is not None and isinstance(part, str) else None
            if field is None:
                parts.append(str(part))
                model = None
                continue
            parts.append(field.alias or part)
            annotation = field.annotation
            model = annotation if isinstance(annotation, type) and issubclass(annotation, BaseModel) else None
        return '.'.join(parts)

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        config_file = self.config_file

        if config_file and not config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                context=ErrorContext(file_path=str(config_file)),
            )

        if not config_file:
            for path in self._config_paths:
                if path.exists() and path.is_file():
                    config_file = path
                    break

        if not config_file:
            logger.debug("No configuration file found, using defaults")
            return None

        logger.info(f"Loading configuration from {config_file}")
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() in {'.yaml', '.yml'}:
                    data = yaml.safe_load(f) or {}
                elif config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    # Try YAML first, then JSON
                    content = f.read()
                    try:
                        data = yaml.safe_load(content) or {}
                    except yaml.YAMLError:
                        data = json.loads(content)
        except PermissionError as e:
            raise ConfigurationError(
                f"Permission denied reading config file {config_file}",
                error_code=ErrorCode.CONFIG_PERMISSION_DENIED,
                cause=e,
                context=ErrorContext(file_path=str(config_file)),
            )
        except (IOError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_file}: {e}",
                error_code=ErrorCode.CONFIG_INVALID_FORMAT,
                cause=e,
                context=ErrorContext(file_path=str(config_file)),
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {config_file} must contain a mapping",
                error_code=ErrorCode.CONFIG_INVALID_FORMAT,
                context=ErrorContext(file_path=str(config_file)),
            )
        return data

    @staticmethod
    def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
        """Map section and option keys to their field names so later layers merge cleanly."""
        section_models = {
            'remove': RemoveConfig,
            'options': OptionsConfig,
            'run_on': RunOnConfig,
        }
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            key = 'run_on' if key == 'runOn' else key
            model = section_models.get(key)
            if model is not None and isinstance(value, dict):
                aliases = {
                    field.alias: name
                    for name, field in model.model_fields.items()
                    if field.alias
                }
                value = {aliases.get(k, k): v for k, v in value.items()}
            normalized[key] = value
        return normalized

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        env_mappings = {
            # Remove section
            f"{prefix}REMOVE_UNCOMMENTED": ("remove", "uncommented", self._parse_bool),
            f"{prefix}REMOVE_UNLIKED": ("remove", "unliked", self._parse_bool),
            f"{prefix}REMOVE_TEXT": ("remove", "text", self._parse_bool),
            f"{prefix}REMOVE_IMAGES": ("remove", "images", self._parse_bool),
            f"{prefix}REMOVE_VIDEOS": ("remove", "videos", self._parse_bool),
            f"{prefix}CONTAINS_STRINGS": ("remove", "contains_strings", self._parse_list),

            # Options section
            f"{prefix}TARGET_LOAD_COUNT": ("options", "target_load_count", int),
            f"{prefix}CASE_SENSITIVE": ("options", "case_sensitive", self._parse_bool),
            f"{prefix}REVERSE_CONDITIONS": ("options", "reverse_conditions", self._parse_bool),
            f"{prefix}LINKED_CONDITIONS": ("options", "linked_conditions", self._parse_linked),

            # General settings
            f"{prefix}VERBOSE": ("verbose", None, self._parse_bool),
        }

        for env_var, (section, key, parser) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    parsed_value = parser(value)
                    if key is None:
                        env_config[section] = parsed_value
                    else:
                        env_config.setdefault(section, {})[key] = parsed_value
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid value for {env_var}: {value} ({e})",
                        error_code=ErrorCode.CONFIG_INVALID_VALUE,
                        config_key=env_var,
                        config_value=value,
                    )

        if env_config:
            logger.debug(f"Environment overrides: {sorted(env_config)}")
        return env_config

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize CLI arguments to configuration structure."""
        normalized: Dict[str, Any] = {}

        cli_mappings = {
            'verbose': 'verbose',

            'uncommented': ('remove', 'uncommented'),
            'unliked': ('remove', 'unliked'),
            'text': ('remove', 'text'),
            'images': ('remove', 'images'),
            'videos': ('remove', 'videos'),
            'contains': ('remove', 'contains_strings'),

            'target_load_count': ('options', 'target_load_count'),
            'case_sensitive': ('options', 'case_sensitive'),
            'reverse': ('options', 'reverse_conditions'),
            'linked': ('options', 'linked_conditions'),
        }

        for cli_key, value in cli_args.items():
            if value is None:
                continue

            mapping = cli_mappings.get(cli_key)
            if mapping:
                if isinstance(mapping, tuple):
                    section, key = mapping
                    normalized.setdefault(section, {})[key] = value
                else:
                    normalized[mapping] = value

        return normalized

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _parse_bool(value: Union[str, bool]) -> bool:
        """Parse boolean value from string."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {'true', '1', 'yes', 'on', 'enabled'}
        return bool(value)

    @staticmethod
    def _parse_list(value: Union[str, List[Any]]) -> List[Any]:
        """
        Parse a term list from a string.

        Comma separates groups and '+' joins terms into an AND-group:
        "spoiler,manga+chapter" -> ["spoiler", ["manga", "chapter"]].
        A JSON array is accepted as is.
        """
        if isinstance(value, list):
            return value
        value = value.strip()
        if value.startswith('['):
            return json.loads(value)
        groups: List[Any] = []
        for item in value.split(','):
            terms = [term.strip() for term in item.split('+') if term.strip()]
            if len(terms) == 1:
                groups.append(terms[0])
            elif terms:
                groups.append(terms)
        return groups

    @classmethod
    def _parse_linked(cls, value: Union[str, List[Any]]) -> List[Any]:
        """Parse linked conditions using the same syntax as term lists."""
        return cls._parse_list(value)

    def validate_config(self, config: Optional[AppConfig] = None) -> List[str]:
        """
        Validate configuration and return list of warnings/issues.

        Args:
            config: Configuration to validate (uses loaded config if None)

        Returns:
            List of validation warnings/issues
        """
        if config is None:
            config = self._config

        if config is None:
            return ["No configuration loaded"]

        warnings = []
        linked_flat = config.options.linked_flat
        enabled = config.enabled_conditions()

        if not enabled and not linked_flat:
            if config.options.reverse_conditions:
                warnings.append("reverseConditions is set but no condition is enabled or linked; every entry will be kept")
            else:
                warnings.append("No condition is enabled or linked; every entry will be kept")

        shadowed = [name.value for name in enabled if name in linked_flat]
        if shadowed:
            warnings.append(
                f"Conditions governed by linked groups are not evaluated independently: {', '.join(shadowed)}"
            )

        if ConditionName.CONTAINS_STRINGS in linked_flat and not config.remove.is_enabled(ConditionName.CONTAINS_STRINGS):
            warnings.append("containsStrings is linked but no strings are configured; it never matches")

        if linked_flat and any(not group for group in config.options.linked_groups):
            if config.options.reverse_conditions:
                warnings.append("linkedConditions contains an empty group; reversed, it keeps every entry")
            else:
                warnings.append("linkedConditions contains an empty group; it removes every entry")

        if not config.run_on.enabled_contexts():
            warnings.append("runOn disables every feed; the filter will never run")

        for warning in warnings:
            logger.warning(warning)
        return warnings

    def generate_schema(self, output_file: Optional[Path] = None) -> Dict[str, Any]:
        """
        Generate JSON schema for configuration.

        Args:
            output_file: Optional file to write schema to

        Returns:
            JSON schema dictionary
        """
        schema = AppConfig.model_json_schema(by_alias=True)

        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(schema, f, indent=2)

        return schema

    def create_example_config(self, output_file: Path, profile: str = "default") -> AppConfig:
        """
        Create example configuration file.

        Args:
            output_file: Path to write configuration file
            profile: Configuration profile (default, media-free, discussions-only)

        Returns:
            The configuration that was written
        """
        if profile == "media-free":
            config = AppConfig(
                remove=RemoveConfig(images=True, videos=True),
            )
        elif profile == "discussions-only":
            config = AppConfig(
                options=OptionsConfig(
                    target_load_count=5,
                    linked_conditions=[[ConditionName.UNCOMMENTED, ConditionName.UNLIKED]],
                ),
            )
        elif profile == "default":
            config = AppConfig()
        else:
            raise ConfigurationError(
                f"Unknown profile '{profile}'. Valid profiles: {', '.join(self.PROFILES)}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                config_key="profile",
                config_value=profile,
            )

        # Written with camelCase aliases so the file reads like the classic config
        config_dict = config.model_dump(mode='json', by_alias=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            if Path(output_file).suffix.lower() == '.json':
                json.dump(config_dict, f, indent=2)
            else:
                yaml.dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

        return config

    @property
    def config(self) -> Optional[AppConfig]:
        """Get the loaded configuration."""
        return self._config
