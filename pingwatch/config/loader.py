"""Loader for the endpoints configuration file."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from pingwatch.config.schemas import EndpointsConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when the endpoints file cannot be loaded or validated."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class EndpointsLoader:
    """Loads and validates ``endpoints.yaml``."""

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the loader.

        Args:
            run_id: Optional run identifier for logging.
        """
        self._log = logger.bind(component="config")
        if run_id:
            self._log = self._log.bind(run_id=run_id)
        self._checksum: str | None = None

    @property
    def checksum(self) -> str | None:
        """SHA-256 of the last loaded file."""
        return self._checksum

    def load(self, path: Path) -> EndpointsConfig:
        """Load and validate an endpoints file.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated EndpointsConfig.

        Raises:
            ConfigValidationError: If the file is missing, not YAML, or invalid.
        """
        file_path = str(path)
        try:
            content_bytes = path.read_bytes()
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            config = EndpointsConfig.model_validate(data)
        except FileNotFoundError as e:
            errors = [{"loc": "file", "msg": str(e), "type": "file_not_found"}]
            self._log.error("config_file_not_found", file_path=file_path)
            raise ConfigValidationError(errors, file_path) from e
        except yaml.YAMLError as e:
            errors = [{"loc": "file", "msg": str(e), "type": "yaml_error"}]
            self._log.error("config_yaml_invalid", file_path=file_path, error=str(e))
            raise ConfigValidationError(errors, file_path) from e
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]) or "root",
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            self._log.error(
                "config_validation_failed",
                file_path=file_path,
                validation_error_count=len(errors),
                errors=errors,
            )
            raise ConfigValidationError(errors, file_path) from e

        self._checksum = hashlib.sha256(content_bytes).hexdigest()
        self._log.info(
            "config_file_loaded",
            file_path=file_path,
            file_sha256=self._checksum,
            endpoint_count=len(config.endpoints),
            tracked_count=len(config.tracked_ids),
        )
        return config
