"""
Config Validator - Single Responsibility: check .inzhenerka.yml against the remote schema.
"""
import json
import logging
from pathlib import Path

from ..exceptions import (
    ConfigNotFoundError,
    InvalidConfigError,
    PublishError,
    TransportFailure,
    UnknownFailure,
    ValidationFailure,
)
from ..models import CONFIG_FILENAME, SCHEMA_TIMEOUT
from ..protocols import IAPIClient

logger = logging.getLogger(__name__)


class ConfigValidator:
    """
    Submits the repository configuration to the schema endpoint.

    The file is sent verbatim; parsing and schema checks happen server-side.
    """

    UNKNOWN_ERROR = "Unknown error during configuration validation"

    def __init__(self, api_client: IAPIClient, schema_url: str, timeout: float = SCHEMA_TIMEOUT):
        """
        Initialize validator.

        Args:
            api_client: HTTP client for API calls
            schema_url: Full URL of the schema validation endpoint
            timeout: Request timeout in seconds
        """
        self._api = api_client
        self._schema_url = schema_url
        self._timeout = timeout

    @staticmethod
    def config_path(root_dir: Path) -> Path:
        return Path(root_dir) / CONFIG_FILENAME

    @staticmethod
    def _describe_transport_failure(exc: TransportFailure) -> str:
        if exc.has_response:
            body = json.dumps(exc.response.body, ensure_ascii=False)
            return (
                "❌ Configuration validation failed:\n"
                f"Status: {exc.response.status_code}\n"
                f"Response: {body}"
            )
        return f"❌ Configuration validation failed:\nError: {exc}"

    async def validate(self, root_dir: Path) -> None:
        """
        Validate ``<root_dir>/.inzhenerka.yml``.

        Raises:
            ConfigNotFoundError: file is missing (no request is made)
            InvalidConfigError: endpoint answered with a non-200 status below 400
            ValidationFailure: endpoint rejected the request or was unreachable
            UnknownFailure: any other error type
        """
        path = self.config_path(root_dir)
        logger.info("🔍 Validating %s...", CONFIG_FILENAME)

        if not path.exists():
            raise ConfigNotFoundError(path)

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
            response = await self._api.post_json(
                self._schema_url,
                {"config_yml": content},
                timeout=self._timeout,
            )
            if response.status_code != 200:
                raise InvalidConfigError(response.status_code)
            logger.info("✅ Configuration is valid")
        except TransportFailure as exc:
            raise ValidationFailure(self._describe_transport_failure(exc)) from exc
        except (OSError, PublishError):
            raise
        except Exception as exc:
            raise UnknownFailure(self.UNKNOWN_ERROR) from exc
