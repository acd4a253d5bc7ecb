# printshop/services/config_loader.py

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import requests
import yaml

from printshop.core.config import settings
from printshop.core.metrics import metrics
from printshop.core.exceptions import InvalidConfigurationError
from printshop.services.pricing_config import PricingConfiguration

logger = logging.getLogger(__name__)

RATE_TABLES = ("flyer", "card", "leaflet", "letterhead", "poster")

class ConfigLoader:
    """Loads the pricing configuration from a URL or a local YAML/JSON file."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        config_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.config_path = Path(config_path or settings.PRICING_CONFIG_PATH)
        self.config_url = config_url if config_url is not None else settings.PRICING_CONFIG_URL
        self.timeout = timeout if timeout is not None else settings.PRICING_CONFIG_TIMEOUT
        logger.info(f"ConfigLoader initialized (url={self.config_url or '-'}, path={self.config_path})")

    def load(self) -> PricingConfiguration:
        """
        Load the pricing configuration.

        The URL is used when set, the local file otherwise. Any failure
        (unreachable, malformed, not a mapping) falls back to the embedded
        default configuration; this method never raises.

        Returns:
            PricingConfiguration
        """
        source = self.config_url or str(self.config_path)
        try:
            if self.config_url:
                data = self._fetch_url(self.config_url)
            else:
                data = self._read_file(self.config_path)

            config = self.parse_document(data, source)
            metrics.record_config_load("url" if self.config_url else "file", "success")
            logger.info(f"Pricing configuration loaded from {source}")
            return config

        except Exception as e:
            metrics.record_config_load("url" if self.config_url else "file", "fallback")
            logger.error(f"Failed to load pricing configuration from {source}: {e}; using embedded defaults")
            return PricingConfiguration.default()

    async def load_async(self) -> PricingConfiguration:
        """Load without blocking the event loop."""
        return await asyncio.to_thread(self.load)

    def _fetch_url(self, url: str) -> Any:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return yaml.safe_load(response.text)

    def _read_file(self, path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"Pricing config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def parse_document(self, data: Any, source: str) -> PricingConfiguration:
        """
        Build a configuration from a parsed document.

        Raises:
            InvalidConfigurationError: If the document is not a mapping
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError(source, f"Configuration must be a mapping, got {type(data).__name__}")

        warnings = self.validate_config(data)
        if warnings:
            logger.warning(f"Pricing configuration has warnings: {warnings}")

        return PricingConfiguration.from_dict(data, source=source)

    def validate_config(self, config_data: Any) -> List[str]:
        """
        Check a configuration document for missing sections and rate tables.

        Malformed values are reported by PricingConfiguration.from_dict when
        the document is built, so they are not repeated here.

        Args:
            config_data: Parsed configuration document

        Returns:
            List of validation warnings (empty when the document looks complete)
        """
        if not isinstance(config_data, dict):
            return [f"Configuration must be a mapping, got {type(config_data).__name__}"]

        warnings = []
        rates = config_data.get("rates")
        if rates is None:
            warnings.append("Missing required configuration section: rates")
            rates = {}
        elif not isinstance(rates, dict):
            return warnings

        for table in RATE_TABLES:
            if table not in rates:
                warnings.append(f"Missing rate table: {table}")

        logger.debug(f"Configuration validation completed: {len(warnings)} warnings")
        return warnings

# Global config loader instance
config_loader = ConfigLoader()
