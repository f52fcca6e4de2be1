"""
File Chain (see DEVELOPER.md):
Doc Version: v1.0.0

- Called by: main.py, compose.py
- Purpose: Configuration loading and defaults management

NetCompose Configuration - Configuration Loading and Defaults Management

PURPOSE:
    Holds the values the composer falls back to when a composite resource
    leaves them empty, plus the fixed attributes of generated network units
    and the response TTL. The composer itself never reads files; the CLI
    loads a Config and hands it over.

WHO READS ME:
    - main.py: Loads configuration via Config.load() during bootstrap
    - compose.py: Uses Config for defaults, CIDR block and TTL

WHO I READ:
    - None (leaf module, no internal dependencies)

DEPENDENCIES:
    - serde: TOML serialization/deserialization (@deserialize, @serialize)
    - serde.toml: from_toml(), to_toml()
    - dataclasses: @dataclass decorator
    - ipaddress: IPv4Network for the network unit address block
    - logging: Configuration loading status messages

CONFIG PARAMETERS:
    - region: region used when spec.region is empty (default: eu-central-1)
    - provider_config_name: provider config used when
      spec.providerConfigName is empty (default: default)
    - cidr_block: address block of every network unit (default: 192.168.0.0/16)
    - ttl: response time-to-live in seconds (default: 60)

FILE FORMAT:
    config.toml example:
    ```toml
    region = "eu-central-1"
    provider_config_name = "default"
    cidr_block = "192.168.0.0/16"
    ttl = 60
    ```
"""

import logging
from dataclasses import dataclass
from ipaddress import IPv4Network

from serde import deserialize, serialize, SerdeError
from serde.toml import from_toml, to_toml

_LOGGER = logging.getLogger(__name__)

DEFAULT_REGION = "eu-central-1"
DEFAULT_PROVIDER_CONFIG = "default"
DEFAULT_TTL = 60


@deserialize
@serialize
@dataclass
class Config:
    """network composer configuration"""

    region: str = DEFAULT_REGION
    provider_config_name: str = DEFAULT_PROVIDER_CONFIG
    cidr_block: IPv4Network = IPv4Network("192.168.0.0/16")
    ttl: int = DEFAULT_TTL

    @classmethod
    def load(cls, filename: str) -> "Config":
        """load the configuration from the given file"""
        try:
            with open(filename, encoding="utf-8") as handle:
                cfg = from_toml(cls, handle.read())
            _LOGGER.info("Configuration loaded from file %s", filename)
        except (FileNotFoundError, TypeError, ValueError, SerdeError) as exc:
            if not isinstance(exc, FileNotFoundError):
                _LOGGER.error(exc)
            cfg = cls()
            _LOGGER.warning("using configuration defaults")
        return cfg

    def save(self, filename: str):
        """save the configuration to the given file"""
        with open(filename, "w+", encoding="utf-8") as handle:
            handle.write(to_toml(self))
