"""INI configuration for the smbios-tables command."""

from configparser import ConfigParser, Error as ConfigParserError
from pathlib import Path
from typing import Optional

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "smbios-tables" / "smbios_tables.ini"


class ConfigManager:
    """Manages tool configuration from INI file."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = ConfigParser()

    def load(self) -> ConfigParser:
        """Load config file; a missing file leaves every value at its default."""
        self.config.read(self.config_path)
        return self.config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """Get config value with fallback."""
        try:
            return self.config.get(section, key)
        except ConfigParserError:
            return fallback

    def getint(self, section: str, key: str, fallback: int = 0) -> int:
        """Get integer config value."""
        try:
            return self.config.getint(section, key)
        except (ConfigParserError, ValueError):
            return fallback

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Get boolean config value."""
        try:
            return self.config.getboolean(section, key)
        except (ConfigParserError, ValueError):
            return fallback
