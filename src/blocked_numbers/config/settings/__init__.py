"""Config settings – 12-factor env-based configuration."""
from blocked_numbers.config.settings.base import Settings
from blocked_numbers.config.settings.blocklist import BlocklistSettings
from blocked_numbers.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["BlocklistSettings", "DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
