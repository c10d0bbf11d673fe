"""Engine configuration read from Django settings."""

from core.config.channels import ChannelConfig

__all__ = ["ChannelConfig"]
