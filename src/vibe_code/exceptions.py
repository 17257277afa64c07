"""Exceptions for vibe-code."""


class VibeError(Exception):
    """Base exception for vibe-code errors."""

    pass


class ConfigError(VibeError):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    pass


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass


class NotInitializedError(ConfigError):
    """Operation requires a project configuration that does not exist."""

    def __init__(self, message: str = "Project not initialized. Run 'vibe init' first."):
        super().__init__(message)


class DocumentError(VibeError):
    """Error rendering or writing the CLAUDE.md instructions document."""

    pass


class LaunchError(VibeError):
    """Error locating or starting the Claude Code executable."""

    pass
