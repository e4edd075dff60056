class ConfigError(Exception):
    """Raised when config loading or validation fails."""


class PipelineError(Exception):
    """Raised when a pipeline stage fails and the request cannot be answered."""
