"""
Error kinds raised by the workflow proxy.

ConfigurationError is surfaced to the caller (HTTP 500).
GenerationError never leaves the proxy; it is converted to the fallback result.
"""


class WorkflowError(Exception):
    """Base class for workflow proxy errors."""


class ConfigurationError(WorkflowError):
    """Required configuration (the API credential) is missing."""


class GenerationError(WorkflowError):
    """The outbound call failed or returned text that could not be used."""
