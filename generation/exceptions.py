"""Errors raised by the generation layer"""


class GenerationError(Exception):
    """Base class for question and solution generation failures"""


class ConfigurationError(GenerationError):
    """The generation client cannot run with the current configuration"""


class CredentialsExhaustedError(GenerationError):
    """Every API key in the pool failed for a single call"""


class ValidationRetryExhaustedError(GenerationError):
    """The model never produced output that passed validation within the cap"""
