"""Error types for sutra_pipeline."""


class SutraPipelineError(Exception):
    """Base error for all sutra_pipeline failures."""


class ConfigurationError(SutraPipelineError):
    """Configuration value that cannot be interpreted (unknown mode, wrong type)."""


class InvalidInputError(SutraPipelineError, TypeError):
    """API misuse, such as passing a non-callable rule to the threader."""
