class ConfigurationError(ValueError):
    """Raised when the inputs of a hail-binning run break one of its preconditions."""
