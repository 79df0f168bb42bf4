"""Custom exceptions for the hairpin layout engine."""


class HairpinLayoutError(Exception):
    """Base exception for all layout engine errors."""
    pass


class InvalidPairingError(HairpinLayoutError):
    """Exception raised when a base-pair list is not a valid matching."""

    def __init__(self, message: str, pair: tuple = None, index: int = None):
        self.pair = pair
        self.index = index

        if pair is not None:
            message = f"Invalid base pair {tuple(pair)}: {message}"
        if index is not None:
            message = f"{message} (index: {index})"

        super().__init__(message)


class FoldError(HairpinLayoutError):
    """Exception raised when a folding oracle result cannot be used."""

    def __init__(self, message: str, sequence: str = None):
        self.sequence = sequence

        if sequence is not None:
            message = f"Fold failed for {sequence[:30]}: {message}"

        super().__init__(message)


class ConfigurationError(HairpinLayoutError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter

        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"

        super().__init__(message)
