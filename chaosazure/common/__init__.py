from enum import Enum


class Operation(Enum):
    """
    All supported VM power operations.
    """
    START = 'start'
    STOP = 'stop'
    RESTART = 'restart'
    # "stop", wait, then "start"
    POWERCYCLE = 'powercycle'

    @classmethod
    def has_value(cls, value):
        return any(value == item.value for item in cls)


class ExitCode(Enum):
    """
    Process exit codes. CONFIG_ERROR matches the code argparse exits with on
    a usage error.
    """
    SUCCESS = 0
    CONFIG_ERROR = 2
    AUTH_ERROR = 3
    API_ERROR = 4
    SELECTION_ERROR = 5


class ChaosAzureError(Exception):
    """
    Base class for every error that aborts a chaos run.
    """
    exit_code = ExitCode.CONFIG_ERROR


class ConfigError(ChaosAzureError):
    """Invalid or contradictory command-line input."""
    exit_code = ExitCode.CONFIG_ERROR


class AuthError(ChaosAzureError):
    """The identity provider rejected the credentials or was unreachable."""
    exit_code = ExitCode.AUTH_ERROR


class ApiError(ChaosAzureError):
    """A resource listing or VM operation call failed."""
    exit_code = ExitCode.API_ERROR


class SelectionError(ChaosAzureError):
    """No VM available, or no VM matched the filter."""
    exit_code = ExitCode.SELECTION_ERROR


# Chaos defaults
# Please keep defaults in lexically acending order by name
DEFAULT_CHAOS_ARM_SCOPE="https://management.azure.com/.default"
DEFAULT_CHAOS_DELAY=60
DEFAULT_CHAOS_OPERATION_TIMEOUT=60
DEFAULT_CHAOS_TOKEN_TYPE="Bearer"
