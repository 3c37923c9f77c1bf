"""Custom exception classes for kindkit."""


class KindkitError(Exception):
    """Base exception for kindkit errors."""

    pass


class ConfigurationError(KindkitError):
    """Raised when process configuration is invalid or missing."""

    pass


# Settings


class SettingError(KindkitError):
    """Base exception for errors raised while writing a setting."""

    pass


class UnknownSettingError(SettingError):
    """Raised when a setting name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Property name {name} not found")


class InvalidIntegerFormatError(SettingError):
    """Raised when a value cannot be parsed as a base-10 integer."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid integer value: {value!r}")


class InvalidBooleanFormatError(SettingError):
    """Raised when a value is not a recognised boolean token."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid boolean value: {value!r}")


class InvalidSettingValueError(SettingError):
    """Raised by validators when a well-formed value is not acceptable."""

    pass


class AggregatedValidationError(SettingError):
    """Raised when one or more setters of a setting failed.

    Errors are kept in the order the setters were registered.
    """

    def __init__(self, name: str, errors: list[Exception]):
        self.name = name
        self.errors = list(errors)
        super().__init__("[" + " ".join(str(e) for e in self.errors) + "]")


# Cluster


class ClusterError(KindkitError):
    """Base exception for cluster control-plane errors."""

    pass


class ClusterNotRunningError(ClusterError):
    """Raised when attempting to perform an operation that requires a running cluster."""

    pass


class ContainerRuntimeError(ClusterError):
    """Raised when the container runtime CLI is missing or a command fails."""

    pass


# Remote


class RemoteError(KindkitError):
    """Base exception for remote node operations."""

    pass


class RemoteSessionError(RemoteError):
    """Raised when a session to a node cannot be opened."""

    pass


class RemoteWriteError(RemoteError):
    """Raised when a file cannot be written to the node."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Failed to write {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RemoteDeleteError(RemoteError):
    """Raised when a file cannot be removed from the node."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Failed to delete {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


# Addons


class AddonError(KindkitError):
    """Base exception for addon errors."""

    pass


class AddonNotFoundError(AddonError):
    """Raised when an addon is not in the catalog."""

    pass


class InvalidToggleValueError(AddonError):
    """Raised when an enable/disable value is not a boolean."""

    def __init__(self, addon: str, value: str):
        self.addon = addon
        self.value = value
        super().__init__(
            f"error attempting to parse enable/disable value {value!r} for addon {addon}"
        )


class AddonOperationError(AddonError):
    """Raised when transferring or deleting addon files fails."""

    def __init__(self, addon: str, enable: bool, cause: Exception):
        self.addon = addon
        self.enable = enable
        if enable:
            message = f"Error transferring addon {addon} to node: {cause}"
        else:
            message = f"Error deleting addon {addon} from node: {cause}"
        super().__init__(message)
