"""Unit tests for error classes."""

from kindkit.utils.errors import (
    AddonError,
    AddonOperationError,
    AggregatedValidationError,
    ClusterNotRunningError,
    InvalidIntegerFormatError,
    InvalidToggleValueError,
    KindkitError,
    RemoteDeleteError,
    RemoteWriteError,
    SettingError,
    UnknownSettingError,
)


class TestErrorClasses:
    """Test custom error classes."""

    def test_unknown_setting_error(self):
        """Test UnknownSettingError."""
        error = UnknownSettingError("cpu")
        assert str(error) == "Property name cpu not found"
        assert error.name == "cpu"
        assert isinstance(error, SettingError)

    def test_aggregated_validation_error(self):
        """Test errors are joined in order."""
        error = AggregatedValidationError(
            "cpus", [InvalidIntegerFormatError("x"), ValueError("too small")]
        )
        assert str(error) == "[invalid integer value: 'x' too small]"
        assert len(error.errors) == 2

    def test_cluster_not_running_error(self):
        """Test ClusterNotRunningError."""
        error = ClusterNotRunningError("Cluster 'kind' is not running")
        assert str(error) == "Cluster 'kind' is not running"
        assert isinstance(error, KindkitError)

    def test_remote_errors_carry_path(self):
        """Test remote errors keep the offending path."""
        write_error = RemoteWriteError("/etc/a.yaml", "disk full")
        delete_error = RemoteDeleteError("/etc/b.yaml")

        assert write_error.path == "/etc/a.yaml"
        assert str(write_error) == "Failed to write /etc/a.yaml: disk full"
        assert delete_error.path == "/etc/b.yaml"
        assert str(delete_error) == "Failed to delete /etc/b.yaml"

    def test_invalid_toggle_value_error(self):
        """Test InvalidToggleValueError."""
        error = InvalidToggleValueError("dashboard", "maybe")
        assert "'maybe'" in str(error)
        assert "dashboard" in str(error)
        assert isinstance(error, AddonError)

    def test_addon_operation_error_direction(self):
        """Test message reflects the direction of the operation."""
        cause = RemoteWriteError("/etc/a.yaml")

        enable_error = AddonOperationError("dashboard", True, cause)
        disable_error = AddonOperationError("dashboard", False, cause)

        assert str(enable_error).startswith("Error transferring addon dashboard to node")
        assert str(disable_error).startswith("Error deleting addon dashboard from node")
