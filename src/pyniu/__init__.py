"""pyniu - Async Python client for NIU vehicle telemetry API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyniu")
except PackageNotFoundError:
    __version__ = "0+local"
from pyniu.client import NiuClient
from pyniu.config import NiuConfig
from pyniu.errors import (
    ErrorDescriptor,
    ErrorKind,
    ProtocolFailure,
    TransportFailure,
    ValidationFailure,
    VendorFailure,
    describe_error,
    normalize_error,
)
from pyniu.exceptions import NiuConfigError, NiuError
from pyniu.models import (
    BatteryHealth,
    BatteryInfo,
    FirmwareVersion,
    MotorInfo,
    OverallTally,
    TrackDetail,
    TrackPage,
    Vehicle,
    VehiclePosition,
    VehicleSnapshot,
)
from pyniu.pipeline import PipelineResult, PipelineState, SnapshotPipeline
from pyniu.session import Session

__all__ = [
    "__version__",
    "BatteryHealth",
    "BatteryInfo",
    "ErrorDescriptor",
    "ErrorKind",
    "FirmwareVersion",
    "MotorInfo",
    "NiuClient",
    "NiuConfig",
    "NiuConfigError",
    "NiuError",
    "OverallTally",
    "PipelineResult",
    "PipelineState",
    "ProtocolFailure",
    "Session",
    "SnapshotPipeline",
    "TrackDetail",
    "TrackPage",
    "TransportFailure",
    "ValidationFailure",
    "Vehicle",
    "VehiclePosition",
    "VehicleSnapshot",
    "VendorFailure",
    "describe_error",
    "normalize_error",
]
