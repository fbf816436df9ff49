"""Data models for NIU API requests, responses and the vehicle snapshot."""

from pyniu.models._base import NiuBaseModel
from pyniu.models.battery import BatteryHealth, BatteryHealthCompartment, BatteryInfo, BatteryInfoCompartment
from pyniu.models.motor import MotorInfo
from pyniu.models.requests import EndpointRequest, EndpointResponse, HttpMethod
from pyniu.models.snapshot import BatterySlot, BatteryStatus, Position, TrackSummary, VehicleIdentity, VehicleSnapshot
from pyniu.models.token import AuthToken
from pyniu.models.track import Track, TrackDetail, TrackPage, TrackPoint
from pyniu.models.vehicle import FirmwareVersion, OverallTally, Vehicle, VehiclePosition

__all__ = [
    "AuthToken",
    "BatteryHealth",
    "BatteryHealthCompartment",
    "BatteryInfo",
    "BatteryInfoCompartment",
    "BatterySlot",
    "BatteryStatus",
    "EndpointRequest",
    "EndpointResponse",
    "FirmwareVersion",
    "HttpMethod",
    "MotorInfo",
    "NiuBaseModel",
    "OverallTally",
    "Position",
    "Track",
    "TrackDetail",
    "TrackPage",
    "TrackPoint",
    "TrackSummary",
    "Vehicle",
    "VehicleIdentity",
    "VehiclePosition",
    "VehicleSnapshot",
]
