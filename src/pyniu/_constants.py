"""Internal constants shared across the library."""

ACCOUNT_URL = "https://account-fk.niu.com"
APP_URL = "https://app-api-fk.niu.com"
USER_AGENT = "manager/4.6.48 (android; IN2020 11);lang=en-US;clientIdentifier=Overseas;timezone=Europe/Berlin;model=IN2020;deviceName=IN2020;ostype=android"
DEFAULT_LANGUAGE = "en-US"

#: HTTP status the vendor answers with on success.
SUCCESS_STATUS_CODE = 200
#: Value of the ``status`` member embedded in successful vendor bodies.
VENDOR_SUCCESS_STATUS = 0

LOGIN_PATH = "/appv2/login"

# Endpoint paths on the app API
VEHICLE_LIST_PATH = "/motoinfo/list"
VEHICLE_POSITION_PATH = "/motoinfo/currentpos"
OVERALL_TALLY_PATH = "/motoinfo/overallTally"
FIRMWARE_VERSION_PATH = "/motorota/getfirmwareversion"
BATTERY_INFO_PATH = "/v3/motor_data/battery_info"
BATTERY_HEALTH_PATH = "/v3/motor_data/battery_info/health"
MOTOR_INFO_PATH = "/v3/motor_data/motor_info"
TRACK_LIST_PATH = "/v5/track/list/v2"
TRACK_DETAIL_PATH = "/v5/track/detail"

# Unit conversions for track summaries
METERS_PER_KILOMETER = 1000
SECONDS_PER_MINUTE = 60

TRACK_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"
