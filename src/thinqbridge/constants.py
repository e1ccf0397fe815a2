"""Enumerations and shared constants for ThinQ appliances."""

from enum import Enum, IntEnum


class PlatformType(str, Enum):
    """Vendor protocol generation a device speaks."""

    THINQ1 = "thinq1"
    THINQ2 = "thinq2"


class DeviceType(IntEnum):
    """Device type codes as reported by the ThinQ device list."""

    REFRIGERATOR = 101
    KIMCHI_REFRIGERATOR = 102
    WATER_PURIFIER = 103
    WASHER = 201
    DRYER = 202
    STYLER = 203
    DISHWASHER = 204
    WASHER_NEW = 221
    WASH_TOWER = 222
    WASH_TOWER_2 = 223
    OVEN = 301
    MICROWAVE = 302
    COOKTOP = 303
    HOOD = 304
    AC = 401  # includes heat pumps and most HVAC units
    AIR_PURIFIER = 402
    DEHUMIDIFIER = 403
    AERO_TOWER = 410
    ROBOT_KING = 501
    TV = 701
    BOILER = 801
    SPEAKER = 901
    HOMEVU = 902
    ARCH = 1001
    MISSG = 3001
    SENSOR = 3002
    IOT_LIGHTING = 3003
    IOT_MOTION_SENSOR = 3004
    IOT_SMART_PLUG = 3005
    IOT_DUST_SENSOR = 3006
    SOLAR_SENSOR = 3102
    EMS_AIR_STATION = 4001
    AIR_SENSOR = 4003
    PURICARE_AIR_DETECTOR = 4004
    V2PHONE = 6001
    HOMEROBOT = 9000


class Category(IntEnum):
    """HomeKit accessory categories used when publishing accessories."""

    OTHER = 1
    FAN = 3
    THERMOSTAT = 9
    SPRINKLER = 28
    AIR_PURIFIER = 19
    AIR_HEATER = 20
    AIR_CONDITIONER = 21
    AIR_HUMIDIFIER = 22
    AIR_DEHUMIDIFIER = 23


# States reported while a washer or dryer is not actively running a course
WASHER_NOT_RUNNING_STATUS = (
    "COOLDOWN", "POWEROFF", "POWERFAIL", "INITIAL", "PAUSE", "AUDIBLE_DIAGNOSIS",
    "FIRMWARE", "COURSE_DOWNLOAD", "ERROR", "END",
)

STYLER_NOT_RUNNING_STATUS = (
    "POWEROFF", "INITIAL", "PAUSE", "COMPLETE", "ERROR", "DIAGNOSIS",
    "RESERVED", "SLEEP", "FOTA",
)

# Optional air conditioner capabilities, by supporting model
AC_MODEL_FEATURES: dict[str, tuple[str, ...]] = {
    "jetMode": ("RAC_056905",),
    "quietMode": ("WINF_056905",),
    "energySaveMode": ("WINF_056905", "RAC_056905"),
    "airClean": ("RAC_056905",),
    # models that reject the airState.mon.timeout command
    "noMonitorTimeout": ("RAC_056905",),
}

ONE_HOUR_IN_SECONDS = 3600

FILTER_CHANGE_THRESHOLD_PERCENT = 95

# HomeKit temperature limits in Celsius
HOMEKIT_TEMP_MIN = 10
HOMEKIT_TEMP_MAX = 38

AIR_PURIFIER_NORMAL_MODE = 14
AIR_PURIFIER_AUTO_MODE = 16

UNDEFINED_OP_MODE = -1

FAN_SPEED_MIN = 2
FAN_SPEED_MAX = 6

HUMIDITY_MAX = 100
HUMIDITY_DIVISOR = 10

LAMP_OFF = 0
LAMP_HIGH = 2

SWING_MODE_ON = "100"
SWING_MODE_OFF = "0"

AC_MONITOR_TIMEOUT_VALUE = "70"

TCL_MAINTENANCE_THRESHOLD = 30

RINSE_LEVEL_EMPTY = 0
RINSE_LEVEL_FULL = 100

DISHWASHER_RUNNING_STATUS = ("RUNNING", "RINSING", "DRYING", "NIGHTDRY", "STEAMSOFTENING")

COOKING_STATUS = ("PREHEATING", "PREHEATING_IS_DONE", "COOKING_IN_PROGRESS")
