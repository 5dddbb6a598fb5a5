"""
Topic and command names used by the panel's MQTT integration.

Just the naming scheme; there is no MQTT client here.
"""

TOPIC_COMMAND = "command"
COMMAND_STATE = "state"
VALUE = "value"

COMMAND_SENSOR = "sensor/"
COMMAND_SENSOR_FACE = "sensor/face"
COMMAND_SENSOR_QR_CODE = "sensor/qrcode"
COMMAND_SENSOR_MOTION = "sensor/motion"

STATE_CURRENT_URL = "currentUrl"
STATE_SCREEN_ON = "screenOn"
STATE_CAMERA = "camera"
STATE_BRIGHTNESS = "brightness"

COMMAND_URL = "url"
COMMAND_CAMERA = "camera"
COMMAND_SETTINGS = "settings"
COMMAND_RELAUNCH = "relaunch"
COMMAND_WAKE = "wake"
COMMAND_WAKETIME = "wakeTime"
COMMAND_BRIGHTNESS = "brightness"
COMMAND_RELOAD = "reload"
COMMAND_CLEAR_CACHE = "clearCache"
COMMAND_EVAL = "eval"
COMMAND_AUDIO = "audio"
COMMAND_SPEAK = "speak"
COMMAND_VOLUME = "volume"

COMMANDS = frozenset({
    COMMAND_URL, COMMAND_CAMERA, COMMAND_SETTINGS, COMMAND_RELAUNCH,
    COMMAND_WAKE, COMMAND_WAKETIME, COMMAND_BRIGHTNESS, COMMAND_RELOAD,
    COMMAND_CLEAR_CACHE, COMMAND_EVAL, COMMAND_AUDIO, COMMAND_SPEAK,
    COMMAND_VOLUME,
})

SENSORS = ("face", "qrcode", "motion")


def _join(base: str, suffix: str) -> str:
    if not base.endswith("/"):
        base += "/"
    return base + suffix


def command_topic(base: str) -> str:
    """Topic the panel listens on for commands, e.g. 'wallpanel/x/command'."""
    return _join(base, TOPIC_COMMAND)


def state_topic(base: str) -> str:
    return _join(base, COMMAND_STATE)


def sensor_topic(base: str, name: str) -> str:
    if name not in SENSORS:
        raise ValueError(f"Unknown sensor: {name}")
    return _join(base, COMMAND_SENSOR + name)


def subscribed_topics(base: str) -> list[str]:
    return [command_topic(base)]


def is_known_command(key: str) -> bool:
    return key in COMMANDS
