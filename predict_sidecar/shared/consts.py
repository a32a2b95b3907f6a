from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


SERIES_NAME_LABEL = "__name__"
PREDICTION_NAME_PREFIX = "predict_sidecar"
PREDICTION_DURATION_LABEL = "predict_duration"
MODEL_PARAMS_FILENAME = "params.json"
MODEL_PATH_SEPARATOR = ":"
