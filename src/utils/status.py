import enum


class Status(enum.Enum):
    SUCCESS = "00"
    FAILURE = "01"
    INVALID_CALLBACK = "02"
