"""Characteristic descriptions for the controls the accessory exposes.

Each control is a plain record; hosts use them to build their own entities
and the accessory uses them to validate incoming values.
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .config import (
    DEFAULT_CHANNEL,
    DEFAULT_KEY,
    VOLUME_MAX,
    VOLUME_MIN,
    VOLUME_STEP_MAX,
    VOLUME_STEP_MIN,
)
from .exceptions import ValidationError


class Format(enum.Enum):
    BOOL = "bool"
    INT = "int"
    STRING = "string"


class Unit(enum.Enum):
    NONE = "none"
    PERCENTAGE = "percentage"


class Perm(enum.Enum):
    READ = "pr"
    WRITE = "pw"
    NOTIFY = "ev"


READ_WRITE_NOTIFY = (Perm.READ, Perm.WRITE, Perm.NOTIFY)


@dataclass(frozen=True)
class DeviceCharacteristic:
    """A single readable/writable control of the accessory."""

    name: str
    uuid: Optional[str]
    format: Format
    default: Any
    unit: Unit = Unit.NONE
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    min_step: Optional[int] = None
    perms: Tuple[Perm, ...] = READ_WRITE_NOTIFY

    @property
    def key(self) -> str:
        """Identifier used in topics and entity ids."""
        return self.name.lower().replace(" ", "_")

    def validate(self, value: Any) -> Any:
        """Check a value against format and bounds.

        Returns:
            The value, unchanged

        Raises:
            ValidationError: Wrong type or out of bounds
        """
        if self.format is Format.BOOL:
            if not isinstance(value, bool):
                raise ValidationError(f"{self.name} expects a boolean, got {value!r}")
        elif self.format is Format.INT:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{self.name} expects an integer, got {value!r}")
            if self.min_value is not None and value < self.min_value:
                raise ValidationError(f"{self.name} {value} is below {self.min_value}")
            if self.max_value is not None and value > self.max_value:
                raise ValidationError(f"{self.name} {value} is above {self.max_value}")
        elif not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{self.name} expects a non-empty string, got {value!r}")
        return value


def make_power_characteristic() -> DeviceCharacteristic:
    return DeviceCharacteristic(name="Power", uuid=None, format=Format.BOOL, default=False)


def make_volume_characteristic() -> DeviceCharacteristic:
    """Absolute Chromecast volume."""
    return DeviceCharacteristic(
        name="Volume",
        uuid=None,
        format=Format.INT,
        default=0,
        unit=Unit.PERCENTAGE,
        min_value=VOLUME_MIN,
        max_value=VOLUME_MAX,
        min_step=1,
    )


def make_volume_step_characteristic() -> DeviceCharacteristic:
    """Relative TV volume in key presses; 0 toggles mute."""
    return DeviceCharacteristic(
        name="Volume Step",
        uuid="91288267-5678-49B2-8D22-F57BE995AA00",
        format=Format.INT,
        default=1,
        unit=Unit.PERCENTAGE,
        min_value=VOLUME_STEP_MIN,
        max_value=VOLUME_STEP_MAX,
        min_step=1,
    )


def make_channel_characteristic() -> DeviceCharacteristic:
    """Channel number as text. The TV cannot report it, so reads return the last one set."""
    return DeviceCharacteristic(
        name="Channel",
        uuid="212131F4-2E14-4FF4-AE13-C97C3232499D",
        format=Format.STRING,
        default=DEFAULT_CHANNEL,
    )


def make_key_characteristic() -> DeviceCharacteristic:
    """Any remote key, without the KEY_ prefix (e.g. MENU)."""
    return DeviceCharacteristic(
        name="Key",
        uuid="2A6FD4DE-8103-4E58-BDAC-25835CD006BD",
        format=Format.STRING,
        default=DEFAULT_KEY,
    )
