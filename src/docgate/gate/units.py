"""Time units used to express admission windows such as "5 per SECOND"."""

from enum import Enum

from docgate.exceptions import InvalidConfigurationError


class TimeUnit(Enum):
    """Window length expressed as a named unit, valued in seconds."""

    MILLISECOND = 0.001
    SECOND = 1.0
    MINUTE = 60.0
    HOUR = 3600.0
    DAY = 86400.0

    @property
    def seconds(self) -> float:
        return self.value

    def to_seconds(self, count: float = 1) -> float:
        """Return the length of ``count`` units in seconds."""
        return self.value * count

    @classmethod
    def parse(cls, name: "str | TimeUnit") -> "TimeUnit":
        """Resolve a unit from its name, ignoring case and a trailing 's'.

        Args:
            name: Unit name such as "second", "MINUTES" or a TimeUnit.

        Returns:
            Matching TimeUnit member.

        Raises:
            InvalidConfigurationError: If the name matches no unit.
        """
        if isinstance(name, TimeUnit):
            return name

        key = name.strip().upper()
        if key.endswith("S") and key[:-1] in cls.__members__:
            key = key[:-1]
        try:
            return cls[key]
        except KeyError as e:
            allowed = ", ".join(m.name for m in cls)
            raise InvalidConfigurationError(
                f"Unknown time unit '{name}' (expected one of: {allowed})",
                field_path="time_unit",
            ) from e
