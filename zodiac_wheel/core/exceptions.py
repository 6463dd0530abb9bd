"""Custom exceptions for the zodiac wheel backend."""


class ZodiacWheelError(Exception):
    """Base exception for all backend errors."""
    pass


class InvalidDateTimeError(ZodiacWheelError):
    """Raised when a local datetime string cannot be parsed."""
    pass


class InvalidTimezoneError(ZodiacWheelError):
    """Raised when neither a known IANA zone nor a UTC offset is usable."""
    pass


class InvalidCoordinatesError(ZodiacWheelError):
    """Raised when observer coordinates are not finite numbers."""
    pass


class EphemerisError(ZodiacWheelError):
    """Raised when the ephemeris kernel cannot be loaded or queried."""
    pass
