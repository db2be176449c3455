"""Calendar arithmetic, POSIX TZ strings, TZif zone files, zoneinfo databases and sun rise/set times."""

__version__ = "0.1.0"
__all__ = ["calendar", "posix", "astro", "tzfile", "zonedb", "dump"]