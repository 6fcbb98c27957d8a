from country_services.core.config import Settings, get_settings
from country_services.core.errors import (
    CancelSignalError,
    ErrorKind,
    InvalidArgument,
    LookupCancelled,
)
from country_services.core.logging_config import setup_logging
from country_services.schemas.country import Country, LocalCurrency
from country_services.services.base import CountryProvider
from country_services.services.country_service import CountryService

__version__ = "1.0.0"

__all__ = [
    "CancelSignalError",
    "Country",
    "CountryProvider",
    "CountryService",
    "ErrorKind",
    "InvalidArgument",
    "LocalCurrency",
    "LookupCancelled",
    "Settings",
    "get_settings",
    "setup_logging",
]
