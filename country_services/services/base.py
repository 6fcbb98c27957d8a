import asyncio
from typing import Optional, Protocol, runtime_checkable

from country_services.schemas.country import Country, LocalCurrency


@runtime_checkable
class CountryProvider(Protocol):
    """Lookups of currency by country code and of country by capital.

    Every failure is raised as ``InvalidArgument``.
    """

    def get_local_currency(self, code: Optional[str]) -> LocalCurrency: ...

    async def get_local_currency_async(
        self, code: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> LocalCurrency: ...

    def get_country_by_capital(self, capital: Optional[str]) -> Country: ...

    async def get_country_by_capital_async(
        self, capital: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> Country: ...
