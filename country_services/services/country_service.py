import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from country_services.core.config import Settings, get_settings
from country_services.core.errors import CancelSignalError, ErrorKind, LookupCancelled
from country_services.core.result import Failure, Result, Success, unwrap
from country_services.schemas.country import (
    Country,
    CountryInfo,
    LocalCurrency,
    LocalCurrencyInfo,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_identifier(value: Optional[str]) -> Optional[Failure]:
    if value is None:
        return Failure(ErrorKind.NULL_ARGUMENT)
    if not isinstance(value, str) or not value.strip():
        return Failure(ErrorKind.BLANK_ARGUMENT)
    return None


async def _until_cancelled(aw: Awaitable[T], cancel_event: Optional[asyncio.Event]) -> T:
    """Await `aw` unless `cancel_event` fires first."""
    if cancel_event is None:
        return await aw
    work = asyncio.ensure_future(aw)
    if cancel_event.is_set():
        work.cancel()
        await asyncio.wait({work})
        raise LookupCancelled("cancelled before the request was sent")

    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {work, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        waiter.cancel()
        if not work.done():
            work.cancel()
            # let the transport unwind before the client is closed
            await asyncio.wait({work})

    if work in done:
        return work.result()
    error = waiter.exception()
    if error is not None:
        raise CancelSignalError("waiting on the cancel event failed") from error
    raise LookupCancelled("cancelled while waiting for the response")


def _to_local_currency(payload: Any) -> "Result[LocalCurrency]":
    try:
        info = LocalCurrencyInfo.model_validate(payload)
    except ValidationError as e:
        return Failure(ErrorKind.DECODE, e)
    try:
        return Success(info.to_local_currency())
    except IndexError as e:
        return Failure(ErrorKind.EMPTY_RESULT, e)


def _to_country(payload: Any) -> "Result[Country]":
    if not isinstance(payload, list):
        return Failure(
            ErrorKind.DECODE,
            TypeError(f"expected a JSON array, got {type(payload).__name__}"),
        )
    if not payload:
        return Failure(ErrorKind.EMPTY_RESULT, IndexError("capital lookup returned []"))
    try:
        return Success(CountryInfo.model_validate(payload[0]).to_country())
    except ValidationError as e:
        return Failure(ErrorKind.DECODE, e)


class CountryService:
    """Client for the REST Countries v2 API.

    One HTTP client is opened per call and closed before the call returns.
    The transports are only injectable so tests can stub the network.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._async_transport = async_transport

    def _currency_url(self, code: str) -> str:
        base = self.settings.base_url.rstrip("/")
        return f"{base}/alpha/{code}?fields={self.settings.currency_fields}"

    def _capital_url(self, capital: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/capital/{capital}"

    def _log_failure(self, target: Optional[str], result: "Result[T]") -> "Result[T]":
        if isinstance(result, Failure):
            logger.warning(
                "[RESTCOUNTRIES] lookup %r failed (%s): %r",
                target,
                result.kind.value,
                result.cause,
            )
        return result

    # HTTP

    def _get_json(self, url: str) -> "Result[Any]":
        logger.debug("[RESTCOUNTRIES] GET %s", url)
        try:
            with httpx.Client(
                transport=self._transport,
                timeout=self.settings.timeout_seconds,
            ) as client:
                r = client.get(url)
                r.raise_for_status()
                return Success(r.json())
        except httpx.HTTPStatusError as e:
            return Failure(ErrorKind.HTTP_STATUS, e)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Failure(ErrorKind.TRANSPORT, e)
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError
            return Failure(ErrorKind.DECODE, e)

    async def _get_json_async(
        self, url: str, cancel_event: Optional[asyncio.Event]
    ) -> "Result[Any]":
        logger.debug("[RESTCOUNTRIES] GET %s (async)", url)
        try:
            async with httpx.AsyncClient(
                transport=self._async_transport,
                timeout=self.settings.timeout_seconds,
            ) as client:
                request = client.build_request("GET", url)
                r = await _until_cancelled(client.send(request, stream=True), cancel_event)
                try:
                    r.raise_for_status()
                    await _until_cancelled(r.aread(), cancel_event)
                finally:
                    await r.aclose()
                return Success(r.json())
        except LookupCancelled as e:
            return Failure(ErrorKind.CANCELLED, e)
        except CancelSignalError as e:
            return Failure(ErrorKind.SIGNAL, e)
        except httpx.HTTPStatusError as e:
            return Failure(ErrorKind.HTTP_STATUS, e)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Failure(ErrorKind.TRANSPORT, e)
        except ValueError as e:
            return Failure(ErrorKind.DECODE, e)

    # Currency by alpha-2 / alpha-3 code

    def fetch_local_currency(self, code: Optional[str]) -> "Result[LocalCurrency]":
        failure = _check_identifier(code)
        if failure is not None:
            return self._log_failure(code, failure)
        result = self._get_json(self._currency_url(code))
        if isinstance(result, Success):
            result = _to_local_currency(result.value)
        return self._log_failure(code, result)

    async def fetch_local_currency_async(
        self, code: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> "Result[LocalCurrency]":
        failure = _check_identifier(code)
        if failure is not None:
            return self._log_failure(code, failure)
        result = await self._get_json_async(self._currency_url(code), cancel_event)
        if isinstance(result, Success):
            result = _to_local_currency(result.value)
        return self._log_failure(code, result)

    def get_local_currency(self, code: Optional[str]) -> LocalCurrency:
        """Currency of the country with ISO 3166-1 alpha-2 or alpha-3 `code`.

        Raises InvalidArgument for a null, blank or unknown code and for any
        transport or decoding failure.
        """
        return unwrap(self.fetch_local_currency(code))

    async def get_local_currency_async(
        self, code: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> LocalCurrency:
        """Async `get_local_currency`; setting `cancel_event` aborts the request."""
        return unwrap(await self.fetch_local_currency_async(code, cancel_event))

    # Country by capital

    def fetch_country_by_capital(self, capital: Optional[str]) -> "Result[Country]":
        failure = _check_identifier(capital)
        if failure is not None:
            return self._log_failure(capital, failure)
        result = self._get_json(self._capital_url(capital))
        if isinstance(result, Success):
            result = _to_country(result.value)
        return self._log_failure(capital, result)

    async def fetch_country_by_capital_async(
        self, capital: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> "Result[Country]":
        failure = _check_identifier(capital)
        if failure is not None:
            return self._log_failure(capital, failure)
        result = await self._get_json_async(self._capital_url(capital), cancel_event)
        if isinstance(result, Success):
            result = _to_country(result.value)
        return self._log_failure(capital, result)

    def get_country_by_capital(self, capital: Optional[str]) -> Country:
        """Country whose capital is `capital`; first match wins."""
        return unwrap(self.fetch_country_by_capital(capital))

    async def get_country_by_capital_async(
        self, capital: Optional[str], cancel_event: Optional[asyncio.Event] = None
    ) -> Country:
        return unwrap(await self.fetch_country_by_capital_async(capital, cancel_event))
