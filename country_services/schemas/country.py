from pydantic import BaseModel, ConfigDict
from typing import List, Optional


# Public results


class LocalCurrency(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_name: str
    currency_code: str
    currency_symbol: Optional[str] = None


class Country(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    capital_name: str
    area: float
    population: int
    flag: str


# Wire shapes (restcountries v2). Unknown keys are dropped.


class CurrencyInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    symbol: Optional[str] = None


class LocalCurrencyInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    currencies: List[CurrencyInfo]

    def to_local_currency(self) -> LocalCurrency:
        # IndexError on an empty list is reported by the caller as EMPTY_RESULT
        first = self.currencies[0]
        return LocalCurrency(
            country_name=self.name,
            currency_code=first.code,
            currency_symbol=first.symbol,
        )


class CountryInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    capital: str
    area: float
    population: int
    flag: str

    def to_country(self) -> Country:
        return Country(
            name=self.name,
            capital_name=self.capital,
            area=self.area,
            population=self.population,
            flag=self.flag,
        )
