"""
Pydantic models of the REST Countries wire payloads.

Only the fields the domain needs are declared; everything else in the body is
ignored. A payload that fails validation is a malformed response, never a
record with default values, so no field here has a default. Fields are strict:
a quoted number or a boolean where a number belongs is malformed, not coerced.
"""

from typing import Any

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, field_validator

from country_services.domain.entities.country import CountryInfo, LocalCurrency


class CurrencyPayload(BaseModel):
    code: StrictStr
    symbol: StrictStr


class CountryCurrencyPayload(BaseModel):
    """Body of ``GET /alpha/{code}``."""

    name: StrictStr
    currencies: list[CurrencyPayload] = Field(min_length=1)

    @field_validator("currencies", mode="before")
    @classmethod
    def _currency_map_to_list(cls, value: Any) -> Any:
        # Newer API versions key currencies by code: {"EUR": {"name": ..., "symbol": ...}}
        if isinstance(value, dict):
            return [
                {"code": code, **entry} if isinstance(entry, dict) and "code" not in entry else entry
                for code, entry in value.items()
            ]
        return value

    def to_entity(self) -> LocalCurrency:
        first = self.currencies[0]
        return LocalCurrency(
            country_name=self.name,
            currency_code=first.code,
            currency_symbol=first.symbol,
        )


class CountryInfoPayload(BaseModel):
    """One element of the array returned by ``GET /capital/{capital}``."""

    name: StrictStr
    capital: StrictStr
    # whole-number areas arrive as JSON integers, e.g. 207600
    area: StrictFloat | StrictInt
    population: StrictInt
    flag: StrictStr

    def to_entity(self) -> CountryInfo:
        return CountryInfo(
            name=self.name,
            capital_name=self.capital,
            area=float(self.area),
            population=self.population,
            flag=self.flag,
        )
