"""
Example: Building query parameters from a search filter record.

This shows the three ways a nested record can be composed:
- dive: nested keys land directly in the parent dict
- dotted: nested keys are prefixed with the parent key
- default: the nested dict is stored under the parent key
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from structmap import StructMapper, struct_to_map, tagged_field
from structmap.core.logger import get_logger

logger = get_logger("structmap.examples", level="DEBUG")


@dataclass
class Paging:
    page: int = tagged_field(default=1, json="page", db="page")
    size: int = tagged_field(default=50, json="size,omitempty", db="size")


@dataclass
class Period:
    start: Optional[date] = tagged_field(default=None, json="from", db="start")
    end: Optional[date] = tagged_field(default=None, json="to", db="end")

    def to_map_entry(self) -> Tuple[str, object]:
        if self.start and self.end:
            return "period", f"{self.start.isoformat()}..{self.end.isoformat()}"
        # Defer to the regular mapping
        return "", None


@dataclass
class CustomerFilter:
    name: str = tagged_field(default="", json="name,omitempty,wildcard", db="name,wildcard")
    country: str = tagged_field(default="", json="country,omitempty", db="country")
    tags: List[str] = tagged_field(default_factory=list, json="tags,omitempty", db="-")
    paging: Paging = tagged_field(default_factory=Paging, json="paging,dive", db="-")
    period: Period = tagged_field(default_factory=Period, json="period,omitempty", db="period,dotted")
    _internal_note: str = field(default="", metadata={"json": "note"})


class Address(BaseModel):
    city: str = Field(default="", json_schema_extra={"json": "city"})
    zip_code: Optional[str] = Field(default=None, json_schema_extra={"json": "zip,omitempty"})


class Customer(BaseModel):
    id: int = Field(json_schema_extra={"json": "id"})
    address: Address = Field(default_factory=Address, json_schema_extra={"json": "address"})


# =============================================================================
# Example 1: HTTP query parameters (json namespace)
# =============================================================================
flt = CustomerFilter(name="smith", tags=["vip"], paging=Paging(page=3))
params = struct_to_map(flt, "json")
logger.info("Query params: %s", params)
# {'name': '%smith%', 'tags': ['vip'], 'page': 3, 'size': 50}


# =============================================================================
# Example 2: Database filter with dotted period and an override hook
# =============================================================================
db_mapper = StructMapper(namespace="db", override_method="to_map_entry")
flt = CustomerFilter(name="smith", country="NL", period=Period(start=date(2026, 1, 1)))
logger.info("DB filter: %s", db_mapper.convert(flt))
# {'name': '%smith%', 'country': 'NL', 'period.start': datetime.date(2026, 1, 1)}

flt = CustomerFilter(period=Period(start=date(2026, 1, 1), end=date(2026, 3, 31)))
logger.info("DB filter with override: %s", db_mapper.convert(flt))
# {'name': '%%', 'country': '', 'period': '2026-01-01..2026-03-31'}


# =============================================================================
# Example 3: Pydantic records, nested submap
# =============================================================================
logger.info("Payload: %s", struct_to_map(Customer(id=7, address=Address(city="Utrecht"))))
# {'id': 7, 'address': {'city': 'Utrecht'}}
