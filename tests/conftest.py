"""Pytest fixtures for Starnamer tests."""

import asyncio
import gzip

import pytest

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.parser import parse_catalog
from starnamer.core.exceptions import CatalogFetchError
from starnamer.generator.models import (
    GenerationRequest,
    GenerationResponse,
    StarProposal,
)

HEADER = "id,hip,proper,ra,dec,dist,mag,absmag,spect,con,var,x,y,z"

NAMED_ROWS = [
    "91262,91262,Vega,18.6156,38.7836,7.68,0.03,0.60,A0V,Lyr,,1.97,-6.19,4.80",
    "97421,97649,Altair,19.8464,8.8683,5.13,0.76,2.21,A7V,Aql,,1.54,-4.83,0.79",
    "101764,102098,Deneb,20.6905,45.2803,802.0,1.25,-8.38,A2Ia,Cyg,,-0.1,-0.1,0.1",
    "32263,32349,Sirius,6.7525,-16.7161,2.64,-1.44,1.45,A0m...,CMa,,-0.49,2.48,-0.76",
    "27919,27989,Betelgeuse,5.9195,7.4071,152.7,0.45,-5.47,M2Ib,Ori,alp Ori,4.4,151.2,19.7",
    "24378,24436,Rigel,5.2423,-8.2016,264.6,0.18,-6.93,B8Ia,Ori,,47.7,257.2,-37.7",
    "69451,69673,Arcturus,14.2610,19.1824,11.26,-0.05,-0.31,K1.5III,Boo,,-8.9,-5.9,3.7",
    "37173,37279,Procyon,7.6550,5.2250,3.51,0.40,2.68,F5IV-V,CMi,,-1.1,3.3,0.3",
    "24549,24608,Capella,5.2782,45.9980,12.94,0.08,-0.48,G6III,Aur,,1.8,8.7,9.3",
    "65378,65474,Spica,13.4199,-11.1613,79.3,0.98,-3.55,B1V,Vir,alp Vir,-63.2,-45.4,-15.4",
    "80404,80763,Antares,16.4901,-26.4320,169.5,1.06,-5.09,M1.5Iab,Sco,alp Sco,-48.4,-143.1,-75.5",
]

UNNAMED_ROWS = [
    "100,,,1.0,2.0,50.0,6.5,3.0,G2V,Psc,,0,0,0",
    "101,,,2.0,-3.0,150.0,7.2,1.3,K0,Cet,,0,0,0",
]

MALFORMED_ROWS = [
    "0,,Sol,0.0,0.0,0.0,-26.7,4.85,G2V,,,0,0,0",
    "abc,,Bogus,1.0,1.0,1.0,1.0,1.0,G,,,0,0,0",
    "102,,,25.0,1.0,1.0,1.0,1.0,G,,,0,0,0",
    "103,1,Short,1.0",
    "91262,91262,Vega Again,18.6,38.7,7.68,0.03,0.6,A0V,Lyr,,0,0,0",
]

# Named stars ranked brightest first, as the index orders them
NAMED_BY_MAGNITUDE = [
    "Sirius",
    "Arcturus",
    "Vega",
    "Capella",
    "Rigel",
    "Procyon",
    "Betelgeuse",
    "Altair",
    "Spica",
    "Antares",
    "Deneb",
]


def build_csv(rows: list[str]) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


@pytest.fixture
def catalog_csv() -> str:
    """Catalog text with named, unnamed and malformed rows."""
    return (
        "# HYG subset for tests\n\n"
        + HEADER + "\n"
        + MALFORMED_ROWS[0] + "\n"
        + "\n".join(NAMED_ROWS + UNNAMED_ROWS + MALFORMED_ROWS[1:])
        + "\n"
    )


@pytest.fixture
def clean_catalog_csv() -> str:
    """Catalog text with no malformed rows."""
    return build_csv(NAMED_ROWS + UNNAMED_ROWS)


@pytest.fixture
def catalog_gz(catalog_csv: str) -> bytes:
    """Gzip-compressed catalog payload."""
    return gzip.compress(catalog_csv.encode("utf-8"))


@pytest.fixture
def index(catalog_csv: str) -> CatalogIndex:
    """Index built from the test catalog."""
    return CatalogIndex(parse_catalog(catalog_csv).records)


class FakeCatalogSource:
    """In-memory catalog source that counts fetches.

    If ``gated`` is set, fetches block until :meth:`release` is called.
    """

    def __init__(
        self,
        payload: bytes = b"",
        error: Exception | None = None,
        delay: float = 0.0,
        gated: bool = False,
    ):
        self.payload = payload
        self.error = error
        self.delay = delay
        self.gated = gated
        self.fetch_count = 0
        self.closed = False
        self._gate: asyncio.Event | None = None

    def describe(self) -> str:
        return "memory://catalog"

    def release(self) -> None:
        self.gated = False
        if self._gate is not None:
            self._gate.set()

    async def fetch(self) -> bytes:
        self.fetch_count += 1
        if self.gated:
            self._gate = asyncio.Event()
            await self._gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload

    async def close(self) -> None:
        self.closed = True


class FakeGenerator:
    """Star generator returning a fixed response."""

    def __init__(
        self,
        names: list[str] | None = None,
        descriptions: list[str] | None = None,
        success: bool = True,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        names = names or []
        descriptions = descriptions or [f"{name} shines for you" for name in names]
        self.response = GenerationResponse(
            success=success,
            stars=[
                StarProposal(name=name, description=description)
                for name, description in zip(names, descriptions)
            ],
            source="ai",
        )
        self.error = error
        self.delay = delay
        self.requests: list[GenerationRequest] = []
        self.closed = False

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


class StaticCatalog:
    """Catalog provider handing out a fixed index (or None)."""

    def __init__(self, index: CatalogIndex | None):
        self.index = index

    async def get_index(self) -> CatalogIndex | None:
        return self.index


@pytest.fixture
def failing_source() -> FakeCatalogSource:
    """Source whose fetch always fails."""
    return FakeCatalogSource(error=CatalogFetchError("boom", source="memory://"))
