from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from paywall.errors import UnknownProductError


@dataclass(frozen=True)
class Product:
    id: str
    currency: str
    amount: str  # fixed-point string, compared verbatim with the capture
    label: str


PRICES: Mapping[str, Product] = MappingProxyType({
    "predador": Product(id="predador", currency="BRL", amount="4.99", label="Predador"),
    "cachorro": Product(id="cachorro", currency="BRL", amount="9.99", label="Cachorro"),
})


def lookup(product_id: Optional[str], catalog: Mapping[str, Product] = PRICES) -> Product:
    product = catalog.get(product_id) if product_id else None
    if product is None:
        raise UnknownProductError(product_id)
    return product
