from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Tuple

from .catalog import CatalogEntry
from .config import CURRENCY_SYMBOL


@dataclass(frozen=True)
class CartLine:
    id: int
    category: str
    description: str
    image: str
    price: float
    title: str
    amount: int

    @classmethod
    def from_entry(cls, entry: CatalogEntry, amount: int = 1) -> "CartLine":
        return cls(amount=amount, **asdict(entry))


# Ordered by first add, unique by id, every amount >= 1
CartState = Tuple[CartLine, ...]

EMPTY_CART: CartState = ()


def add_to_cart(state: CartState, entry: CatalogEntry) -> CartState:
    """Add one unit of `entry`: bump its line if present, else append a new line."""
    lines = []
    found = False
    for line in state:
        if line.id == entry.id:
            line = replace(line, amount=line.amount + 1)
            found = True
        lines.append(line)

    if not found:
        lines.append(CartLine.from_entry(entry))
    return tuple(lines)


def remove_from_cart(state: CartState, entry_id: int) -> CartState:
    """
    Remove one unit of `entry_id`.

    A line at amount 1 is dropped entirely. An id that is not in the cart
    leaves the state untouched and the same object is returned.
    """
    lines = []
    found = False
    for line in state:
        if line.id != entry_id:
            lines.append(line)
            continue
        found = True
        if line.amount > 1:
            lines.append(replace(line, amount=line.amount - 1))

    if not found:
        return state
    return tuple(lines)


def total_item_count(state: CartState) -> int:
    return sum(line.amount for line in state)


def format_price(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def build_cart_summary(state: CartState) -> Dict[str, Any]:
    items = []
    for line in state:
        items.append({
            "id": line.id,
            "title": line.title,
            "category": line.category,
            "image": line.image,
            "amount": line.amount,
            "unitPrice": line.price,
            "unitPriceFormatted": format_price(line.price),
        })

    return {
        "items": items,
        "totalQuantity": total_item_count(state),
    }
