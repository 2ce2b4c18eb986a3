from typing import Dict

from .cart import EMPTY_CART, CartState

DEFAULT_SESSION = "default"

# session id → current cart; lives as long as the process
CARTS: Dict[str, CartState] = {}


def get_cart(session_id: str = DEFAULT_SESSION) -> CartState:
    return CARTS.get(session_id, EMPTY_CART)


def save_cart(session_id: str, state: CartState) -> None:
    # Transitions run one at a time on the event loop, so the last write wins
    if state:
        CARTS[session_id] = state
    else:
        CARTS.pop(session_id, None)


def clear_sessions() -> None:
    CARTS.clear()
