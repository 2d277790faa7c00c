"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcart.domain.exceptions import CartNotFoundError
from shopcart.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_active_for_user(self, user_id: str) -> Cart | None:
        """Return the user's active cart, or None if they have none."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart (whole document)."""

    def get_or_create_active(self, user_id: str) -> Cart:
        """Return the user's active cart, opening and saving one if absent.

        This is the only place a cart comes into existence, so a user
        never ends up with two active carts.
        """
        cart = self.get_active_for_user(user_id)
        if cart is None:
            cart = Cart.open_for(user_id)
            self.save(cart)
        return cart

    def get_active_or_raise(self, user_id: str) -> Cart:
        cart = self.get_active_for_user(user_id)
        if cart is None:
            raise CartNotFoundError("Cart not found")
        return cart
