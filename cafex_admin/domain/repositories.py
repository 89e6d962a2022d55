"""Collaborator interfaces used by the order builder"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from .models import Order, Product


class IProductCatalog(ABC):

    @abstractmethod
    def lookup(self, product_id: Union[int, str]) -> Optional[Product]:
        pass


class IOrderStore(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        pass

    @abstractmethod
    def get(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    def update_status(self, order_id: int, status: str) -> Optional[Order]:
        pass
