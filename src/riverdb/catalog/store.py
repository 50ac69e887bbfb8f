import copy
import threading
from typing import List, Optional

SAMPLE_ITEMS = [
    {
        "case": "Product 1",
        "issue": "Electronics",
        "economic": 499.99,
        "socio": "A great electronic device",
        "ecologic": "A detailed description of the product with all its details.",
    },
    {
        "name": "Product 2",
        "category": "Furniture",
        "price": 299.99,
        "shortDescription": "A comfortable piece of furniture",
        "description": "Detailed description of the piece of furniture.",
        "imageUrl": "/images/product2.jpg",
        "properties": {
            "Material": "Wood",
            "Color": "Brown",
            "Dimensions": "120 x 80 x 75 cm",
        },
    },
]


class CatalogStore:
    """
    In-memory catalog of free-form items with full CRUD.

    Ids are assigned by the store and never reused, even after a delete.
    Items are copied in and out so callers can't mutate stored state.
    """

    def __init__(self, items: List[dict] = None):
        self._lock = threading.Lock()
        self._items: List[dict] = []
        self._next_id = 1
        for item in items or []:
            self.create(item)

    def list(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._items)

    def get(self, item_id: int) -> Optional[dict]:
        with self._lock:
            index = self._find(item_id)
            return copy.deepcopy(self._items[index]) if index is not None else None

    def create(self, data: dict) -> dict:
        with self._lock:
            item = copy.deepcopy(data)
            item["id"] = self._next_id
            self._next_id += 1
            self._items.append(item)
            return copy.deepcopy(item)

    def update(self, item_id: int, data: dict) -> Optional[dict]:
        """Shallow-merge data into an item. The id can't be changed."""
        with self._lock:
            index = self._find(item_id)
            if index is None:
                return None
            merged = {**self._items[index], **copy.deepcopy(data), "id": item_id}
            self._items[index] = merged
            return copy.deepcopy(merged)

    def delete(self, item_id: int) -> Optional[dict]:
        with self._lock:
            index = self._find(item_id)
            if index is None:
                return None
            return self._items.pop(index)

    def _find(self, item_id: int) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item["id"] == item_id:
                return index
        return None
