"""
Expense Item Store

This module owns the two expense lists and keeps each one in sync with
its persisted copy.

Flow for every mutation:
1. Replace the in-memory list (one atomic assignment)
2. Serialize the list and write it under the collection's key
3. Notify subscribers

DESIGN DECISION: In-memory state is authoritative. If a write fails, the
change stays applied for the rest of the process and the failure is
reported through the returned StoreOutcome (or raised, in strict mode).
Unreadable stored data on startup is treated as "no data yet".
"""

import operator
from decimal import Decimal
from typing import Callable, Iterable, Optional, Union

from cashapp.audit import AuditLogger
from cashapp.config import CashAppSettings, get_settings
from cashapp.models.item import Category, Collection, ExpenseItem
from cashapp.models.outcome import StoreOutcome
from cashapp.services.codec import decode_items, encode_items
from cashapp.services.storage import (
    DataCorruptError,
    FilePersistenceAdapter,
    PersistenceAdapter,
    PersistenceWriteError,
    StorageError,
)


ChangeCallback = Callable[[Collection], None]


class StoreNotInitializedError(RuntimeError):
    """A mutation was attempted before the store loaded its data."""
    pass


class ItemStore:
    """
    Holds the private and business expense lists.
    
    Build one with ItemStore.initialize(adapter), which loads both lists.
    Mutations are synchronous: by the time append() or remove_at()
    returns, the list has been persisted (or the failure reported) and
    subscribers have been notified.
    """
    
    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        audit_logger: Optional[AuditLogger] = None,
        strict: bool = False,
        keys: Optional[dict[Collection, str]] = None,
        currency_code: str = "USD",
    ):
        """
        Create an empty, unloaded store.
        
        Args:
            adapter: Key-value byte store the lists are persisted to
            audit_logger: Where store events are logged. Defaults to a
                          local structlog-backed logger.
            strict: Raise PersistenceWriteError when a write fails
            keys: Override the storage key per collection
            currency_code: ISO code appended to formatted prices
        """
        self._adapter = adapter
        self._audit = audit_logger or AuditLogger()
        self._strict = strict
        self._currency_code = currency_code
        
        keys = keys or {}
        self._keys = {c: keys.get(c, c.storage_key) for c in Collection}
        self._items: dict[Collection, list[ExpenseItem]] = {c: [] for c in Collection}
        self._subscribers: list[ChangeCallback] = []
        self._load_outcomes: dict[Collection, StoreOutcome] = {}
        self._initialized = False
    
    @classmethod
    def initialize(
        cls,
        adapter: PersistenceAdapter,
        **kwargs,
    ) -> "ItemStore":
        """Create a store and load both collections from the adapter."""
        store = cls(adapter, **kwargs)
        store.load()
        return store
    
    # =========================================================================
    # LOADING
    # =========================================================================
    
    def load(self) -> dict[Collection, StoreOutcome]:
        """
        (Re)load both collections from persistence.
        
        Each collection is loaded independently. A missing key yields an
        empty list; unreadable data also yields an empty list, with a
        DATA_CORRUPT outcome.
        """
        for collection in Collection:
            items, outcome = self._load_collection(collection)
            self._items[collection] = items
            self._load_outcomes[collection] = outcome
        self._initialized = True
        return self.load_outcomes
    
    def _load_collection(
        self,
        collection: Collection,
    ) -> tuple[list[ExpenseItem], StoreOutcome]:
        key = self._keys[collection]
        
        try:
            data = self._adapter.get(key)
        except StorageError as e:
            self._audit.log_load_data_corrupt(collection, key, str(e))
            return [], StoreOutcome.data_corrupt(collection, str(e))
        
        if data is None:
            self._audit.log_items_loaded(collection, key, 0)
            return [], StoreOutcome.success(collection)
        
        try:
            items = decode_items(data)
        except DataCorruptError as e:
            self._audit.log_load_data_corrupt(collection, key, str(e))
            return [], StoreOutcome.data_corrupt(collection, str(e))
        
        self._audit.log_items_loaded(collection, key, len(items))
        return items, StoreOutcome.success(collection)
    
    @property
    def is_initialized(self) -> bool:
        return self._initialized
    
    @property
    def load_outcomes(self) -> dict[Collection, StoreOutcome]:
        """Per-collection outcome of the last load."""
        return dict(self._load_outcomes)
    
    # =========================================================================
    # READ ACCESS
    # =========================================================================
    
    def items(self, collection: Union[Collection, str]) -> tuple[ExpenseItem, ...]:
        """Current contents of a collection, in insertion order."""
        return tuple(self._items[Collection(collection)])
    
    @property
    def private_items(self) -> tuple[ExpenseItem, ...]:
        return self.items(Collection.PRIVATE)
    
    @property
    def business_items(self) -> tuple[ExpenseItem, ...]:
        return self.items(Collection.BUSINESS)
    
    def total(self, collection: Union[Collection, str]) -> Decimal:
        """Sum of prices in a collection."""
        return sum(
            (item.price for item in self._items[Collection(collection)]),
            Decimal("0"),
        )
    
    def format_price(self, price: Decimal) -> str:
        """Render a price for display, e.g. "1,234.50 USD"."""
        return f"{price:,.2f} {self._currency_code}"
    
    def formatted_total(self, collection: Union[Collection, str]) -> str:
        return self.format_price(self.total(collection))
    
    def storage_key(self, collection: Union[Collection, str]) -> str:
        return self._keys[Collection(collection)]
    
    # =========================================================================
    # MUTATIONS
    # =========================================================================
    
    def append(
        self,
        collection: Union[Collection, str],
        item: ExpenseItem,
    ) -> StoreOutcome:
        """
        Append an item to the end of a collection and persist it.
        
        Raises:
            StoreNotInitializedError: If the store was never loaded
            PersistenceWriteError: In strict mode, if the write fails.
                                   The item is still appended.
        """
        collection = Collection(collection)
        self._require_initialized()
        
        self._items[collection] = [*self._items[collection], item]
        self._audit.log_item_added(collection, item)
        return self._commit(collection)
    
    def remove_at(
        self,
        collection: Union[Collection, str],
        offsets: Iterable[int],
    ) -> StoreOutcome:
        """
        Remove the items at the given positions and persist the result.
        
        Positions refer to the ordering before the call and are removed
        together, so removing {0, 2} from [A, B, C, D] leaves [B, D].
        
        Raises:
            IndexError: If any offset is out of range. Nothing is removed.
            TypeError: If an offset is not an integer. Nothing is removed.
            StoreNotInitializedError: If the store was never loaded
            PersistenceWriteError: In strict mode, if the write fails
        """
        collection = Collection(collection)
        self._require_initialized()
        
        current = self._items[collection]
        positions = sorted({operator.index(offset) for offset in offsets})
        for position in positions:
            if position < 0 or position >= len(current):
                raise IndexError(
                    f"Offset {position} out of range for {collection.value} "
                    f"collection of {len(current)} items"
                )
        
        removal = set(positions)
        self._items[collection] = [
            item for index, item in enumerate(current) if index not in removal
        ]
        self._audit.log_items_removed(
            collection, positions, len(self._items[collection])
        )
        return self._commit(collection)
    
    def add_entry(
        self,
        name: str,
        category: Union[Category, str],
        price: Union[Decimal, float, int, str],
    ) -> ExpenseItem:
        """
        Record a new expense from the "add expense" form.
        
        Personal entries go to the private list, everything else to the
        business list. Persistence problems follow the same policy as
        append(): reported in the log, or raised in strict mode.
        """
        item = ExpenseItem.create(name=name, category=category, price=price)
        self.append(Collection.for_category(category), item)
        return item
    
    # =========================================================================
    # OBSERVATION
    # =========================================================================
    
    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback invoked with the collection after each mutation.
        
        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)
        
        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        
        return unsubscribe
    
    # =========================================================================
    # INTERNALS
    # =========================================================================
    
    def _require_initialized(self) -> None:
        if not self._initialized:
            raise StoreNotInitializedError(
                "ItemStore.load() must run before the store is mutated"
            )
    
    def _commit(self, collection: Collection) -> StoreOutcome:
        outcome = self._persist(collection)
        for callback in list(self._subscribers):
            callback(collection)
        
        if self._strict and not outcome.ok:
            raise PersistenceWriteError(outcome.message)
        return outcome
    
    def _persist(self, collection: Collection) -> StoreOutcome:
        key = self._keys[collection]
        try:
            self._adapter.set(key, encode_items(self._items[collection]))
        # Host adapters may raise anything; memory stays authoritative
        except Exception as e:
            self._audit.log_write_failed(
                collection, key, str(e), total=self.total(collection)
            )
            return StoreOutcome.write_failed(collection, str(e))
        return StoreOutcome.success(collection)


def create_item_store(
    settings: Optional[CashAppSettings] = None,
    adapter: Optional[PersistenceAdapter] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> ItemStore:
    """
    Factory function wiring settings, persistence and logging into a store.
    
    Args:
        settings: Defaults to get_settings()
        adapter: Defaults to a file adapter under settings.storage_dir
        audit_logger: Defaults to a local structlog-backed logger
        
    Returns:
        An initialized ItemStore
    """
    settings = settings or get_settings()
    if adapter is None:
        adapter = FilePersistenceAdapter(
            settings.storage_dir,
            write_attempts=settings.write_retry_attempts,
        )
    
    return ItemStore.initialize(
        adapter,
        audit_logger=audit_logger,
        strict=settings.strict_persistence,
        currency_code=settings.currency_code,
        keys={c: settings.key_for(c) for c in Collection},
    )
