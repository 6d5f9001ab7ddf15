import logging
import threading

from schemadb.Exceptions import CatalogInvariantError
from schemadb.TableDefinition import TableDefinition

logger = logging.getLogger(__name__)


class Catalog():
    """
    Committed table definitions keyed by table name.

    Only SchemaMutator calls register/unregister. Everyone else reads.
    If a store (see DatabaseHandler) is given, definitions are restored from it
    on startup and every change is written to it before the in-memory map.
    """
    def __init__(self, store=None):
        self.store = store
        self.lock = threading.RLock()
        self._tables = {}

        if self.store is not None:
            self.__restore_tables()

    def __restore_tables(self):
        """database startup"""
        for table_name, metadata in self.store.metadata_items():
            self._tables[table_name] = TableDefinition.from_metadata(table_name, metadata)
        logger.info(f"Restored {len(self._tables)} table(s) from store")

    def __len__(self):
        return len(self._tables)

    def __contains__(self, name):
        return self.exists(name)

    def exists(self, name) -> bool:
        return name in self._tables

    def get(self, name) -> TableDefinition:
        return self._tables.get(name)

    def table_names(self) -> list[str]:
        return list(self._tables.keys())

    def referencing_tables(self, name) -> list[str]:
        """names of the other tables holding a foreign key to `name`"""
        return [
            table_name for table_name, definition in self._tables.items()
            if table_name != name and definition.references(name)
        ]

    def register(self, definition: TableDefinition):
        with self.lock:
            if definition.name in self._tables:
                raise CatalogInvariantError(f"table '{definition.name}' registered twice")

            if self.store is not None:
                self.store.metadata_put(definition.name, definition.to_metadata())
            self._tables[definition.name] = definition

    def unregister(self, name):
        with self.lock:
            if name not in self._tables:
                raise CatalogInvariantError(f"table '{name}' is not registered")

            if self.store is not None:
                self.store.metadata_delete(name)
            del self._tables[name]
