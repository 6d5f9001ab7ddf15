import logging

from schemadb.Catalog import Catalog
from schemadb.Exceptions import CatalogInvariantError, ErrorKind, QueryError
from schemadb.KeyResolver import KeyResolver
from schemadb.TableDefinition import ForeignKey, TableDefinition

logger = logging.getLogger(__name__)


class ConstraintValidator():
    """
    Checks a proposed table definition against the catalog.

    validate() either returns the definition unchanged or raises the first
    QueryError it finds. It never writes to the catalog.
    """
    def __init__(self, catalog: Catalog, key_resolver: KeyResolver = None):
        self.catalog = catalog
        self.key_resolver = key_resolver if key_resolver is not None else KeyResolver()

    def validate(self, definition: TableDefinition) -> TableDefinition:
        if self.catalog.exists(definition.name):
            logger.debug(f"'{definition.name}' rejected: table exists")
            raise QueryError(ErrorKind.TABLE_EXISTENCE)

        self._assert_well_formed(definition)

        for foreign_key in definition.foreign_keys:
            self._validate_foreign_key(definition, foreign_key)

        return definition

    def validate_drop(self, table_name):
        if not self.catalog.exists(table_name):
            raise QueryError(ErrorKind.NO_SUCH_TABLE)

        # 자기 자신만 참조하는 경우는 삭제 가능
        if self.catalog.referencing_tables(table_name):
            logger.debug(f"'{table_name}' cannot be dropped: still referenced")
            raise QueryError(ErrorKind.DROP_REFERENCED_TABLE, table_name)

    def _assert_well_formed(self, definition: TableDefinition):
        """the parser already guarantees these; reaching a raise here is a bug upstream"""
        names = definition.column_names()
        if len(set(names)) != len(names):
            raise CatalogInvariantError(f"duplicate column name in '{definition.name}'")

        if definition.primary_key is not None:
            if not definition.primary_key.columns:
                raise CatalogInvariantError(f"empty primary key in '{definition.name}'")
            if len(definition.primary_key.column_set()) != len(definition.primary_key.columns):
                raise CatalogInvariantError(f"duplicate primary key column in '{definition.name}'")
            for col in definition.primary_key.columns:
                if not definition.has_column(col):
                    raise CatalogInvariantError(f"primary key column '{col}' not declared in '{definition.name}'")

        for fk in definition.foreign_keys:
            if not fk.columns or len(fk.columns) != len(fk.ref_columns):
                raise CatalogInvariantError(f"malformed foreign key in '{definition.name}'")
            for col in fk.columns:
                if not definition.has_column(col):
                    raise CatalogInvariantError(f"foreign key column '{col}' not declared in '{definition.name}'")

    def _validate_foreign_key(self, definition: TableDefinition, foreign_key: ForeignKey):
        # 자기 자신을 참조하는 경우
        if foreign_key.ref_table == definition.name:
            target = definition
        else:
            target = self.catalog.get(foreign_key.ref_table)
            if target is None:
                raise QueryError(ErrorKind.REFERENCE_TABLE_EXISTENCE)

        if self.key_resolver.is_full_primary_key_match(target, foreign_key.ref_columns):
            for j, k in zip(foreign_key.columns, foreign_key.ref_columns):
                if definition.column(j).data_type != target.column(k).data_type:
                    raise QueryError(ErrorKind.REFERENCE_TYPE)
            return

        logger.debug(f"'{definition.name}' rejected: {foreign_key.ref_columns} is not the key of '{target.name}'")
        # primary key와 겹치지 않으면 없는 column이어도 non primary key
        if not self.key_resolver.overlaps_primary_key(target, foreign_key.ref_columns):
            raise QueryError(ErrorKind.REFERENCE_NON_PRIMARY_KEY)

        for col in foreign_key.ref_columns:
            if not target.has_column(col):
                raise QueryError(ErrorKind.REFERENCE_COLUMN_EXISTENCE)
        raise QueryError(ErrorKind.REFERENCE_NON_FULL_PRIMARY_KEY)
