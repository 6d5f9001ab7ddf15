import logging

from schemadb.Catalog import Catalog
from schemadb.ConstraintValidator import ConstraintValidator
from schemadb.TableDefinition import TableDefinition

logger = logging.getLogger(__name__)


class SchemaMutator():
    """
    The only writer of the catalog.

    create() and drop() hold the catalog lock from the first check to the
    final write, so two statements on the same name cannot interleave.
    """
    def __init__(self, catalog: Catalog, validator: ConstraintValidator = None):
        self.catalog = catalog
        self.validator = validator if validator is not None else ConstraintValidator(catalog)

    def create(self, definition: TableDefinition) -> TableDefinition:
        with self.catalog.lock:
            validated = self.validator.validate(definition)
            self.commit(validated)
        return validated

    def commit(self, definition: TableDefinition):
        """call only with a definition that passed ConstraintValidator.validate"""
        self.catalog.register(definition)
        logger.info(f"'{definition.name}' table committed")

    def drop(self, table_name):
        with self.catalog.lock:
            self.validator.validate_drop(table_name)
            self.catalog.unregister(table_name)
        logger.info(f"'{table_name}' table dropped")
