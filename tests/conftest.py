import pytest

from schemadb.Catalog import Catalog
from schemadb.ConstraintValidator import ConstraintValidator
from schemadb.DDLTransformer import DDLTransformer, build_parser
from schemadb.SchemaMutator import SchemaMutator
from schemadb.TableDefinition import Column, ForeignKey, PrimaryKey, TableDefinition


class MemoryStore:
    """Dict-backed stand-in for DatabaseHandler."""

    def __init__(self, records=None):
        self.records = dict(records or {})
        self.fail_writes = False

    def metadata_items(self):
        return list(self.records.items())

    def metadata_put(self, key, data):
        if self.fail_writes:
            raise OSError("store unavailable")
        self.records[key] = data

    def metadata_delete(self, key):
        if self.fail_writes:
            raise OSError("store unavailable")
        del self.records[key]


def _make_table(name, columns, primary_key=None, foreign_keys=()):
    """
    columns: list of names (typed INT) or (name, type) pairs
    foreign_keys: list of (local columns, target table, target columns)
    """
    cols = []
    for col in columns:
        if isinstance(col, tuple):
            cols.append(Column(col[0], col[1]))
        else:
            cols.append(Column(col, "INT"))

    pk = PrimaryKey(tuple(primary_key)) if primary_key else None
    for col in cols:
        if pk is not None and col.name in pk.columns:
            col.not_null = True

    fks = [ForeignKey(tuple(local), target, tuple(ref)) for local, target, ref in foreign_keys]
    return TableDefinition(name, cols, pk, fks)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def validator(catalog):
    return ConstraintValidator(catalog)


@pytest.fixture
def mutator(catalog):
    return SchemaMutator(catalog)


@pytest.fixture(scope="session")
def sql_parser():
    return build_parser()


@pytest.fixture
def transformer(mutator):
    return DDLTransformer("test", mutator)


@pytest.fixture
def run_sql(sql_parser, transformer):
    def _run(command):
        return transformer.transform(sql_parser.parse(command))
    return _run


@pytest.fixture
def make_table():
    return _make_table
