import threading

import pytest

from schemadb.Catalog import Catalog
from schemadb.Exceptions import ErrorKind, QueryError
from schemadb.SchemaMutator import SchemaMutator


def test_create_twice(mutator, catalog, make_table):
    mutator.create(make_table("T", ["ID"], primary_key=["ID"]))

    with pytest.raises(QueryError) as excinfo:
        mutator.create(make_table("T", ["ID", "OTHER"]))
    assert excinfo.value.kind is ErrorKind.TABLE_EXISTENCE

    assert catalog.table_names() == ["T"]
    assert catalog.get("T").column_names() == ["ID"]


def test_users_orders_scenario(mutator, catalog, make_table):
    mutator.create(make_table("USERS", ["ID"], primary_key=["ID"]))
    mutator.create(make_table("ORDERS", ["ID", "USER_ID"],
                              foreign_keys=[(["USER_ID"], "USERS", ["ID"])]))

    assert len(catalog) == 2


def test_failed_create_commits_nothing(mutator, catalog, make_table):
    mutator.create(make_table("COMPOSITE", ["A", "B"], primary_key=["A", "B"]))

    with pytest.raises(QueryError) as excinfo:
        mutator.create(make_table("CHILD", ["X", "Y"], foreign_keys=[
            (["X", "Y"], "COMPOSITE", ["A", "B"]),
            (["X"], "COMPOSITE", ["A"]),
        ]))
    assert str(excinfo.value) == "foreign key does not references full primary key"

    assert catalog.table_names() == ["COMPOSITE"]


def test_failed_create_does_not_touch_store(store, make_table):
    mutator = SchemaMutator(Catalog(store=store))
    mutator.create(make_table("USERS", ["ID"], primary_key=["ID"]))
    before = dict(store.records)

    with pytest.raises(QueryError):
        mutator.create(make_table("ORDERS", ["USER_ID"], foreign_keys=[(["USER_ID"], "USERS", ["MISSING"])]))

    assert store.records == before


def test_drop(mutator, catalog, make_table):
    mutator.create(make_table("USERS", ["ID"], primary_key=["ID"]))
    mutator.create(make_table("ORDERS", ["ID", "USER_ID"],
                              foreign_keys=[(["USER_ID"], "USERS", ["ID"])]))

    with pytest.raises(QueryError) as excinfo:
        mutator.drop("USERS")
    assert excinfo.value.kind is ErrorKind.DROP_REFERENCED_TABLE

    mutator.drop("ORDERS")
    mutator.drop("USERS")
    assert len(catalog) == 0

    with pytest.raises(QueryError) as excinfo:
        mutator.drop("USERS")
    assert excinfo.value.kind is ErrorKind.NO_SUCH_TABLE


def test_concurrent_create_same_name(mutator, catalog, make_table):
    start = threading.Barrier(8)
    created = []
    rejected = []

    def worker(i):
        start.wait()
        try:
            mutator.create(make_table("RACE", [f"C{i}"]))
            created.append(i)
        except QueryError as e:
            rejected.append(e.kind)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert rejected == [ErrorKind.TABLE_EXISTENCE] * 7
    assert catalog.table_names() == ["RACE"]
