from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Column:
    name: str
    data_type: str          # "INT", "CHAR(10)", "DATE" ... 비교만 하고 해석하지 않는다.
    not_null: bool = False


@dataclass(frozen=True)
class PrimaryKey:
    columns: tuple

    def column_set(self) -> frozenset:
        return frozenset(self.columns)


@dataclass(frozen=True)
class ForeignKey:
    columns: tuple
    ref_table: str
    ref_columns: tuple


@dataclass
class TableDefinition:
    """
    A parsed CREATE TABLE statement.

    Metadata follows the format below
    {'column_order':    ['C1', 'C2', 'C3'],
     'columns':         {
                        'C1': {'data_type': 'INT', 'not_null': True},
                        'C2': {'data_type': 'INT', 'not_null': False},
                        'C3': {'data_type': 'DATE', 'not_null': False}},
     'primary_keys':    ['C1'],
     'foreign_keys':    [
                        {'fk_columns': ['C2'], 'fk_ref_table': 'OTHER', 'fk_ref_columns': ['ID']}]
     }
    """
    name: str
    columns: list[Column] = field(default_factory=list)
    primary_key: PrimaryKey | None = None
    foreign_keys: list[ForeignKey] = field(default_factory=list)

    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    def column(self, name) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def has_column(self, name) -> bool:
        return self.column(name) is not None

    def primary_key_columns(self) -> list[str]:
        if self.primary_key is None:
            return []
        return list(self.primary_key.columns)

    def foreign_key_columns(self) -> set[str]:
        tmp = set()
        for fk in self.foreign_keys:
            tmp.update(fk.columns)
        return tmp

    def references(self, table_name) -> bool:
        for fk in self.foreign_keys:
            if fk.ref_table == table_name:
                return True
        return False

    def to_metadata(self) -> dict:
        metadata = {}
        metadata["column_order"] = self.column_names()
        metadata["columns"] = {
            col.name: {"data_type": col.data_type, "not_null": col.not_null}
            for col in self.columns
        }
        metadata["primary_keys"] = self.primary_key_columns()
        metadata["foreign_keys"] = [
            {"fk_columns": list(fk.columns), "fk_ref_table": fk.ref_table, "fk_ref_columns": list(fk.ref_columns)}
            for fk in self.foreign_keys
        ]
        return metadata

    @classmethod
    def from_metadata(cls, name, metadata: dict) -> TableDefinition:
        columns = []
        for col_name in metadata["column_order"]:
            info = metadata["columns"][col_name]
            columns.append(Column(col_name, info["data_type"], info["not_null"]))

        # primary_keys가 비어있으면 primary key가 없는 테이블
        primary_key = None
        if metadata["primary_keys"]:
            primary_key = PrimaryKey(tuple(metadata["primary_keys"]))

        foreign_keys = []
        for fk in metadata["foreign_keys"]:
            foreign_keys.append(ForeignKey(tuple(fk["fk_columns"]), fk["fk_ref_table"], tuple(fk["fk_ref_columns"])))

        return cls(name, columns, primary_key, foreign_keys)
