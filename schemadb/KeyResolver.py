from schemadb.TableDefinition import TableDefinition


class KeyResolver():
    """Compares referenced column lists against a table's primary key."""

    def is_full_primary_key_match(self, target_table: TableDefinition, candidate_columns) -> bool:
        # 순서는 상관없고 개수와 이름이 같아야 한다.
        if target_table.primary_key is None:
            return False

        primary_keys = target_table.primary_key.columns
        if len(candidate_columns) != len(primary_keys):
            return False
        return set(candidate_columns) == set(primary_keys)

    def overlaps_primary_key(self, target_table: TableDefinition, candidate_columns) -> bool:
        if target_table.primary_key is None:
            return False
        return not target_table.primary_key.column_set().isdisjoint(candidate_columns)
