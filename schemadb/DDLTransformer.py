from __future__ import annotations
import os
from lark import Lark, Transformer, Tree
from schemadb.Exceptions import ErrorKind, QueryError
from schemadb.SchemaMutator import SchemaMutator
from schemadb.TableDefinition import Column, ForeignKey, PrimaryKey, TableDefinition

GRAMMAR_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "grammar.lark")


def build_parser(grammar_path=GRAMMAR_PATH) -> Lark:
    with open(grammar_path, 'r') as file:
        sql_grammar = file.read()
    return Lark(sql_grammar, start='command', lexer='basic')


# DDLTransformer class. lark 모듈의 Transformer 클래스를 상속받는다.
class DDLTransformer(Transformer):
    def __init__(self, id, mutator: SchemaMutator):
        super().__init__()
        self.id = id
        # 카탈로그에 쓰는 것은 모두 mutator를 거친다.
        self.mutator = mutator
        self.catalog = mutator.catalog
        self.exit_requested = False

    # 데이터를 프롬프트에 출력할 때 형식을 맞춰주는 함수.
    def prompt_out(self, headers, data):
        """
        Print header and data to prompt
        """
        L = len(data)
        if headers:
            widths = [len(header) for header in headers]
        else:
            widths = [20]

        for row in data:
            widths = [max(width, len(str(cell))) for width, cell in zip(widths, row)]
        widths = [(width + 9) // 10 * 10 for width in widths]

        separator = "-" * (sum(widths) + 10)
        format_string = " | ".join(f"{{:<{width}}}" for width in widths)

        print(separator)
        if headers:
            print(format_string.format(*headers))
        for row in data:
            print(format_string.format(*row))
        print(separator)

        if L == 1:
            print(f"{L} row in set")
        else:
            print(f"{L} rows in set")

    # desc, explain, describe query에서 공통적으로 사용.
    def _table_info_print(self, target_table):
        definition = self.catalog.get(target_table)
        primary_keys = definition.primary_key_columns()
        foreign_key_columns = definition.foreign_key_columns()

        headers = ["COLUMN_NAME", "TYPE", "NULL", "KEY"]
        data = []

        for col in definition.columns:
            nul = "N" if col.not_null else "Y"
            key_p = col.name in primary_keys
            key_f = col.name in foreign_key_columns

            if key_p and key_f:
                key = "PRI/FOR"
            elif key_f:
                key = "FOR"
            elif key_p:
                key = "PRI"
            else:
                key = ""

            data.append([col.name, col.data_type, nul, key])

        self.prompt_out(headers, data)

    # 파싱트리에서 특정 토큰을 찾는 함수.
    def _find_tokens(self, data, token) -> list[str]:
        """from data find upper-cased values of token"""
        tmp = []
        if data:
            for k in data.find_data(token):
                tmp.append(k.children[0].value.upper())
        return tmp

    def _column_definition(self, tree) -> Column:
        col_name = tree.children[0].children[0].value.upper()

        d_type = ""
        for j in tree.children[1].children:
            d_type += j.upper()

        if d_type.startswith("CHAR"):
            n = int(d_type[5:-1])
            if n < 1:
                raise QueryError(ErrorKind.CHAR_LENGTH, command="Create table")

        not_null = bool(tree.children[2] and tree.children[2].upper() == "NOT")
        return Column(col_name, d_type, not_null)

    # 아래의 함수들은 파싱 트리를 탐색하며 각각의 명령을 만났을 때 수행할 코드를 정의한다.
    def create_table_query(self, items):
        table_name = items[2].children[0].value.upper()

        if self.catalog.exists(table_name):
            raise QueryError(ErrorKind.TABLE_EXISTENCE, command="Create table")

        columns = []
        primary_key_defs = []
        foreign_key_defs = []

        # 선언된 순서대로 읽는다.
        for element in items[3].children:
            if not isinstance(element, Tree):
                continue
            node = element.children[0]
            if node.data == "column_definition":
                columns.append(self._column_definition(node))
            else:
                constraint = node.children[0]
                if constraint.data == "primary_key_constraint":
                    primary_key_defs.append(constraint)
                else:
                    foreign_key_defs.append(constraint)

        # column
        col_names = set()
        for col in columns:
            if col.name in col_names:
                raise QueryError(ErrorKind.DUPLICATE_COLUMN_DEF, command="Create table")
            col_names.add(col.name)

        # primary key
        if len(primary_key_defs) > 1:
            raise QueryError(ErrorKind.DUPLICATE_PRIMARY_KEY_DEF, command="Create table")

        primary_key = None
        if primary_key_defs:
            primary_keys = self._find_tokens(primary_key_defs[0].children[2], "column_name")
            for n, i in enumerate(primary_keys):
                if i in primary_keys[:n]:
                    raise QueryError(ErrorKind.DUPLICATE_PRIMARY_KEY_COLUMN, i, command="Create table")
                if i not in col_names:
                    raise QueryError(ErrorKind.PRIMARY_KEY_COLUMN_DEF, i, command="Create table")
            for col in columns:
                if col.name in primary_keys:
                    col.not_null = True
            primary_key = PrimaryKey(tuple(primary_keys))

        # foreign key
        foreign_keys = []
        for i in foreign_key_defs:
            fk_columns = self._find_tokens(i.children[2], "column_name")
            fk_ref_table = i.children[4].children[0].value.upper()
            fk_ref_columns = self._find_tokens(i.children[5], "column_name")

            for j in fk_columns:
                if j not in col_names:
                    raise QueryError(ErrorKind.FOREIGN_KEY_COLUMN_DEF, j, command="Create table")

            if len(fk_columns) != len(fk_ref_columns):
                raise QueryError(ErrorKind.REFERENCE_COLUMN_MATCH, command="Create table")

            foreign_keys.append(ForeignKey(tuple(fk_columns), fk_ref_table, tuple(fk_ref_columns)))

        definition = TableDefinition(table_name, columns, primary_key, foreign_keys)

        try:
            self.mutator.create(definition)
        except QueryError as e:
            e.command = "Create table"
            raise

        print(f"DB_{self.id}> '{table_name}' table is created")

    def drop_table_query(self, items):
        target_table = items[2].children[0].upper()

        try:
            self.mutator.drop(target_table)
        except QueryError as e:
            e.command = "Drop table"
            raise

        print(f"DB_{self.id}> '{target_table}' table is dropped")

    def explain_query(self, items):
        target_table = items[1].children[0].upper()
        if not self.catalog.exists(target_table):
            raise QueryError(ErrorKind.NO_SUCH_TABLE, command="Explain")
        self._table_info_print(target_table)

    def describe_query(self, items):
        target_table = items[1].children[0].upper()
        if not self.catalog.exists(target_table):
            raise QueryError(ErrorKind.NO_SUCH_TABLE, command="Describe")
        self._table_info_print(target_table)

    def desc_query(self, items):
        target_table = items[1].children[0].upper()
        if not self.catalog.exists(target_table):
            raise QueryError(ErrorKind.NO_SUCH_TABLE, command="Desc")
        self._table_info_print(target_table)

    def show_tables_query(self, items):
        data = [[i] for i in self.catalog.table_names()]
        self.prompt_out([], data)

    def EXIT(self, token):
        self.exit_requested = True
        return token
