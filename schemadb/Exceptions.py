from enum import Enum


class ErrorKind(Enum):
    """
    Every user-visible failure of a schema statement.
    The value is the exact message text; `{}` slots are filled from QueryError args.
    """
    TABLE_EXISTENCE = "table with the same name already exists"
    REFERENCE_TABLE_EXISTENCE = "foreign key references non existing table"
    REFERENCE_COLUMN_EXISTENCE = "foreign key references non existing column"
    REFERENCE_NON_PRIMARY_KEY = "foreign key references non primary key column"
    REFERENCE_NON_FULL_PRIMARY_KEY = "foreign key does not references full primary key"
    REFERENCE_TYPE = "foreign key references wrong type"

    DUPLICATE_COLUMN_DEF = "column definition is duplicated"
    DUPLICATE_PRIMARY_KEY_DEF = "primary key definition is duplicated"
    DUPLICATE_PRIMARY_KEY_COLUMN = "column '{}' appears more than once in primary key"
    PRIMARY_KEY_COLUMN_DEF = "cannot define non-existing column '{}' as primary key"
    FOREIGN_KEY_COLUMN_DEF = "cannot define non-existing column '{}' as foreign key"
    # 참조하는 열과 참조되는 열의 개수가 다를 때
    REFERENCE_COLUMN_MATCH = "number of referencing columns must match referenced columns"
    CHAR_LENGTH = "char length should be over 0"

    NO_SUCH_TABLE = "no such table"
    DROP_REFERENCED_TABLE = "'{}' is referenced by another table"


class QueryError(Exception):
    def __init__(self, kind: ErrorKind, *args, command=None):
        self.kind = kind
        self.message = kind.value.format(*args)
        # 프롬프트에 출력할 때 붙는 명령 이름 (ex. "Create table")
        self.command = command
        super().__init__(self.message)

    def __str__(self):
        if self.command:
            return f"{self.command} has failed: {self.message}"
        return self.message


class CatalogInvariantError(Exception):
    """
    Raised when a collaborator broke its contract (malformed definition,
    double register). Never shown as a user error.
    """
    def __init__(self, detail):
        super().__init__(f"catalog invariant violated: {detail}")
