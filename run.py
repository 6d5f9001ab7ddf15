import logging
import os
from lark import UnexpectedInput
from lark.exceptions import VisitError
from berkeleydb import db
from schemadb.Catalog import Catalog
from schemadb.DatabaseHandler import DatabaseHandler
from schemadb.DDLTransformer import DDLTransformer, build_parser
from schemadb.Exceptions import CatalogInvariantError
from schemadb.SchemaMutator import SchemaMutator



id = "2023-11225"
env_path="DB"
db_file="my_database.db"
log_file="schemadb.log"

logger = logging.getLogger(__name__)


def open_database() -> DatabaseHandler:
    if not os.path.exists(env_path):
        os.makedirs(env_path)

    # 로그는 프롬프트 출력과 섞이지 않도록 파일에 남긴다.
    logging.basicConfig(
        filename=os.path.join(env_path, log_file),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 데이터베이스를 열고 이를 DatabaseHandler 객체에 넘겨준다.
    database_env = db.DBEnv()
    database_env.open(env_path, db.DB_CREATE | db.DB_INIT_MPOOL)
    return DatabaseHandler(database_env, db_file)


def prompt():
    """
    This function receives user input, splits the command based on semicolons, and returns.
    """

    prompt_input = ""
    while True:
        t_input = input(f"DB_{id}> ")
        prompt_input += t_input + " "
        if len(t_input) == 0:
            pass
        elif t_input[-1] == ";":
            break

    query_list = []
    s = 0
    for i, j in enumerate(prompt_input):
        if j == ";":
            query_list.append(prompt_input[s:i+1].strip())
            s = i + 1
    return query_list


def run(db_handler, sql_parser, ddlTransformer):
    """prompt loop. db_handler is closed however the loop ends."""
    try:
        while not ddlTransformer.exit_requested:
            query = prompt()

            try:
                for command in query:
                    output = sql_parser.parse(command)
                    ddlTransformer.transform(output)
                    if ddlTransformer.exit_requested:
                        break

            # sql 문법에 오류가 있는 경우 Syntax error 메세지를 띄운다.
            except UnexpectedInput:
                print(f"DB_{id}> Syntax error")

            # 명령어의 내용에 오류가 있는 경우 그에 따른 에러 메세지를 띄운다.
            except VisitError as e:
                if isinstance(e.orig_exc, CatalogInvariantError):
                    logger.exception("internal catalog error")
                    raise e.orig_exc
                print(f'DB_{id}> {e.orig_exc}')
    finally:
        db_handler.close()


def main():
    db_handler = open_database()

    # 저장된 메타데이터로 카탈로그를 복원한다. 카탈로그에 쓰는 것은 SchemaMutator뿐.
    catalog = Catalog(store=db_handler)
    mutator = SchemaMutator(catalog)

    # sql 문법을 파싱할 파서 생성.
    sql_parser = build_parser()

    # 파싱된 sql 명령을 입력받아 명령을 수행하는 객체.
    ddlTransformer = DDLTransformer(id, mutator)

    run(db_handler, sql_parser, ddlTransformer)

if __name__ == '__main__':
    main()
