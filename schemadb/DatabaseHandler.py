import json
import logging
from berkeleydb import db

logger = logging.getLogger(__name__)


class DatabaseHandler():
    """
    Berkeley DB store for committed table metadata.
    Key is the table name, value is the JSON produced by TableDefinition.to_metadata().
    """
    def __init__(self, database, db_file="my_database.db"):
        self.db_file = db_file   # 데이터베이스 파일 이름

        self.env = database
        self.meta_db = db.DB(self.env)   # 메타데이터가 저장되는 테이블
        self.meta_db.open(db_file, "metadata", db.DB_HASH, db.DB_CREATE)

    # 프로그램 종료 시 안전하게 close
    def close(self):
        self.meta_db.close()
        self.env.close()
        logger.info("metadata store closed")

    def metadata_items(self) -> list[tuple]:
        """every (table name, metadata) pair in the store"""
        # metadata 테이블을 순회
        cursor = self.meta_db.cursor()
        tmp = []
        while record := cursor.next():
            key, val = record
            tmp.append((key.decode(), json.loads(val.decode())))
        cursor.close()
        return tmp

    def metadata_put(self, key, data):
        self.meta_db.put(key.encode(), json.dumps(data).encode())

    def metadata_delete(self, key):
        self.meta_db.delete(key.encode())
