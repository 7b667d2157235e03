"""런타임 스키마 동기화 유틸리티."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.schema import CreateColumn, CreateIndex, MetaData

logger = logging.getLogger(__name__)


def sync_missing_schema_objects(engine: Engine, metadata: MetaData) -> List[str]:
    """모델 메타데이터 기준으로 기존 테이블에 누락된 컬럼/인덱스를 추가하고 추가한 객체 이름을 돌려준다."""
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    preparer = engine.dialect.identifier_preparer
    added = []

    with engine.begin() as conn:
        for table in metadata.sorted_tables:
            if table.name not in existing_tables:
                continue

            known_columns = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in known_columns:
                    continue
                ddl = str(CreateColumn(column).compile(dialect=engine.dialect)).strip()
                conn.execute(text(f"ALTER TABLE {preparer.format_table(table)} ADD COLUMN {ddl}"))
                added.append(f"{table.name}.{column.name}")

            known_indexes = {idx.get("name") for idx in inspector.get_indexes(table.name)}
            for index in table.indexes:
                if index.name and index.name not in known_indexes:
                    conn.execute(CreateIndex(index))
                    added.append(index.name)

    for name in added:
        logger.info("[schema] added %s", name)
    return added
