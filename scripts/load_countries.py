"""
국가 데이터 적재 스크립트
----------------------
countries.jsonl 파일({"id", "name", "continent"} 한 줄씩)을 읽어서 DB에 저장합니다.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.orm import Session

from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.services.cities import upsert_country

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def iter_jsonl(path: Path) -> Iterator[dict]:
    """JSONL 파일을 한 줄씩 읽어 dict로 yield."""
    with path.open("r", encoding="utf-8") as fp:
        for line_no, line in enumerate(fp, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                logger.warning("JSON 파싱 실패 (line %d)", line_no)


def load_countries(jsonl_path: Path, db: Session) -> tuple[int, int, int]:
    """국가 JSONL을 DB에 적재. (성공, 건너뜀, 실패) 개수 반환."""
    success = 0
    skipped = 0
    failed = 0

    for record in iter_jsonl(jsonl_path):
        missing = [key for key in ("id", "name", "continent") if not record.get(key)]
        if missing:
            skipped += 1
            logger.warning("필수 필드 누락 (%s): %s", ", ".join(missing), record)
            continue

        try:
            upsert_country(
                db,
                {
                    "id": int(record["id"]),
                    "name": str(record["name"]),
                    "continent": str(record["continent"]),
                },
            )
            success += 1
        except (ValueError, TypeError) as exc:
            failed += 1
            logger.error("country id=%s 적재 실패: %s", record.get("id"), exc)

    return success, skipped, failed


def main() -> None:
    parser = argparse.ArgumentParser(description="countries.jsonl → DB 적재")
    parser.add_argument(
        "--file",
        type=Path,
        default=Path("countries.jsonl"),
        help="국가 JSONL 파일 경로 (기본: ./countries.jsonl)",
    )
    args = parser.parse_args()

    if not args.file.exists():
        raise SystemExit(f"파일을 찾을 수 없습니다: {args.file}")

    init_db()
    db = SessionLocal()
    try:
        logger.info("%s에서 국가 데이터 로드 중...", args.file)
        success, skipped, failed = load_countries(args.file, db)
        logger.info("국가 적재 완료: 성공 %d, 건너뜀 %d, 실패 %d", success, skipped, failed)
    finally:
        db.close()


if __name__ == "__main__":
    main()
