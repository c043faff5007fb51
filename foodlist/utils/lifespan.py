"""DB의 분류 테이블(요리 종류, 식이 옵션, 편의 시설)을 taxonomies.json과 동기화"""
import traceback

from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select

from foodlist.database import AsyncSessionLocal
from foodlist.models.restaurants import CuisineType, DietaryOption, Feature
from foodlist.config import Config, logger

TAXONOMY_MODELS = {
    "cuisine_types": CuisineType,
    "dietary_options": DietaryOption,
    "features": Feature,
}


async def sync_taxonomies():
    """DB의 분류 테이블을 taxonomies.json과 동기화

    taxonomies.json 파일에 정의된 항목 중 DB에 없는 이름만 새로 추가합니다.
    이미 존재하는 항목은 수정하지 않습니다.
    """
    taxonomies = Config.load_taxonomies()

    async with AsyncSessionLocal() as db:
        try:
            added = 0
            for key, model in TAXONOMY_MODELS.items():
                result = await db.execute(select(model.name))
                existing = set(result.scalars().all())
                logger.debug("기존 %s: %s", key, existing)

                new_items = [
                    model(
                        name=entry["name"],
                        description=entry.get("description"),
                        icon=entry.get("icon"),
                    )
                    for entry in taxonomies.get(key, [])
                    if entry["name"] not in existing
                ]
                db.add_all(new_items)
                added += len(new_items)

            if added:
                await db.commit()
                logger.info("%s개의 분류 항목이 추가되었습니다.", added)
            else:
                logger.info("분류 항목이 최신 상태입니다.")

        except IntegrityError:
            message = traceback.format_exc()
            logger.debug("Error details: %s", message)
            logger.warning("중복된 분류 항목이 감지되었습니다.")
            await db.rollback()
            logger.debug("DB 롤백 완료")
