from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Sheet


class SheetRepository:
    @staticmethod
    async def list_sheets(db: AsyncSession, user_id: str):
        result = await db.execute(select(Sheet).where(Sheet.user_id == user_id).order_by(Sheet.id))
        return result.scalars().all()

    @staticmethod
    async def get_sheet(db: AsyncSession, sheet_id: int):
        return await db.get(Sheet, sheet_id)

    @staticmethod
    async def create_sheet(db: AsyncSession, data: dict):
        db_sheet = Sheet(**data)
        db.add(db_sheet)
        await db.commit()
        await db.refresh(db_sheet)
        return db_sheet

    @staticmethod
    async def update_sheet(db: AsyncSession, db_sheet: Sheet, update_data: dict):
        for key, value in update_data.items():
            setattr(db_sheet, key, value)
        await db.commit()
        await db.refresh(db_sheet)
        return db_sheet

    @staticmethod
    async def delete_sheet(db: AsyncSession, db_sheet: Sheet) -> None:
        await db.delete(db_sheet)
        await db.commit()
