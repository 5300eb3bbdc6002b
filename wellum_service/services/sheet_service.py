import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..exceptions import SheetForbiddenException, SheetNotFoundException
from ..metrics import SHEETS_CREATED_TOTAL
from ..models import Sheet
from ..repositories.sheet_repository import SheetRepository

logger = structlog.get_logger(__name__)


class SheetService:
    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def create_sheet(self, payload: schemas.SheetCreate) -> Sheet:
        data = payload.model_dump()
        data["user_id"] = self.user_id
        sheet = await SheetRepository.create_sheet(self.db, data)
        SHEETS_CREATED_TOTAL.inc()
        logger.info(
            "sheet_created",
            user_id=self.user_id,
            sheet_id=sheet.id,
            exercises=len(sheet.exercises or []),
        )
        return sheet

    async def list_sheets(self) -> list[Sheet]:
        return await SheetRepository.list_sheets(self.db, self.user_id)

    async def get_sheet(self, sheet_id: int) -> Sheet:
        sheet = await SheetRepository.get_sheet(self.db, sheet_id)
        if not sheet:
            raise SheetNotFoundException(sheet_id)
        if sheet.user_id != self.user_id:
            logger.warning("sheet_access_denied", sheet_id=sheet_id, user_id=self.user_id)
            raise SheetForbiddenException(sheet_id)
        return sheet

    async def update_sheet(self, sheet_id: int, payload: schemas.SheetUpdate) -> Sheet:
        sheet = await self.get_sheet(sheet_id)
        # The owner is never taken from the payload
        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        sheet = await SheetRepository.update_sheet(self.db, sheet, update_data)
        logger.info("sheet_updated", user_id=self.user_id, sheet_id=sheet_id, fields=sorted(update_data))
        return sheet

    async def replace_exercises(self, sheet_id: int, exercises: list[dict]) -> Sheet:
        sheet = await self.get_sheet(sheet_id)
        return await SheetRepository.update_sheet(self.db, sheet, {"exercises": list(exercises)})

    async def delete_sheet(self, sheet_id: int) -> None:
        sheet = await self.get_sheet(sheet_id)
        await SheetRepository.delete_sheet(self.db, sheet)
        logger.info("sheet_deleted", user_id=self.user_id, sheet_id=sheet_id)
