from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..database import get_db
from ..dependencies import get_current_user_id
from ..services.sheet_service import SheetService

router = APIRouter(prefix="/sheets")


def get_sheet_service(
    db: AsyncSession = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> SheetService:
    return SheetService(db, user_id=user_id)


@router.post("/", response_model=schemas.SheetResponse, status_code=status.HTTP_201_CREATED)
async def create_sheet(payload: schemas.SheetCreate, service: SheetService = Depends(get_sheet_service)):
    return await service.create_sheet(payload)


@router.get("/", response_model=list[schemas.SheetResponse])
async def list_sheets(service: SheetService = Depends(get_sheet_service)):
    return await service.list_sheets()


@router.get("/{sheet_id}", response_model=schemas.SheetResponse)
async def get_sheet(sheet_id: int, service: SheetService = Depends(get_sheet_service)):
    return await service.get_sheet(sheet_id)


@router.put("/{sheet_id}", response_model=schemas.SheetResponse)
async def update_sheet(
    sheet_id: int,
    payload: schemas.SheetUpdate,
    service: SheetService = Depends(get_sheet_service),
):
    return await service.update_sheet(sheet_id, payload)


@router.delete("/{sheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sheet(sheet_id: int, service: SheetService = Depends(get_sheet_service)):
    await service.delete_sheet(sheet_id)
