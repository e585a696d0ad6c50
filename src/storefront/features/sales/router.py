from fastapi import APIRouter, Depends, status
from typing import List, Annotated

from .schemas import SaleCreateSchema, SaleDeletedSchema, SalePublicSchema
from . import service
from ..auth.authorization import Identity, authorize, get_current_identity

router = APIRouter(
    prefix="/sales",
    tags=["Sales"],
    dependencies=[Depends(authorize)],
)


@router.post("", response_model=SalePublicSchema, status_code=status.HTTP_201_CREATED)
async def create_sale(
    sale_data: SaleCreateSchema,
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    sale = await service.create_sale(sale_data, created_by=identity.subject)
    return service.to_sale_public_schema(sale)


@router.get("", response_model=List[SalePublicSchema])
async def list_sales():
    return [service.to_sale_public_schema(sale) for sale in await service.list_sales()]


@router.get("/today", response_model=List[SalePublicSchema])
async def list_todays_sales():
    return [service.to_sale_public_schema(sale) for sale in await service.list_sales_for_day()]


@router.get("/{sale_id}", response_model=SalePublicSchema)
async def get_sale(sale_id: str):
    return service.to_sale_public_schema(await service.get_sale(sale_id))


@router.delete("/{sale_id}", response_model=SaleDeletedSchema)
async def delete_sale(sale_id: str):
    return await service.delete_sale(sale_id)
