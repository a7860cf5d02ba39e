from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.catalog import CatalogClient, get_catalog_client
from core.exceptions import (
    ExpiryUnchanged,
    InvalidIdentifier,
    NotFound,
    StoreError,
    UpstreamError,
    ValidationError,
)
from core.inventory import InventoryService
from db.database import get_async_session
from db.store import FoodStore
from schemas.food import (
    CandidateProduct,
    ExpiryDateUpdate,
    FoodItemAdded,
    FoodItemCreate,
    FoodItemOut,
    InventoryEntryOut,
    QuantityUpdate,
)

router = APIRouter()


def get_inventory_service(db: AsyncSession = Depends(get_async_session)) -> InventoryService:
    return InventoryService(FoodStore(db))


def _missing_fields(fields: Dict[str, bool]) -> Dict[str, bool]:
    # wire names; True means missing or blank
    return {"name": fields["name"], "brands": fields["brand"], "quantity": fields["quantity"]}


@router.get("/search", response_model=List[CandidateProduct])
def search_food(
    search: Optional[str] = Query(None),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    """Search Open Food Facts. Plain def: requests blocks, so this runs in the threadpool."""
    if not search or not search.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please provide a food search term")
    try:
        products = catalog.search(search.strip())
    except UpstreamError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching data from Open Food Facts API",
        )
    if not products:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No products found")
    return products


@router.post(
    "/add",
    response_model=FoodItemAdded,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_food(payload: FoodItemCreate, service: InventoryService = Depends(get_inventory_service)):
    """Add a product to the inventory and return the stored record."""
    try:
        item = await service.add_item(payload)
    except ValidationError as e:
        if e.fields is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": e.message, "missingFields": _missing_fields(e.fields)},
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add food to inventory",
        )
    return {"message": "Food added to inventory successfully", "item": item}


@router.get("/inventory", response_model=List[InventoryEntryOut], response_model_exclude_none=True)
async def get_inventory(service: InventoryService = Depends(get_inventory_service)):
    """All products, one entry per name + brand with a count of duplicates."""
    try:
        return await service.list_inventory()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch inventory",
        )


@router.patch("/update/{item_id}", response_model=Dict)
async def update_expiry_date(
    item_id: str,
    payload: ExpiryDateUpdate,
    service: InventoryService = Depends(get_inventory_service),
):
    try:
        await service.update_expiry(item_id, payload.expiry_date)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Expiry date is required")
    except InvalidIdentifier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid product ID")
    except (ExpiryUnchanged, NotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found or expiry date is the same",
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update expiry date",
        )
    return {"message": "Expiry date updated successfully"}


@router.put("/update/{item_id}", response_model=Dict)
async def update_quantity(
    item_id: str,
    payload: QuantityUpdate,
    service: InventoryService = Depends(get_inventory_service),
):
    """Set the on-hand count. A quantity of 0 removes the product."""
    try:
        change = await service.update_quantity(item_id, payload.quantity)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidIdentifier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid product ID")
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update quantity",
        )
    if change.deleted:
        return {"message": "Quantity reached zero, product deleted", "deleted": True}
    return {"message": "Quantity updated successfully", "deleted": False, "quantity": change.stock}


@router.delete("/delete/all", response_model=Dict)
async def delete_all_food(service: InventoryService = Depends(get_inventory_service)):
    try:
        removed = await service.delete_all()
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No products to delete")
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete inventory",
        )
    return {"message": "All products deleted successfully", "deletedCount": removed}


@router.delete("/delete/{item_id}", response_model=Dict)
async def delete_food(item_id: str, service: InventoryService = Depends(get_inventory_service)):
    try:
        await service.delete_item(item_id)
    except InvalidIdentifier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid product ID")
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete product",
        )
    return {"message": "Product deleted successfully"}


# Keep last: /{item_id} would otherwise shadow /inventory and /search
@router.get("/{item_id}", response_model=FoodItemOut, response_model_exclude_none=True)
async def get_food(item_id: str, service: InventoryService = Depends(get_inventory_service)):
    try:
        return await service.get_item(item_id)
    except InvalidIdentifier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid product ID")
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch product",
        )
