"""Item API routes.

Learn: Every route here is protected — api/__init__.py includes this
router with the access gate as a router-level dependency, so none of
these handlers run without a valid bearer token.

Routes translate HTTP to service calls and service errors to status codes:
- GET    /items       → 200 list
- GET    /items/{id}  → 200 item | 404
- POST   /items       → 201 item + Location header
- PUT    /items/{id}  → 204 | 404
- DELETE /items/{id}  → 204 | 404
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from todogate.db.engine import get_db
from todogate.schemas.item import ItemRead, ItemWrite
from todogate.services.item_service import ItemNotFoundError, ItemService

router = APIRouter(prefix="/items")


def _svc(db: AsyncSession = Depends(get_db)) -> ItemService:
    return ItemService(db)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Item not found")


@router.get("", response_model=list[ItemRead])
async def list_items(svc: ItemService = Depends(_svc)):
    return await svc.list_items()


@router.get("/{item_id}", response_model=ItemRead)
async def get_item(item_id: int, svc: ItemService = Depends(_svc)):
    try:
        return await svc.get_item(item_id)
    except ItemNotFoundError:
        raise _not_found()


@router.post("", response_model=ItemRead, status_code=201)
async def create_item(
    body: ItemWrite,
    response: Response,
    svc: ItemService = Depends(_svc),
):
    """Create an item. The server assigns the id; a client-sent id is ignored."""
    item = await svc.create_item(name=body.name, is_complete=body.is_complete)
    response.headers["Location"] = f"/api/items/{item.id}"
    return item


@router.put("/{item_id}", status_code=204)
async def update_item(
    item_id: int,
    body: ItemWrite,
    svc: ItemService = Depends(_svc),
):
    """Overwrite an item's name and completion flag."""
    try:
        await svc.update_item(item_id, name=body.name, is_complete=body.is_complete)
    except ItemNotFoundError:
        raise _not_found()
    return Response(status_code=204)


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: int, svc: ItemService = Depends(_svc)):
    try:
        await svc.delete_item(item_id)
    except ItemNotFoundError:
        raise _not_found()
    return Response(status_code=204)
