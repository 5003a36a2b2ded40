from fastapi import APIRouter, Depends, HTTPException
from schemas.packing_schema import (
    PackingList, PackingListUpdate, PackingCategory, GeneratePackingListRequest,
    AddItemRequest, RemoveItemRequest, AddCategoryRequest
)
from services import packing_service
from api.routers.trips import require_owned_trip
from core.security import get_current_user

router = APIRouter(
    prefix="/packing",
    tags=["packing"],
    responses={404: {"description": "Not found"}},
)

@router.post("/generate", response_model=PackingCategory)
def preview_packing_list(request: GeneratePackingListRequest):
    """Runs the packing rules for the given trip details without saving anything."""
    return packing_service.generate_packing_list(request)

# Edit operations are pure: the client sends its current list and gets the edited one back.

@router.post("/edit/add-item", response_model=PackingCategory)
def add_item(request: AddItemRequest):
    return packing_service.add_item(request.content, request.category, request.item)

@router.post("/edit/remove-item", response_model=PackingCategory)
def remove_item(request: RemoveItemRequest):
    """Removes one item; the category disappears with its last item."""
    return packing_service.remove_item(request.content, request.category, request.index)

@router.post("/edit/add-category", response_model=PackingCategory)
def add_category(request: AddCategoryRequest):
    return packing_service.add_category(request.content, request.category)

@router.post("/{trip_id}", response_model=PackingList)
def generate_checklist(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """
    Generates a packing list for a trip and saves it as the trip's current list.
    Earlier lists are kept; the newest one is the one returned by GET.
    """
    require_owned_trip(trip_id, current_user)

    checklist = packing_service.create_packing_list_for_trip(trip_id, current_user['uid'])
    if not checklist:
        raise HTTPException(status_code=404, detail="Trip not found, cannot generate packing list.")
    return checklist

@router.get("/{trip_id}", response_model=PackingList)
def get_checklist(
    trip_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Retrieves the current packing list of a trip."""
    require_owned_trip(trip_id, current_user)

    checklist = packing_service.get_packing_list(trip_id)
    if not checklist:
        raise HTTPException(status_code=404, detail="Packing list not found for this trip.")
    return checklist

@router.put("/{trip_id}", response_model=PackingList)
def save_checklist(
    trip_id: str,
    update: PackingListUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Saves an edited packing list over the trip's current list."""
    require_owned_trip(trip_id, current_user)

    checklist = packing_service.save_packing_list(trip_id, update.content)
    if not checklist:
        raise HTTPException(status_code=404, detail="Packing list not found for this trip.")
    return checklist
