from fastapi import APIRouter, Depends, status

from sheetkeeper.dependencies.services import get_character_service
from sheetkeeper.schemas.character import (
    ErrorResponse,
    UpdateControlsRequest,
    UpdateControlsResponse,
)
from sheetkeeper.services.character_service import CharacterService

router = APIRouter()


@router.post(
    "/controls",
    response_model=UpdateControlsResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def update_controls(
    request: UpdateControlsRequest,
    character_service: CharacterService = Depends(get_character_service),
) -> UpdateControlsResponse:
    character_uuid = await character_service.update_controls(request)
    return UpdateControlsResponse(
        character_uuid=character_uuid,
        message="Controls updated successfully",
    )
