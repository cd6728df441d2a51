from fastapi import APIRouter, Depends, status
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import enforce_max_body_size, get_upload_service
from model.api import ErrorResponse, UploadPhotoRequest, UploadPhotoResponse
from service.upload_service import UploadService
from util.constants import InternalURIs

upload_rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)

upload_router = APIRouter(dependencies=[Depends(upload_rate_limiter)])


@upload_router.post(
    InternalURIs.UPLOAD_PHOTO,
    response_model=UploadPhotoResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(enforce_max_body_size)],
    responses={
        code: {"model": ErrorResponse}
        for code in (400, 401, 409, 413, 429, 500, 502)
    },
)
async def upload_photo(
    payload: UploadPhotoRequest,
    service: UploadService = Depends(get_upload_service),
) -> UploadPhotoResponse:
    result = await service.handle(payload)
    return UploadPhotoResponse(
        filename=result.filename, rawLocator=result.rawLocator, raw=result.rawLocator
    )
