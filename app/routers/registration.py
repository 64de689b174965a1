import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from app.dependencies import RegistrationDep
from app.schemas.registration import RegistrationRequest
from app.schemas.responses import RegistrationResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_IMAGE_BYTES = 5 * 1024 * 1024


@router.post("/registrierung", response_model=RegistrationResponse, status_code=201)
async def register_schwimmschule(
    service: RegistrationDep,
    data: str = Form(...),
    image: UploadFile | None = File(None),
) -> RegistrationResponse:
    try:
        request = RegistrationRequest.model_validate_json(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=jsonable_encoder(exc.errors(include_url=False, include_context=False)),
        )

    content: bytes | None = None
    if image is not None and image.filename:
        if image.content_type and not image.content_type.startswith("image/"):
            raise HTTPException(status_code=415, detail="Only image uploads are supported")
        content = await image.read()
        if len(content) > MAX_IMAGE_BYTES:
            raise HTTPException(status_code=413, detail="Image exceeds 5 MB")

    return await service.submit(
        request,
        image=content,
        image_filename=image.filename if image else None,
        image_content_type=image.content_type if image else None,
    )
