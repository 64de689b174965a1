import logging
import time

from app.exceptions.custom import RateLimitError, StorageError
from app.schemas.registration import RegistrationRecord, RegistrationRequest
from app.schemas.responses import RegistrationResponse
from app.services.storage import StorageService
from app.services.supabase import REGISTRATION_TABLE, SupabaseService

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Registrierung erfolgreich eingereicht! Sie erhalten eine Bestätigungsemail."


def image_object_name(filename: str | None, now_ms: int | None = None) -> str:
    """``<epoch-millis>.<ext>``, keeping the extension of the uploaded file."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else "bin"
    return f"{stamp}.{ext}"


class RegistrationService:
    def __init__(self, supabase: SupabaseService, storage: StorageService):
        self._supabase = supabase
        self._storage = storage

    async def _upload_image(
        self, content: bytes, filename: str | None, content_type: str | None
    ) -> str | None:
        try:
            return await self._storage.upload(image_object_name(filename), content, content_type)
        except (StorageError, RateLimitError) as exc:
            logger.error("Upload error: %s", exc)
            return None

    async def submit(
        self,
        request: RegistrationRequest,
        image: bytes | None = None,
        image_filename: str | None = None,
        image_content_type: str | None = None,
    ) -> RegistrationResponse:
        image_url = None
        if image:
            image_url = await self._upload_image(image, image_filename, image_content_type)

        record = RegistrationRecord(**request.model_dump(), image_url=image_url)
        row = await self._supabase.insert(REGISTRATION_TABLE, record.model_dump())

        logger.info("Registration submitted for %s", request.name)
        return RegistrationResponse(
            id=str(row["id"]) if row.get("id") is not None else None,
            status=record.status,
            image_url=image_url,
            message=SUCCESS_MESSAGE,
        )
