from typing import Annotated

from fastapi import Depends, Request

from app.services.imported_listings import ImportedListingService
from app.services.listings import ListingService
from app.services.registration import RegistrationService


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service


def get_imported_listing_service(request: Request) -> ImportedListingService:
    return request.app.state.imported_listing_service


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration_service


ListingDep = Annotated[ListingService, Depends(get_listing_service)]
ImportedListingDep = Annotated[ImportedListingService, Depends(get_imported_listing_service)]
RegistrationDep = Annotated[RegistrationService, Depends(get_registration_service)]
