import httpx
import pytest
import respx
from httpx import Response

from app.services.geocoding import GeocodingService
from app.services.supabase import SupabaseService

BASE_URL = "https://test.supabase.co"
POSTAL_RPC_URL = f"{BASE_URL}/rest/v1/rpc/get_coordinates_by_postal_code"
GEOLOCATIONS_URL = f"{BASE_URL}/rest/v1/geolocations"


@respx.mock
@pytest.mark.asyncio
async def test_postal_code_uses_rpc():
    rpc = respx.post(POSTAL_RPC_URL).mock(
        return_value=Response(200, json=[{"latitude": 52.53, "longitude": 13.38}])
    )
    table = respx.get(GEOLOCATIONS_URL).mock(return_value=Response(200, json=[]))

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        coords = await service.coordinates_for(" 10115 ")

    assert coords is not None
    assert coords.latitude == 52.53
    assert rpc.called
    assert not table.called


@respx.mock
@pytest.mark.asyncio
async def test_place_name_uses_geolocation_table():
    rpc = respx.post(POSTAL_RPC_URL).mock(return_value=Response(200, json=[]))
    table = respx.get(GEOLOCATIONS_URL).mock(
        return_value=Response(200, json=[{"latitude": 48.14, "longitude": 11.58}])
    )

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        coords = await service.coordinates_for("München")

    assert coords is not None
    assert coords.longitude == 11.58
    assert not rpc.called
    params = table.calls.last.request.url.params
    assert params["country"] == "ilike.*München*"
    assert params["limit"] == "1"


@respx.mock
@pytest.mark.asyncio
async def test_no_match_returns_none():
    respx.post(POSTAL_RPC_URL).mock(return_value=Response(200, json=[]))

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        assert await service.coordinates_for("99999") is None


@respx.mock
@pytest.mark.asyncio
async def test_backend_error_returns_none():
    respx.get(GEOLOCATIONS_URL).mock(return_value=Response(500, text="db down"))

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        assert await service.coordinates_for("Berlin") is None


@respx.mock
@pytest.mark.asyncio
async def test_unusable_rows_read_as_unresolved():
    respx.get(GEOLOCATIONS_URL).mock(
        return_value=Response(200, json=[{"latitude": "n/a", "longitude": None}])
    )

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        assert await service.coordinates_for("Berlin") is None


@respx.mock
@pytest.mark.asyncio
async def test_unusable_row_is_skipped_for_next_one():
    respx.post(POSTAL_RPC_URL).mock(
        return_value=Response(
            200,
            json=[{"latitude": "kaputt", "longitude": 13.38}, {"latitude": 52.53, "longitude": 13.38}],
        )
    )

    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        coords = await service.coordinates_for("10115")

    assert coords is not None
    assert coords.latitude == 52.53


@pytest.mark.asyncio
async def test_blank_location_skips_lookup():
    async with httpx.AsyncClient() as client:
        service = GeocodingService(SupabaseService(client, BASE_URL, "test-key"))
        assert await service.coordinates_for("   ") is None
