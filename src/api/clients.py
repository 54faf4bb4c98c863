"""Clients API endpoints."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel

from src.api.deps import get_client_service
from src.clients.models import EnrichedClient
from src.clients.service import ClientService

router = APIRouter(prefix="/api/clients", tags=["clients"])

Service = Annotated[ClientService, Depends(get_client_service)]


class ClientEnvelope(BaseModel):
    """Single client response envelope."""

    ok: bool = True
    data: EnrichedClient


class ClientListEnvelope(BaseModel):
    """Client list response envelope."""

    ok: bool = True
    data: list[EnrichedClient]


async def _read_json(request: Request) -> Any | None:
    """Return the decoded body, or None when it is missing or not JSON."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.get("", response_model=ClientListEnvelope)
async def list_clients(
    service: Service,
    search: str | None = Query(default=None, max_length=255),
) -> ClientListEnvelope:
    """List all clients in ascending id order."""
    clients = await service.list_clients(search=search)
    return ClientListEnvelope(data=clients)


@router.post("", response_model=ClientEnvelope, status_code=status.HTTP_201_CREATED)
async def create_client(request: Request, service: Service) -> ClientEnvelope:
    """Create a new client."""
    body = await _read_json(request)
    client = await service.create_client(body)
    return ClientEnvelope(data=client)


@router.get("/{client_id}", response_model=ClientEnvelope)
async def get_client(client_id: str, service: Service) -> ClientEnvelope:
    """Get client by ID."""
    client = await service.get_client(client_id)
    return ClientEnvelope(data=client)


@router.put("/{client_id}", response_model=ClientEnvelope)
async def update_client(
    client_id: str, request: Request, service: Service
) -> ClientEnvelope:
    """Partially update client fields. Omitted fields are left untouched."""
    body = await _read_json(request)
    client = await service.update_client(client_id, body)
    return ClientEnvelope(data=client)


@router.delete("/{client_id}", response_model=ClientEnvelope)
async def delete_client(client_id: str, service: Service) -> ClientEnvelope:
    """Delete a client and return the deleted record."""
    client = await service.delete_client(client_id)
    return ClientEnvelope(data=client)


@router.post("/{client_id}/hours", response_model=ClientEnvelope)
async def increment_hours(
    client_id: str, request: Request, service: Service
) -> ClientEnvelope:
    """Register used hours (``delta`` defaults to 1, max 24)."""
    body = await _read_json(request)
    client = await service.increment_hours(client_id, body)
    return ClientEnvelope(data=client)
