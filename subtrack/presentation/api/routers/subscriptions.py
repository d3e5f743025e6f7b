from __future__ import annotations

import uuid
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ....application.services.subscription_service import SubscriptionService
from ....core.dependencies import get_subscription_service
from ....domain.errors import NotFoundError, StorageError, SubscriptionError, ValidationError
from ...api.schemas.subscription_schemas import (
    SubscriptionCreatedResponse,
    SubscriptionListResponse,
    SubscriptionPayload,
    SubscriptionResponse,
    TotalCostResponse,
)

router = APIRouter(prefix="/api/subscriptions", tags=["Subscriptions"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubscriptionCreatedResponse)
def create_subscription(
    payload: SubscriptionPayload,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionCreatedResponse:
    try:
        subscription_id = service.create(payload.to_domain())
    except SubscriptionError as exc:
        _raise_http_error(exc)
    return SubscriptionCreatedResponse(id=subscription_id)


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionListResponse:
    try:
        subscriptions = service.list()
    except SubscriptionError as exc:
        _raise_http_error(exc)
    items = [SubscriptionResponse.from_domain(item) for item in subscriptions]
    return SubscriptionListResponse(items=items, count=len(items))


@router.get("/total", response_model=TotalCostResponse)
def get_total_cost(
    user_id: uuid.UUID,
    year: int = Query(..., ge=1),
    month: int = Query(..., ge=1, le=12),
    service_name: Optional[str] = None,
    service: SubscriptionService = Depends(get_subscription_service),
) -> TotalCostResponse:
    try:
        total = service.total_cost(user_id, service_name, year, month)
    except SubscriptionError as exc:
        _raise_http_error(exc)
    return TotalCostResponse(total_cost=total)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    try:
        subscription = service.get_by_id(subscription_id)
    except SubscriptionError as exc:
        _raise_http_error(exc)
    return SubscriptionResponse.from_domain(subscription)


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: uuid.UUID,
    payload: SubscriptionPayload,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    try:
        subscription = payload.to_domain(subscription_id)
        service.update(subscription)
    except SubscriptionError as exc:
        _raise_http_error(exc)
    return SubscriptionResponse.from_domain(subscription)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    try:
        service.delete(subscription_id)
    except SubscriptionError as exc:
        _raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _raise_http_error(exc: SubscriptionError) -> NoReturn:
    if isinstance(exc, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, StorageError):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage failure."
        ) from exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
