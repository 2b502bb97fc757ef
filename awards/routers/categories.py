"""Categories API router."""
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_admin_user
from awards.models.base import AuditAction
from awards.models.user import User
from awards.routers.common import http_error, record_audit
from awards.schemas.category import CategoryCreateRequest, CategoryResponse, CategoryUpdateRequest
from awards.services import CategoryService
from awards.utils.exceptions import CategoryNameTakenError, CategoryNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Active categories, newest first."""
    categories = await CategoryService(db).list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    request_body: CategoryCreateRequest,
    request: Request,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        category = await CategoryService(db).create_category(request_body.name, request_body.description)
    except CategoryNameTakenError as e:
        raise http_error(409, e)

    response = CategoryResponse.model_validate(category)
    await record_audit(
        db,
        request,
        AuditAction.CATEGORY_CREATED,
        user_id=admin.user_id,
        details={"category_id": category.category_id, "name": category.name},
    )
    return response


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    request_body: CategoryUpdateRequest,
    request: Request,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        category = await CategoryService(db).update_category(
            category_id,
            name=request_body.name,
            description=request_body.description,
            active=request_body.active,
        )
    except CategoryNotFoundError as e:
        raise http_error(404, e)
    except CategoryNameTakenError as e:
        raise http_error(409, e)

    response = CategoryResponse.model_validate(category)
    await record_audit(
        db,
        request,
        AuditAction.CATEGORY_UPDATED,
        user_id=admin.user_id,
        details={"category_id": category_id, **request_body.model_dump(exclude_unset=True)},
    )
    return response
