"""Line item template endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.crud.crud_line_item_template import line_item_template_crud
from backend.app.db.session import get_db
from backend.app.schemas.line_item_template import (
    LineItemTemplateCreate,
    LineItemTemplateRead,
    LineItemTemplateUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/line-item-templates", tags=["line_item_templates"])


def _get_template_or_404(db: Session, template_id: int):
    template = line_item_template_crud.get(db, template_id=template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Line item template not found")
    return template


@router.post("/", response_model=LineItemTemplateRead, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
async def create_line_item_template(template_in: LineItemTemplateCreate, db: Session = Depends(get_db)):
    template = line_item_template_crud.create(db, obj_in=template_in)
    logger.info("line_item_template_created", template_id=template.id)
    return template


@router.get("/", response_model=list[LineItemTemplateRead], response_model_by_alias=True)
async def list_line_item_templates(search: str | None = None, db: Session = Depends(get_db)):
    return line_item_template_crud.get_multi(db, search=search)


@router.get("/{template_id}", response_model=LineItemTemplateRead, response_model_by_alias=True)
async def get_line_item_template(template_id: int, db: Session = Depends(get_db)):
    return _get_template_or_404(db, template_id)


@router.put("/{template_id}", response_model=LineItemTemplateRead, response_model_by_alias=True)
async def update_line_item_template(
    template_id: int,
    template_in: LineItemTemplateUpdate,
    db: Session = Depends(get_db),
):
    template = _get_template_or_404(db, template_id)
    return line_item_template_crud.update(db, db_obj=template, obj_in=template_in)


@router.delete("/{template_id}", response_model=LineItemTemplateRead, response_model_by_alias=True)
async def delete_line_item_template(template_id: int, db: Session = Depends(get_db)):
    template = _get_template_or_404(db, template_id)
    # capture before the row is gone from the session
    deleted = LineItemTemplateRead.model_validate(template)
    line_item_template_crud.delete(db, db_obj=template)
    logger.info("line_item_template_deleted", template_id=template_id)
    return deleted
