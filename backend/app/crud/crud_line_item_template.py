"""CRUD operations for line item templates."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.line_item_template import LineItemTemplate
from backend.app.schemas.line_item_template import LineItemTemplateCreate, LineItemTemplateUpdate


class CRUDLineItemTemplate:
    def create(self, db: Session, *, obj_in: LineItemTemplateCreate) -> LineItemTemplate:
        obj = LineItemTemplate(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, template_id: int) -> Optional[LineItemTemplate]:
        return db.query(LineItemTemplate).filter(LineItemTemplate.id == template_id).first()

    def get_multi(self, db: Session, *, search: Optional[str] = None) -> List[LineItemTemplate]:
        query = db.query(LineItemTemplate)
        if search and search.strip():
            query = query.filter(LineItemTemplate.description.ilike(f"%{search.strip()}%"))
        # insertion order is the suggestion order
        return query.order_by(LineItemTemplate.id.asc()).all()

    def update(self, db: Session, *, db_obj: LineItemTemplate, obj_in: LineItemTemplateUpdate) -> LineItemTemplate:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if field == "description" and value is None:
                continue
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: LineItemTemplate) -> LineItemTemplate:
        db.delete(db_obj)
        db.commit()
        return db_obj


line_item_template_crud = CRUDLineItemTemplate()
