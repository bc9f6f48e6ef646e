from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.line_item_template import LineItemTemplate  # noqa: F401
