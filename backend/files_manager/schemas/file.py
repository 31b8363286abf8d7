"""File request/response schemas.

Python code stays snake_case; the JSON API speaks camelCase
(``parentId``, ``isPublic``, ``userId``).
"""
from typing import Optional, Union
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class FileCreate(BaseModel):
    """Upload body. Every field is optional here; UploadService decides
    which missing field to report, in a fixed order."""
    name: Optional[str] = None
    type: Optional[str] = None
    parent_id: Union[int, str, None] = None
    is_public: Optional[bool] = False
    data: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class FileResponse(BaseModel):
    """Public projection of a FileRecord. Never carries local_path."""
    id: int
    user_id: int
    name: str
    type: str
    is_public: bool
    parent_id: int

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
