"""FileRecord model - file and folder metadata (bytes live under FOLDER_PATH)."""
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from files_manager.models.base import Base, TimestampMixin, UserMixin

FOLDER = "folder"
FILE = "file"
IMAGE = "image"
FILE_TYPES = (FOLDER, FILE, IMAGE)

# parent_id of entries that live at the top level
ROOT_PARENT_ID = 0


class FileRecord(Base, TimestampMixin, UserMixin):
    __tablename__ = "files"

    # Monotonic, so ordering by id DESC is "most recent first"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    parent_id: Mapped[int] = mapped_column(Integer, default=ROOT_PARENT_ID, index=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    local_path: Mapped[str | None] = mapped_column(String(1000), nullable=True, unique=True)

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER
