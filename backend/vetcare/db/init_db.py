from sqlalchemy.engine import Engine

from vetcare.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
import vetcare.db.models  # noqa: F401


def init_db(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind)
