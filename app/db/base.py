from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Импорт моделей, чтобы таблицы создавались автоматически
from app.db.models import (
    boundary,
)
