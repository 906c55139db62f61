# Пакет моделей базы данных
# Здесь импортируются все модели, чтобы Alembic мог их обнаружить
from .boundary import CampusBoundary
