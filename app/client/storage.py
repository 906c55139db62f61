import json
import os
from typing import Optional


class LocalStorage:
    """
    Простое key/value-хранилище строк в JSON-файле: замена localStorage браузера.
    Отсутствующий файл читается как пустое хранилище.
    Ошибки ввода-вывода и битый JSON пробрасываются вызывающему коду.
    """

    def __init__(self, path: str):
        self.path = path

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Local storage file {self.path!r} is not a JSON object")
        return data

    def _write(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)
