# page_harvest/report/json_report.py

"""
Генерация JSON-отчёта для проекта PageHarvest.

Файл имеет ту же форму, что и тело запроса к приёмнику: ``{"pages": [...]}``.
"""
import json
from pathlib import Path
from typing import Sequence

from page_harvest.crawler.models import PageRecord


def render_json(pages: Sequence[PageRecord], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет pages в формате JSON по указанному пути.

    :param pages: собранные записи PageRecord
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо компактной записи
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {"pages": [page.to_dict() for page in pages]}

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
