"""
View state for the Parquet viewer page.

Everything the page shows is derived from one ViewerState: the selected file,
the loaded rows and columns, which columns are visible and the current page.
The Streamlit page only forwards user events to it and renders the result.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from config.settings import settings
from core.logger import get_logger

logger = get_logger(__name__)

ELLIPSIS = "..."
NULL_PLACEHOLDER = "null"

PageButton = Union[int, str]


@dataclass
class SelectedFile:
    name: str
    data: bytes


def render_cell(value: Any) -> str:
    """String form of one table cell"""
    if value is None:
        return NULL_PLACEHOLDER
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def column_label(column: Dict[str, str]) -> str:
    return f"{column['name']} ({column['type']})"


class ViewerState:
    def __init__(self, rows_per_page: Optional[int] = None, max_page_buttons: Optional[int] = None):
        self.rows_per_page = rows_per_page or settings.viewer.rows_per_page
        self.max_page_buttons = max_page_buttons or settings.viewer.max_page_buttons

        self.file: Optional[SelectedFile] = None
        self.is_loading = False
        self._reset_results()

    def _reset_results(self):
        self.data: List[Dict[str, Any]] = []
        self.columns: List[Dict[str, str]] = []
        self.visible_columns: Dict[str, bool] = {}
        self.error: Optional[str] = None
        self.info_message: Optional[str] = None
        self.current_page = 1

    # --- File selection & submit ---

    def select_file(self, file: Optional[SelectedFile]):
        """A new selection (or clearing it) drops everything loaded before"""
        self.file = file
        self._reset_results()

    def submit(self, client) -> None:
        """
        Send the selected file through `client` and load the response.
        Errors never propagate: they end up in `self.error` for the banner.
        """
        if self.file is None:
            self.error = "Please select a Parquet file first."
            return
        if self.is_loading:
            return

        self.is_loading = True
        self._reset_results()

        try:
            payload = client.upload(self.file.name, self.file.data)
            self.apply_response(payload)
        except Exception as e:
            logger.warning("Upload of %s failed: %s", self.file.name, e)
            self.error = str(e) or "An unexpected error occurred."
        finally:
            self.is_loading = False

    def apply_response(self, payload: Any):
        if not isinstance(payload, dict):
            self.error = "Unexpected response from server."
            return

        if payload.get("error"):
            self.error = str(payload["error"])
            return

        data = payload.get("data")
        columns = payload.get("columns")
        if data is None or columns is None:
            self.error = "Unexpected response from server."
            return

        self.data = data
        self.columns = columns
        self.visible_columns = {col["name"]: True for col in columns}
        self.error = None
        self.info_message = f"Successfully loaded {len(data)} records with {len(columns)} columns."

    # --- Column visibility ---

    def toggle_column(self, name: str):
        self.visible_columns[name] = not self.visible_columns.get(name, False)

    def select_all_columns(self):
        self.visible_columns = {col["name"]: True for col in self.columns}

    def deselect_all_columns(self):
        self.visible_columns = {col["name"]: False for col in self.columns}

    def displayed_columns(self) -> List[Dict[str, str]]:
        """Visible columns, in the order the server reported them"""
        return [col for col in self.columns if self.visible_columns.get(col["name"], False)]

    # --- Pagination ---

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.data) / self.rows_per_page)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def page_rows(self) -> List[Dict[str, Any]]:
        start = (self.current_page - 1) * self.rows_per_page
        return self.data[start:start + self.rows_per_page]

    def go_to_page(self, page: int):
        self.current_page = max(1, min(page, self.total_pages))

    def next_page(self):
        self.current_page = max(1, min(self.current_page + 1, self.total_pages))

    def previous_page(self):
        self.current_page = max(self.current_page - 1, 1)

    def page_buttons(self) -> List[PageButton]:
        """
        Numbered buttons around the current page, at most `max_page_buttons` of them.
        The first and last page are always reachable, with ELLIPSIS marking a gap.
        """
        total = self.total_pages
        window = self.max_page_buttons

        start = max(1, self.current_page - window // 2)
        end = min(total, start + window - 1)
        if end - start + 1 < window and total >= window:
            start = max(1, end - window + 1)

        buttons: List[PageButton] = []
        if start > 1:
            buttons.append(1)
            if start > 2:
                buttons.append(ELLIPSIS)

        buttons.extend(range(start, end + 1))

        if end < total:
            if end < total - 1:
                buttons.append(ELLIPSIS)
            buttons.append(total)

        return buttons
