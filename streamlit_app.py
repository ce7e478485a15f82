"""
Streamlit – Parquet File Viewer

Upload a .parquet file, let the API decode it, then browse the rows
page by page with per-column visibility toggles.

Run
  uvicorn main:app --port 8000
  streamlit run streamlit_app.py
"""

import pandas as pd
import streamlit as st

from viewer.client import UploadClient
from viewer.state import ELLIPSIS, SelectedFile, ViewerState, column_label, render_cell

UPLOADER_KEY = "parquet_file"


def get_viewer() -> ViewerState:
    if "viewer" not in st.session_state:
        st.session_state.viewer = ViewerState()
    return st.session_state.viewer


def on_file_change():
    uploaded = st.session_state.get(UPLOADER_KEY)
    selected = SelectedFile(uploaded.name, uploaded.getvalue()) if uploaded is not None else None
    get_viewer().select_file(selected)


# ---------------------------
# Sections
# ---------------------------

def show_upload_section(viewer: ViewerState):
    st.subheader("Upload Parquet File")
    st.file_uploader(
        "Choose a Parquet file",
        type=["parquet"],
        key=UPLOADER_KEY,
        on_change=on_file_change,
    )

    if st.button("View Data", disabled=viewer.is_loading or viewer.file is None, use_container_width=True):
        with st.spinner("Decoding file..."):
            viewer.submit(UploadClient())

    if viewer.info_message:
        st.success(f"Info: {viewer.info_message}")
    if viewer.error:
        st.error(f"Error: {viewer.error}")


def show_column_panel(viewer: ViewerState):
    header, select_all, deselect_all = st.columns([4, 1, 1])
    header.subheader("Column Visibility & Info")
    select_all.button("Select All", on_click=viewer.select_all_columns, use_container_width=True)
    deselect_all.button("Deselect All", on_click=viewer.deselect_all_columns, use_container_width=True)

    grid = st.columns(4)
    for i, col in enumerate(viewer.columns):
        key = f"col-{col['name']}"
        # Widget value always mirrors the view state
        st.session_state[key] = viewer.visible_columns.get(col["name"], False)
        grid[i % len(grid)].checkbox(
            column_label(col),
            key=key,
            on_change=viewer.toggle_column,
            args=(col["name"],),
        )


def show_pagination(viewer: ViewerState):
    buttons = viewer.page_buttons()
    cells = st.columns(len(buttons) + 2)

    cells[0].button("Previous", disabled=not viewer.has_previous, on_click=viewer.previous_page)
    for cell, page in zip(cells[1:-1], buttons):
        if page == ELLIPSIS:
            cell.markdown(ELLIPSIS)
        else:
            cell.button(
                str(page),
                key=f"page-{page}",
                type="primary" if page == viewer.current_page else "secondary",
                on_click=viewer.go_to_page,
                args=(page,),
            )
    cells[-1].button("Next", disabled=not viewer.has_next, on_click=viewer.next_page)


def show_table(viewer: ViewerState):
    headers = [col["name"] for col in viewer.displayed_columns()]
    if not headers:
        st.info(
            "All columns are hidden. Please select columns to display from the "
            "'Column Visibility & Info' panel above."
        )
        return

    st.subheader("File Content")
    rows = viewer.page_rows()
    if not rows:
        st.write("No data to display for the current page.")
        return

    page_df = pd.DataFrame(
        [[render_cell(row.get(name)) for name in headers] for row in rows],
        columns=headers,
    )
    st.dataframe(page_df, use_container_width=True, hide_index=True)

    if viewer.total_pages > 1:
        st.caption(f"Page {viewer.current_page} of {viewer.total_pages}")
        show_pagination(viewer)


def main():
    st.set_page_config(page_title="Parquet File Viewer", layout="wide")
    st.title("Parquet File Viewer")

    viewer = get_viewer()
    show_upload_section(viewer)

    if viewer.columns:
        st.divider()
        show_column_panel(viewer)

    if viewer.data:
        st.divider()
        show_table(viewer)


if __name__ == "__main__":
    main()
