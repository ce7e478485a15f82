import os
import unittest

from streamlit.testing.v1 import AppTest

from viewer.state import SelectedFile, ViewerState

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "streamlit_app.py")


def loaded_state(rows, columns=("id", "name")):
    state = ViewerState(rows_per_page=20, max_page_buttons=5)
    state.select_file(SelectedFile("sample.parquet", b"PAR1"))
    state.apply_response({
        "data": [{name: f"{name}-{i}" for name in columns} for i in range(rows)],
        "columns": [{"name": name, "type": "string"} for name in columns],
    })
    return state


class TestViewerPage(unittest.TestCase):
    def run_app(self, state=None):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        if state is not None:
            at.session_state["viewer"] = state
        at.run()
        self.assertFalse(at.exception)
        return at

    def button(self, at, label):
        return next(b for b in at.button if b.label == label)

    def labels(self, at):
        return [b.label for b in at.button]

    def test_view_data_disabled_without_file(self):
        at = self.run_app()

        self.assertTrue(self.button(at, "View Data").disabled)
        self.assertNotIn("Select All", self.labels(at))
        self.assertEqual(len(at.dataframe), 0)

    def test_loaded_result_shows_info_and_table(self):
        at = self.run_app(loaded_state(rows=5))

        self.assertFalse(self.button(at, "View Data").disabled)
        self.assertIn("Successfully loaded 5 records with 2 columns.", at.success[0].value)
        self.assertEqual(list(at.dataframe[0].value.columns), ["id", "name"])
        self.assertEqual(len(at.dataframe[0].value), 5)

    def test_deselect_all_shows_hidden_columns_notice(self):
        at = self.run_app(loaded_state(rows=5))

        self.button(at, "Deselect All").click().run()

        self.assertEqual(len(at.dataframe), 0)
        self.assertTrue(any("All columns are hidden" in info.value for info in at.info))

        self.button(at, "Select All").click().run()
        self.assertEqual(list(at.dataframe[0].value.columns), ["id", "name"])

    def test_unchecking_a_column_hides_only_that_column(self):
        at = self.run_app(loaded_state(rows=5))

        at.checkbox(key="col-name").uncheck().run()

        self.assertEqual(list(at.dataframe[0].value.columns), ["id"])
        self.assertTrue(at.checkbox(key="col-id").value)

    def test_single_page_has_no_pager(self):
        at = self.run_app(loaded_state(rows=20))

        self.assertEqual(len(at.dataframe[0].value), 20)
        self.assertNotIn("Previous", self.labels(at))
        self.assertNotIn("Next", self.labels(at))

    def test_two_pages_show_pager(self):
        at = self.run_app(loaded_state(rows=21))

        self.assertTrue(self.button(at, "Previous").disabled)
        self.assertFalse(self.button(at, "Next").disabled)
        self.assertEqual(len(at.dataframe[0].value), 20)

        self.button(at, "Next").click().run()

        self.assertEqual(len(at.dataframe[0].value), 1)
        self.assertEqual(at.dataframe[0].value.iloc[0]["id"], "id-20")
        self.assertFalse(self.button(at, "Previous").disabled)
        self.assertTrue(self.button(at, "Next").disabled)

    def test_page_past_the_end_shows_empty_notice(self):
        state = loaded_state(rows=21)
        state.current_page = 5

        at = self.run_app(state)

        self.assertEqual(len(at.dataframe), 0)
        self.assertTrue(any("No data to display for the current page." in md.value for md in at.markdown))


if __name__ == "__main__":
    unittest.main()
