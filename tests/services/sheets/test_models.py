import unittest

# Module to test
from src.services.sheets.models import IndexedView, Sheet, SheetSource
from src.utils.error_utils import (
    SheetLookupError, IndexOutOfRangeError, HeaderNotFoundError,
)


class TestIndexedView(unittest.TestCase):

    def setUp(self):
        self.view = IndexedView(["1", "2", "3"], {"a": 0, "c": 2}, what="column")

    def test_int_and_name_access(self):
        self.assertEqual(self.view[1], "2")
        self.assertEqual(self.view["c"], "3")
        self.assertEqual(self.view.position("a"), 0)

    def test_out_of_range(self):
        """Negative and too-large positions fail instead of wrapping or returning None."""
        for bad in (3, -1, 100):
            with self.assertRaises(IndexOutOfRangeError):
                self.view[bad]

    def test_unknown_name(self):
        with self.assertRaises(HeaderNotFoundError) as ctx:
            self.view["zzz"]
        self.assertIn("zzz", str(ctx.exception))

    def test_errors_are_lookup_errors(self):
        """Both accessor failures can be caught as the builtin lookup types."""
        with self.assertRaises(IndexError):
            self.view[5]
        with self.assertRaises(KeyError):
            self.view["nope"]
        with self.assertRaises(SheetLookupError):
            self.view[None]

    def test_equality_with_plain_sequences(self):
        self.assertEqual(self.view, ["1", "2", "3"])
        self.assertEqual(self.view, ("1", "2", "3"))
        self.assertNotEqual(self.view, ["1", "2"])
        self.assertNotEqual(self.view, "123")

    def test_iteration_and_slicing(self):
        self.assertEqual(list(self.view), ["1", "2", "3"])
        self.assertEqual(self.view[1:], ("2", "3"))
        self.assertIn("2", self.view)

    def test_names_copy(self):
        names = self.view.names
        names["b"] = 1
        with self.assertRaises(HeaderNotFoundError):
            self.view["b"]


class TestSheet(unittest.TestCase):

    def setUp(self):
        self.sheet = Sheet(["a", "b"], [["1", "2"], ["3", "4"]], has_header=True)

    def test_row_and_col(self):
        self.assertEqual(self.sheet.row(0), ["1", "2"])
        self.assertEqual(self.sheet.row(1)["b"], "4")
        self.assertEqual(self.sheet.col("a"), ["1", "3"])
        self.assertEqual(self.sheet.cols["b"], ["2", "4"])

    def test_transpose_of_cols_gives_rows(self):
        cols = [list(col) for col in self.sheet.cols]
        transposed = [list(cells) for cells in zip(*cols)]
        self.assertEqual(self.sheet.rows, transposed)

    def test_row_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            self.sheet.row(2)
        with self.assertRaises(IndexOutOfRangeError):
            self.sheet.row(-1)

    def test_row_rejects_names(self):
        with self.assertRaises(IndexOutOfRangeError):
            self.sheet.row("a")  # type: ignore

    def test_col_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            self.sheet.col(2)

    def test_col_unknown_header(self):
        with self.assertRaises(HeaderNotFoundError):
            self.sheet.col("c")

    def test_get_composes_failures(self):
        self.assertEqual(self.sheet.get("b", 0), "2")
        with self.assertRaises(HeaderNotFoundError):
            self.sheet.get("c", 0)
        with self.assertRaises(IndexOutOfRangeError):
            self.sheet.get("a", 5)

    def test_names_unavailable_without_header(self):
        sheet = Sheet(["ignored"], [["1", "2"]], has_header=False)
        self.assertEqual(sheet.headers, ())
        with self.assertRaises(HeaderNotFoundError):
            sheet.col("ignored")
        with self.assertRaises(HeaderNotFoundError):
            sheet.row(0)["ignored"]

    def test_duplicate_header_last_wins(self):
        sheet = Sheet(["x", "x"], [["1", "2"]], has_header=True)
        self.assertEqual(sheet.col("x"), ["2"])
        self.assertEqual(sheet.row(0)["x"], "2")

    def test_rows_from_generator(self):
        """Test that one-shot iterables of rows are read once and kept."""
        sheet = Sheet([], (row for row in [["1", "2"], ["3", "4"]]))

        self.assertEqual(sheet.shape, (2, 2))
        self.assertEqual(sheet.rows, [["1", "2"], ["3", "4"]])
        self.assertEqual(sheet.col(1), ["2", "4"])

    def test_len_shape_and_iter(self):
        self.assertEqual(len(self.sheet), 2)
        self.assertEqual(self.sheet.shape, (2, 2))
        self.assertEqual([list(r) for r in self.sheet], [["1", "2"], ["3", "4"]])

    def test_str_is_csv(self):
        self.assertEqual(str(self.sheet), "a,b\n1,2\n3,4")

    def test_repr_mentions_shape(self):
        self.assertIn("rows=2", repr(self.sheet))


class TestSheetSource(unittest.TestCase):

    def test_export_source(self):
        source = SheetSource(spreadsheet_id="2PACX-abc")
        self.assertEqual(source.kind, "export")
        self.assertEqual(source.payload_format, "csv")
        self.assertEqual(source.url, "https://docs.google.com/spreadsheets/d/e/2PACX-abc/pub?output=csv")

    def test_api_source(self):
        source = SheetSource(spreadsheet_id="abc", sheet="Sheet1", key="KEY", cell_range="A1:G23")
        self.assertEqual(source.kind, "api")
        self.assertEqual(source.payload_format, "json")
        self.assertEqual(
            source.url,
            "https://sheets.googleapis.com/v4/spreadsheets/abc/values/Sheet1!A1:G23?key=KEY",
        )

    def test_repr_hides_key(self):
        source = SheetSource(spreadsheet_id="abc", sheet="Sheet1", key="SECRETKEY")
        self.assertNotIn("SECRETKEY", repr(source))

    def test_frozen(self):
        source = SheetSource(spreadsheet_id="abc")
        with self.assertRaises(Exception):
            source.spreadsheet_id = "other"  # type: ignore

if __name__ == '__main__':
    unittest.main()
