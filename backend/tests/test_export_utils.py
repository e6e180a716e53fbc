"""
数据导出工具测试
"""
import csv
from datetime import datetime
from io import StringIO

from openpyxl import load_workbook

from utils.export import DataExporter, ExportColumn

ROWS = [
    {"id": 1, "name": "Alpha", "when": datetime(2024, 5, 1, 8, 30), "tags": ["a", "b"]},
    {"id": 2, "name": "Beta, Gamma", "when": datetime(2024, 5, 2, 9, 0), "tags": []},
]


class TestCsvExport:
    """CSV 导出"""

    def test_header_and_order(self):
        stream = DataExporter.export_to_csv(ROWS, ["name", "id"])
        text = stream.getvalue().decode("utf-8")
        assert text.startswith("name,id\r\n")
        assert list(csv.reader(StringIO(text)))[1:] == [["Alpha", "1"], ["Beta, Gamma", "2"]]

    def test_no_bom(self):
        stream = DataExporter.export_to_csv(ROWS, ["id"])
        assert not stream.getvalue().startswith(b"\xef\xbb\xbf")

    def test_special_values(self):
        stream = DataExporter.export_to_csv(ROWS, ["when", "tags", "missing"])
        rows = list(csv.DictReader(StringIO(stream.getvalue().decode("utf-8"))))
        assert rows[0] == {"when": "2024-05-01T08:30:00", "tags": '["a", "b"]', "missing": ""}


class TestExcelExport:
    """Excel 导出"""

    def test_columns(self):
        columns = [ExportColumn("ID", "id", 8), ExportColumn("Name", "name")]
        stream = DataExporter.export_to_excel(ROWS, columns, sheet_name="Data")
        wb = load_workbook(stream)
        ws = wb["Data"]
        assert [list(r) for r in ws.iter_rows(values_only=True)] == [
            ["ID", "Name"], [1, "Alpha"], [2, "Beta, Gamma"]
        ]
        assert ws.column_dimensions["A"].width == 8
        assert ws.column_dimensions["B"].width == 20

    def test_empty(self):
        stream = DataExporter.export_to_excel([], [ExportColumn("ID", "id")])
        ws = load_workbook(stream).active
        assert ws.max_row == 1
        assert ws["A1"].value == "ID"
