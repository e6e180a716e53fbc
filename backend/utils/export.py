"""
数据导出工具
支持 CSV、Excel 格式的数据导出
"""

import csv
import json
import logging
from dataclasses import dataclass
from typing import List, Dict, Any, Sequence
from io import StringIO, BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportColumn:
    """导出列定义"""
    header: str
    key: str
    width: int = 20


def _cell_value(value: Any) -> Any:
    """处理单元格特殊类型"""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return value


class DataExporter:
    """数据导出器"""

    @staticmethod
    def export_to_csv(data: List[Dict[str, Any]], fieldnames: Sequence[str]) -> BytesIO:
        """
        导出数据为 CSV 格式（始终包含表头行）

        Args:
            data: 数据列表
            fieldnames: 列名及顺序

        Returns:
            BytesIO 对象
        """
        output = StringIO()
        writer = csv.DictWriter(output, fieldnames=list(fieldnames), extrasaction="ignore")
        writer.writeheader()
        for item in data:
            writer.writerow({key: _cell_value(item.get(key, "")) for key in fieldnames})

        result = BytesIO(output.getvalue().encode("utf-8"))
        result.seek(0)
        return result

    @staticmethod
    def export_to_excel(
        data: List[Dict[str, Any]],
        columns: Sequence[ExportColumn],
        sheet_name: str = "Sheet1"
    ) -> BytesIO:
        """
        导出数据为 Excel 格式 (.xlsx)

        Args:
            data: 数据列表
            columns: 固定列定义（表头、取值键、列宽）
            sheet_name: 工作表名称

        Returns:
            BytesIO 对象
        """
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # 表头
        header_font = Font(bold=True)
        for col_idx, column in enumerate(columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=column.header)
            cell.font = header_font
            cell.alignment = Alignment(vertical="center")
            ws.column_dimensions[get_column_letter(col_idx)].width = column.width

        # 数据
        for row_idx, item in enumerate(data, 2):
            for col_idx, column in enumerate(columns, 1):
                ws.cell(row=row_idx, column=col_idx, value=_cell_value(item.get(column.key)))

        output = BytesIO()
        wb.save(output)
        output.seek(0)

        logger.debug(f"Excel 导出完成: sheet={sheet_name}, rows={len(data)}")
        return output
