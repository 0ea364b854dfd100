import csv
import logging
from typing import Any, Iterable, List

from openpyxl import Workbook, load_workbook

from app.models import ConversionRequest, ConversionResult
from app.services.converters.base import BaseConverter

logger = logging.getLogger(__name__)

# CSV 방언: null이 아닌 필드는 항상 따옴표, 내부 따옴표는 두 번, 행 구분자는 '\n'
CSV_QUOTING = csv.QUOTE_NOTNULL
CSV_LINE_TERMINATOR = "\n"


def _cell_to_field(value: Any) -> Any:
    """셀 값을 CSV 필드로 변환 (None은 그대로 두어 빈 필드로 기록)"""
    if value is None:
        return None
    return str(value)


def _trim_row(row: Iterable[Any]) -> List[Any]:
    """행 끝의 빈 셀 제거 (read-only 모드는 모든 행을 시트 최대 너비로 채운다)"""
    values = list(row)
    while values and values[-1] is None:
        values.pop()
    return values


class XlsxToCsvConverter(BaseConverter):
    """XLSX → CSV 변환기 (시트마다 파일 하나)"""

    source_extensions = frozenset({"xlsx"})
    target_formats = frozenset({"csv"})

    @property
    def strategy(self) -> str:
        return "xlsx-to-csv"

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        """
        워크북의 각 시트를 `{baseName}_{sheetIndex}.csv`로 저장

        시트는 순서대로 하나씩 기록하며, 모든 파일 쓰기가 끝난 뒤에 경로 목록을 반환한다.
        """
        workbook = load_workbook(request.input_path, read_only=True, data_only=True)
        outputs = []

        try:
            for sheet_index, worksheet in enumerate(workbook.worksheets, start=1):
                output_path = self.get_output_path(
                    request.output_dir, f"{request.base_name}_{sheet_index}.csv"
                )

                with open(output_path, "w", encoding="utf-8", newline="") as f:
                    writer = csv.writer(
                        f, quoting=CSV_QUOTING, lineterminator=CSV_LINE_TERMINATOR
                    )
                    for row in worksheet.iter_rows(values_only=True):
                        values = _trim_row(row)
                        if not values:
                            continue
                        writer.writerow([_cell_to_field(value) for value in values])

                logger.debug(f"시트 저장 완료: {worksheet.title} -> {output_path.name}")
                outputs.append(output_path)
        finally:
            workbook.close()

        return outputs


class CsvToXlsxConverter(BaseConverter):
    """CSV → XLSX 변환기 (단일 시트)"""

    source_extensions = frozenset({"csv"})
    target_formats = frozenset({"xlsx"})

    SHEET_TITLE = "Sheet1"

    @property
    def strategy(self) -> str:
        return "csv-to-xlsx"

    def _read_rows(self, request: ConversionRequest) -> List[List[str]]:
        """CSV 파싱 (따옴표 안의 콤마/줄바꿈 처리, BOM 제거, 잘못된 UTF-8 바이트는 U+FFFD로 대체)"""
        with open(request.input_path, encoding="utf-8-sig", errors="replace", newline="") as f:
            rows = list(csv.reader(f))

        # 파일 끝의 빈 줄 제거
        while rows and not any(rows[-1]):
            rows.pop()

        return rows

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        """CSV의 각 행을 워크시트 행으로 기록 (값은 텍스트로 저장)"""
        output_path = self.get_output_path(request.output_dir, f"{request.base_name}.xlsx")

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.SHEET_TITLE

        for row_index, row in enumerate(self._read_rows(request), start=1):
            for column_index, value in enumerate(row, start=1):
                cell = worksheet.cell(row=row_index, column=column_index, value=value)
                # "=..." 등이 수식/오류 코드로 해석되지 않도록 문자열로 고정
                cell.data_type = "s"

        workbook.save(output_path)
        return [output_path]
