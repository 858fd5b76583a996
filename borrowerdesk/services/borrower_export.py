"""Export of the borrower list to CSV or Excel."""
import logging
from typing import Sequence, Tuple

import pandas as pd

from ..data_structures import BorrowerRow, ExportOptions

logger = logging.getLogger(__name__)


def rows_to_dataframe(rows: Sequence[BorrowerRow], options: ExportOptions = None) -> pd.DataFrame:
    options = options or ExportOptions()
    data = []
    for row in rows:
        b = row.borrower
        data.append({
            "Ref No": b.ref_no,
            "Customer ID": b.customer_id,
            "Full Name": b.full_name,
            "Contact": b.contact_no,
            "Email": b.display_email,
            "Address": b.address,
            "Status": b.status_label,
        })
    return pd.DataFrame(data, columns=list(options.columns))


def export_rows(rows: Sequence[BorrowerRow], output_path: str,
                options: ExportOptions = None) -> Tuple[bool, str]:
    """Write rows to ``output_path``; the extension picks the format.

    Returns:
        (success, message)
    """
    options = options or ExportOptions()
    df = rows_to_dataframe(rows, options)
    if output_path.lower().endswith('.csv'):
        return _export_to_csv(df, output_path)
    return _export_to_excel(df, rows, output_path, options)


def _export_to_csv(df, output_path):
    try:
        df.to_csv(output_path, index=False)
        return True, f"Exported {len(df)} borrowers (CSV)."
    except OSError as e:
        logger.error("CSV export to %s failed: %s", output_path, e)
        return False, f"CSV Export Failed: {e}"


def _export_to_excel(df, rows, output_path, options):
    """Export to Excel, painting each row with its band colour."""
    try:
        with pd.ExcelWriter(output_path, engine='xlsxwriter') as writer:
            df.to_excel(writer, index=False, sheet_name=options.sheet_name)
            workbook = writer.book
            worksheet = writer.sheets[options.sheet_name]

            header_fmt = workbook.add_format({'bold': True, 'border': 1, 'bg_color': '#D7E4BC'})
            for col_num, value in enumerate(df.columns.values):
                worksheet.write(0, col_num, value, header_fmt)
            worksheet.set_column(0, len(df.columns) - 1, 18)

            if options.paint_bands:
                formats = {}
                for idx, row in enumerate(rows, start=1):
                    style = row.style
                    if style.is_empty:
                        continue
                    key = (style.background, style.border_accent)
                    if key not in formats:
                        formats[key] = workbook.add_format({
                            'bg_color': style.background,
                            'left': 5,
                            'left_color': style.border_accent,
                        })
                    worksheet.set_row(idx, None, formats[key])
        return True, f"Exported {len(df)} borrowers (Excel)."
    except (OSError, ValueError) as e:
        logger.error("Excel export to %s failed: %s", output_path, e)
        return False, f"Excel Export Failed: {e}"
