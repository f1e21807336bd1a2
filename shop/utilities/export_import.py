"""
Export of shopping data: a readable lists report (JSON or CSV) and a ZIP of
every data file for backup.
"""
import csv
import io
import json
import zipfile
from datetime import datetime
from pathlib import Path
import logging

from shop.domain.Province import tax_description
from shop.infra.paths import DATA_FILENAMES
from shop.infra.store import ShopStore
from shop.logic.shopping.summary import summarize
from shop.logic.tax.classifier import is_taxable
from shop.utilities.currency import money_str

logger = logging.getLogger(__name__)

CSV_FIELDS = ['list', 'item', 'category', 'price', 'quantity', 'line_total', 'taxable', 'purchased', 'notes']


class DataExporter:
    """Export shopping lists with their items and totals."""

    def __init__(self, store: ShopStore):
        self.store = store

    def build_lists_report(self) -> dict:
        """Every list with its items and summary under the currently selected province."""
        jurisdiction = self.store.jurisdiction()
        lists = []
        for lst in self.store.lists.list_all():
            items = self.store.items.for_list(lst.id)
            summary = summarize(items, jurisdiction, lst.budget)
            entry = lst.to_dict()
            entry['items'] = [dict(i.to_dict(), taxable=is_taxable(i.category_name)) for i in items]
            entry['summary'] = summary.to_dict()
            lists.append(entry)
        return {
            'export_date': datetime.now().isoformat(),
            'province': jurisdiction.name,
            'tax': tax_description(jurisdiction),
            'lists': lists,
        }

    def export_lists_csv(self) -> str:
        """One row per item, for spreadsheet use."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for lst in self.store.lists.list_all():
            for item in self.store.items.for_list(lst.id):
                writer.writerow({
                    'list': lst.name,
                    'item': item.name,
                    'category': item.category_name or '',
                    'price': money_str(item.price),
                    'quantity': item.quantity,
                    'line_total': money_str(item.line_total),
                    'taxable': is_taxable(item.category_name),
                    'purchased': item.is_purchased,
                    'notes': item.notes or '',
                })
        return out.getvalue()

    def export_zip_bytes(self) -> bytes:
        """ZIP archive with the raw data files, the lists report and metadata."""
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, 'w', zipfile.ZIP_DEFLATED) as zipf:
            included = []
            for name in DATA_FILENAMES:
                path = self.store.data_dir / name
                if path.exists():
                    zipf.write(path, arcname=name)
                    included.append(name)
            zipf.writestr('lists_report.json', json.dumps(self.build_lists_report(), indent=2, ensure_ascii=False))
            zipf.writestr('lists.csv', self.export_lists_csv())
            metadata = {
                'export_date': datetime.now().isoformat(),
                'version': '1.0',
                'files': included,
            }
            zipf.writestr('metadata.json', json.dumps(metadata, indent=2))
        logger.info("Exported %d data file(s) to archive", len(included))
        return buf.getvalue()

    def export_all(self, output_path: Path = None) -> Path:
        """Write the ZIP archive to disk."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"shopsense_backup_{timestamp}.zip")
        Path(output_path).write_bytes(self.export_zip_bytes())
        logger.info("Exported all data to %s", output_path)
        return Path(output_path)


# CLI interface
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Export ShopSense data')
    parser.add_argument('--format', choices=['json', 'csv', 'zip'], default='zip', help='Export format')
    parser.add_argument('--file', help='Output file path')
    args = parser.parse_args()

    exporter = DataExporter(ShopStore())
    if args.format == 'zip':
        result = exporter.export_all(Path(args.file) if args.file else None)
    else:
        result = Path(args.file or f"lists_export.{args.format}")
        if args.format == 'csv':
            result.write_text(exporter.export_lists_csv(), encoding='utf-8')
        else:
            result.write_text(json.dumps(exporter.build_lists_report(), indent=2, ensure_ascii=False), encoding='utf-8')
    print(f"Exported to: {result}")
