#!/usr/bin/env python3
"""
Exporta un CSV aplicando los filtros guardados (año/mes) de un scope y
normalizando las columnas de fecha a DD-MM-YYYY.

Uso:
  python scripts/export_filtered_records.py entrada.csv salida.csv --date-field fecha [--scope default]
"""
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'backend'))

from dashfilters.core.config import settings  # noqa: E402
from dashfilters.db.bootstrap import ensure_schema  # noqa: E402
from dashfilters.services.filter_definitions import MONTH_FILTER_KEY, YEAR_FILTER_KEY  # noqa: E402
from dashfilters.services.filters_service import FiltersService  # noqa: E402
from dashfilters.services.records import filter_records  # noqa: E402

logger = logging.getLogger('export_filtered_records')


def export_filtered(
    input_file: str,
    output_file: str,
    date_field: str,
    scope: str,
    extra_date_fields: list[str] | None = None,
    ignore_month: bool = False,
    chunk_size: int = 5000,
) -> int:
    values = FiltersService.get_values(scope)
    year = values.get(YEAR_FILTER_KEY)
    month = None if ignore_month else values.get(MONTH_FILTER_KEY)
    date_fields = [date_field] + [f for f in (extra_date_fields or []) if f != date_field]
    logger.info('scope=%s year=%s month=%s date_fields=%s', scope, year, month, date_fields)

    total_rows = 0
    first_chunk = True
    for chunk in pd.read_csv(input_file, dtype=str, keep_default_na=False, chunksize=chunk_size):
        rows = chunk.to_dict(orient='records')
        kept = filter_records(rows, date_field, year=year, month=month)
        if not kept:
            continue
        out = pd.DataFrame(FiltersService.normalize_records(kept, date_fields), columns=chunk.columns)
        out.to_csv(output_file, index=False, mode='w' if first_chunk else 'a', header=first_chunk)
        first_chunk = False
        total_rows += len(out)
        logger.info('written chunk, total rows so far: %s', total_rows)

    if first_chunk:
        # nothing matched: still leave a header-only file behind
        pd.read_csv(input_file, dtype=str, nrows=0).to_csv(output_file, index=False)
    return total_rows


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Exporta registros filtrados por los filtros guardados de un scope.')
    parser.add_argument('input_file')
    parser.add_argument('output_file')
    parser.add_argument('--date-field', required=True, help='columna usada para filtrar por año/mes')
    parser.add_argument('--also-format', nargs='*', default=[], help='otras columnas de fecha a normalizar')
    parser.add_argument('--scope', default=settings.default_filter_scope)
    parser.add_argument('--year-only', action='store_true', help='ignorar el filtro de mes')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s %(message)s')
    if not Path(args.input_file).exists():
        logger.error('input file not found: %s', args.input_file)
        return 1

    ensure_schema()
    total = export_filtered(
        args.input_file,
        args.output_file,
        args.date_field,
        args.scope,
        extra_date_fields=args.also_format,
        ignore_month=args.year_only,
    )
    logger.info('export finished: %s rows saved to %s', total, args.output_file)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
