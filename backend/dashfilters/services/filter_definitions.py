from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from dashfilters.core.config import settings

MONTH_FILTER_KEY = 'selectedMonth'
YEAR_FILTER_KEY = 'selectedYear'
ALL_YEARS = 'all'

MONTH_LABELS = {
    'fr': [
        'Janvier', 'Février', 'Mars', 'Avril', 'Mai', 'Juin',
        'Juillet', 'Août', 'Septembre', 'Octobre', 'Novembre', 'Décembre',
    ],
    'es': [
        'Enero', 'Febrero', 'Marzo', 'Abril', 'Mayo', 'Junio',
        'Julio', 'Agosto', 'Septiembre', 'Octubre', 'Noviembre', 'Diciembre',
    ],
}

PLACEHOLDERS = {
    'fr': {MONTH_FILTER_KEY: 'Filtrer par mois', YEAR_FILTER_KEY: 'Filtrer par année'},
    'es': {MONTH_FILTER_KEY: 'Filtrar por mes', YEAR_FILTER_KEY: 'Filtrar por año'},
}

ALL_YEARS_LABELS = {
    'fr': 'Toutes les années',
    'es': 'Todos los años',
}


@dataclass(frozen=True)
class FilterOption:
    value: str
    label: str


@dataclass(frozen=True)
class FilterDefinition:
    key: str
    placeholder: str
    build_options: Callable[[date], list[FilterOption]]
    default_value: Callable[[date], str]


def _locale(locale: str | None) -> str:
    loc = str(locale or settings.filter_locale or 'fr').strip().lower()
    return loc if loc in MONTH_LABELS else 'fr'


def month_options(locale: str | None = None) -> list[FilterOption]:
    labels = MONTH_LABELS[_locale(locale)]
    return [FilterOption(value=str(i + 1), label=name) for i, name in enumerate(labels)]


def year_options(today: date, start_year: int | None = None, locale: str | None = None) -> list[FilterOption]:
    start = int(start_year if start_year is not None else settings.filter_year_start)
    out = [FilterOption(value=ALL_YEARS, label=ALL_YEARS_LABELS[_locale(locale)])]
    for year in range(today.year, start - 1, -1):
        out.append(FilterOption(value=str(year), label=str(year)))
    return out


def month_filter(locale: str | None = None) -> FilterDefinition:
    loc = _locale(locale)
    return FilterDefinition(
        key=MONTH_FILTER_KEY,
        placeholder=PLACEHOLDERS[loc][MONTH_FILTER_KEY],
        build_options=lambda _today: month_options(loc),
        default_value=lambda today: str(today.month),
    )


def year_filter(locale: str | None = None, start_year: int | None = None) -> FilterDefinition:
    loc = _locale(locale)
    return FilterDefinition(
        key=YEAR_FILTER_KEY,
        placeholder=PLACEHOLDERS[loc][YEAR_FILTER_KEY],
        build_options=lambda today: year_options(today, start_year, loc),
        default_value=lambda today: str(today.year),
    )


def default_definitions(locale: str | None = None) -> list[FilterDefinition]:
    return [month_filter(locale), year_filter(locale)]
