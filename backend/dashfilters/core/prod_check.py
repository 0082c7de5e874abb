"""
Validaciones de configuracion en arranque para APP_ENV=prod.
Si alguna falla, se lanza RuntimeError y la aplicacion no inicia.
"""
from datetime import date

from dashfilters.core.config import settings


def validate_production_config() -> None:
    """En produccion no se permite CORS * ni una base sqlite local."""
    if (getattr(settings, "app_env", "dev") or "dev").strip().lower() != "prod":
        return

    errors: list[str] = []

    cors = (settings.cors_origins or "").strip()
    if not cors:
        errors.append("CORS_ORIGINS no puede estar vacío en producción.")
    elif cors == "*":
        errors.append(
            "CORS_ORIGINS no puede ser '*' en producción. "
            "Configure una lista explícita de orígenes (ej: https://app.ejemplo.com)."
        )

    db_url = (getattr(settings, "database_url", "") or "").strip().lower()
    if not db_url:
        errors.append("DATABASE_URL debe estar definido en producción.")
    elif db_url.startswith("sqlite"):
        errors.append(
            "DATABASE_URL no puede apuntar a sqlite en producción: las preferencias de filtros "
            "deben sobrevivir a reinicios y a varias instancias."
        )

    year_start = int(getattr(settings, "filter_year_start", 0) or 0)
    if year_start < 1900:
        errors.append("FILTER_YEAR_START debe ser un año de cuatro dígitos.")
    elif year_start > date.today().year:
        errors.append(
            "FILTER_YEAR_START no puede ser posterior al año en curso: "
            "el filtro de año quedaría sin años para elegir."
        )

    if errors:
        raise RuntimeError(
            "Configuración de producción inválida:\n  - " + "\n  - ".join(errors)
        )
