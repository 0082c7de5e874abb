from dashfilters.models.preferences import FilterPreference

__all__ = [
    'FilterPreference',
]
