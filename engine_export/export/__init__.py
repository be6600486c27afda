"""
Engine Export Stages

Provides the per-category exports:
- Synonym sets -> synonyms.json
- Curations -> curations.json
- Curation URL resolution (rewrites curations.json)
- Search field settings -> search_settings.json
"""

from engine_export.export.synonyms import (
    SynonymExporter,
    export_synonyms,
    SYNONYMS_FILE,
)

from engine_export.export.curations import (
    CurationExporter,
    export_curations,
    filter_curations,
    CURATIONS_FILE,
)

from engine_export.export.curation_urls import (
    CurationURLResolver,
    resolve_curation_urls,
)

from engine_export.export.search_settings import (
    SearchSettingsExporter,
    export_search_settings,
    SEARCH_SETTINGS_FILE,
)

__all__ = [
    "SynonymExporter",
    "export_synonyms",
    "SYNONYMS_FILE",
    "CurationExporter",
    "export_curations",
    "filter_curations",
    "CURATIONS_FILE",
    "CurationURLResolver",
    "resolve_curation_urls",
    "SearchSettingsExporter",
    "export_search_settings",
    "SEARCH_SETTINGS_FILE",
]
