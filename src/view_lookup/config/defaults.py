# src/view_lookup/config/defaults.py
from typing import Dict, Any

CONFIG_FILE_ENV = "VIEW_LOOKUP_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    # Template lookup configuration
    "lookup": {
        "default_formats": ["html", "text", "js", "css", "xml", "json"],
        "default_locale": "${VIEW_LOOKUP_DEFAULT_LOCALE:en}",
        "available_locales": [],
        "handler_extensions": ["erb", "builder", "html"],
        "fallback_paths": ["", "/"],
        "js_format_falls_back_to_html": True,
        "cache_templates": "${VIEW_LOOKUP_CACHE_TEMPLATES:true}"
    },

    # Logging configuration
    "logging": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file_path": "${VIEW_LOOKUP_LOGDIR:logs}/view_lookup.log",
        "max_size_mb": 10,
        "backup_count": 5,
        "format": "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"
    }
}
