__version__ = "0.1.0"

# Public API exports
from .cache import FRESHNESS_WINDOW, MetadataCache
from .config import AppConfig, CacheConfig, LogConfig, ModeConfig, load_config
from .fileinfo import FileInfo
from .path import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, Path, new
from .pathlist import PathList

__all__ = [
    "__version__",
    # Paths
    "Path",
    "PathList",
    "new",
    "FileInfo",
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    # Cache
    "MetadataCache",
    "FRESHNESS_WINDOW",
    # Configuration
    "AppConfig",
    "CacheConfig",
    "ModeConfig",
    "LogConfig",
    "load_config",
]
