"""Turn the top-level Markdown files of a repository into a PDF book."""

from .config import AppConfig, load_config
from .core import BookService
from .errors import BookError
from .models import BookResult, RepositoryReference
from .repository import parse_repository_url

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "load_config",
    "BookError",
    "BookResult",
    "BookService",
    "RepositoryReference",
    "parse_repository_url",
    "__version__",
]
