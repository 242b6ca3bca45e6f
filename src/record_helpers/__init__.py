"""View helpers for bibliographic records: citations and icons."""
from .citation import Citation
from .config import Config
from .dates import DateConverter
from .i18n import Translator
from .icons import Icon
from .models import RecordDriver

__version__ = "1.0.0"
__all__ = ["Citation", "Config", "DateConverter", "Icon", "RecordDriver", "Translator"]
